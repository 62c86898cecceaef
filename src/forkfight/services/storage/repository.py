"""Shared helpers for repositories bound to one SQLModel session."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import ColumnElement
from sqlmodel import Session

from forkfight.models import RatingField, Restaurant


class SessionRepository:
    """Base for repositories that share their caller's session and transaction."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def _execute(self, statement: Any) -> None:
        """Run a Core DML statement on the session's connection."""
        self._session.connection().execute(statement)


def rating_columns(fields: Mapping[RatingField, Any]) -> dict[Any, Any]:
    """Map rating fields to their Restaurant column attributes."""
    return {getattr(Restaurant, field.value): value for field, value in fields.items()}


def rating_increments(deltas: Mapping[RatingField, float]) -> dict[Any, ColumnElement[float]]:
    """Build ``column = column + delta`` assignments for an UPDATE."""
    values: dict[Any, ColumnElement[float]] = {}
    for field, delta in deltas.items():
        column = getattr(Restaurant, field.value)
        values[column] = column + delta
    return values
