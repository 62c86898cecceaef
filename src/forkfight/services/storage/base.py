"""Storage interfaces consumed by the vote, undo and ranking services."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol, runtime_checkable

from forkfight.models import Category, RatingField, RatingSnapshot, Vote


@runtime_checkable
class RatingStore(Protocol):
    """Transaction-bound access to restaurant rating fields."""

    def read_ratings(self, entity_id: str) -> RatingSnapshot | None:
        """Read all four ratings of a restaurant, or None if it doesn't exist."""
        ...

    def write_ratings(self, entity_id: str, fields: Mapping[RatingField, float]) -> None:
        """Overwrite the given rating fields with absolute values."""
        ...

    def add_to_ratings(self, entity_id: str, deltas: Mapping[RatingField, float]) -> None:
        """Increment the given rating fields by signed deltas."""
        ...

    def list_eligible(self) -> list[str]:
        """List ids of active restaurants."""
        ...

    def list_eligible_snapshots(self) -> list[RatingSnapshot]:
        """List rating snapshots of active restaurants."""
        ...


@runtime_checkable
class VoteLedger(Protocol):
    """Transaction-bound access to the append-only vote ledger."""

    def append(self, record: Vote) -> str:
        """Append a vote record and return its id."""
        ...

    def get(self, vote_id: str) -> Vote | None:
        """Look up a vote by id."""
        ...

    def mark_undone(self, vote_id: str) -> None:
        """Flag a vote as undone. The record itself is never deleted."""
        ...

    def list_by_user(self, user_id: str, category: Category | None = None) -> list[Vote]:
        """List a user's non-undone votes in ledger order."""
        ...
