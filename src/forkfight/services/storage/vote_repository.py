"""Database persistence for vote records."""

from __future__ import annotations

from sqlalchemy import update
from sqlmodel import col, func, select

from forkfight.models import Category, Vote

from .repository import SessionRepository


class VoteRepository(SessionRepository):
    """VoteLedger backed by the ``vote`` table."""

    def append(self, record: Vote) -> str:
        last = self._session.exec(select(func.max(Vote.sequence))).one()
        record.sequence = (last or 0) + 1
        self._session.add(record)
        self._session.flush()
        return record.id

    def get(self, vote_id: str) -> Vote | None:
        return self._session.get(Vote, vote_id, populate_existing=True)

    def mark_undone(self, vote_id: str) -> None:
        statement = update(Vote).where(col(Vote.id) == vote_id).values(undone=True)
        self._execute(statement)

    def list_by_user(self, user_id: str, category: Category | None = None) -> list[Vote]:
        statement = select(Vote).where(
            Vote.user_id == user_id,
            col(Vote.undone).is_(False),
        )
        if category is not None:
            statement = statement.where(Vote.category == category.value)
        statement = statement.order_by(col(Vote.created_at), col(Vote.sequence))
        return list(self._session.exec(statement).all())
