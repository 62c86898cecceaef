"""Database persistence for restaurant ratings."""

from __future__ import annotations

from collections.abc import Mapping

from sqlalchemy import update
from sqlmodel import col, select

from forkfight.models import RatingField, RatingSnapshot, Restaurant

from .repository import SessionRepository, rating_columns, rating_increments


class RestaurantRepository(SessionRepository):
    """RatingStore backed by the ``restaurant`` table."""

    def read_ratings(self, entity_id: str) -> RatingSnapshot | None:
        restaurant = self._session.get(Restaurant, entity_id, populate_existing=True)
        if restaurant is None:
            return None
        return restaurant.snapshot()

    def write_ratings(self, entity_id: str, fields: Mapping[RatingField, float]) -> None:
        if not fields:
            return
        statement = (
            update(Restaurant)
            .where(col(Restaurant.id) == entity_id)
            .values(rating_columns(fields))
        )
        self._execute(statement)

    def add_to_ratings(self, entity_id: str, deltas: Mapping[RatingField, float]) -> None:
        if not deltas:
            return
        statement = (
            update(Restaurant)
            .where(col(Restaurant.id) == entity_id)
            .values(rating_increments(deltas))
        )
        self._execute(statement)

    def list_eligible(self) -> list[str]:
        statement = (
            select(Restaurant.id)
            .where(col(Restaurant.active).is_(True))
            .order_by(col(Restaurant.name), col(Restaurant.id))
        )
        return list(self._session.exec(statement).all())

    def list_eligible_snapshots(self) -> list[RatingSnapshot]:
        statement = (
            select(Restaurant)
            .where(col(Restaurant.active).is_(True))
            .order_by(col(Restaurant.name), col(Restaurant.id))
            .execution_options(populate_existing=True)
        )
        return [r.snapshot() for r in self._session.exec(statement).all()]

    def get_by_slug(self, slug: str) -> Restaurant | None:
        """Look up a restaurant row by slug."""
        statement = select(Restaurant).where(Restaurant.slug == slug)
        return self._session.exec(statement).first()

    def add(self, name: str, slug: str, active: bool = True) -> Restaurant:
        """Insert a restaurant at baseline ratings (administrative)."""
        restaurant = Restaurant(name=name, slug=slug, active=active)
        self._session.add(restaurant)
        self._session.flush()
        return restaurant

    def set_active(self, entity_id: str, active: bool) -> None:
        """Toggle whether a restaurant is eligible for matchups and leaderboards."""
        statement = (
            update(Restaurant).where(col(Restaurant.id) == entity_id).values(active=active)
        )
        self._execute(statement)
