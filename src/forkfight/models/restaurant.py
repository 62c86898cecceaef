"""Restaurant entity and its rating snapshot."""

import uuid
from dataclasses import dataclass

from sqlalchemy import Double
from sqlmodel import Field, SQLModel

from forkfight.models.category import SCOPE_FIELDS, RankingScope, RatingField

BASELINE_RATING = 1500.0


class Restaurant(SQLModel, table=True):
    """A rated restaurant with one global and three category ratings."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    name: str
    slug: str = Field(unique=True)
    active: bool = True
    elo_global: float = Field(default=BASELINE_RATING, sa_type=Double)
    elo_value: float = Field(default=BASELINE_RATING, sa_type=Double)
    elo_aesthetics: float = Field(default=BASELINE_RATING, sa_type=Double)
    elo_speed: float = Field(default=BASELINE_RATING, sa_type=Double)

    def snapshot(self) -> "RatingSnapshot":
        """Detach the current ratings from the session-bound row."""
        return RatingSnapshot(
            id=self.id,
            name=self.name,
            elo_global=self.elo_global,
            elo_value=self.elo_value,
            elo_aesthetics=self.elo_aesthetics,
            elo_speed=self.elo_speed,
        )


@dataclass(frozen=True)
class RatingSnapshot:
    """Point-in-time ratings of one restaurant.

    Attributes:
        id: Restaurant id.
        name: Display name.
        elo_global: Global rating, updated on every vote.
        elo_value: Value category rating.
        elo_aesthetics: Aesthetics category rating.
        elo_speed: Speed category rating.
    """

    id: str
    name: str
    elo_global: float = BASELINE_RATING
    elo_value: float = BASELINE_RATING
    elo_aesthetics: float = BASELINE_RATING
    elo_speed: float = BASELINE_RATING

    def get(self, field: RatingField) -> float:
        return getattr(self, field.value)

    def for_scope(self, scope: RankingScope) -> float:
        return self.get(SCOPE_FIELDS[scope])
