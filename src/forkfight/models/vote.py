"""Vote ledger record."""

import uuid
from datetime import UTC, datetime

from sqlalchemy import Double
from sqlmodel import Field, SQLModel


class Vote(SQLModel, table=True):
    """A recorded pairwise outcome with the deltas needed to undo it."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    sequence: int = 0  # ledger position, assigned on append
    winner_id: str
    loser_id: str
    category: str  # "value", "aesthetics", "speed"
    delta_global_winner: float = Field(sa_type=Double)
    delta_global_loser: float = Field(sa_type=Double)
    delta_category_winner: float = Field(sa_type=Double)
    delta_category_loser: float = Field(sa_type=Double)
    undone: bool = False
    user_id: str | None = Field(default=None, index=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
