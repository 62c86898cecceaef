"""Random matchup selection for voting rounds."""

from __future__ import annotations

import random
import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime

import structlog

from forkfight.core.errors import EntityNotFoundError, InsufficientCandidatesError
from forkfight.models import Category, RatingSnapshot
from forkfight.services.storage import LedgerStore, LedgerTransaction

logger = structlog.get_logger()

MIN_CANDIDATES = 2


@dataclass(frozen=True)
class Matchup:
    """A proposed head-to-head comparison. Never persisted.

    Attributes:
        id: Opaque identifier for this round-trip.
        category: Votable category being compared.
        a: First restaurant id.
        b: Second restaurant id, always different from ``a``.
        created_at: Wall-clock creation time (UTC).
    """

    category: Category
    a: str
    b: str
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))


def pick_distinct_pair(candidate_ids: list[str], rng: random.Random) -> tuple[str, str]:
    """Draw two distinct ids uniformly at random.

    Args:
        candidate_ids: Eligible restaurant ids.
        rng: Random source.

    Returns:
        Tuple of two different ids, in no meaningful order.

    Raises:
        InsufficientCandidatesError: If fewer than two ids are given.
    """
    count = len(candidate_ids)
    if count < MIN_CANDIDATES:
        raise InsufficientCandidatesError(count)

    index_a = rng.randrange(count)
    index_b = rng.randrange(count)
    while index_b == index_a:
        index_b = rng.randrange(count)

    return candidate_ids[index_a], candidate_ids[index_b]


class MatchupSelector:
    """Pick two distinct eligible restaurants to compare in a category."""

    def __init__(self, store: LedgerStore, seed: int | None = None) -> None:
        """Initialize matchup selector.

        Args:
            store: Ledger storage providing the eligible restaurant set.
            seed: Random seed for reproducible draws. None uses system entropy.
        """
        self.store = store
        self._rng = random.Random(seed)  # noqa: S311

    async def generate_matchup(self, category: Category | str) -> Matchup:
        """Generate a random matchup between two distinct active restaurants.

        Args:
            category: Votable category for this matchup.

        Returns:
            Fresh Matchup with a new id and timestamp.

        Raises:
            InvalidCategoryError: If the category is not votable.
            InsufficientCandidatesError: If fewer than 2 restaurants are active.
        """
        resolved = Category.parse(category)
        candidate_ids = await self.store.run_read(lambda tx: tx.ratings.list_eligible())

        a, b = pick_distinct_pair(candidate_ids, self._rng)
        matchup = Matchup(category=resolved, a=a, b=b)

        logger.debug("matchup_generated", matchup_id=matchup.id, category=resolved.value)
        return matchup

    async def load_matchup_restaurants(
        self, matchup: Matchup
    ) -> tuple[RatingSnapshot, RatingSnapshot]:
        """Load both restaurants of a matchup for display.

        Raises:
            EntityNotFoundError: If either restaurant no longer exists.
        """

        def _load(tx: LedgerTransaction) -> tuple[RatingSnapshot, RatingSnapshot]:
            restaurant_a = tx.ratings.read_ratings(matchup.a)
            if restaurant_a is None:
                raise EntityNotFoundError(matchup.a)
            restaurant_b = tx.ratings.read_ratings(matchup.b)
            if restaurant_b is None:
                raise EntityNotFoundError(matchup.b)
            return restaurant_a, restaurant_b

        return await self.store.run_read(_load)
