"""Shared leaderboards and per-user ranking replay."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from forkfight.models import RankingScope, RatingSnapshot, Vote
from forkfight.ranking import ReplayTable
from forkfight.services.storage import LedgerStore, LedgerTransaction

logger = structlog.get_logger()


@dataclass(frozen=True)
class RankingEntry:
    """One row of a leaderboard.

    Attributes:
        rank: 1-indexed position.
        entity_id: Restaurant id.
        name: Restaurant display name.
        rating: Rating for the requested scope.
    """

    rank: int
    entity_id: str
    name: str
    rating: float


def rank_ratings(
    restaurants: list[RatingSnapshot], ratings: dict[str, float]
) -> list[RankingEntry]:
    """Sort restaurants by rating descending, breaking ties by name then id."""
    ordered = sorted(restaurants, key=lambda r: (-ratings[r.id], r.name, r.id))
    return [
        RankingEntry(rank=idx + 1, entity_id=r.id, name=r.name, rating=ratings[r.id])
        for idx, r in enumerate(ordered)
    ]


class RankingService:
    """Build leaderboards from shared ratings or from a user's vote history."""

    def __init__(self, store: LedgerStore) -> None:
        self.store = store

    async def get_rankings(self, scope: RankingScope | str = RankingScope.GLOBAL) -> list[RankingEntry]:
        """Rank active restaurants by their shared rating for a scope.

        Args:
            scope: "global" or a votable category.

        Returns:
            Ranked entries, highest rating first.

        Raises:
            InvalidCategoryError: If the scope is unknown.
        """
        resolved = RankingScope.parse(scope)
        restaurants = await self.store.run_read(lambda tx: tx.ratings.list_eligible_snapshots())
        return rank_ratings(restaurants, {r.id: r.for_scope(resolved) for r in restaurants})

    async def compute_personal_rankings(
        self, user_id: str, scope: RankingScope | str = RankingScope.GLOBAL
    ) -> list[RankingEntry]:
        """Rank restaurants as if only this user's votes counted.

        Every active restaurant starts at the 1500 baseline in a scratch
        table. The user's non-undone votes are replayed in ledger order,
        re-deriving each Elo update from the scratch ratings rather than
        reusing the stored deltas. The global scope replays every category;
        a category scope replays only that category's votes. Shared ratings
        are never written.

        Args:
            user_id: Voter whose history is replayed.
            scope: "global" or a votable category.

        Returns:
            Ranked entries, highest scratch rating first.

        Raises:
            InvalidCategoryError: If the scope is unknown.
        """
        resolved = RankingScope.parse(scope)

        def _load(tx: LedgerTransaction) -> tuple[list[RatingSnapshot], list[Vote]]:
            restaurants = tx.ratings.list_eligible_snapshots()
            votes = tx.votes.list_by_user(user_id, resolved.category)
            return restaurants, votes

        restaurants, votes = await self.store.run_read(_load)

        table = ReplayTable()
        table.initialize(r.id for r in restaurants)
        for vote in votes:
            table.apply(vote.winner_id, vote.loser_id)

        logger.debug(
            "personal_rankings_computed",
            user_id=user_id,
            scope=resolved.value,
            votes=len(votes),
        )
        names = {r.id: r.name for r in restaurants}
        board = [(eid, rating) for eid, rating in table.get_leaderboard(names) if eid in names]
        return [
            RankingEntry(rank=idx + 1, entity_id=eid, name=names[eid], rating=rating)
            for idx, (eid, rating) in enumerate(board)
        ]
