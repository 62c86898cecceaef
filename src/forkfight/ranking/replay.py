"""In-memory scratch ratings for replaying a vote history."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from forkfight.models import BASELINE_RATING
from forkfight.ranking.elo import Outcome, update_pair_by_outcome


class ReplayTable:
    """Scratch rating table folded from an ordered vote history.

    Never touches shared storage; every replay starts from the baseline.
    """

    def __init__(self, initial_rating: float = BASELINE_RATING) -> None:
        self.initial_rating = initial_rating
        self._ratings: dict[str, float] = {}

    def initialize(self, entity_ids: Iterable[str]) -> None:
        """Reset every entity to the baseline."""
        self._ratings = dict.fromkeys(entity_ids, self.initial_rating)

    def apply(self, winner_id: str, loser_id: str) -> tuple[float, float]:
        """Fold one vote into the table.

        Votes may name restaurants that have since been deactivated; those
        enter the table at the baseline.

        Returns:
            Tuple of (new_winner_rating, new_loser_rating).
        """
        update = update_pair_by_outcome(
            self._ratings.get(winner_id, self.initial_rating),
            self._ratings.get(loser_id, self.initial_rating),
            Outcome.A,
        )
        self._ratings[winner_id] = update.new_a
        self._ratings[loser_id] = update.new_b
        return update.new_a, update.new_b

    def get_rating(self, entity_id: str) -> float:
        return self._ratings[entity_id]

    def get_leaderboard(self, names: Mapping[str, str] | None = None) -> list[tuple[str, float]]:
        """Get (entity_id, rating) pairs sorted by rating descending.

        Args:
            names: Optional display names used to break rating ties. Remaining
                ties fall back to entity id so the order is reproducible.
        """
        labels = names or {}
        entries = list(self._ratings.items())
        return sorted(entries, key=lambda x: (-x[1], labels.get(x[0], ""), x[0]))
