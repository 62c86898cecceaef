"""Undo a vote by subtracting its stored deltas."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from forkfight.models import CATEGORY_FIELDS, Category, RatingField, RatingSnapshot
from forkfight.services.storage import LedgerStore, LedgerTransaction

logger = structlog.get_logger()

REASON_NOT_FOUND = "not found"
REASON_ALREADY_UNDONE = "already undone"
REASON_ENTITY_NOT_FOUND = "entity not found"


@dataclass(frozen=True)
class UndoResult:
    """Result of an undo request.

    Attributes:
        success: Whether the vote was reversed.
        winner: Restored winner ratings (if success).
        loser: Restored loser ratings (if success).
        reason: Why the undo was rejected (if not success).
    """

    success: bool
    winner: RatingSnapshot | None = None
    loser: RatingSnapshot | None = None
    reason: str | None = None


class UndoProcessor:
    """Reverse individual votes using the deltas they recorded."""

    def __init__(self, store: LedgerStore) -> None:
        self.store = store

    async def undo_vote(self, vote_id: str) -> UndoResult:
        """Undo a vote by reversing its exact deltas.

        Each of the four rating fields becomes ``current - stored_delta``, so
        votes applied to the same restaurants since then are preserved. A vote
        can be undone at most once; later calls report "already undone" and
        change nothing.

        Args:
            vote_id: Vote id returned by submit_vote.

        Returns:
            UndoResult with the restored restaurants or a rejection reason.
        """
        result = await self.store.run_in_transaction(lambda tx: self._reverse(tx, vote_id))

        if result.success:
            logger.info("vote_undone", vote_id=vote_id)
        else:
            logger.info("undo_rejected", vote_id=vote_id, reason=result.reason)
        return result

    def _reverse(self, tx: LedgerTransaction, vote_id: str) -> UndoResult:
        vote = tx.votes.get(vote_id)
        if vote is None:
            return UndoResult(success=False, reason=REASON_NOT_FOUND)
        if vote.undone:
            return UndoResult(success=False, reason=REASON_ALREADY_UNDONE)

        winner = tx.ratings.read_ratings(vote.winner_id)
        loser = tx.ratings.read_ratings(vote.loser_id)
        if winner is None or loser is None:
            return UndoResult(success=False, reason=REASON_ENTITY_NOT_FOUND)

        category_field = CATEGORY_FIELDS[Category(vote.category)]

        tx.ratings.write_ratings(
            vote.winner_id,
            {
                RatingField.GLOBAL: winner.get(RatingField.GLOBAL) - vote.delta_global_winner,
                category_field: winner.get(category_field) - vote.delta_category_winner,
            },
        )
        tx.ratings.write_ratings(
            vote.loser_id,
            {
                RatingField.GLOBAL: loser.get(RatingField.GLOBAL) - vote.delta_global_loser,
                category_field: loser.get(category_field) - vote.delta_category_loser,
            },
        )
        tx.votes.mark_undone(vote_id)

        return UndoResult(
            success=True,
            winner=tx.ratings.read_ratings(vote.winner_id),
            loser=tx.ratings.read_ratings(vote.loser_id),
        )
