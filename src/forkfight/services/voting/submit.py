"""Vote submission: dual Elo update plus a reversible ledger entry."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from forkfight.core.errors import EntityNotFoundError, InvalidVoteError
from forkfight.models import CATEGORY_FIELDS, Category, RatingField, RatingSnapshot, Vote
from forkfight.ranking import Outcome, update_pair_by_outcome
from forkfight.services.storage import LedgerStore, LedgerTransaction

logger = structlog.get_logger()


def _require(tx: LedgerTransaction, entity_id: str, role: str) -> RatingSnapshot:
    snapshot = tx.ratings.read_ratings(entity_id)
    if snapshot is None:
        raise EntityNotFoundError(entity_id, role=role)
    return snapshot


@dataclass(frozen=True)
class VoteResult:
    """Outcome of a committed vote.

    Attributes:
        vote_id: Ledger id, used to undo the vote.
        winner: Winner's ratings after the update.
        loser: Loser's ratings after the update.
    """

    vote_id: str
    winner: RatingSnapshot
    loser: RatingSnapshot


class VoteProcessor:
    """Apply votes to the shared ratings and record them in the ledger."""

    def __init__(self, store: LedgerStore) -> None:
        self.store = store

    async def submit_vote(
        self,
        winner_id: str,
        loser_id: str,
        category: Category | str,
        user_id: str | None = None,
    ) -> VoteResult:
        """Submit a vote and update both restaurants' ratings.

        Steps, all inside one storage transaction:
        1. Read both restaurants' global and category ratings
        2. Apply the Elo update twice: once for global, once for the category
        3. Increment the four rating fields by their deltas
        4. Append a vote record holding the four deltas for undo
        5. Re-read the updated restaurants

        Args:
            winner_id: Winning restaurant id.
            loser_id: Losing restaurant id.
            category: Votable category.
            user_id: Optional voter identifier, used for personal rankings.

        Returns:
            Vote id and updated restaurants.

        Raises:
            InvalidVoteError: If winner and loser are the same restaurant.
            InvalidCategoryError: If the category is not votable.
            EntityNotFoundError: If either restaurant doesn't exist.
        """
        if winner_id == loser_id:
            raise InvalidVoteError(winner_id)
        resolved = Category.parse(category)

        result = await self.store.run_in_transaction(
            lambda tx: self._apply(tx, winner_id, loser_id, resolved, user_id)
        )

        logger.info(
            "vote_submitted",
            vote_id=result.vote_id,
            category=resolved.value,
            winner=winner_id,
            loser=loser_id,
        )
        return result

    def _apply(
        self,
        tx: LedgerTransaction,
        winner_id: str,
        loser_id: str,
        category: Category,
        user_id: str | None,
    ) -> VoteResult:
        winner = _require(tx, winner_id, "winner restaurant")
        loser = _require(tx, loser_id, "loser restaurant")

        category_field = CATEGORY_FIELDS[category]

        # Winner is always side A
        global_update = update_pair_by_outcome(
            winner.get(RatingField.GLOBAL), loser.get(RatingField.GLOBAL), Outcome.A
        )
        category_update = update_pair_by_outcome(
            winner.get(category_field), loser.get(category_field), Outcome.A
        )

        tx.ratings.add_to_ratings(
            winner_id,
            {RatingField.GLOBAL: global_update.delta_a, category_field: category_update.delta_a},
        )
        tx.ratings.add_to_ratings(
            loser_id,
            {RatingField.GLOBAL: global_update.delta_b, category_field: category_update.delta_b},
        )

        vote_id = tx.votes.append(
            Vote(
                winner_id=winner_id,
                loser_id=loser_id,
                category=category.value,
                delta_global_winner=global_update.delta_a,
                delta_global_loser=global_update.delta_b,
                delta_category_winner=category_update.delta_a,
                delta_category_loser=category_update.delta_b,
                user_id=user_id,
            )
        )

        return VoteResult(
            vote_id=vote_id,
            winner=_require(tx, winner_id, "winner restaurant"),
            loser=_require(tx, loser_id, "loser restaurant"),
        )
