"""Elo rating calculations for pairwise restaurant votes.

Pure functions only: no I/O and no hidden state.

Formula:
- Expected score: E_A = 1 / (1 + 10^((R_B - R_A) / 400))
- Update: R_A' = R_A + K * (S_A - E_A), K fixed at 32
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import StrEnum

from forkfight.core.errors import InvalidInputError

K_FACTOR = 32.0


class Outcome(StrEnum):
    """Outcome of a pairing from side A's perspective."""

    A = "A"
    B = "B"
    DRAW = "draw"


ACTUAL_SCORES: dict[Outcome, tuple[float, float]] = {
    Outcome.A: (1.0, 0.0),
    Outcome.B: (0.0, 1.0),
    Outcome.DRAW: (0.5, 0.5),
}


@dataclass(frozen=True)
class PairUpdate:
    """New ratings and signed deltas for both sides of a pairing."""

    new_a: float
    new_b: float
    delta_a: float
    delta_b: float


def _check_ratings(rating_a: float, rating_b: float) -> None:
    if math.isnan(rating_a) or math.isnan(rating_b):
        msg = "Elo ratings cannot be NaN"
        raise InvalidInputError(msg)


def expected_score(rating_a: float, rating_b: float) -> float:
    """Calculate expected score for side A against side B.

    Args:
        rating_a: Rating of side A.
        rating_b: Rating of side B.

    Returns:
        Expected score in (0, 1); 0.5 for equal ratings.

    Raises:
        InvalidInputError: If either rating is NaN.
    """
    _check_ratings(rating_a, rating_b)
    return 1.0 / (1.0 + 10 ** ((rating_b - rating_a) / 400))


def update_pair_by_outcome(
    rating_a: float,
    rating_b: float,
    outcome: Outcome | str,
) -> PairUpdate:
    """Update both ratings from a pairing outcome with K = 32.

    The loser's delta is the exact negation of the winner's, so the pair
    always sums to zero.

    Args:
        rating_a: Current rating of side A.
        rating_b: Current rating of side B.
        outcome: "A", "B" or "draw".

    Returns:
        PairUpdate with the new ratings and deltas.

    Raises:
        InvalidInputError: If a rating is NaN or the outcome is unknown.
    """
    _check_ratings(rating_a, rating_b)
    try:
        resolved = Outcome(outcome)
    except ValueError as e:
        msg = f"Invalid outcome: {outcome!r}"
        raise InvalidInputError(msg) from e

    expected_a = expected_score(rating_a, rating_b)
    actual_a, _actual_b = ACTUAL_SCORES[resolved]

    delta_a = K_FACTOR * (actual_a - expected_a)
    delta_b = -delta_a

    return PairUpdate(
        new_a=rating_a + delta_a,
        new_b=rating_b + delta_b,
        delta_a=delta_a,
        delta_b=delta_b,
    )


def predict_upset_probability(rating_a: float, rating_b: float) -> float:
    """Probability that the weaker side wins, in [0, 0.5]."""
    expected_a = expected_score(rating_a, rating_b)
    return min(expected_a, 1.0 - expected_a)
