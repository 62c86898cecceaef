"""Rating math and replay tables for ForkFight.

Elo updates are pure functions; replay tables fold a vote history into
scratch ratings without touching shared storage.
"""

from forkfight.ranking.elo import (
    K_FACTOR,
    Outcome,
    PairUpdate,
    expected_score,
    predict_upset_probability,
    update_pair_by_outcome,
)
from forkfight.ranking.replay import ReplayTable

__all__ = [
    "K_FACTOR",
    "Outcome",
    "PairUpdate",
    "ReplayTable",
    "expected_score",
    "predict_upset_probability",
    "update_pair_by_outcome",
]
