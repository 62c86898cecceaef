"""ForkFight rating ledger.

Rank restaurants by pairwise votes with reversible Elo updates and
per-user ranking replay.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
