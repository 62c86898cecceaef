from .base import RatingStore, VoteLedger
from .restaurant_repository import RestaurantRepository
from .store import LedgerStore, LedgerTransaction
from .vote_repository import VoteRepository

__all__ = [
    "LedgerStore",
    "LedgerTransaction",
    "RatingStore",
    "RestaurantRepository",
    "VoteLedger",
    "VoteRepository",
]
