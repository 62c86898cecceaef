from .category import CATEGORY_FIELDS, SCOPE_FIELDS, Category, RankingScope, RatingField
from .restaurant import BASELINE_RATING, RatingSnapshot, Restaurant
from .vote import Vote

__all__ = [
    "BASELINE_RATING",
    "CATEGORY_FIELDS",
    "SCOPE_FIELDS",
    "Category",
    "RankingScope",
    "RatingField",
    "RatingSnapshot",
    "Restaurant",
    "Vote",
]
