"""Core configuration and errors for the rating ledger."""

from forkfight.core.config import (
    DEFAULT_DATABASE_PATH,
    LeagueConfig,
    RestaurantConfig,
    load_config,
    slugify,
)
from forkfight.core.errors import (
    ConfigurationError,
    EntityNotFoundError,
    ForkFightError,
    InsufficientCandidatesError,
    InvalidCategoryError,
    InvalidInputError,
    InvalidVoteError,
)

__all__ = [
    "DEFAULT_DATABASE_PATH",
    "LeagueConfig",
    "RestaurantConfig",
    "load_config",
    "slugify",
    "ConfigurationError",
    "EntityNotFoundError",
    "ForkFightError",
    "InsufficientCandidatesError",
    "InvalidCategoryError",
    "InvalidInputError",
    "InvalidVoteError",
]
