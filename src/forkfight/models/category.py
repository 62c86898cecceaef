"""Rating dimensions and the category-to-field lookup table."""

from __future__ import annotations

from enum import StrEnum

from forkfight.core.errors import InvalidCategoryError


class Category(StrEnum):
    """Votable categories. The global rating is never voted on directly."""

    VALUE = "value"
    AESTHETICS = "aesthetics"
    SPEED = "speed"

    @classmethod
    def parse(cls, value: str | Category) -> Category:
        """Parse a votable category, raising InvalidCategoryError otherwise."""
        try:
            return cls(value)
        except ValueError as e:
            raise InvalidCategoryError(value, [c.value for c in cls]) from e


class RankingScope(StrEnum):
    """Dimensions a leaderboard can be sorted by."""

    GLOBAL = "global"
    VALUE = "value"
    AESTHETICS = "aesthetics"
    SPEED = "speed"

    @classmethod
    def parse(cls, value: str | RankingScope) -> RankingScope:
        """Parse a ranking scope, raising InvalidCategoryError otherwise."""
        try:
            return cls(value)
        except ValueError as e:
            raise InvalidCategoryError(value, [s.value for s in cls]) from e

    @property
    def category(self) -> Category | None:
        """The votable category for this scope, or None for global."""
        if self is RankingScope.GLOBAL:
            return None
        return Category(self.value)


class RatingField(StrEnum):
    """Rating columns on a restaurant row."""

    GLOBAL = "elo_global"
    VALUE = "elo_value"
    AESTHETICS = "elo_aesthetics"
    SPEED = "elo_speed"


CATEGORY_FIELDS: dict[Category, RatingField] = {
    Category.VALUE: RatingField.VALUE,
    Category.AESTHETICS: RatingField.AESTHETICS,
    Category.SPEED: RatingField.SPEED,
}

SCOPE_FIELDS: dict[RankingScope, RatingField] = {
    RankingScope.GLOBAL: RatingField.GLOBAL,
    RankingScope.VALUE: RatingField.VALUE,
    RankingScope.AESTHETICS: RatingField.AESTHETICS,
    RankingScope.SPEED: RatingField.SPEED,
}
