"""Custom exceptions for the rating ledger and its configuration."""

from __future__ import annotations


class ForkFightError(Exception):
    """Base exception for rating ledger errors."""


class InvalidInputError(ForkFightError, ValueError):
    """Error when a rating or outcome is malformed (e.g. NaN)."""


class InvalidVoteError(ForkFightError):
    """Error when a vote is structurally invalid (winner equals loser)."""

    def __init__(self, entity_id: str) -> None:
        self.entity_id = entity_id
        super().__init__(f"Winner and loser must be different restaurants (got {entity_id!r} twice)")


class InvalidCategoryError(ForkFightError, ValueError):
    """Error when a category is not one of the accepted values."""

    def __init__(self, category: object, allowed: list[str]) -> None:
        self.category = category
        self.allowed = allowed
        super().__init__(f"Invalid category {category!r}. Must be one of: {', '.join(allowed)}")


class EntityNotFoundError(ForkFightError):
    """Error when a restaurant id does not resolve."""

    def __init__(self, entity_id: str, role: str = "restaurant") -> None:
        self.entity_id = entity_id
        self.role = role
        super().__init__(f"{role.capitalize()} {entity_id} not found")


class InsufficientCandidatesError(ForkFightError):
    """No matchup available: fewer than two eligible restaurants."""

    def __init__(self, found: int) -> None:
        self.found = found
        super().__init__(f"Need at least 2 restaurants, found {found}")


class ConfigurationError(ForkFightError):
    """Base exception for configuration errors with optional suggestions."""

    def __init__(self, message: str, suggestion: str | None = None) -> None:
        self.message = message
        self.suggestion = suggestion
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = f"[Configuration Error] {self.message}"
        if self.suggestion:
            msg += f"\n[Suggestion] {self.suggestion}"
        return msg

