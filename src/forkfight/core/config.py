"""Configuration schemas and loading for the rating ledger."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from forkfight.core.errors import ConfigurationError

DEFAULT_DATABASE_PATH = "./forkfight.duckdb"
DATABASE_ENV_VAR = "FORKFIGHT_DB"
DEFAULT_SLUG_MAX_LENGTH = 50


def slugify(value: str, max_length: int = DEFAULT_SLUG_MAX_LENGTH) -> str:
    """Generate a URL-safe slug from free text."""
    slug = re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")
    return slug[:max_length]


class RestaurantConfig(BaseModel):
    """A restaurant to seed into the rating store."""

    name: str
    slug: str | None = None
    active: bool = True

    @field_validator("name")
    @classmethod
    def validate_name_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Restaurant name cannot be empty")
        return v.strip()

    def get_slug(self) -> str:
        """Return the explicit slug or one derived from the name."""
        return self.slug or slugify(self.name)


class LeagueConfig(BaseModel):
    """Complete ledger configuration.

    Attributes:
        database_path: DuckDB file holding restaurants and votes.
        seed: Random seed for matchup selection. None draws from system entropy.
        restaurants: Restaurants seeded by ``forkfight init``.
    """

    database_path: str = DEFAULT_DATABASE_PATH
    seed: int | None = None
    restaurants: list[RestaurantConfig] = Field(default_factory=list)

    @field_validator("restaurants")
    @classmethod
    def validate_unique_slugs(cls, v: list[RestaurantConfig]) -> list[RestaurantConfig]:
        """Ensure no two restaurants share a slug."""
        seen: set[str] = set()
        for restaurant in v:
            slug = restaurant.get_slug()
            if slug in seen:
                msg = f"Duplicate restaurant slug: {slug}"
                raise ValueError(msg)
            seen.add(slug)
        return v

    def get_database_url(self) -> str:
        """Build the SQLAlchemy URL, preferring the FORKFIGHT_DB env var."""
        path = os.environ.get(DATABASE_ENV_VAR) or self.database_path
        if "://" in path:
            return path
        return f"duckdb:///{path}"


def load_config(path: str | Path) -> LeagueConfig:
    """Load and validate configuration from YAML file.

    Args:
        path: Path to YAML configuration file.

    Returns:
        Validated LeagueConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ConfigurationError: If the file is not a YAML mapping.
        pydantic.ValidationError: If config values are invalid.
    """
    config_path = Path(path)
    if not config_path.exists():
        msg = f"Configuration file not found: {config_path}"
        raise FileNotFoundError(msg)

    with config_path.open() as f:
        data: Any = yaml.safe_load(f)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Expected a mapping at the top of {config_path}",
            "Use 'key: value' pairs, e.g. 'database_path: ./forkfight.duckdb'.",
        )

    return LeagueConfig.model_validate(data)
