"""Tests for configuration loading and validation."""

from pathlib import Path

import pydantic
import pytest
import yaml

from forkfight.core.config import (
    DATABASE_ENV_VAR,
    LeagueConfig,
    RestaurantConfig,
    load_config,
    slugify,
)
from forkfight.core.errors import ConfigurationError


class TestSlugify:
    """Tests for slug generation."""

    def test_basic(self):
        """Test slug is generated correctly from a name."""
        assert slugify("Taco Palace") == "taco-palace"

    def test_special_chars(self):
        """Test punctuation collapses to single hyphens."""
        assert slugify("Joe's Diner & Grill!") == "joe-s-diner-grill"

    def test_max_length(self):
        """Test long names are truncated."""
        assert len(slugify("x" * 80)) == 50


class TestRestaurantConfig:
    """Tests for RestaurantConfig."""

    def test_slug_derived_from_name(self):
        """Test slug falls back to the name."""
        assert RestaurantConfig(name="Noodle Bar").get_slug() == "noodle-bar"

    def test_explicit_slug_wins(self):
        """Test an explicit slug is kept as-is."""
        assert RestaurantConfig(name="Noodle Bar", slug="nb").get_slug() == "nb"

    def test_defaults_active(self):
        """Test restaurants are active unless stated otherwise."""
        assert RestaurantConfig(name="Noodle Bar").active is True

    def test_empty_name_fails(self):
        """Test blank names are rejected."""
        with pytest.raises(pydantic.ValidationError, match="cannot be empty"):
            RestaurantConfig(name="   ")


class TestLeagueConfig:
    """Tests for LeagueConfig."""

    def test_defaults(self, monkeypatch):
        """Test default configuration points at a local DuckDB file."""
        monkeypatch.delenv(DATABASE_ENV_VAR, raising=False)
        config = LeagueConfig()

        assert config.seed is None
        assert config.restaurants == []
        assert config.get_database_url() == "duckdb:///./forkfight.duckdb"

    def test_duplicate_slugs_fail(self):
        """Test two restaurants cannot share a slug."""
        with pytest.raises(pydantic.ValidationError, match="Duplicate restaurant slug"):
            LeagueConfig(
                restaurants=[RestaurantConfig(name="Pho King"), RestaurantConfig(name="pho-king")]
            )

    def test_env_var_overrides_path(self, monkeypatch):
        """Test FORKFIGHT_DB takes precedence over database_path."""
        monkeypatch.setenv(DATABASE_ENV_VAR, "/tmp/other.duckdb")
        config = LeagueConfig(database_path="ignored.duckdb")

        assert config.get_database_url() == "duckdb:////tmp/other.duckdb"

    def test_full_url_passes_through(self, monkeypatch):
        """Test a complete SQLAlchemy URL is used verbatim."""
        monkeypatch.delenv(DATABASE_ENV_VAR, raising=False)
        config = LeagueConfig(database_path="sqlite:///ledger.db")

        assert config.get_database_url() == "sqlite:///ledger.db"


class TestLoadConfig:
    """Tests for load_config."""

    def test_load_valid_config(self, tmp_path):
        """Test loading a valid config file."""
        config_data = {
            "database_path": "league.duckdb",
            "seed": 7,
            "restaurants": [
                {"name": "Alpha"},
                {"name": "Bravo", "slug": "b", "active": False},
            ],
        }
        config_path = tmp_path / "forkfight.yaml"
        config_path.write_text(yaml.dump(config_data))

        config = load_config(config_path)

        assert config.seed == 7
        assert config.database_path == "league.duckdb"
        assert [r.get_slug() for r in config.restaurants] == ["alpha", "b"]
        assert config.restaurants[1].active is False

    def test_missing_file(self):
        """Test missing config file raises error."""
        with pytest.raises(FileNotFoundError, match="not found"):
            load_config(Path("/nonexistent/forkfight.yaml"))

    def test_empty_file_uses_defaults(self, tmp_path):
        """Test an empty YAML file yields the default config."""
        config_path = tmp_path / "empty.yaml"
        config_path.write_text("")

        assert load_config(config_path) == LeagueConfig()

    def test_non_mapping_rejected(self, tmp_path):
        """Test a YAML list at top level is a configuration error."""
        config_path = tmp_path / "list.yaml"
        config_path.write_text("- Alpha\n- Bravo\n")

        with pytest.raises(ConfigurationError, match="Expected a mapping") as exc_info:
            load_config(config_path)
        assert exc_info.value.suggestion

    def test_invalid_values(self, tmp_path):
        """Test bad field types surface as validation errors."""
        config_path = tmp_path / "bad.yaml"
        config_path.write_text("seed: not-a-number\n")

        with pytest.raises(pydantic.ValidationError):
            load_config(config_path)
