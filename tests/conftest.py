"""Shared fixtures: a DuckDB-backed ledger with three seeded restaurants."""

import pytest

from forkfight.core.config import RestaurantConfig
from forkfight.services.storage import LedgerStore


@pytest.fixture
def database_url(tmp_path):
    """DuckDB URL in a per-test temporary directory."""
    return f"duckdb:///{tmp_path / 'ledger.duckdb'}"


@pytest.fixture
async def store(database_url):
    """Empty ledger store with tables created."""
    ledger = LedgerStore(database_url)
    ledger.create_tables()
    yield ledger
    await ledger.close()


@pytest.fixture
async def restaurants(store):
    """Seed Alpha, Bravo and Charlie at baseline; return slug -> id."""
    await store.seed_restaurants(
        [
            RestaurantConfig(name="Alpha"),
            RestaurantConfig(name="Bravo"),
            RestaurantConfig(name="Charlie"),
        ]
    )
    ids = {}
    for slug in ("alpha", "bravo", "charlie"):
        ids[slug] = await store.resolve_id(slug)
    return ids


@pytest.fixture
def read_ratings(store):
    """Read a restaurant snapshot outside of any vote."""

    async def _read(entity_id):
        return await store.run_read(lambda tx: tx.ratings.read_ratings(entity_id))

    return _read
