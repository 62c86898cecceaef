"""Unified ledger storage: engine lifecycle and transaction boundaries."""

from __future__ import annotations

import asyncio
import threading
from collections.abc import Callable, Iterable
from typing import TypeVar

import structlog
from sqlalchemy.exc import OperationalError
from sqlalchemy.pool import NullPool
from sqlmodel import Session, SQLModel, create_engine
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from forkfight.core.config import LeagueConfig, RestaurantConfig

from .base import RatingStore, VoteLedger
from .restaurant_repository import RestaurantRepository
from .vote_repository import VoteRepository

logger = structlog.get_logger()

T = TypeVar("T")


class LedgerTransaction:
    """Rating store and vote ledger sharing one session and transaction.

    Services go through the ``ratings`` and ``votes`` interfaces; the
    concrete ``restaurants`` repository is kept for administrative seeding.

    Attributes:
        restaurants: Restaurant table repository (slug lookup, inserts).
        ratings: RatingStore view of the transaction.
        votes: VoteLedger view of the transaction.
    """

    session: Session
    restaurants: RestaurantRepository
    ratings: RatingStore
    votes: VoteLedger

    def __init__(self, session: Session) -> None:
        self.session = session
        self.restaurants = RestaurantRepository(session)
        self.ratings = self.restaurants
        self.votes = VoteRepository(session)


class LedgerStore:
    """Persistence layer for restaurants and the vote ledger.

    Handles:
    - Engine setup and table creation (DuckDB by default)
    - Atomic units of work spanning rating writes and ledger rows
    - Administrative seeding of restaurants
    """

    def __init__(self, database_url: str) -> None:
        """Initialize ledger store.

        Args:
            database_url: SQLAlchemy URL, e.g. ``duckdb:///forkfight.duckdb``.
        """
        self.database_url = database_url
        # Use NullPool to avoid connection pooling issues on Windows
        self._engine = create_engine(database_url, poolclass=NullPool)
        self._write_lock = threading.Lock()
        logger.info("store_init", url=database_url)

    @classmethod
    def from_config(cls, config: LeagueConfig) -> LedgerStore:
        """Create a store for the configured database and ensure its tables."""
        store = cls(config.get_database_url())
        store.create_tables()
        return store

    def create_tables(self) -> None:
        """Create restaurant and vote tables if missing."""
        SQLModel.metadata.create_all(self._engine)

    # ==================== Units of work ====================

    async def run_in_transaction(self, fn: Callable[[LedgerTransaction], T]) -> T:
        """Run mutating work as one atomic unit on a worker thread.

        Mutating transactions are serialized by a store-wide lock, so a
        read inside ``fn`` stays current until its writes commit. The
        transaction commits when ``fn`` returns and rolls back if it raises.
        Never retried: a replayed vote would double-count.
        """

        def _run() -> T:
            with self._write_lock, Session(self._engine, expire_on_commit=False) as session:
                with session.begin():
                    return fn(LedgerTransaction(session))

        return await asyncio.to_thread(_run)

    @retry(
        stop=stop_after_attempt(2),
        wait=wait_fixed(0.15),
        retry=retry_if_exception_type(OperationalError),
        reraise=True,
    )
    async def run_read(self, fn: Callable[[LedgerTransaction], T]) -> T:
        """Run read-only work on a worker thread, retrying transient failures once."""

        def _run() -> T:
            with Session(self._engine, expire_on_commit=False) as session:
                return fn(LedgerTransaction(session))

        return await asyncio.to_thread(_run)

    # ==================== Administration ====================

    async def seed_restaurants(self, restaurants: Iterable[RestaurantConfig]) -> list[str]:
        """Insert configured restaurants that don't exist yet.

        Existing restaurants keep their ratings; only their ``active`` flag
        is synced from the config.

        Returns:
            Slugs of the restaurants that were created.
        """
        entries = list(restaurants)

        def _seed(tx: LedgerTransaction) -> list[str]:
            created: list[str] = []
            for entry in entries:
                slug = entry.get_slug()
                existing = tx.restaurants.get_by_slug(slug)
                if existing is not None:
                    if existing.active != entry.active:
                        tx.restaurants.set_active(existing.id, entry.active)
                    continue
                tx.restaurants.add(entry.name, slug, active=entry.active)
                created.append(slug)
            return created

        created = await self.run_in_transaction(_seed)
        logger.info("restaurants_seeded", created=len(created), total=len(entries))
        return created

    async def add_restaurant(self, name: str, slug: str, active: bool = True) -> str:
        """Insert a single restaurant at baseline ratings and return its id."""
        return await self.run_in_transaction(lambda tx: tx.restaurants.add(name, slug, active).id)

    async def resolve_id(self, key: str) -> str:
        """Resolve a restaurant id or slug to its id; unknown keys pass through."""

        def _resolve(tx: LedgerTransaction) -> str:
            restaurant = tx.restaurants.get_by_slug(key)
            return restaurant.id if restaurant is not None else key

        return await self.run_read(_resolve)

    # ==================== Lifecycle ====================

    async def close(self) -> None:
        """Dispose of the database engine."""
        self._engine.dispose()
