"""Tests for random matchup selection."""

import random

import pytest

from forkfight.core.errors import (
    EntityNotFoundError,
    InsufficientCandidatesError,
    InvalidCategoryError,
)
from forkfight.models import Category
from forkfight.services.matchup import Matchup, MatchupSelector, pick_distinct_pair


class ScriptedRandom(random.Random):
    """Random source whose randrange replays a fixed script."""

    def __init__(self, draws):
        super().__init__(0)
        self.draws = list(draws)

    def randrange(self, *args, **kwargs):
        return self.draws.pop(0)


class TestPickDistinctPair:
    """Tests for pick_distinct_pair."""

    def test_resamples_on_collision(self):
        """Test a repeated index is redrawn rather than returned."""
        rng = ScriptedRandom([1, 1, 1, 2])

        assert pick_distinct_pair(["a", "b", "c"], rng) == ("b", "c")
        assert rng.draws == []

    def test_two_candidates_always_distinct(self):
        """Test the minimal pool never yields a self-matchup."""
        rng = random.Random(7)
        for _ in range(200):
            a, b = pick_distinct_pair(["x", "y"], rng)
            assert {a, b} == {"x", "y"}

    def test_seed_is_reproducible(self):
        """Test same seed gives same sequence of pairs."""
        ids = [f"r{i}" for i in range(10)]
        first = [pick_distinct_pair(ids, random.Random(42)) for _ in range(5)]
        second = [pick_distinct_pair(ids, random.Random(42)) for _ in range(5)]
        assert first == second

    def test_every_pair_reachable(self):
        """Test draws cover every unordered pair of a small pool."""
        rng = random.Random(1)
        seen = {frozenset(pick_distinct_pair(["a", "b", "c"], rng)) for _ in range(300)}
        assert seen == {frozenset("ab"), frozenset("ac"), frozenset("bc")}

    @pytest.mark.parametrize("ids", [[], ["only"]])
    def test_too_few_candidates(self, ids):
        """Test fewer than two ids is an error."""
        with pytest.raises(InsufficientCandidatesError, match="at least 2"):
            pick_distinct_pair(ids, random.Random(0))


class TestMatchupSelector:
    """Tests for MatchupSelector against the ledger store."""

    async def test_generate_matchup(self, store, restaurants):
        """Test a matchup names two distinct seeded restaurants."""
        selector = MatchupSelector(store, seed=3)

        matchup = await selector.generate_matchup("value")

        assert matchup.category is Category.VALUE
        assert matchup.a != matchup.b
        assert {matchup.a, matchup.b} <= set(restaurants.values())
        assert matchup.id
        assert matchup.created_at.tzinfo is not None

    async def test_matchups_get_fresh_ids(self, store, restaurants):
        """Test every generated matchup has its own id."""
        selector = MatchupSelector(store, seed=3)
        ids = {(await selector.generate_matchup("speed")).id for _ in range(5)}
        assert len(ids) == 5

    async def test_never_pairs_restaurant_with_itself(self, store, restaurants):
        """Test distinctness over many draws."""
        selector = MatchupSelector(store, seed=11)
        for _ in range(50):
            matchup = await selector.generate_matchup("aesthetics")
            assert matchup.a != matchup.b

    async def test_global_is_not_votable(self, store, restaurants):
        """Test matchups are requested per votable category only."""
        with pytest.raises(InvalidCategoryError, match="global"):
            await MatchupSelector(store).generate_matchup("global")

    async def test_empty_store(self, store):
        """Test no restaurants means no matchup."""
        with pytest.raises(InsufficientCandidatesError, match="found 0"):
            await MatchupSelector(store).generate_matchup("value")

    async def test_single_active_restaurant(self, store):
        """Test inactive restaurants don't count toward the pool."""
        await store.add_restaurant("Open", "open")
        await store.add_restaurant("Closed", "closed", active=False)

        with pytest.raises(InsufficientCandidatesError, match="found 1"):
            await MatchupSelector(store).generate_matchup("value")

    async def test_inactive_restaurants_excluded(self, store, restaurants):
        """Test a deactivated restaurant is never drawn."""
        closed = await store.add_restaurant("Closed", "closed", active=False)
        selector = MatchupSelector(store, seed=5)

        for _ in range(30):
            matchup = await selector.generate_matchup("speed")
            assert closed not in (matchup.a, matchup.b)

    async def test_load_matchup_restaurants(self, store, restaurants):
        """Test both sides of a matchup load with their ratings."""
        selector = MatchupSelector(store, seed=2)
        matchup = await selector.generate_matchup("value")

        restaurant_a, restaurant_b = await selector.load_matchup_restaurants(matchup)

        assert restaurant_a.id == matchup.a
        assert restaurant_b.id == matchup.b
        assert restaurant_a.elo_value == 1500.0

    async def test_load_matchup_missing_restaurant(self, store, restaurants):
        """Test a stale matchup reports the missing restaurant."""
        matchup = Matchup(category=Category.VALUE, a=restaurants["alpha"], b="gone")

        with pytest.raises(EntityNotFoundError, match="gone"):
            await MatchupSelector(store).load_matchup_restaurants(matchup)
