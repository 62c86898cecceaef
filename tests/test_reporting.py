"""Tests for leaderboard and ratings rendering."""

from forkfight.models import RatingSnapshot
from forkfight.services.rankings import RankingEntry, rank_ratings
from forkfight.services.reporting import format_leaderboard, format_ratings


def _snapshot(entity_id, name, rating=1500.0):
    return RatingSnapshot(
        id=entity_id,
        name=name,
        elo_global=rating,
        elo_value=1500.0,
        elo_aesthetics=1500.0,
        elo_speed=1500.0,
    )


class TestRankRatings:
    """Tests for rank_ratings ordering."""

    def test_ties_break_by_name_then_id(self):
        """Test equal ratings are ordered by name, then id."""
        restaurants = [_snapshot("z", "Bravo"), _snapshot("b", "Alpha"), _snapshot("a", "Alpha")]

        entries = rank_ratings(restaurants, {"z": 1500.0, "b": 1500.0, "a": 1500.0})

        assert [e.entity_id for e in entries] == ["a", "b", "z"]
        assert [e.rank for e in entries] == [1, 2, 3]

    def test_highest_rating_first(self):
        """Test rating dominates name order."""
        restaurants = [_snapshot("a", "Alpha"), _snapshot("b", "Bravo")]

        entries = rank_ratings(restaurants, {"a": 1490.0, "b": 1510.0})

        assert [e.name for e in entries] == ["Bravo", "Alpha"]


class TestFormatting:
    """Tests for markdown rendering."""

    def test_format_leaderboard(self):
        """Test leaderboard includes title, description and rows."""
        entries = [RankingEntry(rank=1, entity_id="a", name="Alpha", rating=1516.0)]

        report = format_leaderboard(entries, "Rankings: speed", description="Shared ratings")

        assert report.startswith("# Rankings: speed")
        assert "Shared ratings" in report
        assert "Rank |" in report
        assert "| Restaurant" in report
        assert "1516.0" in report

    def test_format_ratings(self):
        """Test every rating column is rendered."""
        table = format_ratings([_snapshot("a", "Alpha", rating=1484.0)])

        assert "Aesthetics" in table
        assert "1484.0" in table

    def test_ratings_keep_one_decimal(self):
        """Test whole and fractional ratings both render with one decimal."""
        entries = [
            RankingEntry(rank=1, entity_id="a", name="Alpha", rating=1531.2561),
            RankingEntry(rank=2, entity_id="b", name="Bravo", rating=1500.0),
        ]

        report = format_leaderboard(entries, "Rankings: global")
        table = format_ratings([_snapshot("a", "Alpha", rating=1516.0)])

        assert "1531.3" in report
        assert "1500.0" in report
        assert "1516.0" in table
        assert "1500.0 |" in table
