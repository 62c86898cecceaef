"""Plain-text report rendering for leaderboards and votes."""

from __future__ import annotations

from tabulate import tabulate

from forkfight.models import RatingSnapshot
from forkfight.services.rankings import RankingEntry


def format_leaderboard(
    entries: list[RankingEntry],
    title: str,
    description: str | None = None,
) -> str:
    """Render ranked entries as a markdown table.

    Args:
        entries: Ranked leaderboard rows.
        title: Report title (markdown heading).
        description: Optional description line below title.

    Returns:
        Markdown report content.
    """
    rows = [(e.rank, e.name, e.rating, e.entity_id) for e in entries]

    lines = [f"# {title}", ""]
    if description:
        lines.extend([description, ""])
    lines.append(
        tabulate(
            rows,
            headers=("Rank", "Restaurant", "Rating", "ID"),
            tablefmt="github",
            floatfmt=".1f",
        )
    )

    return "\n".join(lines)


def format_ratings(restaurants: list[RatingSnapshot]) -> str:
    """Render the four ratings of each restaurant as a table."""
    rows = [
        (r.name, r.elo_global, r.elo_value, r.elo_aesthetics, r.elo_speed)
        for r in restaurants
    ]
    headers = ("Restaurant", "Global", "Value", "Aesthetics", "Speed")
    return tabulate(rows, headers=headers, tablefmt="github", floatfmt=".1f")
