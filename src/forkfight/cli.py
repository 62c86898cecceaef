"""CLI for the ForkFight rating ledger."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Annotated, TypeVar

import pydantic
import structlog
import typer
from rich.console import Console
from rich.logging import RichHandler

from forkfight import __version__
from forkfight.core.config import LeagueConfig, load_config
from forkfight.core.errors import ConfigurationError, ForkFightError, InsufficientCandidatesError
from forkfight.models import CATEGORY_FIELDS
from forkfight.ranking import predict_upset_probability
from forkfight.services.matchup import MatchupSelector
from forkfight.services.rankings import RankingService
from forkfight.services.reporting import format_leaderboard, format_ratings
from forkfight.services.storage import LedgerStore
from forkfight.services.voting import UndoProcessor, VoteProcessor

T = TypeVar("T")

DEFAULT_CONFIG_PATH = Path("forkfight.yaml")

# Configure structlog
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

app = typer.Typer(
    name="forkfight",
    help="ForkFight - Rank restaurants with reversible pairwise Elo votes",
    add_completion=False,
)
console = Console()

ConfigOption = Annotated[
    Path,
    typer.Option("--config", "-c", help="Path to config YAML file"),
]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-V", help="Verbose output")]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"forkfight v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = None,
) -> None:
    """ForkFight CLI."""


def _configure_logging(verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def _load_or_default(config_path: Path) -> LeagueConfig:
    """Load the config file, or fall back to defaults when the default path is absent."""
    if config_path == DEFAULT_CONFIG_PATH and not config_path.exists():
        return LeagueConfig()
    return load_config(config_path)


def _run_with_store(
    config_path: Path,
    verbose: bool,
    action: Callable[[LeagueConfig, LedgerStore], Awaitable[T]],
) -> T:
    """Open the ledger store, run an async action and map errors to exit codes."""
    _configure_logging(verbose)

    async def _run() -> T:
        config = _load_or_default(config_path)
        store = LedgerStore.from_config(config)
        try:
            return await action(config, store)
        finally:
            await store.close()

    try:
        return asyncio.run(_run())
    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e
    except pydantic.ValidationError as e:
        console.print(f"[red]Invalid configuration:[/red] {e}")
        raise typer.Exit(1) from e
    except ConfigurationError as e:
        console.print(f"[red]{e}")
        raise typer.Exit(1) from e
    except InsufficientCandidatesError as e:
        console.print(f"[yellow]No matchup available:[/yellow] {e}")
        raise typer.Exit(1) from e
    except ForkFightError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e


@app.command()
def init(
    config_path: Annotated[Path, typer.Argument(help="Path to config YAML file")],
    verbose: VerboseOption = False,
) -> None:
    """Create the database tables and seed configured restaurants."""

    async def _init(config: LeagueConfig, store: LedgerStore) -> None:
        created = await store.seed_restaurants(config.restaurants)
        console.print(f"[green]Database ready:[/green] {config.get_database_url()}")
        console.print(f"  Restaurants created: {len(created)}")
        console.print(f"  Restaurants configured: {len(config.restaurants)}")

    _run_with_store(config_path, verbose, _init)


@app.command()
def matchup(
    category: Annotated[str, typer.Argument(help="Category: value, aesthetics or speed")],
    config_path: ConfigOption = DEFAULT_CONFIG_PATH,
    verbose: VerboseOption = False,
) -> None:
    """Propose two distinct restaurants to compare."""

    async def _matchup(config: LeagueConfig, store: LedgerStore) -> None:
        selector = MatchupSelector(store, seed=config.seed)
        result = await selector.generate_matchup(category)
        restaurant_a, restaurant_b = await selector.load_matchup_restaurants(result)
        console.print(f"[bold]Matchup {result.id}[/bold] ({result.category.value})")
        console.print(format_ratings([restaurant_a, restaurant_b]))
        console.print(f"  A: {restaurant_a.id}")
        console.print(f"  B: {restaurant_b.id}")
        field = CATEGORY_FIELDS[result.category]
        upset = predict_upset_probability(restaurant_a.get(field), restaurant_b.get(field))
        console.print(f"  Upset probability: {upset:.1%}")

    _run_with_store(config_path, verbose, _matchup)


@app.command()
def vote(
    winner: Annotated[str, typer.Argument(help="Winning restaurant id or slug")],
    loser: Annotated[str, typer.Argument(help="Losing restaurant id or slug")],
    category: Annotated[str, typer.Argument(help="Category: value, aesthetics or speed")],
    user: Annotated[str | None, typer.Option("--user", "-u", help="Voter id")] = None,
    config_path: ConfigOption = DEFAULT_CONFIG_PATH,
    verbose: VerboseOption = False,
) -> None:
    """Record a vote and update both restaurants' ratings."""

    async def _vote(_config: LeagueConfig, store: LedgerStore) -> None:
        winner_id = await store.resolve_id(winner)
        loser_id = await store.resolve_id(loser)
        result = await VoteProcessor(store).submit_vote(winner_id, loser_id, category, user)
        console.print(f"[green]Vote recorded:[/green] {result.vote_id}")
        console.print(format_ratings([result.winner, result.loser]))

    _run_with_store(config_path, verbose, _vote)


@app.command()
def undo(
    vote_id: Annotated[str, typer.Argument(help="Vote id returned by 'vote'")],
    config_path: ConfigOption = DEFAULT_CONFIG_PATH,
    verbose: VerboseOption = False,
) -> None:
    """Reverse a vote's exact rating changes."""

    async def _undo(_config: LeagueConfig, store: LedgerStore) -> bool:
        result = await UndoProcessor(store).undo_vote(vote_id)
        if not result.success:
            console.print(f"[yellow]Nothing undone:[/yellow] vote {result.reason}")
            return False
        console.print(f"[green]Vote undone:[/green] {vote_id}")
        restored = [r for r in (result.winner, result.loser) if r is not None]
        console.print(format_ratings(restored))
        return True

    if not _run_with_store(config_path, verbose, _undo):
        raise typer.Exit(1)


@app.command()
def rankings(
    scope: Annotated[str, typer.Argument(help="global, value, aesthetics or speed")] = "global",
    config_path: ConfigOption = DEFAULT_CONFIG_PATH,
    verbose: VerboseOption = False,
) -> None:
    """Show the shared leaderboard."""

    async def _rankings(_config: LeagueConfig, store: LedgerStore) -> None:
        entries = await RankingService(store).get_rankings(scope)
        console.print(format_leaderboard(entries, f"Rankings: {scope}"))

    _run_with_store(config_path, verbose, _rankings)


@app.command()
def personal(
    user: Annotated[str, typer.Argument(help="Voter id")],
    scope: Annotated[str, typer.Argument(help="global, value, aesthetics or speed")] = "global",
    config_path: ConfigOption = DEFAULT_CONFIG_PATH,
    verbose: VerboseOption = False,
) -> None:
    """Show rankings rebuilt from one user's votes only."""

    async def _personal(_config: LeagueConfig, store: LedgerStore) -> None:
        entries = await RankingService(store).compute_personal_rankings(user, scope)
        console.print(
            format_leaderboard(
                entries,
                f"Personal rankings: {scope}",
                description=f"Replayed from votes by {user}",
            )
        )

    _run_with_store(config_path, verbose, _personal)


@app.command()
def validate(
    config_path: Annotated[Path, typer.Argument(help="Path to config YAML file")],
) -> None:
    """Validate a configuration file without touching the database."""
    try:
        config = load_config(config_path)
        console.print("[green]Configuration is valid![/green]")
        console.print(f"  Database: {config.get_database_url()}")
        console.print(f"  Restaurants: {len(config.restaurants)}")
        console.print(f"  Seed: {config.seed}")

    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e
    except ConfigurationError as e:
        console.print(f"[red]{e}")
        raise typer.Exit(1) from e
    except Exception as e:
        console.print(f"[red]Validation error:[/red] {e}")
        raise typer.Exit(1) from e


if __name__ == "__main__":
    app()
