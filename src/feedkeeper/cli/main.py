"""CLI commands for feedkeeper."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, NoReturn

import typer

from feedkeeper.config import (
    DEFAULT_MAX_CACHE_AGE_DAYS,
    STORE_PATH_ENVVAR,
    resolve_store_path,
)
from feedkeeper.core.exceptions import ConfigurationError, FeedkeeperError


if TYPE_CHECKING:
    from feedkeeper import FileFeedStore


app = typer.Typer(
    name="feedkeeper",
    help="Inspect and maintain the locally cached feed.",
    no_args_is_help=True,
)

logger = logging.getLogger(__name__)

STORE_OPTION_HELP = "Snapshot file. Defaults to <project root>/.feedkeeper/feed.json."
MAX_AGE_OPTION_HELP = "Days a saved feed stays fresh."


@app.callback()
def configure(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log store and loader activity to stderr.",
    ),
) -> None:
    """Inspect and maintain the locally cached feed."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


def fail(error: FeedkeeperError) -> NoReturn:
    """Report a library error with its recovery hint and exit with status 1."""
    typer.echo(f"Error: {error}", err=True)
    if error.recovery_hint:
        typer.echo(f"Hint: {error.recovery_hint}", err=True)
    raise typer.Exit(1)


def open_store(store: str | None) -> FileFeedStore:
    """Open the file store named by --store, or the project default.

    Raises:
        typer.Exit: If the store path is invalid.
    """
    from feedkeeper import FileFeedStore

    try:
        path = resolve_store_path(store)
    except ConfigurationError as e:
        fail(e)
    logger.debug("Using feed store at %s", path)
    return FileFeedStore(path)


@app.command()
def validate(
    store: str | None = typer.Option(
        None, "--store", "-s", envvar=STORE_PATH_ENVVAR, help=STORE_OPTION_HELP
    ),
    max_age_days: int = typer.Option(
        DEFAULT_MAX_CACHE_AGE_DAYS,
        "--max-age-days",
        min=1,
        help=MAX_AGE_OPTION_HELP,
    ),
) -> None:
    """Evict the cached feed if it is stale or unreadable."""
    from feedkeeper import CachePolicy, LocalFeedLoader, system_clock

    policy = CachePolicy(max_age_days)
    with open_store(store) as feed_store:
        with LocalFeedLoader(feed_store, clock=system_clock, policy=policy) as loader:
            evicted = loader.validate_cache().result()

    if evicted:
        typer.echo(f"Evicted cached feed at {feed_store.path}.")
    else:
        typer.echo("Cached feed is valid. Nothing to evict.")


@app.command()
def clear(
    store: str | None = typer.Option(
        None, "--store", "-s", envvar=STORE_PATH_ENVVAR, help=STORE_OPTION_HELP
    ),
) -> None:
    """Delete the cached feed."""
    with open_store(store) as feed_store:
        try:
            feed_store.delete().result()
        except FeedkeeperError as e:
            fail(e)
    logger.info("Cleared feed cache at %s", feed_store.path)
    typer.echo(f"Cleared cached feed at {feed_store.path}.")


def main() -> None:
    """Entry point for the CLI."""
    app()
