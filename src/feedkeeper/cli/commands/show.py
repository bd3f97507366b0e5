"""Show command for CLI."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from feedkeeper.cli.formatting import _format_optional
from feedkeeper.cli.main import (
    MAX_AGE_OPTION_HELP,
    STORE_OPTION_HELP,
    app,
    fail,
    open_store,
)
from feedkeeper.config import DEFAULT_MAX_CACHE_AGE_DAYS, STORE_PATH_ENVVAR
from feedkeeper.core.cache_policy import CachePolicy, system_clock
from feedkeeper.core.exceptions import FeedkeeperError
from feedkeeper.core.local_loader import LocalFeedLoader
from feedkeeper.core.models import Failure


@app.command()
def show(
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
    """List the images of the cached feed, if it is still fresh."""
    policy = CachePolicy(max_age_days)

    with open_store(store) as feed_store:
        with LocalFeedLoader(feed_store, clock=system_clock, policy=policy) as loader:
            result = loader.load().result()

    if isinstance(result, Failure):
        if isinstance(result.error, FeedkeeperError):
            fail(result.error)
        raise result.error

    if not result.items:
        typer.echo("No fresh feed cached.")
        return

    table = Table()
    table.add_column("#", justify="right")
    table.add_column("ID")
    table.add_column("Description")
    table.add_column("Location")
    table.add_column("URL")

    for position, image in enumerate(result.items, 1):
        table.add_row(
            str(position),
            str(image.id),
            _format_optional(image.description),
            _format_optional(image.location),
            image.url,
        )

    console = Console(force_terminal=True)
    console.print(table)
