"""Status command for CLI."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from feedkeeper.cli.formatting import _format_state_with_color, _format_timestamp
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
from feedkeeper.core.formatting import cache_state
from feedkeeper.core.models import Found


@app.command()
def status(
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
    """Show cache state (fresh/stale/missing/corrupt) of the stored feed."""
    policy = CachePolicy(max_age_days)

    with open_store(store) as feed_store:
        outcome = feed_store.retrieve().result()

    try:
        state = cache_state(outcome, policy, system_clock())
    except FeedkeeperError as e:
        fail(e)

    table = Table(show_header=False)
    table.add_column("Field")
    table.add_column("Value")
    table.add_row("Store", str(feed_store.path))
    table.add_row("State", _format_state_with_color(state))

    if isinstance(outcome, Found):
        table.add_row("Items", str(len(outcome.feed)))
        table.add_row("Saved at", _format_timestamp(outcome.timestamp))
        expires_at = policy.expires_at(outcome.timestamp)
        table.add_row("Expires at", _format_timestamp(expires_at))

    # Force terminal output to ensure tables render correctly in all environments
    console = Console(force_terminal=True)
    console.print(table)
