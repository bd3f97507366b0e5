"""Shared formatting helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.text import Text

from feedkeeper.core.formatting import state_to_color


if TYPE_CHECKING:
    from datetime import datetime


def _format_state_with_color(state: str) -> Text:
    """Format cache state string with color coding.

    Args:
        state: State string ("fresh", "stale", "missing" or "corrupt")

    Returns:
        Rich Text object styled by state_to_color().
    """
    color = state_to_color(state)
    return Text(state, style=color) if color else Text(state)


def _format_timestamp(value: datetime | None) -> str:
    """Format a timestamp for table output, or '-' when absent."""
    if value is None:
        return "-"
    return value.isoformat(sep=" ", timespec="seconds")


def _format_optional(value: str | None) -> str:
    """Render None as '-'."""
    return "-" if value is None else value
