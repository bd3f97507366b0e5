"""Formatting utilities for domain logic."""

from __future__ import annotations

from typing import TYPE_CHECKING

from feedkeeper.core.exceptions import CacheCorruptError
from feedkeeper.core.models import Empty, Found, RetrievalFailure


if TYPE_CHECKING:
    from datetime import datetime

    from feedkeeper.core.cache_policy import CachePolicy
    from feedkeeper.core.models import RetrievalOutcome


def cache_state(outcome: RetrievalOutcome, policy: CachePolicy, now: datetime) -> str:
    """Summarize a retrieval outcome as a single state word.

    Returns:
        "missing" for an empty store, "fresh" or "stale" for a stored
        snapshot, "corrupt" when the snapshot could not be decoded.

    Raises:
        Exception: The store error, for any other retrieval failure.
    """
    if isinstance(outcome, Empty):
        return "missing"
    if isinstance(outcome, Found):
        return "fresh" if policy.is_fresh(outcome.timestamp, now) else "stale"
    if isinstance(outcome, RetrievalFailure) and isinstance(
        outcome.error, CacheCorruptError
    ):
        return "corrupt"
    raise outcome.error


def state_to_color(state: str) -> str:
    """Map state string to color name.

    Returns:
        Color name string:
        - "fresh" -> "green"
        - "stale" -> "yellow"
        - "missing" -> "red"
        - "corrupt" -> "bold red"
        - invalid -> empty string
    """
    color_map = {
        "fresh": "green",
        "stale": "yellow",
        "missing": "red",
        "corrupt": "bold red",
    }
    return color_map.get(state, "")
