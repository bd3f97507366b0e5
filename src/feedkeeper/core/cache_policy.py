"""Time-based freshness policy for the cached feed."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta


DEFAULT_MAX_CACHE_AGE_DAYS = 7


def system_clock() -> datetime:
    """Current UTC time. Pass this explicitly where a real clock is wanted."""
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True)
class CachePolicy:
    """Decides whether a snapshot saved at a given time is still fresh.

    The age limit is applied in calendar days: adding days to an aware
    timestamp moves its wall-clock date and keeps the time of day, so a
    DST change inside the window does not shift the expiry by an hour.

    Attributes:
        max_age_days: Number of days a snapshot stays fresh.
    """

    max_age_days: int = DEFAULT_MAX_CACHE_AGE_DAYS

    def __post_init__(self) -> None:
        """Validate the age limit."""
        if self.max_age_days <= 0:
            raise ValueError("max_age_days must be positive")

    def expires_at(self, timestamp: datetime) -> datetime:
        """First instant at which a snapshot saved at timestamp is stale."""
        return timestamp + timedelta(days=self.max_age_days)

    def is_fresh(self, timestamp: datetime, now: datetime) -> bool:
        """Return True if a snapshot saved at timestamp is fresh at now.

        A snapshot exactly max_age_days old is already stale. Both instants
        must be timezone-aware; comparing a naive one raises TypeError.
        """
        return now < self.expires_at(timestamp)
