"""Port interfaces for hexagonal architecture.

Ports define contracts that adapters must implement. The core domain
depends only on these protocols, never on concrete implementations.

Every asynchronous operation returns a ``concurrent.futures.Future`` that
completes exactly once, possibly on a different thread than the caller.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING, Protocol, runtime_checkable


if TYPE_CHECKING:
    from concurrent.futures import Future

    from feedkeeper.core.models import (
        FeedImage,
        HTTPResponse,
        LoadResult,
        RetrievalOutcome,
        StoredFeedImage,
    )

# Must return timezone-aware datetimes.
Clock = Callable[[], datetime]


@runtime_checkable
class FeedStore(Protocol):
    """Persists a single feed snapshot."""

    def retrieve(self) -> Future[RetrievalOutcome]:
        """Read the stored snapshot.

        Returns:
            Future resolving to Empty, Found or RetrievalFailure. Store
            errors are reported through RetrievalFailure, not raised.
        """
        ...

    def insert(
        self, feed: list[StoredFeedImage], timestamp: datetime
    ) -> Future[None]:
        """Replace any stored snapshot with feed saved at timestamp.

        A failed insert must leave the previous snapshot retrievable.

        Returns:
            Future resolving to None, or failing with the store error.
        """
        ...

    def delete(self) -> Future[None]:
        """Remove the stored snapshot. Deleting an empty store succeeds.

        Returns:
            Future resolving to None, or failing with the store error.
        """
        ...


@runtime_checkable
class HTTPClient(Protocol):
    """One-shot HTTP GET transport."""

    def get(self, url: str) -> Future[tuple[bytes, HTTPResponse]]:
        """Request url.

        Returns:
            Future resolving to (body, response), or failing with the
            transport error. Each call owns its future.
        """
        ...


@runtime_checkable
class FeedLoader(Protocol):
    """Anything that can load the feed."""

    def load(self) -> Future[LoadResult]:
        """Load feed images as a Success or Failure result."""
        ...


@runtime_checkable
class FeedCache(Protocol):
    """Anything that can persist the feed."""

    def save(self, feed: list[FeedImage]) -> Future[None]:
        """Persist feed, replacing any previous one."""
        ...


@runtime_checkable
class ExecutorPort(Protocol):
    """Executor for store work.

    Abstracts over concurrent.futures executors to allow dependency injection
    and testing. Stores submit their I/O here instead of creating threads,
    keeping concurrency at the edges.
    """

    def submit(
        self, fn: Callable[..., object], *args: object, **kwargs: object
    ) -> Future[object]:  # type: ignore[name-defined, unused-ignore]
        """Submit a function for execution.

        Args:
            fn: Function to execute.
            *args: Positional arguments to pass to fn.
            **kwargs: Keyword arguments to pass to fn.

        Returns:
            Future representing the pending result.
        """
        ...

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting work, optionally waiting for queued tasks."""
        ...

    def __enter__(self) -> ExecutorPort:
        """Enter context manager."""
        ...

    def __exit__(
        self, exc_type: object, exc_val: object, exc_tb: object
    ) -> object | None:
        """Exit context manager."""
        ...
