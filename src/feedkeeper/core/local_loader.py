"""Cache-backed feed loader.

LocalFeedLoader combines a FeedStore with a CachePolicy. Store calls are
asynchronous: every public operation returns a Future that the loader
completes from the store's completion, on whatever thread the store uses.

The owner invalidates the loader with close(). Pending futures are
cancelled and later store completions are dropped without delivering a
result or issuing follow-up store calls.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import CancelledError, Future
from typing import TYPE_CHECKING, Any

from feedkeeper.core.cache_policy import CachePolicy
from feedkeeper.core.exceptions import LoaderClosedError
from feedkeeper.core.models import (
    Failure,
    Found,
    RetrievalFailure,
    Success,
    to_domain,
    to_stored,
)


if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from types import TracebackType

    from feedkeeper.core.models import FeedImage, LoadResult, RetrievalOutcome
    from feedkeeper.core.ports import Clock, FeedStore

logger = logging.getLogger(__name__)


def _outcome_of(retrieved: Future[RetrievalOutcome]) -> RetrievalOutcome:
    """Read a retrieval future, folding raised errors into RetrievalFailure."""
    if retrieved.cancelled():
        return RetrievalFailure(CancelledError())
    error = retrieved.exception()
    if error is not None:
        return RetrievalFailure(error)  # type: ignore[arg-type]
    return retrieved.result()


def _error_of(completed: Future[None]) -> BaseException | None:
    if completed.cancelled():
        return CancelledError()
    return completed.exception()


class LocalFeedLoader:
    """Loads, saves and validates the cached feed.

    Example:
        >>> from feedkeeper import FileFeedStore, LocalFeedLoader, system_clock
        >>> with FileFeedStore(path) as store:  # doctest: +SKIP
        ...     loader = LocalFeedLoader(store, clock=system_clock)
        ...     loader.save(images).result()
        ...     result = loader.load().result()
    """

    def __init__(
        self,
        store: FeedStore,
        clock: Clock,
        policy: CachePolicy | None = None,
    ) -> None:
        """Create a loader. No store call is made here.

        Args:
            store: Where the snapshot lives.
            clock: Current-time provider, used for save timestamps and
                freshness checks.
            policy: Freshness policy. Defaults to a 7-day CachePolicy.
        """
        self._store = store
        self._clock = clock
        self._policy = policy if policy is not None else CachePolicy()
        self._lock = threading.Lock()
        self._pending: set[Future[Any]] = set()
        self._closed = False

    @property
    def closed(self) -> bool:
        """Whether close() has been called."""
        return self._closed

    def load(self) -> Future[LoadResult]:
        """Load the cached feed if it is fresh.

        Makes exactly one retrieve call and never deletes anything, even
        when the snapshot turns out to be stale.

        Returns:
            Future resolving to Success(images) for a fresh snapshot,
            Success([]) for an empty or stale store, or Failure(error)
            when retrieval failed or the snapshot could not be checked
            against the clock.

        Raises:
            LoaderClosedError: If the loader has been closed.
        """
        result: Future[LoadResult] = self._track()

        def on_retrieved(retrieved: Future[RetrievalOutcome]) -> None:
            try:
                loaded = self._load_result(_outcome_of(retrieved))
            except Exception as e:
                logger.warning("Could not interpret cached feed: %s", e)
                loaded = Failure(e)
            self._deliver(result, loaded)

        self._call_store(result, self._store.retrieve).add_done_callback(on_retrieved)
        return result

    def save(self, feed: Iterable[FeedImage]) -> Future[None]:
        """Replace the cached feed with feed, timestamped by the clock.

        The existing snapshot is deleted first. If deletion fails the
        returned future fails with that error and nothing is inserted.
        Stores reject a naive clock value with StoreWriteError.

        Returns:
            Future resolving to None once the new snapshot is stored, or
            failing with the deletion or insertion error.

        Raises:
            LoaderClosedError: If the loader has been closed.
        """
        images = list(feed)
        result: Future[None] = self._track()

        def on_deleted(deleted: Future[None]) -> None:
            if not self._is_live(result):
                logger.debug("Skipping insert for abandoned save")
                return
            error = _error_of(deleted)
            if error is not None:
                self._deliver(result, error=error)
                return
            try:
                inserted = self._store.insert(to_stored(images), self._clock())
            except Exception as e:
                logger.warning("Could not start feed cache insert: %s", e)
                self._deliver(result, error=e)
                return
            inserted.add_done_callback(on_inserted)

        def on_inserted(inserted: Future[None]) -> None:
            error = _error_of(inserted)
            if error is not None:
                self._deliver(result, error=error)
            else:
                logger.debug("Saved %d feed images", len(images))
                self._deliver(result, None)

        self._call_store(result, self._store.delete).add_done_callback(on_deleted)
        return result

    def validate_cache(self) -> Future[bool]:
        """Evict the snapshot if it is stale or unreadable.

        Eviction is best effort: a failed delete is logged and otherwise
        ignored.

        Returns:
            Future resolving to True after an eviction was attempted, or
            False when the store was empty or fresh. Fails with the error
            if the snapshot could not be checked against the clock.

        Raises:
            LoaderClosedError: If the loader has been closed.
        """
        result: Future[bool] = self._track()

        def on_retrieved(retrieved: Future[RetrievalOutcome]) -> None:
            if not self._is_live(result):
                logger.debug("Skipping validation for closed loader")
                return
            try:
                evict = self._needs_eviction(_outcome_of(retrieved))
            except Exception as e:
                logger.warning("Could not validate cached feed: %s", e)
                self._deliver(result, error=e)
                return
            if not evict:
                self._deliver(result, False)
                return
            try:
                deleted = self._store.delete()
            except Exception as e:
                logger.warning("Feed cache eviction failed: %s", e)
                self._deliver(result, True)
                return
            deleted.add_done_callback(on_evicted)

        def on_evicted(deleted: Future[None]) -> None:
            error = _error_of(deleted)
            if error is not None:
                logger.warning("Feed cache eviction failed: %s", error)
            self._deliver(result, True)

        self._call_store(result, self._store.retrieve).add_done_callback(on_retrieved)
        return result

    def close(self) -> None:
        """Invalidate the loader.

        Pending futures are cancelled and no result is delivered for store
        calls that complete afterwards. Closing twice is harmless.
        """
        with self._lock:
            self._closed = True
            pending = list(self._pending)
            self._pending.clear()
        for future in pending:
            future.cancel()
        if pending:
            logger.debug("Closed loader with %d pending operations", len(pending))

    def __enter__(self) -> LocalFeedLoader:
        """Enter context manager."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Close the loader."""
        self.close()

    def _load_result(self, outcome: RetrievalOutcome) -> LoadResult:
        if isinstance(outcome, RetrievalFailure):
            return Failure(outcome.error)
        if isinstance(outcome, Found) and self._is_fresh(outcome):
            return Success(to_domain(outcome.feed))
        return Success([])

    def _needs_eviction(self, outcome: RetrievalOutcome) -> bool:
        if isinstance(outcome, RetrievalFailure):
            logger.info("Evicting unreadable feed cache: %s", outcome.error)
            return True
        if isinstance(outcome, Found) and not self._is_fresh(outcome):
            logger.info("Evicting stale feed cache saved at %s", outcome.timestamp)
            return True
        return False

    def _is_fresh(self, found: Found) -> bool:
        return self._policy.is_fresh(found.timestamp, self._clock())

    def _is_live(self, result: Future[Any]) -> bool:
        return not self._closed and not result.done()

    def _track(self) -> Future[Any]:
        future: Future[Any] = Future()
        with self._lock:
            if self._closed:
                raise LoaderClosedError()
            self._pending.add(future)
        return future

    def _call_store(
        self, result: Future[Any], operation: Callable[[], Future[Any]]
    ) -> Future[Any]:
        """Start a store operation on behalf of result."""
        try:
            return operation()
        except Exception:
            with self._lock:
                self._pending.discard(result)
            raise

    def _deliver(
        self,
        result: Future[Any],
        value: object = None,
        error: BaseException | None = None,
    ) -> None:
        """Complete result once, unless the loader or the caller gave up on it."""
        with self._lock:
            self._pending.discard(result)
            if self._closed:
                logger.debug("Dropping completion for closed loader")
                return
            if not result.set_running_or_notify_cancel():
                return
        if error is not None:
            result.set_exception(error)
        else:
            result.set_result(value)
