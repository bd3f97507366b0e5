"""File-backed feed store implementing FeedStore."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

from feedkeeper.adapters.executor import ThreadPoolExecutorAdapter
from feedkeeper.adapters.store.codec import decode_cache, encode_cache
from feedkeeper.core.exceptions import (
    CacheCorruptError,
    StoreReadError,
    StoreWriteError,
)
from feedkeeper.core.models import (
    CachedFeed,
    Empty,
    Found,
    RetrievalFailure,
)


if TYPE_CHECKING:
    from concurrent.futures import Future
    from datetime import datetime
    from types import TracebackType

    from feedkeeper.core.models import RetrievalOutcome, StoredFeedImage
    from feedkeeper.core.ports import ExecutorPort

logger = logging.getLogger(__name__)


class FileFeedStore:
    """Keeps the feed snapshot in a single JSON file.

    All operations run on one executor. The default is a single-worker
    thread pool, so overlapping calls are applied one at a time in the
    order they were made. Inserts write a temporary file next to the
    target and atomically replace it, so a reader sees either the old or
    the new snapshot and a failed insert leaves the old one in place.

    Attributes:
        path: Location of the snapshot file.
    """

    def __init__(self, path: Path | str, executor: ExecutorPort | None = None) -> None:
        """Initialize the store.

        Args:
            path: Snapshot file. Parent directories are created on insert.
            executor: Where operations run. Defaults to a dedicated
                single-worker ThreadPoolExecutorAdapter owned by the store.
        """
        self.path = Path(path)
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutorAdapter(
            max_workers=1, thread_name_prefix="feedkeeper-store"
        )

    def retrieve(self) -> Future[RetrievalOutcome]:
        """Read the snapshot file."""
        return self._executor.submit(self._retrieve)  # type: ignore[return-value]

    def insert(
        self, feed: list[StoredFeedImage], timestamp: datetime
    ) -> Future[None]:
        """Overwrite the snapshot file with feed."""
        cache = CachedFeed(items=list(feed), timestamp=timestamp)
        return self._executor.submit(self._insert, cache)  # type: ignore[return-value]

    def delete(self) -> Future[None]:
        """Remove the snapshot file if it exists."""
        return self._executor.submit(self._delete)  # type: ignore[return-value]

    def close(self) -> None:
        """Wait for queued operations and stop the executor if the store owns it."""
        if self._owns_executor:
            self._executor.shutdown(wait=True)

    def __enter__(self) -> FileFeedStore:
        """Enter context manager."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Close the store."""
        self.close()

    def _retrieve(self) -> RetrievalOutcome:
        try:
            raw = self.path.read_bytes()
        except (FileNotFoundError, NotADirectoryError):
            logger.debug("No feed cache at %s", self.path)
            return Empty()
        except OSError as e:
            return RetrievalFailure(
                StoreReadError(
                    f"Could not read feed cache at {self.path}",
                    location=str(self.path),
                    cause=e,
                )
            )

        try:
            cache = decode_cache(raw, location=str(self.path))
        except CacheCorruptError as e:
            return RetrievalFailure(e)
        logger.debug("Read %d cached items from %s", len(cache.items), self.path)
        return Found.from_cache(cache)

    def _insert(self, cache: CachedFeed) -> None:
        tmp_path: Path | None = None
        try:
            data = encode_cache(cache)
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                delete=False, dir=self.path.parent, prefix=f".{self.path.name}."
            ) as tmp_file:
                tmp_path = Path(tmp_file.name)
                tmp_file.write(data)
            os.replace(tmp_path, self.path)
        except (OSError, TypeError, ValueError) as e:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            raise StoreWriteError(
                f"Could not write feed cache to {self.path}",
                location=str(self.path),
                cause=e,
            ) from e
        logger.debug("Wrote %d items to %s", len(cache.items), self.path)

    def _delete(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
        except NotADirectoryError:
            return
        except OSError as e:
            raise StoreWriteError(
                f"Could not delete feed cache at {self.path}",
                location=str(self.path),
                cause=e,
            ) from e
        logger.debug("Deleted feed cache at %s", self.path)
