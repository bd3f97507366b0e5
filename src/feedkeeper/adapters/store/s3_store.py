"""S3 feed store using boto3."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import boto3
from botocore.exceptions import ClientError

from feedkeeper.adapters.executor import ThreadPoolExecutorAdapter
from feedkeeper.adapters.store.codec import decode_cache, encode_cache
from feedkeeper.core.exceptions import (
    CacheCorruptError,
    FeedStoreError,
    StoreAccessError,
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

    from mypy_boto3_s3 import S3Client

    from feedkeeper.core.models import RetrievalOutcome, StoredFeedImage
    from feedkeeper.core.ports import ExecutorPort

logger = logging.getLogger(__name__)

_NOT_FOUND_CODES = ("404", "NoSuchKey")
_ACCESS_DENIED_CODES = ("403", "AccessDenied")


class S3FeedStore:
    """Keeps the feed snapshot as a single S3 object.

    PutObject replaces an object atomically, so readers never observe a
    partially written snapshot. Operations run on a single-worker executor
    to keep overlapping calls in order.
    """

    def __init__(
        self,
        uri: str,
        client: S3Client | None = None,
        executor: ExecutorPort | None = None,
    ) -> None:
        """Initialize S3 store.

        Args:
            uri: Snapshot location as s3://bucket/key.
            client: Optional boto3 S3 client. If not provided, creates a default client.
            executor: Where operations run. Defaults to a dedicated
                single-worker ThreadPoolExecutorAdapter owned by the store.
        """
        self.uri = uri
        self._bucket, self._key = self._parse_s3_uri(uri)
        self._client = client or boto3.client("s3")
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutorAdapter(
            max_workers=1, thread_name_prefix="feedkeeper-s3"
        )

    def retrieve(self) -> Future[RetrievalOutcome]:
        """Read the snapshot object."""
        return self._executor.submit(self._retrieve)  # type: ignore[return-value]

    def insert(
        self, feed: list[StoredFeedImage], timestamp: datetime
    ) -> Future[None]:
        """Overwrite the snapshot object with feed."""
        cache = CachedFeed(items=list(feed), timestamp=timestamp)
        return self._executor.submit(self._insert, cache)  # type: ignore[return-value]

    def delete(self) -> Future[None]:
        """Remove the snapshot object. Missing objects are not an error."""
        return self._executor.submit(self._delete)  # type: ignore[return-value]

    def close(self) -> None:
        """Wait for queued operations and stop the executor if the store owns it."""
        if self._owns_executor:
            self._executor.shutdown(wait=True)

    def __enter__(self) -> S3FeedStore:
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
            response = self._client.get_object(Bucket=self._bucket, Key=self._key)
            raw = response["Body"].read()
        except ClientError as e:
            if self._error_code(e) in _NOT_FOUND_CODES:
                logger.debug("No feed cache at %s", self.uri)
                return Empty()
            return RetrievalFailure(self._translate_client_error(e, StoreReadError))

        try:
            cache = decode_cache(raw, location=self.uri)
        except CacheCorruptError as e:
            return RetrievalFailure(e)
        return Found.from_cache(cache)

    def _insert(self, cache: CachedFeed) -> None:
        try:
            body = encode_cache(cache)
        except ValueError as e:
            raise StoreWriteError(
                f"Could not encode feed cache for {self.uri}: {e}",
                location=self.uri,
                cause=e,
            ) from e
        try:
            self._client.put_object(
                Bucket=self._bucket,
                Key=self._key,
                Body=body,
                ContentType="application/json",
            )
        except ClientError as e:
            raise self._translate_client_error(e, StoreWriteError) from e
        logger.debug("Wrote %d items to %s", len(cache.items), self.uri)

    def _delete(self) -> None:
        try:
            self._client.delete_object(Bucket=self._bucket, Key=self._key)
        except ClientError as e:
            raise self._translate_client_error(e, StoreWriteError) from e
        logger.debug("Deleted feed cache at %s", self.uri)

    def _parse_s3_uri(self, uri: str) -> tuple[str, str]:
        """Parse an S3 URI into bucket and key.

        Raises:
            ValueError: If URI is not a valid S3 URI.
        """
        if not uri.startswith("s3://"):
            raise ValueError(f"Invalid S3 URI: {uri}")

        parts = uri[5:].split("/", 1)
        if len(parts) != 2 or not parts[1]:
            raise ValueError(f"Invalid S3 URI (missing key): {uri}")

        bucket, key = parts
        return bucket, key

    @staticmethod
    def _error_code(error: ClientError) -> str:
        return str(error.response.get("Error", {}).get("Code", ""))

    def _translate_client_error(
        self, error: ClientError, fallback: type[FeedStoreError]
    ) -> FeedStoreError:
        """Translate botocore ClientError to domain exception."""
        code = self._error_code(error)

        if code in _ACCESS_DENIED_CODES:
            return StoreAccessError(
                f"Access denied: {self.uri}",
                location=self.uri,
                cause=error,
            )

        return fallback(
            f"S3 error ({code}): {error}",
            location=self.uri,
            cause=error,
        )
