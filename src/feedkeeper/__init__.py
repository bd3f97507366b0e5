"""feedkeeper - Feed loading with a single-snapshot local cache.

This library fetches an image feed through an injected HTTP client, maps
the response into domain images, and keeps one cached copy of the feed
that expires after a fixed number of calendar days.

Example:
    >>> from feedkeeper import FileFeedStore, LocalFeedLoader, system_clock
    >>> with FileFeedStore(".feedkeeper/feed.json") as store:  # doctest: +SKIP
    ...     loader = LocalFeedLoader(store, clock=system_clock)
    ...     loader.save(images).result()
    ...     loader.load().result()
    Success(items=[...])
"""

from feedkeeper.adapters.executor import (
    SynchronousExecutor,
    ThreadPoolExecutorAdapter,
)
from feedkeeper.adapters.store import FileFeedStore, S3FeedStore
from feedkeeper.config import (
    default_store_path,
    find_project_root,
    resolve_store_path,
)
from feedkeeper.core.cache_policy import CachePolicy, system_clock
from feedkeeper.core.exceptions import (
    CacheCorruptError,
    ConfigurationError,
    ConnectivityError,
    FeedkeeperError,
    FeedStoreError,
    InvalidDataError,
    LoaderClosedError,
    RemoteFeedError,
    StoreAccessError,
    StoreReadError,
    StoreWriteError,
)
from feedkeeper.core.feed_items_mapper import map_feed_items
from feedkeeper.core.local_loader import LocalFeedLoader
from feedkeeper.core.models import (
    CachedFeed,
    Empty,
    Failure,
    FeedImage,
    Found,
    HTTPResponse,
    LoadResult,
    RetrievalFailure,
    RetrievalOutcome,
    StoredFeedImage,
    Success,
)
from feedkeeper.core.ports import (
    Clock,
    ExecutorPort,
    FeedCache,
    FeedLoader,
    FeedStore,
    HTTPClient,
)
from feedkeeper.core.remote_loader import RemoteFeedLoader


__version__ = "0.1.0"

__all__ = [
    "CacheCorruptError",
    "CachePolicy",
    "CachedFeed",
    "Clock",
    "ConfigurationError",
    "ConnectivityError",
    "Empty",
    "ExecutorPort",
    "Failure",
    "FeedCache",
    "FeedImage",
    "FeedLoader",
    "FeedStore",
    "FeedStoreError",
    "FeedkeeperError",
    "FileFeedStore",
    "Found",
    "HTTPClient",
    "HTTPResponse",
    "InvalidDataError",
    "LoadResult",
    "LoaderClosedError",
    "LocalFeedLoader",
    "RemoteFeedError",
    "RemoteFeedLoader",
    "RetrievalFailure",
    "RetrievalOutcome",
    "S3FeedStore",
    "StoreAccessError",
    "StoreReadError",
    "StoreWriteError",
    "StoredFeedImage",
    "Success",
    "SynchronousExecutor",
    "ThreadPoolExecutorAdapter",
    "__version__",
    "default_store_path",
    "find_project_root",
    "map_feed_items",
    "resolve_store_path",
    "system_clock",
]
