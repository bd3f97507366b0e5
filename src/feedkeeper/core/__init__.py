"""Core domain module for feedkeeper.

This module contains pure Python domain models, port definitions, the
cache policy and the loaders. It performs no I/O itself and can be
tested in isolation with fake ports.
"""

from feedkeeper.core.cache_policy import CachePolicy, system_clock
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
from feedkeeper.core.ports import Clock, FeedStore, HTTPClient
from feedkeeper.core.remote_loader import RemoteFeedLoader


__all__ = [
    "CachePolicy",
    "CachedFeed",
    "Clock",
    "Empty",
    "Failure",
    "FeedImage",
    "FeedStore",
    "Found",
    "HTTPClient",
    "HTTPResponse",
    "LoadResult",
    "LocalFeedLoader",
    "RemoteFeedLoader",
    "RetrievalFailure",
    "RetrievalOutcome",
    "StoredFeedImage",
    "Success",
    "map_feed_items",
    "system_clock",
]
