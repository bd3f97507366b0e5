"""Feed store adapters."""

from feedkeeper.adapters.store.codec import decode_cache, encode_cache
from feedkeeper.adapters.store.file_store import FileFeedStore
from feedkeeper.adapters.store.s3_store import S3FeedStore


__all__ = ["FileFeedStore", "S3FeedStore", "decode_cache", "encode_cache"]
