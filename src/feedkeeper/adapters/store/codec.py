"""JSON encoding of the cached feed snapshot.

Schema::

    {"items": [{"id": "<uuid>", "description": str | null,
                "location": str | null, "url": "<url>"}],
     "timestamp": "<ISO-8601>"}
"""

from __future__ import annotations

import json
from datetime import datetime
from uuid import UUID

from feedkeeper.core.exceptions import CacheCorruptError
from feedkeeper.core.models import CachedFeed, StoredFeedImage


def _is_aware(timestamp: datetime) -> bool:
    return timestamp.utcoffset() is not None


def _is_optional_text(value: object) -> bool:
    return value is None or isinstance(value, str)


def encode_cache(cache: CachedFeed) -> bytes:
    """Serialize a snapshot to UTF-8 JSON bytes.

    Raises:
        ValueError: If the snapshot timestamp has no UTC offset.
    """
    if not _is_aware(cache.timestamp):
        raise ValueError(f"Snapshot timestamp {cache.timestamp} has no timezone")
    data = {
        "items": [
            {
                "id": str(item.id),
                "description": item.description,
                "location": item.location,
                "url": item.url,
            }
            for item in cache.items
        ],
        "timestamp": cache.timestamp.isoformat(),
    }
    return json.dumps(data).encode("utf-8")


def decode_cache(raw: bytes, location: str) -> CachedFeed:
    """Parse bytes produced by encode_cache.

    Args:
        raw: Stored bytes.
        location: Path or URI of the snapshot, for error reporting.

    Raises:
        CacheCorruptError: If raw is not a valid snapshot document.
    """
    try:
        data = json.loads(raw)
        items = [
            StoredFeedImage(
                id=UUID(entry["id"]),
                url=entry["url"],
                description=entry.get("description"),
                location=entry.get("location"),
            )
            for entry in data["items"]
        ]
        timestamp = datetime.fromisoformat(data["timestamp"])
    except (KeyError, TypeError, ValueError, AttributeError, RecursionError) as e:
        raise CacheCorruptError(
            f"Cached feed at {location} is corrupt",
            location=location,
            cause=e,
        ) from e

    for item in items:
        if not isinstance(item.url, str):
            raise CacheCorruptError(
                f"Cached feed at {location} has a non-string url", location=location
            )
        if not (_is_optional_text(item.description) and _is_optional_text(item.location)):
            raise CacheCorruptError(
                f"Cached feed at {location} has a non-string description or location",
                location=location,
            )
    if not _is_aware(timestamp):
        raise CacheCorruptError(
            f"Cached feed at {location} has a timestamp without timezone",
            location=location,
        )
    return CachedFeed(items=items, timestamp=timestamp)
