"""Core domain models for feedkeeper.

These models are pure Python dataclasses with no I/O dependencies.
They represent the feed images, the persisted snapshot, and the tagged
results exchanged between loaders, stores and callers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Self


if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from uuid import UUID


@dataclass(frozen=True, slots=True)
class FeedImage:
    """An image published in the feed.

    Attributes:
        id: Unique identifier of the image.
        url: Location of the image resource.
        description: Optional human-readable description.
        location: Optional place label.

    Example:
        >>> from uuid import UUID
        >>> image = FeedImage(
        ...     id=UUID("73A7F70C-75DA-4C2E-B5A3-EED40DC53AA6"),
        ...     url="https://a-url.com/image.jpg",
        ... )
        >>> image.description is None
        True
    """

    id: UUID
    url: str
    description: str | None = None
    location: str | None = None


@dataclass(frozen=True, slots=True)
class StoredFeedImage:
    """Persistence-layer mirror of FeedImage.

    Keeps the on-disk schema independent from the domain model so either
    can evolve without touching the other.
    """

    id: UUID
    url: str
    description: str | None = None
    location: str | None = None

    @classmethod
    def from_image(cls, image: FeedImage) -> Self:
        """Build the stored representation of a domain image."""
        return cls(
            id=image.id,
            url=image.url,
            description=image.description,
            location=image.location,
        )

    def to_image(self) -> FeedImage:
        """Convert back to the domain model."""
        return FeedImage(
            id=self.id,
            url=self.url,
            description=self.description,
            location=self.location,
        )


def to_stored(images: Iterable[FeedImage]) -> list[StoredFeedImage]:
    """Convert domain images to their stored form, preserving order."""
    return [StoredFeedImage.from_image(image) for image in images]


def to_domain(stored: Iterable[StoredFeedImage]) -> list[FeedImage]:
    """Convert stored images to domain images, preserving order."""
    return [item.to_image() for item in stored]


@dataclass(frozen=True, slots=True)
class CachedFeed:
    """The single persisted unit: an ordered feed plus its creation time.

    Attributes:
        items: Stored images in feed order.
        timestamp: When the snapshot was saved.
    """

    items: list[StoredFeedImage]
    timestamp: datetime


@dataclass(frozen=True, slots=True)
class Empty:
    """Retrieval outcome when no snapshot is stored."""


@dataclass(frozen=True, slots=True)
class Found:
    """Retrieval outcome carrying the stored snapshot."""

    feed: list[StoredFeedImage]
    timestamp: datetime

    @classmethod
    def from_cache(cls, cache: CachedFeed) -> Self:
        """Build a Found outcome from a decoded snapshot."""
        return cls(feed=cache.items, timestamp=cache.timestamp)


@dataclass(frozen=True, slots=True)
class RetrievalFailure:
    """Retrieval outcome when the store could not produce a snapshot."""

    error: Exception


RetrievalOutcome = Empty | Found | RetrievalFailure


@dataclass(frozen=True, slots=True)
class Success:
    """Successful load carrying the feed images in order."""

    items: list[FeedImage]


@dataclass(frozen=True, slots=True)
class Failure:
    """Failed load carrying the error verbatim."""

    error: Exception


LoadResult = Success | Failure


@dataclass(frozen=True, slots=True)
class HTTPResponse:
    """Transport response metadata.

    Attributes:
        status_code: HTTP status code.
        headers: Response headers.
    """

    status_code: int
    headers: Mapping[str, str] = field(default_factory=dict)
