"""Pytest configuration and shared fixtures.

This module registers custom markers for CI job separation and provides
shared fakes for the store and transport ports.
"""

from __future__ import annotations

from collections.abc import Callable
from concurrent.futures import Future
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

import pytest

from feedkeeper.core.models import FeedImage, HTTPResponse, StoredFeedImage, to_stored


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "core: Core models, ports, policy and loaders")
    config.addinivalue_line("markers", "remote: Remote loader and response mapping")
    config.addinivalue_line("markers", "cache: Local loader and cache policy")
    config.addinivalue_line("markers", "storage: Store adapters (file, s3)")
    config.addinivalue_line("markers", "cli: CLI tests")
    config.addinivalue_line("markers", "property: Property-based tests (hypothesis)")
    config.addinivalue_line(
        "markers", "tra: Test Responsibility Anchor (TRA) - namespace.Anchor format"
    )
    config.addinivalue_line(
        "markers",
        "tier: Test tier for CI job separation (0=instant, 1=fast, 2=standard, 3=slow, 4=manual)",
    )


class FeedStoreSpy:
    """FeedStore fake that records messages and completes on demand.

    Futures returned by each operation stay pending until the test calls
    one of the complete_* methods, which resolve them in the test thread.
    """

    def __init__(self) -> None:
        self.messages: list[tuple[Any, ...]] = []
        self._retrievals: list[Future[Any]] = []
        self._deletions: list[Future[None]] = []
        self._insertions: list[Future[None]] = []

    def retrieve(self) -> Future[Any]:
        self.messages.append(("retrieve",))
        future: Future[Any] = Future()
        self._retrievals.append(future)
        return future

    def insert(self, feed: list[StoredFeedImage], timestamp: datetime) -> Future[None]:
        self.messages.append(("insert", feed, timestamp))
        future: Future[None] = Future()
        self._insertions.append(future)
        return future

    def delete(self) -> Future[None]:
        self.messages.append(("delete",))
        future: Future[None] = Future()
        self._deletions.append(future)
        return future

    def complete_retrieval(self, outcome: Any, at: int = 0) -> None:
        self._retrievals[at].set_result(outcome)

    def complete_deletion(self, error: Exception | None = None, at: int = 0) -> None:
        self._complete(self._deletions[at], error)

    def complete_insertion(self, error: Exception | None = None, at: int = 0) -> None:
        self._complete(self._insertions[at], error)

    @staticmethod
    def _complete(future: Future[None], error: Exception | None) -> None:
        if error is None:
            future.set_result(None)
        else:
            future.set_exception(error)


class HTTPClientSpy:
    """HTTPClient fake that records requested URLs and completes on demand."""

    def __init__(self) -> None:
        self._requests: list[tuple[str, Future[tuple[bytes, HTTPResponse]]]] = []

    @property
    def requested_urls(self) -> list[str]:
        return [url for url, _ in self._requests]

    def get(self, url: str) -> Future[tuple[bytes, HTTPResponse]]:
        future: Future[tuple[bytes, HTTPResponse]] = Future()
        self._requests.append((url, future))
        return future

    def complete_with_error(self, error: Exception, at: int = 0) -> None:
        self._requests[at][1].set_exception(error)

    def complete_with(self, status_code: int, body: bytes, at: int = 0) -> None:
        self._requests[at][1].set_result((body, HTTPResponse(status_code=status_code)))


class FixedClock:
    """Clock returning a settable instant."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def store() -> FeedStoreSpy:
    """A store spy with no completed operations."""
    return FeedStoreSpy()


@pytest.fixture
def http_client() -> HTTPClientSpy:
    """A transport spy with no completed requests."""
    return HTTPClientSpy()


@pytest.fixture
def fixed_now() -> datetime:
    """A fixed reference instant."""
    return datetime(2024, 3, 10, 12, 30, tzinfo=UTC)


@pytest.fixture
def clock(fixed_now: datetime) -> FixedClock:
    """Clock frozen at fixed_now."""
    return FixedClock(fixed_now)


def _make_image(description: str | None = "a description") -> FeedImage:
    return FeedImage(
        id=uuid4(),
        url=f"https://images.example.com/{uuid4()}.jpg",
        description=description,
        location="a location",
    )


@pytest.fixture
def make_image() -> Callable[..., FeedImage]:
    """Factory for images with fresh ids."""
    return _make_image


@pytest.fixture
def unique_feed() -> tuple[list[FeedImage], list[StoredFeedImage]]:
    """Two images and their stored counterparts."""
    images = [_make_image(), _make_image(description=None)]
    return images, to_stored(images)
