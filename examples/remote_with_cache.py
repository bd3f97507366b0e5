"""Fetch the feed remotely and fall back to the local cache.

feedkeeper does not ship an HTTP transport. Anything with a
get(url) -> Future[(body, HTTPResponse)] method can be passed as the
client; this example uses a canned in-memory one.
"""

from __future__ import annotations

from concurrent.futures import Future
from pathlib import Path

from feedkeeper import (
    CachePolicy,
    Failure,
    FeedImage,
    FeedkeeperError,
    FileFeedStore,
    HTTPResponse,
    LocalFeedLoader,
    RemoteFeedLoader,
    system_clock,
)


FEED_URL = "https://feed.example.com/v1/feed"

BODY = b"""{"items": [
    {"id": "5d6ea8a0-8b2c-4d3e-9f00-0123456789ab",
     "description": "Sunset", "location": "Lisbon",
     "image": "https://images.example.com/sunset.jpg"}
]}"""


class CannedClient:
    """HTTPClient answering every GET with the same body."""

    def __init__(self, body: bytes, status_code: int = 200) -> None:
        self.body = body
        self.status_code = status_code

    def get(self, url: str) -> Future[tuple[bytes, HTTPResponse]]:
        future: Future[tuple[bytes, HTTPResponse]] = Future()
        future.set_result((self.body, HTTPResponse(status_code=self.status_code)))
        return future


def load_feed(remote: RemoteFeedLoader, local: LocalFeedLoader) -> list[FeedImage]:
    """Prefer the remote feed, caching it; use the cache when remote fails."""
    result = remote.load().result()
    if not isinstance(result, Failure):
        local.save(result.items).result()
        return result.items

    error = result.error
    print(f"Remote load failed: {error}")
    if isinstance(error, FeedkeeperError) and error.recovery_hint:
        print(f"Hint: {error.recovery_hint}")

    cached = local.load().result()
    if isinstance(cached, Failure):
        raise cached.error
    return cached.items


if __name__ == "__main__":
    with FileFeedStore(Path(".feedkeeper") / "feed.json") as store:
        # Cached feeds stay fresh for 3 days instead of the default 7
        local = LocalFeedLoader(store, clock=system_clock, policy=CachePolicy(3))
        local.validate_cache().result()

        remote = RemoteFeedLoader(FEED_URL, client=CannedClient(BODY))
        for image in load_feed(remote, local):
            print(image.description, image.url)

        offline = RemoteFeedLoader(FEED_URL, client=CannedClient(b"", status_code=503))
        print(len(load_feed(offline, local)), "images from cache")
