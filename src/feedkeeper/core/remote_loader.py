"""Remote feed loader: one GET, mapped into domain images."""

from __future__ import annotations

import logging
from concurrent.futures import Future
from typing import TYPE_CHECKING

from feedkeeper.core.exceptions import ConnectivityError, InvalidDataError
from feedkeeper.core.feed_items_mapper import map_feed_items
from feedkeeper.core.models import Failure, Success


if TYPE_CHECKING:
    from feedkeeper.core.models import HTTPResponse, LoadResult
    from feedkeeper.core.ports import HTTPClient

logger = logging.getLogger(__name__)


class RemoteFeedLoader:
    """Fetches the feed from url through an injected HTTPClient.

    Holds no per-call state, so overlapping load() calls are independent:
    each returned future is completed only by its own request.
    """

    def __init__(self, url: str, client: HTTPClient) -> None:
        self._url = url
        self._client = client

    @property
    def url(self) -> str:
        """The feed URL."""
        return self._url

    def load(self) -> Future[LoadResult]:
        """Request the feed.

        Returns:
            Future resolving to Success(images), Failure(ConnectivityError)
            when the transport failed, or Failure(InvalidDataError) when
            the response could not be mapped.
        """
        result: Future[LoadResult] = Future()

        def on_response(response: Future[tuple[bytes, HTTPResponse]]) -> None:
            if response.cancelled() or response.exception() is not None:
                cause = None if response.cancelled() else response.exception()
                logger.debug("GET %s failed: %s", self._url, cause)
                result.set_result(Failure(ConnectivityError(self._url, cause=cause)))
                return
            try:
                body, http_response = response.result()
                items = map_feed_items(body, http_response)
            except InvalidDataError as e:
                logger.debug("Rejected feed from %s: %s", self._url, e)
                result.set_result(Failure(e))
                return
            except Exception as e:
                logger.warning("Could not map feed from %s: %s", self._url, e)
                error = InvalidDataError(f"Could not map feed response: {e}", cause=e)
                result.set_result(Failure(error))
                return
            result.set_result(Success(items))

        self._client.get(self._url).add_done_callback(on_response)
        return result
