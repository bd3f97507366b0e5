"""Translate remote feed responses into domain images.

Wire format (HTTP 200)::

    {"items": [{"id": "<uuid>", "description": "...", "location": "...",
                "image": "https://..."}]}

``id`` must be a UUID in its 8-4-4-4-12 hex form. ``description`` and
``location`` may be missing or null. Anything else that does not match
raises InvalidDataError.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any
from uuid import UUID

from feedkeeper.core.exceptions import InvalidDataError
from feedkeeper.core.models import FeedImage


if TYPE_CHECKING:
    from feedkeeper.core.models import HTTPResponse

OK_200 = 200


def _optional_text(item: dict[str, Any], key: str) -> str | None:
    value = item.get(key)
    if value is not None and not isinstance(value, str):
        raise InvalidDataError(f"Feed item field '{key}' must be a string or null")
    return value


def _to_image(item: object) -> FeedImage:
    if not isinstance(item, dict):
        raise InvalidDataError("Feed item is not an object")

    raw_id = item.get("id")
    if not isinstance(raw_id, str):
        raise InvalidDataError("Feed item is missing 'id'")
    try:
        image_id = UUID(raw_id)
    except ValueError as e:
        raise InvalidDataError(f"Feed item id is not a UUID: {raw_id!r}", cause=e) from e
    if str(image_id) != raw_id.lower():
        raise InvalidDataError(f"Feed item id is not a canonical UUID: {raw_id!r}")

    url = item.get("image")
    if not isinstance(url, str) or not url:
        raise InvalidDataError(f"Feed item {raw_id} is missing 'image'")

    return FeedImage(
        id=image_id,
        url=url,
        description=_optional_text(item, "description"),
        location=_optional_text(item, "location"),
    )


def map_feed_items(body: bytes, response: HTTPResponse) -> list[FeedImage]:
    """Decode a feed response into images, keeping document order.

    Args:
        body: Raw response body.
        response: Response metadata; only status 200 is accepted.

    Returns:
        Images in the order they appear in the document.

    Raises:
        InvalidDataError: If the status is not 200 or the body does not
            match the feed format.
    """
    if response.status_code != OK_200:
        raise InvalidDataError(
            f"Unexpected status code {response.status_code}",
            status_code=response.status_code,
        )

    try:
        root = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as e:
        raise InvalidDataError(
            "Feed body is not valid JSON", status_code=response.status_code, cause=e
        ) from e

    if not isinstance(root, dict) or not isinstance(root.get("items"), list):
        raise InvalidDataError(
            "Feed body has no 'items' list", status_code=response.status_code
        )

    return [_to_image(item) for item in root["items"]]
