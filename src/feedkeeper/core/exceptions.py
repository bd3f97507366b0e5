"""Domain exceptions for feedkeeper.

All library errors inherit from FeedkeeperError, allowing users to catch
any library exception with a single except clause. Each exception provides
a recovery_hint property with guidance on resolving the error.
"""

from __future__ import annotations


class FeedkeeperError(Exception):
    """Base class for all feedkeeper exceptions.

    Catch this to handle any error from the library.
    """

    @property
    def recovery_hint(self) -> str | None:
        """Optional guidance on how to resolve this error."""
        return None


class RemoteFeedError(FeedkeeperError):
    """Base class for errors produced while loading the remote feed."""

    pass


class ConnectivityError(RemoteFeedError):
    """Raised when the transport failed to produce a response.

    Attributes:
        url: The feed URL that was requested.
        cause: The underlying transport exception, if any.
    """

    def __init__(self, url: str, cause: BaseException | None = None) -> None:
        self.url = url
        self.cause = cause
        super().__init__(f"Could not reach feed at {url}")

    @property
    def recovery_hint(self) -> str:
        """Suggest checking the network."""
        return "Check the network connection and try loading the feed again"


class InvalidDataError(RemoteFeedError):
    """Raised when a response was received but could not be turned into items.

    Attributes:
        status_code: HTTP status code of the response, if known.
        cause: The underlying decode exception, if any.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.status_code = status_code
        self.cause = cause
        super().__init__(message)


class FeedStoreError(FeedkeeperError):
    """Base class for feed store errors.

    Attributes:
        location: Path or URI of the stored snapshot.
        cause: The underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        location: str,
        cause: Exception | None = None,
    ) -> None:
        self.location = location
        self.cause = cause
        super().__init__(message)


class StoreReadError(FeedStoreError):
    """Raised when the stored snapshot exists but cannot be read."""

    pass


class StoreWriteError(FeedStoreError):
    """Raised when the snapshot cannot be written or removed."""

    @property
    def recovery_hint(self) -> str:
        """Suggest checking the target location."""
        return f"Check that {self.location} is writable"


class StoreAccessError(FeedStoreError):
    """Raised when access to the store is denied (permissions, credentials)."""

    @property
    def recovery_hint(self) -> str:
        """Suggest checking permissions."""
        return "Check credentials and bucket/path permissions"


class CacheCorruptError(FeedStoreError):
    """Raised when the stored snapshot is present but cannot be decoded."""

    @property
    def recovery_hint(self) -> str:
        """Suggest clearing the corrupt snapshot."""
        return f"Delete {self.location} (or run 'feedkeeper clear') and save again"


class LoaderClosedError(FeedkeeperError):
    """Raised when an operation is requested from a closed loader."""

    def __init__(self) -> None:
        super().__init__("Feed loader has been closed")


class ConfigurationError(FeedkeeperError):
    """Raised for configuration problems (invalid settings)."""

    pass
