"""Executor adapters implementing ExecutorPort."""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Callable


class SynchronousExecutor:
    """Executor that runs tasks immediately in the calling thread.

    Used by tests and short-lived tools where store calls should complete
    before returning. Operations are trivially serialised.
    """

    def submit(
        self,
        fn: Callable[..., object],
        *args: object,
        **kwargs: object,
    ) -> Future[object]:
        """Execute function immediately and return completed future.

        Args:
            fn: Function to execute.
            *args: Positional arguments to pass to fn.
            **kwargs: Keyword arguments to pass to fn.

        Returns:
            Future with result already available.
        """
        future: Future[object] = Future()
        try:
            result = fn(*args, **kwargs)
            future.set_result(result)
        except Exception as e:
            future.set_exception(e)
        return future

    def shutdown(self, wait: bool = True) -> None:
        """Nothing to stop."""
        _ = wait

    def __enter__(self) -> SynchronousExecutor:
        """Enter context manager."""
        return self

    def __exit__(
        self, exc_type: object, exc_val: object, exc_tb: object
    ) -> object | None:
        """Exit context manager (no-op for synchronous executor)."""
        return None


class ThreadPoolExecutorAdapter:
    """Adapter wrapping ThreadPoolExecutor to implement ExecutorPort.

    With ``max_workers=1`` (the default) the pool is a single dedicated
    queue: submitted tasks run one at a time in submission order.
    """

    def __init__(
        self, max_workers: int = 1, thread_name_prefix: str = "feedkeeper"
    ) -> None:
        """Initialize thread pool executor adapter.

        Args:
            max_workers: Maximum number of worker threads.
            thread_name_prefix: Prefix for worker thread names.
        """
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix=thread_name_prefix
        )

    def submit(
        self,
        fn: Callable[..., object],
        *args: object,
        **kwargs: object,
    ) -> Future[object]:
        """Submit function to thread pool.

        Args:
            fn: Function to execute.
            *args: Positional arguments to pass to fn.
            **kwargs: Keyword arguments to pass to fn.

        Returns:
            Future representing the pending result.
        """
        return self._executor.submit(fn, *args, **kwargs)

    def shutdown(self, wait: bool = True) -> None:
        """Stop the pool, optionally waiting for queued tasks."""
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> ThreadPoolExecutorAdapter:
        """Enter context manager."""
        self._executor.__enter__()
        return self

    def __exit__(
        self, exc_type: object, exc_val: object, exc_tb: object
    ) -> object | None:
        """Exit context manager."""
        # Type ignore needed because ThreadPoolExecutor.__exit__ expects specific types
        # but Protocol requires object for compatibility
        return self._executor.__exit__(exc_type, exc_val, exc_tb)  # type: ignore[arg-type]
