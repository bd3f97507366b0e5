"""Unit tests for FileFeedStore."""

from __future__ import annotations

import os
import threading
from concurrent.futures import wait
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import pytest

from feedkeeper.adapters.executor import SynchronousExecutor
from feedkeeper.adapters.store import FileFeedStore
from feedkeeper.core.exceptions import CacheCorruptError, StoreWriteError
from feedkeeper.core.models import Empty, Found, RetrievalFailure, to_stored


if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path

    from feedkeeper.core.models import FeedImage


TIMESTAMP = datetime(2024, 3, 10, 12, 30, tzinfo=UTC)


@pytest.fixture
def store_path(tmp_path: Path) -> Path:
    """Snapshot location inside a not-yet-created directory."""
    return tmp_path / "cache" / "feed.json"


@pytest.fixture
def file_store(store_path: Path) -> Iterator[FileFeedStore]:
    """FileFeedStore running on its own single-worker pool."""
    with FileFeedStore(store_path) as feed_store:
        yield feed_store


@pytest.mark.storage
@pytest.mark.tra("Adapter.FileFeedStore")
@pytest.mark.tier(1)
class TestRetrieve:
    """Tests for reading the snapshot."""

    def test_retrieve_delivers_empty_on_empty_cache(
        self, file_store: FileFeedStore
    ) -> None:
        assert file_store.retrieve().result(timeout=5) == Empty()

    def test_retrieve_twice_has_no_side_effects_on_empty_cache(
        self, file_store: FileFeedStore
    ) -> None:
        assert file_store.retrieve().result(timeout=5) == Empty()
        assert file_store.retrieve().result(timeout=5) == Empty()

    def test_retrieve_delivers_found_after_insert(
        self, file_store: FileFeedStore, unique_feed
    ) -> None:
        _, stored = unique_feed

        file_store.insert(stored, TIMESTAMP).result(timeout=5)

        assert file_store.retrieve().result(timeout=5) == Found(stored, TIMESTAMP)

    def test_retrieve_twice_has_no_side_effects_on_non_empty_cache(
        self, file_store: FileFeedStore, unique_feed
    ) -> None:
        _, stored = unique_feed
        file_store.insert(stored, TIMESTAMP).result(timeout=5)

        first = file_store.retrieve().result(timeout=5)
        second = file_store.retrieve().result(timeout=5)

        assert first == second == Found(stored, TIMESTAMP)

    def test_retrieve_delivers_failure_on_corrupt_data(
        self, file_store: FileFeedStore, store_path: Path
    ) -> None:
        store_path.parent.mkdir(parents=True)
        store_path.write_bytes(b"invalid data")

        outcome = file_store.retrieve().result(timeout=5)

        assert isinstance(outcome, RetrievalFailure)
        assert isinstance(outcome.error, CacheCorruptError)

    def test_retrieve_has_no_side_effects_on_failure(
        self, file_store: FileFeedStore, store_path: Path
    ) -> None:
        """A corrupt snapshot is reported, not removed."""
        store_path.parent.mkdir(parents=True)
        store_path.write_bytes(b"invalid data")

        file_store.retrieve().result(timeout=5)
        file_store.retrieve().result(timeout=5)

        assert store_path.read_bytes() == b"invalid data"


@pytest.mark.storage
@pytest.mark.tra("Adapter.FileFeedStore")
@pytest.mark.tier(1)
class TestInsert:
    """Tests for writing the snapshot."""

    def test_insert_creates_parent_directories(
        self, file_store: FileFeedStore, store_path: Path, unique_feed
    ) -> None:
        file_store.insert(unique_feed[1], TIMESTAMP).result(timeout=5)

        assert store_path.is_file()

    def test_insert_overrides_previous_snapshot(
        self, file_store: FileFeedStore, make_image: Callable[..., FeedImage]
    ) -> None:
        first = to_stored([make_image()])
        latest = to_stored([make_image(), make_image()])
        later = TIMESTAMP + timedelta(hours=1)

        file_store.insert(first, TIMESTAMP).result(timeout=5)
        file_store.insert(latest, later).result(timeout=5)

        assert file_store.retrieve().result(timeout=5) == Found(latest, later)

    def test_insert_leaves_no_temporary_files(
        self, file_store: FileFeedStore, store_path: Path, unique_feed
    ) -> None:
        file_store.insert(unique_feed[1], TIMESTAMP).result(timeout=5)
        file_store.insert(unique_feed[1], TIMESTAMP).result(timeout=5)

        assert [p.name for p in store_path.parent.iterdir()] == ["feed.json"]

    def test_insert_fails_on_unwritable_location(
        self, tmp_path: Path, unique_feed
    ) -> None:
        """A parent that is a regular file cannot hold the snapshot."""
        (tmp_path / "blocker").write_text("not a directory")
        path = tmp_path / "blocker" / "feed.json"

        with FileFeedStore(path) as feed_store:
            error = feed_store.insert(unique_feed[1], TIMESTAMP).exception(timeout=5)
            outcome = feed_store.retrieve().result(timeout=5)

        assert isinstance(error, StoreWriteError)
        assert error.location == str(path)
        assert outcome == Empty()

    def test_failed_insert_keeps_previous_snapshot(
        self,
        store_path: Path,
        unique_feed,
        make_image: Callable[..., FeedImage],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """A write that never lands must not disturb the stored snapshot."""
        _, stored = unique_feed
        feed_store = FileFeedStore(store_path, executor=SynchronousExecutor())
        feed_store.insert(stored, TIMESTAMP).result()

        def failing_replace(src: object, dst: object) -> None:
            raise OSError("disk full")

        monkeypatch.setattr(
            "feedkeeper.adapters.store.file_store.os.replace", failing_replace
        )
        error = feed_store.insert(to_stored([make_image()]), TIMESTAMP).exception()

        assert isinstance(error, StoreWriteError)
        assert feed_store.retrieve().result() == Found(stored, TIMESTAMP)
        assert [p.name for p in store_path.parent.iterdir()] == ["feed.json"]

    def test_insert_rejects_timestamp_without_timezone(
        self, file_store: FileFeedStore, store_path: Path, unique_feed
    ) -> None:
        """A naive timestamp could never be read back, so nothing is written."""
        naive = TIMESTAMP.replace(tzinfo=None)

        error = file_store.insert(unique_feed[1], naive).exception(timeout=5)

        assert isinstance(error, StoreWriteError)
        assert isinstance(error.cause, ValueError)
        assert not store_path.exists()


@pytest.mark.storage
@pytest.mark.tra("Adapter.FileFeedStore")
@pytest.mark.tier(1)
class TestDelete:
    """Tests for removing the snapshot."""

    def test_delete_has_no_side_effects_on_empty_cache(
        self, file_store: FileFeedStore
    ) -> None:
        assert file_store.delete().exception(timeout=5) is None
        assert file_store.retrieve().result(timeout=5) == Empty()

    def test_delete_empties_previously_inserted_cache(
        self, file_store: FileFeedStore, unique_feed
    ) -> None:
        file_store.insert(unique_feed[1], TIMESTAMP).result(timeout=5)

        assert file_store.delete().exception(timeout=5) is None
        assert file_store.retrieve().result(timeout=5) == Empty()

    def test_delete_twice_succeeds(
        self, file_store: FileFeedStore, unique_feed
    ) -> None:
        file_store.insert(unique_feed[1], TIMESTAMP).result(timeout=5)

        file_store.delete().result(timeout=5)
        assert file_store.delete().exception(timeout=5) is None

    def test_delete_removes_corrupt_snapshot(
        self, file_store: FileFeedStore, store_path: Path
    ) -> None:
        store_path.parent.mkdir(parents=True)
        store_path.write_bytes(b"invalid data")

        file_store.delete().result(timeout=5)

        assert not store_path.exists()

    def test_delete_fails_when_path_is_directory(self, tmp_path: Path) -> None:
        """A directory at the snapshot path cannot be unlinked."""
        path = tmp_path / "feed.json"
        path.mkdir()

        with FileFeedStore(path) as feed_store:
            error = feed_store.delete().exception(timeout=5)

        assert isinstance(error, StoreWriteError)


@pytest.mark.storage
@pytest.mark.tra("Adapter.FileFeedStore")
@pytest.mark.tier(1)
class TestSerialization:
    """Overlapping operations run one at a time in call order."""

    def test_side_effects_run_serially(
        self, file_store: FileFeedStore, unique_feed
    ) -> None:
        _, stored = unique_feed
        completed: list[str] = []

        op1 = file_store.insert(stored, TIMESTAMP)
        op1.add_done_callback(lambda _: completed.append("insert"))
        op2 = file_store.delete()
        op2.add_done_callback(lambda _: completed.append("delete"))
        op3 = file_store.insert(stored, TIMESTAMP)
        op3.add_done_callback(lambda _: completed.append("insert again"))

        wait([op1, op2, op3], timeout=5)

        assert completed == ["insert", "delete", "insert again"]
        assert file_store.retrieve().result(timeout=5) == Found(stored, TIMESTAMP)

    def test_operations_never_overlap(
        self,
        store_path: Path,
        unique_feed,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """No two store operations touch the file at the same time."""
        active = 0
        peak = 0
        guard = threading.Lock()
        real_replace = os.replace

        def tracking_replace(src: object, dst: object) -> None:
            nonlocal active, peak
            with guard:
                active += 1
                peak = max(peak, active)
            real_replace(src, dst)  # type: ignore[arg-type]
            with guard:
                active -= 1

        monkeypatch.setattr(
            "feedkeeper.adapters.store.file_store.os.replace", tracking_replace
        )
        with FileFeedStore(store_path) as feed_store:
            futures = [feed_store.insert(unique_feed[1], TIMESTAMP) for _ in range(10)]
            wait(futures, timeout=10)

        assert all(f.exception() is None for f in futures)
        assert peak == 1

    def test_close_waits_for_queued_operations(
        self, store_path: Path, unique_feed
    ) -> None:
        feed_store = FileFeedStore(store_path)
        future = feed_store.insert(unique_feed[1], TIMESTAMP)

        feed_store.close()

        assert future.done()
        assert store_path.is_file()

    def test_close_leaves_injected_executor_running(
        self, store_path: Path
    ) -> None:
        """The store only stops executors it created."""
        executor = SynchronousExecutor()
        calls: list[bool] = []
        executor.shutdown = lambda wait=True: calls.append(wait)  # type: ignore[method-assign]

        FileFeedStore(store_path, executor=executor).close()

        assert calls == []
