"""Tests for core/rwlock.py - the readers-writer lock guarding the store.

Tests verify:
- Readers share the lock
- A writer excludes readers and other writers
- Waiting writers block newly arriving readers
- Misuse from the writing thread is rejected
"""

import threading
import time
from collections.abc import Callable

import pytest

from lazylocale.core.rwlock import RWLock


def _run(*targets: Callable[[], None]) -> None:
    threads = [threading.Thread(target=target) for target in targets]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=5)
    assert not any(thread.is_alive() for thread in threads)


class TestSharedAndExclusive:
    """Test who may hold the lock together."""

    def test_readers_hold_the_lock_together(self) -> None:
        """Four readers all reach the barrier while holding the lock."""
        lock = RWLock()
        barrier = threading.Barrier(4, timeout=5)

        def reader() -> None:
            with lock.read():
                barrier.wait()

        _run(reader, reader, reader, reader)

    def test_reader_waits_for_writer(self) -> None:
        lock = RWLock()
        writing = threading.Event()
        release = threading.Event()
        order: list[str] = []

        def writer() -> None:
            with lock.write():
                writing.set()
                release.wait(timeout=5)
                order.append("writer")

        def reader() -> None:
            writing.wait(timeout=5)
            release.set()
            with lock.read():
                order.append("reader")

        _run(writer, reader)

        assert order == ["writer", "reader"]

    def test_writer_waits_for_reader(self) -> None:
        lock = RWLock()
        reading = threading.Event()
        order: list[str] = []

        def reader() -> None:
            with lock.read():
                reading.set()
                order.append("reader")

        def writer() -> None:
            reading.wait(timeout=5)
            with lock.write():
                order.append("writer")

        _run(reader, writer)

        assert order == ["reader", "writer"]

    def test_waiting_writer_goes_before_new_reader(self) -> None:
        lock = RWLock()
        order: list[str] = []
        first_reading = threading.Event()
        writer_queued = threading.Event()

        def first_reader() -> None:
            with lock.read():
                first_reading.set()
                writer_queued.wait(timeout=5)
                # Give the writer time to block on the lock.
                time.sleep(0.2)

        def writer() -> None:
            first_reading.wait(timeout=5)
            writer_queued.set()
            with lock.write():
                order.append("writer")

        def late_reader() -> None:
            writer_queued.wait(timeout=5)
            time.sleep(0.05)
            with lock.read():
                order.append("late reader")

        _run(first_reader, writer, late_reader)

        assert order == ["writer", "late reader"]


class TestMisuse:
    """Test nesting rules."""

    def test_write_inside_write_rejected(self) -> None:
        lock = RWLock()

        with lock.write(), pytest.raises(RuntimeError, match="already holding"):
            with lock.write():
                pass

    def test_read_inside_write_rejected(self) -> None:
        lock = RWLock()

        with lock.write(), pytest.raises(RuntimeError, match="while holding write lock"):
            with lock.read():
                pass

    def test_released_after_exception(self) -> None:
        lock = RWLock()

        with pytest.raises(ValueError, match="boom"), lock.write():
            raise ValueError("boom")

        def reader() -> None:
            with lock.read():
                pass

        _run(reader)
