"""Readers-writer lock guarding the translation store.

Hosts may transform several component files concurrently. The store's values
never collide (every base key is file-scoped) but its nested maps are created
on demand, so structural mutation has to be exclusive while enumeration can
be shared. Waiting writers block new readers, so a stream of synthesis passes
cannot starve upserts.

Neither side is reentrant: store methods never call each other under the
lock.

Python 3.13+.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

__all__ = ["RWLock"]


class RWLock:
    """Shared/exclusive lock with writer preference.

    Example:
        >>> lock = RWLock()
        >>> with lock.read():
        ...     pass  # shared
        >>> with lock.write():
        ...     pass  # exclusive
    """

    __slots__ = ("_condition", "_readers", "_waiting_writers", "_writer")

    def __init__(self) -> None:
        self._condition = threading.Condition()
        self._readers = 0
        self._waiting_writers = 0
        self._writer: int | None = None

    @contextmanager
    def read(self) -> Generator[None]:
        with self._condition:
            if self._writer == threading.get_ident():
                msg = "Cannot acquire read lock while holding write lock"
                raise RuntimeError(msg)
            self._condition.wait_for(lambda: self._writer is None and not self._waiting_writers)
            self._readers += 1
        try:
            yield
        finally:
            with self._condition:
                self._readers -= 1
                if not self._readers:
                    self._condition.notify_all()

    @contextmanager
    def write(self) -> Generator[None]:
        owner = threading.get_ident()
        with self._condition:
            if self._writer == owner:
                msg = "Cannot acquire write lock: already holding write lock"
                raise RuntimeError(msg)
            self._waiting_writers += 1
            try:
                self._condition.wait_for(lambda: self._writer is None and not self._readers)
                self._writer = owner
            finally:
                self._waiting_writers -= 1
                self._condition.notify_all()
        try:
            yield
        finally:
            with self._condition:
                self._writer = None
                self._condition.notify_all()
