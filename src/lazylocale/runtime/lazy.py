"""Lazily loaded locale exports.

A LazyExport is a handle on one binding of one virtual module. The default
locale's handles are loaded eagerly when the rewritten file is imported;
every other locale stays IDLE until dispatch first asks for it.

Loads requested through ``request`` run on the active scheduler:

    ThreadScheduler     background thread pool (default)
    DeferredScheduler   queue drained by the host, one batch per frame

Architecture:
    - Status transitions: IDLE -> LOADING -> RESOLVED | FAILED, never back
    - Callbacks registered while loading fire once, on the loading thread
    - A handle that already settled calls back synchronously

Thread Safety:
    Status and waiter list are guarded by a threading.Lock. The import itself
    runs outside the lock; importlib serializes concurrent imports of the
    same module.

Python 3.13+.
"""

from __future__ import annotations

import importlib
import logging
import threading
from collections import deque
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Protocol

from lazylocale.enums import LoadStatus

__all__ = [
    "CancelToken",
    "DeferredScheduler",
    "LazyExport",
    "Scheduler",
    "ThreadScheduler",
    "eager",
    "get_scheduler",
    "lazy",
    "set_scheduler",
]

logger = logging.getLogger(__name__)


class CancelToken:
    """Cancellation flag threaded through one hook load.

    The effect that started a load returns ``cancel`` as its cleanup, so a
    newer locale change cancels the older, still pending commit.
    """

    __slots__ = ("_cancelled",)

    def __init__(self) -> None:
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True


class Scheduler(Protocol):
    """Runs load jobs off the render path."""

    def submit(self, job: Callable[[], None]) -> None: ...


class ThreadScheduler:
    """Runs jobs on a lazily created thread pool."""

    __slots__ = ("_executor", "_lock", "_max_workers")

    def __init__(self, max_workers: int = 4) -> None:
        if max_workers < 1:
            msg = f"max_workers must be >= 1, got {max_workers}"
            raise ValueError(msg)
        self._max_workers = max_workers
        self._executor: ThreadPoolExecutor | None = None
        self._lock = threading.Lock()

    def submit(self, job: Callable[[], None]) -> None:
        with self._lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self._max_workers, thread_name_prefix="lazylocale"
                )
            executor = self._executor
        executor.submit(job)

    def shutdown(self, wait: bool = True) -> None:
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=wait)


class DeferredScheduler:
    """Queues jobs until ``run_pending`` is called.

    Suits single-threaded hosts that drain loads between frames, and tests
    that need to control exactly when a load completes.
    """

    __slots__ = ("_jobs", "_lock")

    def __init__(self) -> None:
        self._jobs: deque[Callable[[], None]] = deque()
        self._lock = threading.Lock()

    def submit(self, job: Callable[[], None]) -> None:
        with self._lock:
            self._jobs.append(job)

    def run_pending(self) -> int:
        """Run every queued job, including jobs queued while running.

        Returns:
            Number of jobs run
        """
        count = 0
        while True:
            with self._lock:
                if not self._jobs:
                    return count
                job = self._jobs.popleft()
            job()
            count += 1

    def __len__(self) -> int:
        with self._lock:
            return len(self._jobs)


_scheduler_lock = threading.Lock()
_scheduler: Scheduler = ThreadScheduler()


def get_scheduler() -> Scheduler:
    with _scheduler_lock:
        return _scheduler


def set_scheduler(scheduler: Scheduler) -> Scheduler:
    """Install the scheduler used by subsequent loads.

    Returns:
        The previously installed scheduler
    """
    global _scheduler  # noqa: PLW0603 - process-wide scheduler by design of the host contract
    with _scheduler_lock:
        previous, _scheduler = _scheduler, scheduler
    return previous


type ReadyCallback = Callable[[LazyExport], None]


class LazyExport:
    """Handle on ``export_key`` of the virtual module ``module_id``.

    Example:
        >>> handle = lazy("lazylocale-virtual/en", "app_py__0_0")
        >>> handle.status
        <LoadStatus.IDLE: 'idle'>
        >>> handle.load()
        <LoadStatus.RESOLVED: 'resolved'>
    """

    __slots__ = ("_lock", "_status", "_value", "_waiters", "export_key", "module_id")

    def __init__(self, module_id: str, export_key: str) -> None:
        self.module_id = module_id
        self.export_key = export_key
        self._status = LoadStatus.IDLE
        self._value: Callable[..., Any] | None = None
        self._waiters: list[ReadyCallback] = []
        self._lock = threading.Lock()

    @property
    def status(self) -> LoadStatus:
        with self._lock:
            return self._status

    @property
    def settled(self) -> bool:
        return self.status in (LoadStatus.RESOLVED, LoadStatus.FAILED)

    @property
    def value(self) -> Callable[..., Any] | None:
        """The export once RESOLVED, else None."""
        with self._lock:
            return self._value if self._status is LoadStatus.RESOLVED else None

    def load(self) -> LoadStatus:
        """Load synchronously unless already settled.

        Returns:
            RESOLVED or FAILED
        """
        if not self.settled:
            self._resolve()
        return self.status

    def request(self, callback: ReadyCallback) -> None:
        """Call ``callback(self)`` once the handle settles.

        Schedules the load on first request. A settled handle calls back
        immediately on the calling thread.
        """
        with self._lock:
            settled = self._status in (LoadStatus.RESOLVED, LoadStatus.FAILED)
            schedule = self._status is LoadStatus.IDLE
            if not settled:
                self._waiters.append(callback)
                if schedule:
                    self._status = LoadStatus.LOADING
        if settled:
            callback(self)
            return
        if schedule:
            logger.debug("Scheduling load of %s:%s", self.module_id, self.export_key)
            get_scheduler().submit(self._resolve)

    def _resolve(self) -> None:
        value: Callable[..., Any] | None = None
        try:
            module = importlib.import_module(self.module_id)
        except ImportError as e:
            logger.warning("Locale module %s unavailable: %s", self.module_id, e)
        except Exception:
            logger.exception("Locale module %s failed to execute", self.module_id)
        else:
            value = getattr(module, self.export_key, None)
            if value is None:
                logger.warning("Export %s missing from %s", self.export_key, self.module_id)

        with self._lock:
            if self._status not in (LoadStatus.RESOLVED, LoadStatus.FAILED):
                self._value = value
                self._status = LoadStatus.FAILED if value is None else LoadStatus.RESOLVED
            waiters, self._waiters = self._waiters, []

        for waiter in waiters:
            waiter(self)

    def __repr__(self) -> str:
        return f"LazyExport({self.module_id!r}, {self.export_key!r}, status={self.status.value})"


def lazy(module_id: str, export_key: str) -> LazyExport:
    """Handle loaded on first request."""
    return LazyExport(module_id, export_key)


def eager(module_id: str, export_key: str) -> LazyExport:
    """Handle loaded immediately, on the importing thread."""
    handle = LazyExport(module_id, export_key)
    handle.load()
    return handle
