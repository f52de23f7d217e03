"""Tests for runtime/lazy.py - lazy export handles and schedulers.

Tests verify:
- Status transitions IDLE -> LOADING -> RESOLVED | FAILED
- eager handles resolve at construction
- request() schedules exactly one load and fans out to every waiter
- Settled handles call back synchronously
- Missing modules, missing exports and failing modules settle as FAILED
- DeferredScheduler queue semantics and scheduler swapping
"""

import logging
import sys
import threading
from types import ModuleType

import pytest

from lazylocale.enums import LoadStatus
from lazylocale.runtime import (
    CancelToken,
    DeferredScheduler,
    LazyExport,
    ThreadScheduler,
    eager,
    get_scheduler,
    lazy,
    set_scheduler,
)
from tests.helpers.project import Project

MODULE_ID = "lazylocale-virtual/en"


@pytest.fixture
def virtual_module(monkeypatch: pytest.MonkeyPatch) -> ModuleType:
    """An already imported virtual module with one export."""
    module = ModuleType(MODULE_ID)
    module.app_py__0_0 = lambda *_: "Hello"  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, MODULE_ID, module)
    return module


class TestCancelToken:
    """Test CancelToken."""

    def test_cancel(self) -> None:
        token = CancelToken()
        assert not token.cancelled

        token.cancel()

        assert token.cancelled


class TestSchedulers:
    """Test DeferredScheduler, ThreadScheduler and scheduler installation."""

    def test_deferred_runs_nothing_until_drained(self) -> None:
        deferred = DeferredScheduler()
        ran: list[int] = []
        deferred.submit(lambda: ran.append(1))

        assert ran == []
        assert len(deferred) == 1
        assert deferred.run_pending() == 1
        assert ran == [1]
        assert len(deferred) == 0

    def test_deferred_runs_jobs_queued_while_draining(self) -> None:
        deferred = DeferredScheduler()
        ran: list[str] = []
        deferred.submit(lambda: (ran.append("outer"), deferred.submit(lambda: ran.append("inner"))))

        assert deferred.run_pending() == 2
        assert ran == ["outer", "inner"]

    def test_thread_scheduler_runs_jobs(self) -> None:
        scheduler = ThreadScheduler(max_workers=2)
        done = threading.Event()
        try:
            scheduler.submit(done.set)
            assert done.wait(timeout=5)
        finally:
            scheduler.shutdown()

    def test_thread_scheduler_rejects_zero_workers(self) -> None:
        with pytest.raises(ValueError, match="max_workers"):
            ThreadScheduler(max_workers=0)

    def test_shutdown_without_jobs(self) -> None:
        ThreadScheduler().shutdown()

    def test_set_scheduler_returns_previous(self) -> None:
        deferred = DeferredScheduler()
        previous = set_scheduler(deferred)
        try:
            assert get_scheduler() is deferred
        finally:
            assert set_scheduler(previous) is deferred


class TestLazyExport:
    """Test LazyExport loading."""

    def test_starts_idle(self) -> None:
        handle = lazy(MODULE_ID, "app_py__0_0")

        assert handle.status is LoadStatus.IDLE
        assert handle.value is None
        assert not handle.settled

    def test_eager_resolves_immediately(self, virtual_module: ModuleType) -> None:
        handle = eager(MODULE_ID, "app_py__0_0")

        assert handle.status is LoadStatus.RESOLVED
        assert handle.value is virtual_module.app_py__0_0

    def test_load_is_idempotent(self, virtual_module: ModuleType) -> None:
        handle = lazy(MODULE_ID, "app_py__0_0")

        assert handle.load() is LoadStatus.RESOLVED
        assert handle.load() is LoadStatus.RESOLVED

    def test_request_schedules_one_load(self, virtual_module: ModuleType, scheduler: DeferredScheduler) -> None:
        handle = lazy(MODULE_ID, "app_py__0_0")
        ready: list[LazyExport] = []

        handle.request(ready.append)
        handle.request(ready.append)

        assert handle.status is LoadStatus.LOADING
        assert len(scheduler) == 1
        assert ready == []

        scheduler.run_pending()

        assert handle.status is LoadStatus.RESOLVED
        assert ready == [handle, handle]

    def test_request_on_settled_handle_calls_back_synchronously(
        self, virtual_module: ModuleType, scheduler: DeferredScheduler
    ) -> None:
        handle = eager(MODULE_ID, "app_py__0_0")
        ready: list[LazyExport] = []

        handle.request(ready.append)

        assert ready == [handle]
        assert len(scheduler) == 0

    def test_missing_export_fails(self, virtual_module: ModuleType, caplog: pytest.LogCaptureFixture) -> None:
        handle = lazy(MODULE_ID, "absent__0_0")

        with caplog.at_level(logging.WARNING, logger="lazylocale.runtime.lazy"):
            assert handle.load() is LoadStatus.FAILED

        assert handle.value is None
        assert "absent__0_0" in caplog.text

    def test_missing_module_fails(self, caplog: pytest.LogCaptureFixture) -> None:
        handle = lazy("lazylocale-virtual/nowhere", "app_py__0_0")

        with caplog.at_level(logging.WARNING, logger="lazylocale.runtime.lazy"):
            assert handle.load() is LoadStatus.FAILED

        assert "lazylocale-virtual/nowhere" in caplog.text

    def test_module_raising_on_import_fails(self, project: Project, caplog: pytest.LogCaptureFixture) -> None:
        project.write("broken_locale.py", "raise RuntimeError('broken')\n")
        handle = lazy("broken_locale", "app_py__0_0")

        with caplog.at_level(logging.ERROR, logger="lazylocale.runtime.lazy"):
            assert handle.load() is LoadStatus.FAILED

        assert "broken_locale failed to execute" in caplog.text

    def test_failure_notifies_waiters(self, scheduler: DeferredScheduler) -> None:
        handle = lazy("lazylocale-virtual/nowhere", "app_py__0_0")
        ready: list[LazyExport] = []

        handle.request(ready.append)
        scheduler.run_pending()

        assert ready == [handle]
        assert handle.status is LoadStatus.FAILED

    def test_concurrent_loads_settle_once(self, virtual_module: ModuleType) -> None:
        handle = lazy(MODULE_ID, "app_py__0_0")
        threads = [threading.Thread(target=handle.load) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert handle.status is LoadStatus.RESOLVED
        assert handle.value is virtual_module.app_py__0_0

    def test_repr(self) -> None:
        assert repr(lazy(MODULE_ID, "k")) == "LazyExport('lazylocale-virtual/en', 'k', status=idle)"
