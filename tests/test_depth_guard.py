"""Tests for core/depth_guard.py - recursion limits of syntax tree walks."""

from __future__ import annotations

import logging
import sys

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lazylocale.constants import MAX_DEPTH
from lazylocale.core.depth_guard import DepthGuard, DepthLimitExceededError, depth_clamp


class TestDepthGuard:
    """Test DepthGuard enter/exit accounting."""

    def test_default_construction(self) -> None:
        guard = DepthGuard()

        assert guard.max_depth == depth_clamp(MAX_DEPTH)
        assert guard.current_depth == 0

    def test_nesting_tracks_depth(self) -> None:
        guard = DepthGuard(max_depth=5)

        with guard:
            with guard:
                assert guard.current_depth == 2
            assert guard.current_depth == 1
        assert guard.current_depth == 0

    def test_limit_raises(self) -> None:
        guard = DepthGuard(max_depth=2)

        with guard, guard, pytest.raises(DepthLimitExceededError) as exc_info:
            with guard:
                pass

        assert exc_info.value.max_depth == 2
        assert isinstance(exc_info.value, RecursionError)

    def test_failed_enter_does_not_leak_depth(self) -> None:
        guard = DepthGuard(max_depth=1)

        with guard:
            with pytest.raises(DepthLimitExceededError):
                guard.__enter__()
            assert guard.current_depth == 1
        assert guard.current_depth == 0

    def test_reset(self) -> None:
        guard = DepthGuard(max_depth=3)
        guard.__enter__()
        guard.reset()

        assert guard.current_depth == 0


class TestDepthClamp:
    """Test depth_clamp against the interpreter recursion limit."""

    @given(requested=st.integers(min_value=1, max_value=100_000))
    def test_never_exceeds_safe_depth(self, requested: int) -> None:
        safe = max(1, (sys.getrecursionlimit() - 100) // 3)

        assert depth_clamp(requested) == min(requested, safe)

    def test_clamping_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="lazylocale.core.depth_guard"):
            depth_clamp(10**9)

        assert "Clamping" in caplog.text
