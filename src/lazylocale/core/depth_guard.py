"""Depth limiting for syntax tree walks.

Component files are arbitrary user source: generated or adversarial files can
nest expressions deeply enough to exhaust the interpreter stack while the
locator recurses. DepthGuard turns that into a clean, per-file failure.

Thread-safe: uses explicit state, no thread-local storage.
Python 3.13+.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field

from lazylocale.constants import MAX_DEPTH

__all__ = ["DepthGuard", "DepthLimitExceededError", "depth_clamp"]

logger = logging.getLogger(__name__)


class DepthLimitExceededError(RecursionError):
    """Raised when a syntax tree walk exceeds the configured depth."""

    def __init__(self, max_depth: int) -> None:
        super().__init__(f"Maximum syntax tree depth of {max_depth} exceeded")
        self.max_depth = max_depth


@dataclass(slots=True)
class DepthGuard:
    """Context manager for tracking and limiting recursion depth.

    Usage:
        guard = DepthGuard()
        with guard:
            self.generic_visit(node)

    Mutability Note:
        Intentionally mutable (not frozen=True) to enable stateful depth
        tracking via context manager protocol.

    Attributes:
        max_depth: Maximum allowed depth (default: MAX_DEPTH)
        current_depth: Current recursion depth
    """

    max_depth: int = MAX_DEPTH
    current_depth: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        """Clamp max_depth against Python recursion limit."""
        self.max_depth = depth_clamp(self.max_depth)

    def __enter__(self) -> DepthGuard:
        """Enter guarded section, increment depth.

        Checks the limit BEFORE incrementing: __exit__ is not called when
        __enter__ raises, so incrementing first would leave the counter
        permanently elevated.
        """
        if self.current_depth >= self.max_depth:
            raise DepthLimitExceededError(self.max_depth)
        self.current_depth += 1
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit guarded section, decrement depth."""
        self.current_depth -= 1

    def reset(self) -> None:
        """Reset depth to zero (reuse across files)."""
        self.current_depth = 0


def depth_clamp(requested_depth: int, reserve_frames: int = 100) -> int:
    """Clamp requested depth against Python recursion limit.

    Each guarded level costs a few interpreter frames (visit, generic_visit,
    the guard itself), so the clamp keeps a third of the remaining budget.

    Args:
        requested_depth: Desired maximum depth
        reserve_frames: Stack frames to reserve for call overhead

    Returns:
        Safe depth value, clamped if necessary
    """
    max_safe_depth = max(1, (sys.getrecursionlimit() - reserve_frames) // 3)
    if requested_depth > max_safe_depth:
        logger.warning(
            "Requested depth %d exceeds Python recursion limit (%d). Clamping to %d.",
            requested_depth,
            sys.getrecursionlimit(),
            max_safe_depth,
        )
        return max_safe_depth
    return requested_depth
