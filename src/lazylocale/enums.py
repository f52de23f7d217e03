"""Enumerations for lazylocale type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class ExtractionKind(StrEnum):
    """Shape of an extraction point in component source.

    StrEnum provides automatic string conversion: str(ExtractionKind.HOOK) == "hook"
    """

    STATIC = "static"
    """Compile-time fold: t({"it": ..., "en": ...}, arg)"""

    COMPONENT = "component"
    """Reactive component: T(it=..., en=..., scope="x", arg=...)"""

    HOOK = "hook"
    """Reactive hook: use_t({"it": ..., "en": ...}, arg, "scope")"""


class LoadStatus(StrEnum):
    """Lifecycle of a lazily loaded locale export.

    StrEnum provides automatic string conversion: str(LoadStatus.RESOLVED) == "resolved"
    """

    IDLE = "idle"
    """Not requested yet"""

    LOADING = "loading"
    """Import scheduled or running"""

    RESOLVED = "resolved"
    """Export available"""

    FAILED = "failed"
    """Virtual module or export missing"""


__all__ = [
    "ExtractionKind",
    "LoadStatus",
]
