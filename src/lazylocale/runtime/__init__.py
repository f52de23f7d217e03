"""Runtime support imported by rewritten component files.

Rewritten files import this package under a private alias and reach it only
through the names below. It carries no reactivity of its own: state, refs
and effects come from the UI runtime the generated code was built for.

Exports:
    eager, lazy: Export handle factories used by dispatch tables
    LazyExport: Handle on one binding of one virtual module
    CancelToken: Cancellation flag of one hook load
    select_component, resolve_hook, initial_hook_value: Dispatch decisions
    ThreadScheduler, DeferredScheduler, get_scheduler, set_scheduler: Load scheduling

Python 3.13+.
"""

from .dispatch import (
    COMPONENT_NOT_FOUND,
    CONTENT_NOT_FOUND,
    FALLBACK_NOT_FOUND,
    ExportTable,
    initial_hook_value,
    resolve_hook,
    select_component,
)
from .lazy import (
    CancelToken,
    DeferredScheduler,
    LazyExport,
    Scheduler,
    ThreadScheduler,
    eager,
    get_scheduler,
    lazy,
    set_scheduler,
)

__all__ = [
    "COMPONENT_NOT_FOUND",
    "CONTENT_NOT_FOUND",
    "FALLBACK_NOT_FOUND",
    "CancelToken",
    "DeferredScheduler",
    "ExportTable",
    "LazyExport",
    "Scheduler",
    "ThreadScheduler",
    "eager",
    "get_scheduler",
    "initial_hook_value",
    "lazy",
    "resolve_hook",
    "select_component",
    "set_scheduler",
]
