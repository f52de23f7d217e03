"""Render-time dispatch support for rewritten files.

Generated component and hook functions own the reactive state (refs, state,
effects) and delegate every decision to the two functions below, which hold
no state and never touch the UI runtime:

    select_component  which content a component renders this frame
    resolve_hook      when and with what a hook commits its value

Content that cannot be found renders as a placeholder string instead of
raising, so a missing translation never takes a page down.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, MutableSet
from typing import Any

from lazylocale.constants import (
    PLACEHOLDER_COMPONENT_NOT_FOUND,
    PLACEHOLDER_CONTENT_NOT_FOUND,
    PLACEHOLDER_FALLBACK_NOT_FOUND,
)
from lazylocale.diagnostics.codes import DiagnosticCode
from lazylocale.enums import LoadStatus

from .lazy import CancelToken, LazyExport

__all__ = [
    "COMPONENT_NOT_FOUND",
    "CONTENT_NOT_FOUND",
    "FALLBACK_NOT_FOUND",
    "ExportTable",
    "initial_hook_value",
    "resolve_hook",
    "select_component",
]

logger = logging.getLogger(__name__)

type ExportTable = Mapping[str, LazyExport]
type Content = Callable[..., Any]
type Commit = Callable[[Callable[[Any], Any]], None]


def _placeholder(text: str) -> Content:
    def render(*_: object) -> str:
        return text

    render.__name__ = f"placeholder({text!r})"
    return render


COMPONENT_NOT_FOUND: Content = _placeholder(PLACEHOLDER_COMPONENT_NOT_FOUND)
FALLBACK_NOT_FOUND: Content = _placeholder(PLACEHOLDER_FALLBACK_NOT_FOUND)
CONTENT_NOT_FOUND: Content = _placeholder(PLACEHOLDER_CONTENT_NOT_FOUND)


def select_component(
    table: ExportTable,
    locale: str,
    previous: str,
    waiting: MutableSet[str],
    on_ready: Callable[[], None],
) -> tuple[str, Content]:
    """Pick the content a component renders for ``locale``.

    Args:
        table: locale -> export handle of one component point
        locale: Current locale
        previous: Last locale actually rendered
        waiting: Locales this component already waits on, kept across
            renders; one re-render per load, however often it renders meanwhile
        on_ready: Re-render trigger, called once a pending load settles

    Returns:
        (locale shown, content). While ``locale`` loads, the previous
        locale's content is shown (stale-while-revalidate).
    """
    handle = table.get(locale)
    if handle is None:
        logger.warning("%s: no content for locale %r", DiagnosticCode.DISPATCH_COMPONENT_NOT_FOUND.name, locale)
        return previous, COMPONENT_NOT_FOUND

    match handle.status:
        case LoadStatus.RESOLVED:
            return locale, handle.value or COMPONENT_NOT_FOUND
        case LoadStatus.FAILED:
            return previous, COMPONENT_NOT_FOUND
        case LoadStatus.IDLE | LoadStatus.LOADING:
            if locale not in waiting:
                waiting.add(locale)

                def settled(_handle: LazyExport) -> None:
                    waiting.discard(locale)
                    on_ready()

                handle.request(settled)
            fallback = table.get(previous)
            value = fallback.value if fallback is not None else None
            if value is None:
                logger.warning(
                    "%s: locale %r is loading and %r has no content",
                    DiagnosticCode.DISPATCH_FALLBACK_NOT_FOUND.name,
                    locale,
                    previous,
                )
                return previous, FALLBACK_NOT_FOUND
            return previous, value


def initial_hook_value(table: ExportTable, default_locale: str, *args: Any) -> Any:
    """Synchronous first value of a hook: the default content."""
    handle = table.get(default_locale)
    value = handle.value if handle is not None else None
    if value is None:
        return CONTENT_NOT_FOUND(*args)
    return value(*args)


def resolve_hook(
    table: ExportTable,
    locale: str,
    default_locale: str,
    token: CancelToken,
    commit: Commit,
    *args: Any,
) -> None:
    """Commit the hook value for ``locale``, now or once it loads.

    The default locale and already resolved locales commit synchronously.
    Anything else commits on load completion, unless ``token`` was cancelled
    in the meantime by a newer locale change (last locale wins). Until then
    the hook keeps its previous value.

    Commits pass an updater (``lambda previous: value``) so content that is
    itself callable is never mistaken for one.
    """
    handle = table.get(locale)
    if handle is None:
        logger.warning("%s: no content for locale %r", DiagnosticCode.DISPATCH_CONTENT_NOT_FOUND.name, locale)
        _commit(commit, CONTENT_NOT_FOUND, args)
        return

    if locale == default_locale or handle.settled:
        _commit(commit, handle.value or CONTENT_NOT_FOUND, args)
        return

    def on_ready(ready: LazyExport) -> None:
        if token.cancelled:
            logger.debug("Discarding stale load of %s", ready.export_key)
            return
        _commit(commit, ready.value or CONTENT_NOT_FOUND, args)

    handle.request(on_ready)


def _commit(commit: Commit, content: Content, args: tuple[Any, ...]) -> None:
    value = content(*args)
    commit(lambda _previous: value)
