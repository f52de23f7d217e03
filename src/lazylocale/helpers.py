"""Untransformed fallbacks of the three extraction helpers.

Component files import ``t``, ``use_t`` and ``T`` from a module of the
application. When a file goes through LocalePlugin every call is rewritten
and these functions never run; when it does not (tests, scripts, content
nested inside other translated content) they dispatch synchronously, with
every locale's content already in memory:

    # app/i18n.py
    from hooks.locale import use_locale
    from lazylocale.helpers import make_helpers

    t, use_t, T = make_helpers("it", use_locale)

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, NamedTuple

from lazylocale.constants import ARG_ATTRIBUTE, SCOPE_ATTRIBUTE
from lazylocale.runtime.dispatch import COMPONENT_NOT_FOUND, CONTENT_NOT_FOUND

__all__ = ["LocaleHelpers", "make_helpers"]

_NO_ARG = object()


class LocaleHelpers(NamedTuple):
    """The three helpers, unpackable as ``t, use_t, T``."""

    t: Callable[..., Any]
    use_t: Callable[..., Any]
    T: Callable[..., Any]


def _select(selected: Any, arg: Any) -> Any:
    if callable(selected):
        return selected() if arg is _NO_ARG else selected(arg)
    return selected


def make_helpers(default_locale: str, use_locale: Callable[[], str]) -> LocaleHelpers:
    """Build runtime ``t``/``use_t``/``T`` for one application.

    Args:
        default_locale: Locale ``t`` always renders
        use_locale: Current-locale accessor

    Returns:
        LocaleHelpers(t, use_t, T)
    """

    def t(locales: Mapping[str, Any], arg: Any = _NO_ARG) -> Any:
        if default_locale not in locales:
            return CONTENT_NOT_FOUND()
        return _select(locales[default_locale], arg)

    def use_t(locales: Mapping[str, Any], arg: Any = _NO_ARG, scope: str = "") -> Any:
        del scope  # partitions virtual modules only
        locale = use_locale()
        if locale not in locales:
            return CONTENT_NOT_FOUND()
        return _select(locales[locale], arg)

    def T(**props: Any) -> Any:  # noqa: N802 - mirrors the component helper name
        arg = props.pop(ARG_ATTRIBUTE, _NO_ARG)
        props.pop(SCOPE_ATTRIBUTE, None)
        locale = use_locale()
        if locale not in props:
            return COMPONENT_NOT_FOUND()
        return _select(props[locale], arg)

    return LocaleHelpers(t=t, use_t=use_t, T=T)
