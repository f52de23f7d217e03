"""Virtual locale module synthesis.

Every (locale, scope) pair of the translation store becomes one module whose
bindings are the export keys of the stored entries:

    import reactpy
    from reactpy import html
    __all__ = ['app_counter_py__0_3']
    app_counter_py__0_3 = lambda *_: html.p('Hello')

Lambda content is bound as written; any other content is wrapped in
``lambda *_:`` so every export is invocable with or without the dispatch
argument. Module-level absolute imports of the contributing files are
replicated so content can keep referring to imported names.

Modules are printed with ``ast.unparse``; the output is deterministic for a
given store state.

Python 3.13+.
"""

from __future__ import annotations

import ast
import logging
from typing import TYPE_CHECKING

from lazylocale.constants import (
    VIRTUAL_MODULE_SCHEME,
    VIRTUAL_MODULE_SEPARATOR,
    VIRTUAL_MODULE_SUFFIX,
)

if TYPE_CHECKING:
    from lazylocale.store import TranslationEntry, TranslationStore

__all__ = [
    "ModuleSynthesizer",
    "parse_virtual_module_id",
    "virtual_module_id",
]

logger = logging.getLogger(__name__)

_PREFIX = f"{VIRTUAL_MODULE_SCHEME}{VIRTUAL_MODULE_SEPARATOR}"


def virtual_module_id(locale: str, scope: str = "") -> str:
    """Canonical id of the module holding ``locale`` content of ``scope``.

    Example:
        >>> virtual_module_id("en")
        'lazylocale-virtual/en'
        >>> virtual_module_id("en", "greetings")
        'lazylocale-virtual/en/greetings'
    """
    if scope:
        return f"{_PREFIX}{locale}{VIRTUAL_MODULE_SEPARATOR}{scope}"
    return f"{_PREFIX}{locale}"


def parse_virtual_module_id(module_id: str) -> tuple[str, str] | None:
    """Split a virtual module id into (locale, scope).

    Tolerates a trailing ``.py`` suffix and trailing separators.

    Returns:
        (locale, scope), or None if ``module_id`` is not a virtual module id
    """
    if not module_id.startswith(_PREFIX):
        return None
    rest = module_id.removeprefix(_PREFIX).removesuffix(VIRTUAL_MODULE_SUFFIX)
    rest = rest.rstrip(VIRTUAL_MODULE_SEPARATOR)
    parts = rest.split(VIRTUAL_MODULE_SEPARATOR)
    match parts:
        case [locale] if locale:
            return locale, ""
        case [locale, scope] if locale and scope:
            return locale, scope
        case _:
            return None


class ModuleSynthesizer:
    """Prints virtual modules from the translation store.

    Holds no state of its own beyond the store reference; every call reads
    a fresh snapshot.
    """

    __slots__ = ("_store",)

    def __init__(self, store: TranslationStore) -> None:
        self._store = store

    def synthesize(self, locale: str, scope: str = "") -> str:
        """Source of the (locale, scope) module.

        An unknown pair yields a module with an empty ``__all__``.
        """
        entries = self._store.entries(locale, scope)
        body: list[ast.stmt] = [
            ast.Expr(value=ast.Constant(value=f"lazylocale virtual module {virtual_module_id(locale, scope)}"))
        ]

        sources = dict.fromkeys(entry.source for entry in entries)
        for statement in self._store.imports(sources):
            body.extend(ast.parse(statement).body)

        body.append(
            ast.Assign(
                targets=[ast.Name(id="__all__", ctx=ast.Store())],
                value=ast.List(elts=[ast.Constant(value=entry.export_key) for entry in entries], ctx=ast.Load()),
            )
        )
        body.extend(self._binding(entry) for entry in entries)

        module = ast.fix_missing_locations(ast.Module(body=body, type_ignores=[]))
        logger.debug("Synthesized %s with %d export(s)", virtual_module_id(locale, scope), len(entries))
        return ast.unparse(module) + "\n"

    def synthesize_all(self) -> dict[tuple[str, str], str]:
        """Source of every (locale, scope) module present in the store.

        Each configured locale always has its default-scope module, even
        before any entry is recorded.
        """
        pairs = dict.fromkeys((locale, "") for locale in self._store.locales())
        pairs.update(dict.fromkeys(self._store.scopes()))
        return {pair: self.synthesize(*pair) for pair in pairs}

    @staticmethod
    def _binding(entry: TranslationEntry) -> ast.Assign:
        content = entry.content
        if not isinstance(content, ast.Lambda):
            content = ast.Lambda(
                args=ast.arguments(
                    posonlyargs=[],
                    args=[],
                    vararg=ast.arg(arg="_"),
                    kwonlyargs=[],
                    kw_defaults=[],
                    kwarg=None,
                    defaults=[],
                ),
                body=content,
            )
        return ast.Assign(targets=[ast.Name(id=entry.export_key, ctx=ast.Store())], value=content)
