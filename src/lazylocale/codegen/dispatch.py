"""Dispatch code generation.

Rewrites the extraction points of one parsed file in place:

    t({"it": "Ciao", "en": "Hello"})        ->  'Ciao'
    t({"it": lambda n: ..., ...}, count)    ->  (lambda n: ...)(count)
    T(it=..., en=..., arg=user)             ->  _lazylocale_component_<key>(user)
    use_t({...}, count, "menu")             ->  _lazylocale_hook_<key>(count)

Every reactive point also gets two module-level definitions, inserted right
before the top-level statement that contains the point: an export table
(default locale eager, other locales lazy) and the generated component or
hook function. Files with reactive points import the runtime, the locale
accessor and the reactivity hooks under private aliases.

Generated functions are built from source templates parsed with ``ast``;
every interpolated name is an identifier or a ``repr``'d string.

Python 3.13+.
"""

from __future__ import annotations

import ast
import logging
from collections import defaultdict
from collections.abc import Sequence
from typing import TYPE_CHECKING, cast

from lazylocale.constants import (
    GENERATED_PREFIX,
    LOCALE_ACCESSOR_ALIAS,
    RUNTIME_ALIAS,
    RUNTIME_IMPORT_PATH,
    USE_EFFECT_ALIAS,
    USE_REF_ALIAS,
    USE_STATE_ALIAS,
)
from lazylocale.extraction.points import ComponentPoint, ExtractionPoint, HookPoint, StaticPoint

from .synthesizer import virtual_module_id

if TYPE_CHECKING:
    from lazylocale.config import LocaleConfig

__all__ = ["DispatchGenerator", "generated_name"]

logger = logging.getLogger(__name__)

_PREAMBLE_TEMPLATE = """\
import {runtime_path} as {runtime}
from {accessor_path} import {accessor_name} as {accessor}
from {reactivity_path} import use_effect as {use_effect}, use_ref as {use_ref}, use_state as {use_state}
"""

_TABLE_TEMPLATE = "{table} = {{{entries}}}\n"

_COMPONENT_TEMPLATE = """\
def {function}(*args):
    locale = {accessor}()
    previous = {use_ref}({default!r})
    waiting = {use_ref}(set())
    _, rerender = {use_state}(0)
    shown, content = {runtime}.select_component(
        {table}, locale, previous.current, waiting.current, lambda: rerender(lambda n: n + 1)
    )
    {use_effect}(lambda: setattr(previous, 'current', shown), [shown])
    return content(*args)
"""

_HOOK_TEMPLATE = """\
def {function}(*args):
    locale = {accessor}()
    value, set_value = {use_state}(lambda: {runtime}.initial_hook_value({table}, {default!r}, *args))

    def load():
        token = {runtime}.CancelToken()
        {runtime}.resolve_hook({table}, locale, {default!r}, token, set_value, *args)
        return token.cancel

    {use_effect}(load, [locale, *args])
    return value
"""


def generated_name(role: str, export_key: str) -> str:
    """Module-level name of a generated definition.

    Example:
        >>> generated_name("hook", "app_py__0_3")
        '_lazylocale_hook_app_py__0_3'
    """
    return f"{GENERATED_PREFIX}_{role}_{export_key}"


class DispatchGenerator:
    """Rewrites extraction points into dispatch code.

    Example:
        >>> tree = ast.parse(source)
        >>> result = ExtractionLocator(config, "app.py", 0).locate(tree, store)
        >>> code = DispatchGenerator(config).render(tree, result.points)
    """

    __slots__ = ("_config",)

    def __init__(self, config: LocaleConfig) -> None:
        self._config = config

    def render(self, tree: ast.Module, points: Sequence[ExtractionPoint]) -> str:
        """Rewrite ``tree`` and print it."""
        return ast.unparse(self.rewrite(tree, points)) + "\n"

    def rewrite(self, tree: ast.Module, points: Sequence[ExtractionPoint]) -> ast.Module:
        """Rewrite every point of ``tree`` in place.

        Args:
            tree: Parsed file the points were located in
            points: Accepted points, as returned by the locator

        Returns:
            The same module object
        """
        if not points:
            return tree

        owners = _owning_statements(tree)
        definitions: defaultdict[int, list[ast.stmt]] = defaultdict(list)
        reactive = False
        for point in points:
            match point:
                case StaticPoint():
                    continue
                case ComponentPoint() | HookPoint():
                    reactive = True
                    definitions[owners[id(point.node)]].extend(self._definitions(point))

        rewriter = _PointRewriter(points)
        body: list[ast.stmt] = []
        for index, statement in enumerate(tree.body):
            body.extend(definitions.get(index, ()))
            body.append(rewriter.visit(statement))

        if reactive:
            position = _preamble_position(body)
            body[position:position] = self._preamble()

        tree.body = body
        logger.debug("Rewrote %d point(s)", len(points))
        return ast.fix_missing_locations(tree)

    # ------------------------------------------------------------------
    # Generated definitions
    # ------------------------------------------------------------------

    def _preamble(self) -> list[ast.stmt]:
        config = self._config
        source = _PREAMBLE_TEMPLATE.format(
            runtime_path=RUNTIME_IMPORT_PATH,
            runtime=RUNTIME_ALIAS,
            accessor_path=config.locale_accessor_import_path,
            accessor_name=config.locale_accessor_name,
            accessor=LOCALE_ACCESSOR_ALIAS,
            reactivity_path=config.reactivity_import_path,
            use_effect=USE_EFFECT_ALIAS,
            use_ref=USE_REF_ALIAS,
            use_state=USE_STATE_ALIAS,
        )
        return ast.parse(source).body

    def _definitions(self, point: ComponentPoint | HookPoint) -> list[ast.stmt]:
        key = point.identity.export_key
        table = generated_name("table", key)
        default = self._config.default_locale

        entries = []
        for locale in self._config.locales:
            factory = "eager" if locale == default else "lazy"
            module_id = virtual_module_id(locale, point.scope)
            entries.append(f"{locale!r}: {RUNTIME_ALIAS}.{factory}({module_id!r}, {key!r})")
        source = _TABLE_TEMPLATE.format(table=table, entries=", ".join(entries))

        match point:
            case ComponentPoint():
                template = _COMPONENT_TEMPLATE
            case HookPoint():
                template = _HOOK_TEMPLATE
        source += template.format(
            function=generated_name(point.kind, key),
            table=table,
            default=default,
            runtime=RUNTIME_ALIAS,
            accessor=LOCALE_ACCESSOR_ALIAS,
            use_effect=USE_EFFECT_ALIAS,
            use_ref=USE_REF_ALIAS,
            use_state=USE_STATE_ALIAS,
        )
        logger.debug("Generated %s dispatch for %s", point.kind, key)
        return ast.parse(source).body


class _PointRewriter(ast.NodeTransformer):
    """Replaces helper calls, innermost first.

    Children are rewritten before their parent, so a replacement built from
    the call's current fields already contains rewritten arguments.
    """

    def __init__(self, points: Sequence[ExtractionPoint]) -> None:
        self._points = {id(point.node): point for point in points}

    def visit_Call(self, node: ast.Call) -> ast.expr:
        self.generic_visit(node)
        point = self._points.get(id(node))
        if point is None:
            return node
        return ast.copy_location(_replacement(point, node), node)


def _replacement(point: ExtractionPoint, node: ast.Call) -> ast.expr:
    match point:
        case StaticPoint(default_index=index, has_arg=has_arg):
            # Validated as a dict literal; its values may hold rewritten calls.
            content = cast(ast.Dict, node.args[0]).values[index]
            if isinstance(content, ast.Lambda):
                return ast.Call(func=content, args=node.args[1:2] if has_arg else [], keywords=[])
            return content
        case ComponentPoint() | HookPoint():
            arg = point.arg_expression()
            return ast.Call(
                func=ast.Name(id=generated_name(point.kind, point.identity.export_key), ctx=ast.Load()),
                args=[arg] if arg is not None else [],
                keywords=[],
            )


def _owning_statements(tree: ast.Module) -> dict[int, int]:
    """Map each call node to the index of the top-level statement holding it."""
    owners: dict[int, int] = {}
    for index, statement in enumerate(tree.body):
        for node in ast.walk(statement):
            if isinstance(node, ast.Call):
                owners[id(node)] = index
    return owners


def _preamble_position(body: list[ast.stmt]) -> int:
    """Index after the module docstring and ``from __future__`` imports."""
    position = 0
    for index, statement in enumerate(body):
        match statement:
            case ast.Expr(value=ast.Constant(value=str())) if index == 0:
                position = index + 1
            case ast.ImportFrom(module="__future__"):
                position = index + 1
            case _:
                break
    return position
