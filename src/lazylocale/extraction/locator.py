"""Extraction point locator.

Walks a component file's syntax tree once, in source order, and recognizes
calls to the three configured helpers:

    t({"it": "Ciao", "en": "Hello"})                      static form
    T(it="Ciao", en="Hello", scope="greetings", arg=user)  component form
    use_t({"it": lambda n: ..., "en": ...}, count, "x")     hook form

Component and hook points get an identity (ordinals are allocated to them
only, in the order they are met) and have their content recorded in the
translation store. Static points are compile-time folds and record nothing.

Malformed points are reported through a Diagnostic, logged, and left
untouched; the walk always finishes the file. Content expressions of
component and hook points move to the synthesized locale modules, so the
walk does not descend into them; arguments and static default content stay
in the file and are walked.

Python 3.13+.
"""

from __future__ import annotations

import ast
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, NoReturn

from lazylocale.constants import ARG_ATTRIBUTE, MAX_DEPTH, SCOPE_ATTRIBUTE
from lazylocale.core.depth_guard import DepthGuard, DepthLimitExceededError
from lazylocale.diagnostics import (
    Diagnostic,
    DiagnosticFormatter,
    ErrorTemplate,
    ExtractionValidationError,
    MissingDefaultContentError,
    OutputFormat,
    SourceSpan,
)

from .identity import ExtractionIdentity, OrdinalCounter, assign_identity
from .points import ComponentPoint, ExtractionPoint, HookPoint, StaticPoint

if TYPE_CHECKING:
    from lazylocale.config import LocaleConfig
    from lazylocale.store import TranslationStore

__all__ = ["ExtractionLocator", "LocateResult", "parse_source"]

logger = logging.getLogger(__name__)

_FORMATTER = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)

# Expressions that cannot be moved into a module-level lambda.
_NON_RELOCATABLE = (ast.Await, ast.Yield, ast.YieldFrom, ast.NamedExpr)


@dataclass(frozen=True, slots=True)
class LocateResult:
    """Outcome of one scan pass over one file.

    Attributes:
        points: Accepted extraction points, in source order
        diagnostics: Problems found (rejected points, unparsable file)
        imports: Module-level absolute imports, as source text
    """

    points: tuple[ExtractionPoint, ...]
    diagnostics: tuple[Diagnostic, ...]
    imports: tuple[str, ...] = ()

    @property
    def identities(self) -> tuple[ExtractionIdentity, ...]:
        return tuple(
            point.identity for point in self.points if not isinstance(point, StaticPoint)
        )


def parse_source(source: str, display_path: str) -> tuple[ast.Module | None, Diagnostic | None]:
    """Parse component source, turning syntax errors into a diagnostic.

    Returns:
        (tree, None) on success, (None, diagnostic) if the file does not parse
    """
    try:
        return ast.parse(source, filename=display_path), None
    except SyntaxError as e:
        diagnostic = ErrorTemplate.syntax_error(display_path, e.lineno, e.msg)
        logger.error("%s", _FORMATTER.format(diagnostic))
        return None, diagnostic


class ExtractionLocator(ast.NodeVisitor):
    """Finds and validates extraction points in one file.

    Follows the stdlib ast.NodeVisitor convention (visit_NodeName methods).
    A locator instance is bound to one file and one version; ``locate`` may
    be called repeatedly and restarts ordinals each time, which is what
    keeps identities stable across re-scans.

    Example:
        >>> locator = ExtractionLocator(config, "app/counter.py", version=0)
        >>> result = locator.locate(ast.parse(source), store)
        >>> [p.identity.base for p in result.points]
        ['app_counter_py__0', 'app_counter_py__1']
    """

    def __init__(
        self,
        config: LocaleConfig,
        relative_path: str,
        version: int,
        *,
        display_path: str | None = None,
        max_depth: int = MAX_DEPTH,
    ) -> None:
        """Bind the locator to a file.

        Args:
            config: Engine configuration
            relative_path: File path relative to the project root
            version: Global version qualifying the identities
            display_path: Path shown in diagnostics (default: relative_path)
            max_depth: Maximum syntax tree nesting walked
        """
        self._config = config
        self._relative_path = relative_path
        self._display_path = display_path or relative_path
        self._version = version
        self._depth_guard = DepthGuard(max_depth=max_depth)
        self._counter = OrdinalCounter()
        self._points: list[ExtractionPoint] = []
        self._diagnostics: list[Diagnostic] = []

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    def locate(self, tree: ast.Module, store: TranslationStore | None = None) -> LocateResult:
        """Scan a parsed file and record accepted points in the store.

        Args:
            tree: Parsed module
            store: Store receiving one entry per (point, locale); None for a
                dry scan

        Returns:
            LocateResult with the accepted points and the diagnostics
        """
        self._depth_guard.reset()
        self._counter = OrdinalCounter()
        self._points = []
        self._diagnostics = []

        try:
            self.visit(tree)
        except DepthLimitExceededError as e:
            diagnostic = ErrorTemplate.depth_exceeded(self._display_path, e.max_depth)
            logger.error("%s", _FORMATTER.format(diagnostic))
            return LocateResult(points=(), diagnostics=(*self._diagnostics, diagnostic))

        imports = self._collect_imports(tree)
        if store is not None:
            self._record(store, imports)

        logger.debug(
            "Scanned %s: %d point(s), %d diagnostic(s)",
            self._display_path,
            len(self._points),
            len(self._diagnostics),
        )
        return LocateResult(
            points=tuple(self._points),
            diagnostics=tuple(self._diagnostics),
            imports=imports,
        )

    def _record(self, store: TranslationStore, imports: tuple[str, ...]) -> None:
        for point in self._points:
            match point:
                case StaticPoint():
                    continue
                case ComponentPoint() | HookPoint():
                    for locale, content in point.contents.items():
                        store.record(locale, point.scope, point.identity, content, self._relative_path)
        store.set_imports(self._relative_path, imports)

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def generic_visit(self, node: ast.AST) -> None:
        with self._depth_guard:
            super().generic_visit(node)

    def visit_Call(self, node: ast.Call) -> None:
        config = self._config
        match node.func:
            case ast.Name(id=name) if name == config.static_helper:
                self._visit_static(node, name)
            case ast.Name(id=name) if name == config.hook_helper:
                self._visit_hook(node, name)
            case ast.Name(id=name) if name == config.component_helper:
                self._visit_component(node, name)
            case _:
                self.generic_visit(node)

    def _visit_static(self, node: ast.Call, helper: str) -> None:
        try:
            contents, default_index = self._read_locale_table(node, helper, max_positional=2)
        except ExtractionValidationError as e:
            self._reject(e, node)
            return

        has_arg = len(node.args) > 1
        self._points.append(
            StaticPoint(
                node=node,
                helper=helper,
                contents=contents,
                default_index=default_index,
                has_arg=has_arg,
                span=self._span(node),
            )
        )
        with self._depth_guard:
            self.visit(contents[self._config.default_locale])
            if has_arg:
                self.visit(node.args[1])

    def _visit_hook(self, node: ast.Call, helper: str) -> None:
        identity = self._allocate()
        try:
            contents, _ = self._read_locale_table(node, helper, max_positional=3)
            scope = self._read_scope(helper, node.args[2]) if len(node.args) > 2 else ""
        except ExtractionValidationError as e:
            self._reject(e, node)
            return

        has_arg = len(node.args) > 1
        self._points.append(
            HookPoint(
                node=node,
                helper=helper,
                identity=identity,
                scope=scope,
                contents=contents,
                has_arg=has_arg,
                span=self._span(node),
            )
        )
        if has_arg:
            with self._depth_guard:
                self.visit(node.args[1])

    def _visit_component(self, node: ast.Call, helper: str) -> None:
        identity = self._allocate()
        try:
            contents, scope, arg = self._read_attributes(node, helper)
        except ExtractionValidationError as e:
            self._reject(e, node)
            return

        self._points.append(
            ComponentPoint(
                node=node,
                helper=helper,
                identity=identity,
                scope=scope,
                contents=contents,
                has_arg=arg is not None,
                span=self._span(node),
            )
        )
        if arg is not None:
            with self._depth_guard:
                self.visit(arg)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def _read_locale_table(
        self, node: ast.Call, helper: str, *, max_positional: int
    ) -> tuple[dict[str, ast.expr], int]:
        """Validate a ``{"locale": content}`` first argument.

        Returns:
            (contents of configured locales, index of the default-locale value)
        """
        if node.keywords:
            self._fail_argument(helper, node, "keyword arguments are not supported")
        if not node.args or len(node.args) > max_positional:
            self._fail_argument(helper, node, f"expected 1 to {max_positional} positional arguments")
        if any(isinstance(arg, ast.Starred) for arg in node.args):
            self._fail_argument(helper, node, "starred arguments are not supported")

        table = node.args[0]
        if not isinstance(table, ast.Dict):
            self._fail_argument(helper, node, "first argument must be a dict literal")

        contents: dict[str, ast.expr] = {}
        default_index = -1
        for index, (key, value) in enumerate(zip(table.keys, table.values, strict=True)):
            match key:
                case ast.Constant(value=str() as locale):
                    pass
                case _:
                    raise ExtractionValidationError(
                        ErrorTemplate.invalid_locale_key(helper, self._span(key or value))
                    )
            if locale not in self._config.locales:
                logger.debug("%s: ignoring unconfigured locale %r", self._span(key), locale)
                continue
            self._check_content(helper, locale, value)
            contents[locale] = value
            if locale == self._config.default_locale:
                default_index = index

        if default_index < 0:
            raise MissingDefaultContentError(
                ErrorTemplate.missing_default(helper, self._config.default_locale, self._span(node))
            )
        return contents, default_index

    def _read_attributes(
        self, node: ast.Call, helper: str
    ) -> tuple[dict[str, ast.expr], str, ast.expr | None]:
        """Validate component keywords.

        Returns:
            (contents of configured locales, scope, ``arg=`` expression or None)
        """
        if node.args:
            self._fail_argument(helper, node, "positional arguments are not supported, pass locales as keywords")

        locales = self._config.locales
        contents: dict[str, ast.expr] = {}
        scope = ""
        arg: ast.expr | None = None
        for keyword in node.keywords:
            match keyword.arg:
                case None:
                    # T(**{"en-US": ...}) for locale names that are not identifiers
                    for locale, value in self._read_unpacked(helper, keyword.value):
                        if locale in locales:
                            self._check_content(helper, locale, value)
                            contents[locale] = value
                case str() as name if name == SCOPE_ATTRIBUTE:
                    scope = self._read_scope(helper, keyword.value)
                case str() as name if name == ARG_ATTRIBUTE:
                    arg = keyword.value
                case str() as name if name in locales:
                    self._check_content(helper, name, keyword.value)
                    contents[name] = keyword.value
                case _:
                    # Other attributes and unconfigured locales are ignored.
                    pass

        if self._config.default_locale not in contents:
            raise MissingDefaultContentError(
                ErrorTemplate.missing_default(helper, self._config.default_locale, self._span(node))
            )
        return contents, scope, arg

    def _read_unpacked(self, helper: str, value: ast.expr) -> list[tuple[str, ast.expr]]:
        if not isinstance(value, ast.Dict):
            self._fail_argument(helper, value, "only dict literals can be unpacked")
        pairs: list[tuple[str, ast.expr]] = []
        for key, item in zip(value.keys, value.values, strict=True):
            match key:
                case ast.Constant(value=str() as locale) if locale not in (SCOPE_ATTRIBUTE, ARG_ATTRIBUTE):
                    pairs.append((locale, item))
                case ast.Constant(value=str()):
                    self._fail_argument(helper, key, "'scope' and 'arg' must be passed as plain keywords")
                case _:
                    raise ExtractionValidationError(
                        ErrorTemplate.invalid_locale_key(helper, self._span(key or item))
                    )
        return pairs

    def _read_scope(self, helper: str, expression: ast.expr) -> str:
        match expression:
            case ast.Constant(value=str() as scope):
                pass
            case _:
                raise ExtractionValidationError(ErrorTemplate.non_literal_scope(helper, self._span(expression)))
        if any(ch in scope for ch in "./\\"):
            raise ExtractionValidationError(ErrorTemplate.invalid_scope(helper, scope, self._span(expression)))
        return scope

    def _check_content(self, helper: str, locale: str, node: ast.AST) -> None:
        # Content is copied and printed recursively later, so its depth counts too.
        if isinstance(node, _NON_RELOCATABLE):
            raise ExtractionValidationError(
                ErrorTemplate.invalid_content(helper, locale, type(node).__name__, self._span(node))
            )
        with self._depth_guard:
            for child in ast.iter_child_nodes(node):
                self._check_content(helper, locale, child)

    def _fail_argument(self, helper: str, node: ast.AST, detail: str) -> NoReturn:
        raise ExtractionValidationError(ErrorTemplate.invalid_argument(helper, detail, self._span(node)))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _allocate(self) -> ExtractionIdentity:
        return assign_identity(self._relative_path, self._counter.allocate(), self._version)

    def _reject(self, error: ExtractionValidationError, node: ast.Call) -> None:
        diagnostic = error.diagnostic
        if diagnostic is not None:
            self._diagnostics.append(diagnostic)
            if isinstance(error, MissingDefaultContentError):
                logger.warning("%s", _FORMATTER.format(diagnostic))
            else:
                logger.error("%s", _FORMATTER.format(diagnostic))
        # The call stays in the file, so nested points are still found.
        self.generic_visit(node)

    def _span(self, node: ast.AST) -> SourceSpan:
        line = getattr(node, "lineno", 1) or 1
        column = getattr(node, "col_offset", 0) + 1
        end_line = getattr(node, "end_lineno", None)
        if end_line is not None and end_line < line:
            end_line = None
        return SourceSpan(path=self._display_path, line=line, column=column, end_line=end_line)

    def _collect_imports(self, tree: ast.Module) -> tuple[str, ...]:
        # Helper imports are kept: helpers nested inside moved content then
        # run through their untransformed fallbacks.
        statements: list[str] = []
        for statement in tree.body:
            match statement:
                case ast.Import():
                    statements.append(ast.unparse(statement))
                case ast.ImportFrom(module="__future__"):
                    pass
                case ast.ImportFrom(level=0):
                    statements.append(ast.unparse(statement))
                case ast.ImportFrom():
                    logger.debug("%s: relative import not replicated in locale modules", self._display_path)
        return tuple(statements)
