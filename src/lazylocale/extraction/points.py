"""Extraction point variants.

The locator recognizes three source shapes and hands each downstream as one
member of a closed union, consumed exhaustively with ``match``:

    StaticPoint     t({"it": ..., "en": ...}, arg)
    ComponentPoint  T(it=..., en=..., scope="x", arg=...)
    HookPoint       use_t({"it": ..., "en": ...}, arg, "x")

Points reference the live ``ast.Call`` node they were found at. Content
expressions are opaque ``ast.expr`` handles and are never evaluated.

Python 3.13+.
"""

from __future__ import annotations

import ast
from dataclasses import dataclass
from typing import ClassVar

from lazylocale.diagnostics.codes import SourceSpan
from lazylocale.enums import ExtractionKind

from .identity import ExtractionIdentity

__all__ = [
    "ComponentPoint",
    "ExtractionPoint",
    "HookPoint",
    "StaticPoint",
]

@dataclass(frozen=True, slots=True, eq=False)
class StaticPoint:
    """Compile-time fold of the default-locale content.

    Attributes:
        node: The helper call
        helper: Helper name as written in source
        contents: locale -> content expression (configured locales only)
        default_index: Position of the default-locale value in the dict literal
        has_arg: Whether a second positional argument was given
        span: Source location
    """

    kind: ClassVar[ExtractionKind] = ExtractionKind.STATIC

    node: ast.Call
    helper: str
    contents: dict[str, ast.expr]
    default_index: int
    has_arg: bool
    span: SourceSpan


@dataclass(frozen=True, slots=True, eq=False)
class ComponentPoint:
    """Reactive component dispatch.

    Attributes:
        node: The helper call
        helper: Helper name as written in source
        identity: Identity allocated for this point
        scope: Partition key of the virtual modules ('' when unspecified)
        contents: locale -> content expression (configured locales only)
        has_arg: Whether an ``arg=`` keyword was given
        span: Source location
    """

    kind: ClassVar[ExtractionKind] = ExtractionKind.COMPONENT

    node: ast.Call
    helper: str
    identity: ExtractionIdentity
    scope: str
    contents: dict[str, ast.expr]
    has_arg: bool
    span: SourceSpan

    def arg_expression(self) -> ast.expr | None:
        """Current ``arg=`` expression of the (possibly rewritten) call."""
        for keyword in self.node.keywords:
            if keyword.arg == "arg":
                return keyword.value
        return None


@dataclass(frozen=True, slots=True, eq=False)
class HookPoint:
    """Reactive hook dispatch.

    Attributes:
        node: The helper call
        helper: Helper name as written in source
        identity: Identity allocated for this point
        scope: Partition key of the virtual modules ('' when unspecified)
        contents: locale -> content expression (configured locales only)
        has_arg: Whether a second positional argument was given
        span: Source location
    """

    kind: ClassVar[ExtractionKind] = ExtractionKind.HOOK

    node: ast.Call
    helper: str
    identity: ExtractionIdentity
    scope: str
    contents: dict[str, ast.expr]
    has_arg: bool
    span: SourceSpan

    def arg_expression(self) -> ast.expr | None:
        """Current argument expression of the (possibly rewritten) call."""
        return self.node.args[1] if self.has_arg else None


type ExtractionPoint = StaticPoint | ComponentPoint | HookPoint
