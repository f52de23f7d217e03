"""Diagnostic codes and data structures.

Defines error codes, source spans, and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "SourceSpan",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Configuration errors (fatal at plugin construction)
        2000-2999: Extraction errors (per extraction point, non-fatal)
        3000-3999: Dispatch runtime gaps (rendered as placeholders)
        4000-4999: Source errors (whole-file problems, non-fatal)
    """

    # Configuration errors (1000-1999)
    CONFIG_NO_LOCALES = 1001
    CONFIG_DEFAULT_NOT_IN_LOCALES = 1002
    CONFIG_INVALID_LOCALE = 1003
    CONFIG_ROOT_NOT_FOUND = 1004
    CONFIG_INVALID_IMPORT_PATH = 1005
    CONFIG_INVALID_HELPER_NAME = 1006
    CONFIG_UNKNOWN_CLDR_LOCALE = 1007

    # Extraction errors (2000-2999)
    EXTRACTION_INVALID_ARGUMENT = 2001
    EXTRACTION_INVALID_LOCALE_KEY = 2002
    EXTRACTION_INVALID_CONTENT = 2003
    EXTRACTION_NON_LITERAL_SCOPE = 2004
    EXTRACTION_INVALID_SCOPE = 2005
    EXTRACTION_MISSING_DEFAULT = 2006

    # Dispatch runtime gaps (3000-3999)
    DISPATCH_COMPONENT_NOT_FOUND = 3001
    DISPATCH_FALLBACK_NOT_FOUND = 3002
    DISPATCH_CONTENT_NOT_FOUND = 3003

    # Source errors (4000-4999)
    SOURCE_SYNTAX_ERROR = 4001
    SOURCE_DEPTH_EXCEEDED = 4002


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Source code location for error reporting.

    Positions come straight from ``ast`` node attributes: lines are 1-indexed,
    columns are converted from the 0-indexed ``col_offset`` to 1-indexed.

    Attributes:
        path: File the span belongs to
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        end_line: Last line of the span (None if unknown)
    """

    path: str
    line: int
    column: int
    end_line: int | None = None

    def __post_init__(self) -> None:
        """Validate SourceSpan invariants.

        Raises:
            ValueError: If line or column is less than 1, or end_line
                precedes line.
        """
        if self.line < 1:
            msg = f"SourceSpan.line must be >= 1 (1-indexed), got {self.line}"
            raise ValueError(msg)
        if self.column < 1:
            msg = f"SourceSpan.column must be >= 1 (1-indexed), got {self.column}"
            raise ValueError(msg)
        if self.end_line is not None and self.end_line < self.line:
            msg = f"SourceSpan.end_line ({self.end_line}) must be >= line ({self.line})"
            raise ValueError(msg)

    def __str__(self) -> str:
        return f"{self.path}:{self.line}:{self.column}"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Carries enough context for a
    build log line (code, message, location) plus an optional fix hint.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        span: Source location (None for configuration errors)
        hint: Suggestion for fixing the error
        locale: Locale the diagnostic is about, if any
        helper: Helper name of the extraction point, if any
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    span: SourceSpan | None = None
    hint: str | None = None
    locale: str | None = None
    helper: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Example output:
            error[EXTRACTION_MISSING_DEFAULT]: Missing content for default locale 'it'
              --> app/counter.py:12:5
              = helper: use_t
              = help: Add an 'it' entry; the default locale is loaded synchronously

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
