"""Rendering of diagnostics as text.

Two renderings exist: a multi-line block for exception messages and a
single line for build logs.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import StrEnum

from .codes import Diagnostic

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]


class OutputFormat(StrEnum):
    """Rendering styles."""

    RUST = "rust"  # Block with location and hint lines, used by exceptions
    SIMPLE = "simple"  # One line per diagnostic, used by build logs


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Renders Diagnostic objects.

    Attributes:
        output_format: Rendering style

    Example:
        >>> formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        >>> print(formatter.format(diagnostic))
        app/counter.py:12:5: EXTRACTION_NON_LITERAL_SCOPE: scope must be a string literal
    """

    output_format: OutputFormat = OutputFormat.RUST

    def format(self, diagnostic: Diagnostic) -> str:
        message = _escape(diagnostic.message)
        if self.output_format is OutputFormat.SIMPLE:
            location = f"{diagnostic.span}: " if diagnostic.span else ""
            return f"{location}{diagnostic.code.name}: {message}"

        lines = [f"{diagnostic.severity}[{diagnostic.code.name}]: {message}"]
        if diagnostic.span:
            lines.append(f"  --> {diagnostic.span}")
        for label, value in (("helper", diagnostic.helper), ("locale", diagnostic.locale)):
            if value:
                lines.append(f"  = {label}: {value}")
        if diagnostic.hint:
            lines.append(f"  = help: {_escape(diagnostic.hint)}")
        return "\n".join(lines)


def _escape(text: str) -> str:
    """Escape control characters so one diagnostic stays one log record."""
    return text.replace("\r", "\\r").replace("\n", "\\n").replace("\x1b", "\\x1b")
