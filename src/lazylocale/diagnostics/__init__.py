"""Diagnostic system for lazylocale errors.

Provides structured error diagnostics with codes, source spans and hints.
Inspired by Rust compiler diagnostics.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan
from .errors import (
    ConfigError,
    ExtractionValidationError,
    LocaleError,
    MissingDefaultContentError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "ConfigError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorTemplate",
    "ExtractionValidationError",
    "LocaleError",
    "MissingDefaultContentError",
    "OutputFormat",
    "SourceSpan",
]
