"""lazylocale exception hierarchy with structured diagnostics.

All exceptions store Diagnostic objects for rich error information.
Only ConfigError ever escapes the engine; extraction errors are raised by
the locator's validation helpers and caught per extraction point.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic


class LocaleError(Exception):
    """Base exception for all lazylocale errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize LocaleError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class ConfigError(LocaleError):
    """Invalid plugin configuration.

    Fatal: raised from LocaleConfig construction and aborts plugin
    initialization. Examples: default locale not among the configured
    locales, project root that is not a directory.
    """


class ExtractionValidationError(LocaleError):
    """Malformed extraction point.

    Non-fatal: the point is reported and left unrewritten, the rest of the
    file is still transformed.

    Examples:
    - First argument of use_t() is not a dict literal
    - scope= is not a string literal
    - Locale content is a starred expression
    """


class MissingDefaultContentError(ExtractionValidationError):
    """Extraction point without content for the default locale.

    Dispatch code renders the default locale synchronously (first render of
    hooks, fallback of components), so a point lacking it cannot be
    rewritten. Non-fatal: reported and left as-is.
    """


__all__ = [
    "ConfigError",
    "ExtractionValidationError",
    "LocaleError",
    "MissingDefaultContentError",
]
