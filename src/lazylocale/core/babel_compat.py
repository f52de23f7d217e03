"""Babel compatibility layer for optional dependency handling.

Provides centralized, lazy import infrastructure for Babel to ensure consistent
error messaging and import behavior across all Babel-dependent modules.

Design Rationale:
    lazylocale supports two installation modes:
    - Engine only: `pip install lazylocale` (no external dependencies)
    - With CLDR checks: `pip install lazylocale[babel]`

    Locale names are opaque to the engine ('default' or 'pirate' are legal),
    so Babel is only consulted to warn about locale names that CLDR does not
    know. Engine-only installations never trigger Babel imports.

Usage Pattern:
    from lazylocale.core.babel_compat import is_babel_available, is_cldr_locale

    if is_babel_available() and not is_cldr_locale(locale):
        logger.warning(...)

Python 3.13+.
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "BabelImportError",
    "describe_locale",
    "is_babel_available",
    "is_cldr_locale",
    "require_babel",
]


@lru_cache(maxsize=1)
def _check_babel_available() -> bool:
    """Check if Babel is installed (computed once, cached via lru_cache)."""
    try:
        import babel  # noqa: F401, PLC0415  # pylint: disable=unused-import

        return True
    except ImportError:
        return False


class BabelImportError(ImportError):
    """Raised when Babel is required but not installed.

    Provides a consistent, helpful error message directing users to install
    the Babel dependency.
    """

    def __init__(self, feature: str) -> None:
        """Create error with feature-specific message.

        Args:
            feature: Name of the feature/function requiring Babel
        """
        message = (
            f"{feature} requires Babel for CLDR locale data. "
            "Install with: pip install lazylocale[babel]"
        )
        super().__init__(message)
        self.feature = feature


def is_babel_available() -> bool:
    """Check if Babel is installed.

    Uses cached result to avoid repeated import attempts.

    Returns:
        True if Babel is installed and importable, False otherwise.
    """
    return _check_babel_available()


def require_babel(feature: str) -> None:
    """Assert that Babel is available, raising BabelImportError if not.

    Args:
        feature: Name of the feature requiring Babel (for error message)

    Raises:
        BabelImportError: If Babel is not installed
    """
    if not _check_babel_available():
        raise BabelImportError(feature)


@lru_cache(maxsize=128)
def _parse_locale(locale_code: str) -> Locale | None:
    require_babel("is_cldr_locale")
    from babel import Locale, UnknownLocaleError  # noqa: PLC0415

    try:
        return Locale.parse(locale_code.replace("-", "_"))
    except (UnknownLocaleError, ValueError, TypeError):
        return None


def is_cldr_locale(locale_code: str) -> bool:
    """Check whether CLDR knows a locale code.

    Accepts both BCP 47 ('en-US') and POSIX ('en_US') separators.

    Args:
        locale_code: Locale name as configured

    Returns:
        True if Babel can parse the locale

    Raises:
        BabelImportError: If Babel is not installed
    """
    return _parse_locale(locale_code) is not None


def describe_locale(locale_code: str) -> str:
    """Human-readable English name of a locale for log output.

    Falls back to the code itself for non-CLDR names or when Babel is
    not installed.
    """
    if not is_babel_available():
        return locale_code
    parsed = _parse_locale(locale_code)
    if parsed is None:
        return locale_code
    return parsed.get_display_name("en") or locale_code
