"""Plugin configuration.

Provides a single frozen dataclass that encapsulates every option of the
extraction engine. Validation happens once, at construction: an invalid
configuration is the only fatal error the engine knows, so it surfaces
before any file is touched.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from lazylocale.constants import (
    DEFAULT_COMPONENT_HELPER,
    DEFAULT_EXCLUDE,
    DEFAULT_HOOK_HELPER,
    DEFAULT_INCLUDE,
    DEFAULT_LOCALE_ACCESSOR_IMPORT_PATH,
    DEFAULT_LOCALE_ACCESSOR_NAME,
    DEFAULT_REACTIVITY_IMPORT_PATH,
    DEFAULT_STATIC_HELPER,
)
from lazylocale.core.babel_compat import describe_locale, is_babel_available, is_cldr_locale
from lazylocale.diagnostics import ConfigError, DiagnosticFormatter, ErrorTemplate, OutputFormat

__all__ = ["LocaleConfig"]

logger = logging.getLogger(__name__)

_LOCALE_FORBIDDEN = frozenset("./\\")


@dataclass(frozen=True, slots=True)
class LocaleConfig:
    """Immutable configuration for the extraction engine.

    Only ``locales`` and ``default_locale`` are required. Locale names are
    opaque strings; they only have to be usable inside virtual module ids.

    Attributes:
        locales: Configured locales, deduplicated in first-occurrence order
        default_locale: Locale loaded eagerly; must be one of ``locales``
        root: Project root; identities are derived from paths relative to it
        include: Glob patterns (relative to root) of files to process
        exclude: Glob patterns (relative to root) of files to skip
        static_helper: Name of the compile-time helper (``t``)
        hook_helper: Name of the reactive hook helper (``use_t``)
        component_helper: Name of the reactive component helper (``T``)
        locale_accessor_import_path: Module exporting the current-locale accessor
        locale_accessor_name: Name of the accessor inside that module
        reactivity_import_path: Module exporting use_ref/use_effect/use_state

    Example:
        >>> config = LocaleConfig(
        ...     locales=("it", "en"),
        ...     default_locale="it",
        ...     locale_accessor_import_path="app.hooks.locale",
        ... )
        >>> config.locales
        ('it', 'en')

    Raises:
        ConfigError: On any invalid option (see ``__post_init__``)
    """

    locales: Iterable[str]
    default_locale: str
    root: str | Path = "."
    include: tuple[str, ...] = DEFAULT_INCLUDE
    exclude: tuple[str, ...] = DEFAULT_EXCLUDE
    static_helper: str = DEFAULT_STATIC_HELPER
    hook_helper: str = DEFAULT_HOOK_HELPER
    component_helper: str = DEFAULT_COMPONENT_HELPER
    locale_accessor_import_path: str = DEFAULT_LOCALE_ACCESSOR_IMPORT_PATH
    locale_accessor_name: str = DEFAULT_LOCALE_ACCESSOR_NAME
    reactivity_import_path: str = DEFAULT_REACTIVITY_IMPORT_PATH
    _resolved_root: Path = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Normalize collections and validate every option.

        Raises:
            ConfigError: If no locales are given, a locale name is unusable,
                the default locale is not configured, the root is not a
                directory, or a helper name / import path is malformed.
        """
        # dict.fromkeys() removes duplicates while maintaining insertion order
        locales = tuple(dict.fromkeys(self.locales))
        object.__setattr__(self, "locales", locales)
        object.__setattr__(self, "include", tuple(self.include))
        object.__setattr__(self, "exclude", tuple(self.exclude))

        if not locales:
            raise ConfigError(ErrorTemplate.no_locales())
        for locale in locales:
            if (
                not isinstance(locale, str)
                or not locale
                or locale != locale.strip()
                or any(ch in _LOCALE_FORBIDDEN or ch.isspace() for ch in locale)
            ):
                raise ConfigError(ErrorTemplate.invalid_locale(str(locale)))
        if self.default_locale not in locales:
            raise ConfigError(ErrorTemplate.default_not_in_locales(self.default_locale, locales))

        resolved = Path(self.root).resolve()
        if not resolved.is_dir():
            raise ConfigError(ErrorTemplate.root_not_found(str(self.root)))
        object.__setattr__(self, "_resolved_root", resolved)

        for option in ("static_helper", "hook_helper", "component_helper", "locale_accessor_name"):
            value = getattr(self, option)
            if not isinstance(value, str) or not value.isidentifier():
                raise ConfigError(ErrorTemplate.invalid_helper_name(option, str(value)))
        if len({self.static_helper, self.hook_helper, self.component_helper}) != 3:
            raise ConfigError(ErrorTemplate.invalid_helper_name("component_helper", self.component_helper))
        for option in ("locale_accessor_import_path", "reactivity_import_path"):
            value = getattr(self, option)
            if not isinstance(value, str) or not all(part.isidentifier() for part in value.split(".")):
                raise ConfigError(ErrorTemplate.invalid_import_path(option, str(value)))

        self._warn_unknown_locales()

    def _warn_unknown_locales(self) -> None:
        if not is_babel_available():
            logger.debug("Babel not installed, skipping CLDR locale check")
            return
        formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        for locale in self.locales:
            if is_cldr_locale(locale):
                logger.debug("Locale %s: %s", locale, describe_locale(locale))
            else:
                logger.warning("%s", formatter.format(ErrorTemplate.unknown_cldr_locale(locale)))

    @property
    def root_path(self) -> Path:
        """Resolved absolute project root."""
        return self._resolved_root

    def relative_path(self, path: str | Path) -> PurePosixPath | None:
        """Path relative to the project root, or None if outside it.

        Any query suffix appended by hosts (``file.py?v=3``) is dropped.
        """
        raw = str(path).split("?", 1)[0]
        candidate = Path(raw)
        if not candidate.is_absolute():
            candidate = self._resolved_root / candidate
        try:
            relative = candidate.resolve().relative_to(self._resolved_root)
        except ValueError:
            return None
        return PurePosixPath(relative.as_posix())

    def matches(self, path: str | Path) -> bool:
        """Apply the include/exclude filters to a file path.

        Args:
            path: Absolute path, or path relative to the root

        Returns:
            True if the file is inside the root, matches an include pattern
            and no exclude pattern
        """
        relative = self.relative_path(path)
        if relative is None:
            return False
        if not any(relative.full_match(pattern) for pattern in self.include):
            return False
        return not any(relative.full_match(pattern) for pattern in self.exclude)

    def excludes_directory(self, path: str | Path) -> bool:
        """True if every file below ``path`` is excluded (used to prune scans)."""
        relative = self.relative_path(path)
        if relative is None:
            return True
        sample = relative / "_"
        return any(sample.full_match(pattern) for pattern in self.exclude)
