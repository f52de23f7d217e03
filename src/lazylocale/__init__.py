"""lazylocale - inline translations with lazily loaded locales.

Component files keep every locale's content next to the markup that uses it.
At build (or import) time the content is extracted into one synthesized
module per (locale, scope) and each helper call is rewritten to dispatch to
the current locale, loading non-default locales only when first needed.

Public API:
    LocaleConfig - Validated engine configuration
    LocalePlugin - Host facade (build_start, transform, resolve_id, load, hot update)
    LocaleImportHook - Import system host for LocalePlugin
    TranslationStore - Process-wide store of extracted content
    make_helpers - Untransformed t/use_t/T fallbacks

Exceptions:
    LocaleError - Base exception class
    ConfigError - Invalid configuration (fatal)
    ExtractionValidationError - Malformed extraction point (reported, non-fatal)
    MissingDefaultContentError - Point without default-locale content

Submodules:
    lazylocale.extraction - Identity assignment and the extraction point locator
    lazylocale.codegen - Virtual module synthesis and dispatch rewriting
    lazylocale.runtime - Support imported by rewritten files
    lazylocale.diagnostics - Diagnostic codes, templates and formatters
"""

from .config import LocaleConfig
from .diagnostics import (
    ConfigError,
    ExtractionValidationError,
    LocaleError,
    MissingDefaultContentError,
)
from .helpers import make_helpers
from .importer import LocaleImportHook
from .plugin import LocalePlugin, TransformResult
from .store import TranslationStore

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
try:
    from importlib.metadata import PackageNotFoundError
    from importlib.metadata import version as _get_version
except ImportError as e:
    raise RuntimeError("importlib.metadata unavailable - Python version too old? " + str(e)) from e

try:
    __version__ = _get_version("lazylocale")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "ConfigError",
    "ExtractionValidationError",
    "LocaleConfig",
    "LocaleError",
    "LocaleImportHook",
    "LocalePlugin",
    "MissingDefaultContentError",
    "TransformResult",
    "TranslationStore",
    "__version__",
    "make_helpers",
]
