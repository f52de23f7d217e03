"""Shared constants for lazylocale.

Centralizes the names and strings that the extraction engine, the code
generators and the dispatch runtime must agree on. Generated code and the
runtime live in different processes' worth of time (source is generated at
build time, executed at render time), so every name shared across that
boundary is defined exactly once here.

Constants are grouped by domain:
- Virtual modules: scheme and separators for synthesized locale modules
- Generated names: prefixes for bindings injected into rewritten files
- Defaults: helper names, import paths, file filters
- Placeholders: strings rendered when dispatch cannot find content
- Depth limits: recursion protection for tree walks

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Virtual modules
    "VIRTUAL_MODULE_SCHEME",
    "VIRTUAL_MODULE_SEPARATOR",
    "VIRTUAL_MODULE_SUFFIX",
    # Generated names
    "GENERATED_PREFIX",
    "RUNTIME_ALIAS",
    "LOCALE_ACCESSOR_ALIAS",
    "USE_REF_ALIAS",
    "USE_EFFECT_ALIAS",
    "USE_STATE_ALIAS",
    "RUNTIME_IMPORT_PATH",
    "IDENTITY_SEPARATOR",
    "VERSION_SEPARATOR",
    # Defaults
    "DEFAULT_STATIC_HELPER",
    "DEFAULT_HOOK_HELPER",
    "DEFAULT_COMPONENT_HELPER",
    "DEFAULT_LOCALE_ACCESSOR_IMPORT_PATH",
    "DEFAULT_LOCALE_ACCESSOR_NAME",
    "DEFAULT_REACTIVITY_IMPORT_PATH",
    "DEFAULT_INCLUDE",
    "DEFAULT_EXCLUDE",
    "SCOPE_ATTRIBUTE",
    "ARG_ATTRIBUTE",
    # Placeholders
    "PLACEHOLDER_COMPONENT_NOT_FOUND",
    "PLACEHOLDER_FALLBACK_NOT_FOUND",
    "PLACEHOLDER_CONTENT_NOT_FOUND",
    # Depth limits
    "MAX_DEPTH",
]

# ============================================================================
# VIRTUAL MODULES
# ============================================================================

# Module ids look like "lazylocale-virtual/<locale>[/<scope>]". The scheme
# contains no "." so the Python import system treats every id as a single
# top-level module name and never tries to import a parent package.
VIRTUAL_MODULE_SCHEME: str = "lazylocale-virtual"
VIRTUAL_MODULE_SEPARATOR: str = "/"

# Hosts that append a file suffix to resolved ids (as bundlers commonly do)
# have it stripped again by resolve_id().
VIRTUAL_MODULE_SUFFIX: str = ".py"

# ============================================================================
# GENERATED NAMES
# ============================================================================

GENERATED_PREFIX: str = "_lazylocale"

RUNTIME_ALIAS: str = f"{GENERATED_PREFIX}_rt"
LOCALE_ACCESSOR_ALIAS: str = f"{GENERATED_PREFIX}_use_locale"
USE_REF_ALIAS: str = f"{GENERATED_PREFIX}_use_ref"
USE_EFFECT_ALIAS: str = f"{GENERATED_PREFIX}_use_effect"
USE_STATE_ALIAS: str = f"{GENERATED_PREFIX}_use_state"

RUNTIME_IMPORT_PATH: str = "lazylocale.runtime"

# base = "<sanitized path>__<ordinal>", versioned = "<base>_<version>"
IDENTITY_SEPARATOR: str = "__"
VERSION_SEPARATOR: str = "_"

# ============================================================================
# DEFAULTS
# ============================================================================

DEFAULT_STATIC_HELPER: str = "t"
DEFAULT_HOOK_HELPER: str = "use_t"
DEFAULT_COMPONENT_HELPER: str = "T"

DEFAULT_LOCALE_ACCESSOR_IMPORT_PATH: str = "hooks.locale"
DEFAULT_LOCALE_ACCESSOR_NAME: str = "use_locale"

# Any module exposing use_ref/use_effect/use_state with ReactPy semantics.
DEFAULT_REACTIVITY_IMPORT_PATH: str = "reactpy"

DEFAULT_INCLUDE: tuple[str, ...] = ("**/*.py",)
DEFAULT_EXCLUDE: tuple[str, ...] = (
    "**/site-packages/**",
    "**/.venv/**",
    "**/venv/**",
    "**/__pycache__/**",
)

# Reserved keyword arguments of the component form.
SCOPE_ATTRIBUTE: str = "scope"
ARG_ATTRIBUTE: str = "arg"

# ============================================================================
# PLACEHOLDERS
# ============================================================================

PLACEHOLDER_COMPONENT_NOT_FOUND: str = "lazylocale error: component not found"
PLACEHOLDER_FALLBACK_NOT_FOUND: str = "lazylocale error: fallback not found"
PLACEHOLDER_CONTENT_NOT_FOUND: str = "lazylocale error: content not found"

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Maximum syntax tree nesting walked by the locator. Component files nest
# UI element calls deeply, but never anywhere near this. Moved content is
# deep-copied and printed recursively, so the limit stays well below the
# interpreter recursion limit.
MAX_DEPTH: int = 100
