"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan


class ErrorTemplate:
    """Centralized error message templates.

    All diagnostics are created here. NO f-strings in exception constructors!
    Keeps messages testable and consistent between the build log and the
    exceptions raised during configuration.
    """

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @staticmethod
    def no_locales() -> Diagnostic:
        """Empty locale set."""
        return Diagnostic(
            code=DiagnosticCode.CONFIG_NO_LOCALES,
            message="At least one locale is required",
            hint="Pass locales=('en', ...) including the default locale",
        )

    @staticmethod
    def default_not_in_locales(default_locale: str, locales: tuple[str, ...]) -> Diagnostic:
        """Default locale missing from the configured set.

        Args:
            default_locale: The configured default
            locales: The configured locale set

        Returns:
            Diagnostic for CONFIG_DEFAULT_NOT_IN_LOCALES
        """
        listed = ", ".join(repr(locale) for locale in locales)
        return Diagnostic(
            code=DiagnosticCode.CONFIG_DEFAULT_NOT_IN_LOCALES,
            message=f"Default locale '{default_locale}' is not one of the configured locales ({listed})",
            hint="Add the default locale to 'locales' or pick one of them as default",
            locale=default_locale,
        )

    @staticmethod
    def invalid_locale(locale: str) -> Diagnostic:
        """Locale name unusable inside module ids."""
        return Diagnostic(
            code=DiagnosticCode.CONFIG_INVALID_LOCALE,
            message=f"Locale {locale!r} must be a non-empty name without '.', '/' or whitespace",
            hint="Locale names become part of virtual module ids",
            locale=locale,
        )

    @staticmethod
    def root_not_found(root: str) -> Diagnostic:
        """Project root that is not a directory."""
        return Diagnostic(
            code=DiagnosticCode.CONFIG_ROOT_NOT_FOUND,
            message=f"Project root '{root}' is not a directory",
            hint="Identities are derived from paths relative to the root",
        )

    @staticmethod
    def invalid_import_path(option: str, value: str) -> Diagnostic:
        """Import path that is not a dotted module name."""
        return Diagnostic(
            code=DiagnosticCode.CONFIG_INVALID_IMPORT_PATH,
            message=f"Option '{option}' must be a dotted module path, got {value!r}",
            hint="Use the absolute import path, e.g. 'app.hooks.locale'",
        )

    @staticmethod
    def invalid_helper_name(option: str, value: str) -> Diagnostic:
        """Helper name that is not an identifier."""
        return Diagnostic(
            code=DiagnosticCode.CONFIG_INVALID_HELPER_NAME,
            message=f"Option '{option}' must be a Python identifier, got {value!r}",
        )

    @staticmethod
    def unknown_cldr_locale(locale: str) -> Diagnostic:
        """Locale not present in CLDR (warning only)."""
        return Diagnostic(
            code=DiagnosticCode.CONFIG_UNKNOWN_CLDR_LOCALE,
            message=f"Locale '{locale}' is not a CLDR locale",
            hint="Non-standard locale names work, but tooling cannot describe them",
            locale=locale,
            severity="warning",
        )

    # ------------------------------------------------------------------
    # Extraction
    # ------------------------------------------------------------------

    @staticmethod
    def invalid_argument(helper: str, detail: str, span: SourceSpan | None) -> Diagnostic:
        """Wrong argument shape for a helper call.

        Args:
            helper: Helper name as written in source
            detail: What exactly is wrong
            span: Location of the call

        Returns:
            Diagnostic for EXTRACTION_INVALID_ARGUMENT
        """
        return Diagnostic(
            code=DiagnosticCode.EXTRACTION_INVALID_ARGUMENT,
            message=f"Invalid arguments for {helper}(): {detail}",
            span=span,
            helper=helper,
            hint="The point is left unrewritten",
        )

    @staticmethod
    def invalid_locale_key(helper: str, span: SourceSpan | None) -> Diagnostic:
        """Locale dict key that is not a string literal."""
        return Diagnostic(
            code=DiagnosticCode.EXTRACTION_INVALID_LOCALE_KEY,
            message="Locale keys must be string literals",
            span=span,
            helper=helper,
            hint="Write {'en': ...} instead of computed keys or ** unpacking",
        )

    @staticmethod
    def invalid_content(helper: str, locale: str, node_type: str, span: SourceSpan | None) -> Diagnostic:
        """Locale content that is not a plain expression."""
        return Diagnostic(
            code=DiagnosticCode.EXTRACTION_INVALID_CONTENT,
            message=f"Invalid content expression {node_type}",
            span=span,
            helper=helper,
            locale=locale,
        )

    @staticmethod
    def non_literal_scope(helper: str, span: SourceSpan | None) -> Diagnostic:
        """Scope given as anything but a string literal."""
        return Diagnostic(
            code=DiagnosticCode.EXTRACTION_NON_LITERAL_SCOPE,
            message="scope must be a string literal",
            span=span,
            helper=helper,
            hint="Scopes partition virtual modules at build time and cannot be computed",
        )

    @staticmethod
    def invalid_scope(helper: str, scope: str, span: SourceSpan | None) -> Diagnostic:
        """Scope unusable inside module ids."""
        return Diagnostic(
            code=DiagnosticCode.EXTRACTION_INVALID_SCOPE,
            message=f"scope {scope!r} must not contain '.', '/' or '\\'",
            span=span,
            helper=helper,
        )

    @staticmethod
    def missing_default(helper: str, default_locale: str, span: SourceSpan | None) -> Diagnostic:
        """Extraction point without default-locale content."""
        return Diagnostic(
            code=DiagnosticCode.EXTRACTION_MISSING_DEFAULT,
            message=f"Missing content for default locale '{default_locale}'",
            span=span,
            helper=helper,
            locale=default_locale,
            hint=f"Add a '{default_locale}' entry; the default locale is loaded synchronously",
        )

    # ------------------------------------------------------------------
    # Source
    # ------------------------------------------------------------------

    @staticmethod
    def syntax_error(path: str, line: int | None, detail: str) -> Diagnostic:
        """File that does not parse."""
        span = SourceSpan(path=path, line=line, column=1) if line else None
        return Diagnostic(
            code=DiagnosticCode.SOURCE_SYNTAX_ERROR,
            message=f"Cannot parse source: {detail}",
            span=span,
            hint="The file is passed through unmodified",
        )

    @staticmethod
    def depth_exceeded(path: str, max_depth: int) -> Diagnostic:
        """Syntax tree nested deeper than the walker allows."""
        return Diagnostic(
            code=DiagnosticCode.SOURCE_DEPTH_EXCEEDED,
            message=f"Syntax tree of '{path}' exceeds maximum depth of {max_depth}",
            hint="The file is passed through unmodified",
        )


__all__ = ["ErrorTemplate"]
