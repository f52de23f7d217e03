"""Tests for config.py - LocaleConfig validation and file filters."""

import logging
from pathlib import Path

import pytest

from lazylocale import ConfigError, LocaleConfig
from lazylocale.diagnostics import DiagnosticCode


def _config(root: Path, **overrides: object) -> LocaleConfig:
    options: dict[str, object] = {"locales": ("it", "en"), "default_locale": "it", "root": root}
    options.update(overrides)
    return LocaleConfig(**options)  # type: ignore[arg-type]


class TestLocaleValidation:
    """Test locale set validation."""

    def test_minimal_config(self, tmp_path: Path) -> None:
        config = _config(tmp_path)

        assert config.locales == ("it", "en")
        assert config.default_locale == "it"
        assert config.root_path == tmp_path.resolve()

    def test_duplicate_locales_removed_in_order(self, tmp_path: Path) -> None:
        config = _config(tmp_path, locales=["en", "it", "en", "fr"])

        assert config.locales == ("en", "it", "fr")

    def test_default_not_in_locales_is_fatal(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            _config(tmp_path, default_locale="de")

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.CONFIG_DEFAULT_NOT_IN_LOCALES
        assert "'de'" in str(exc_info.value)

    def test_empty_locales_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            _config(tmp_path, locales=())

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.CONFIG_NO_LOCALES

    @pytest.mark.parametrize("locale", ["en.US", "en/US", "en US", "", " en"])
    def test_locale_unusable_in_module_ids_rejected(self, tmp_path: Path, locale: str) -> None:
        with pytest.raises(ConfigError) as exc_info:
            _config(tmp_path, locales=("it", locale))

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.CONFIG_INVALID_LOCALE

    def test_non_cldr_locale_only_warns(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        """Opaque locale names are legal; Babel only reports them."""
        with caplog.at_level(logging.WARNING, logger="lazylocale.config"):
            config = _config(tmp_path, locales=("it", "pirate"))

        assert config.locales == ("it", "pirate")
        assert "CONFIG_UNKNOWN_CLDR_LOCALE" in caplog.text
        assert "'pirate'" in caplog.text


class TestOptionValidation:
    """Test root, helper name and import path validation."""

    def test_root_must_be_directory(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            _config(tmp_path / "missing")

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.CONFIG_ROOT_NOT_FOUND

    @pytest.mark.parametrize("option", ["static_helper", "hook_helper", "component_helper", "locale_accessor_name"])
    def test_helper_names_must_be_identifiers(self, tmp_path: Path, option: str) -> None:
        with pytest.raises(ConfigError) as exc_info:
            _config(tmp_path, **{option: "not-an-identifier"})

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.CONFIG_INVALID_HELPER_NAME

    def test_helper_names_must_be_distinct(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError):
            _config(tmp_path, hook_helper="t")

    @pytest.mark.parametrize("value", ["", "app..hooks", "app/hooks", "./hooks"])
    def test_import_paths_must_be_dotted_names(self, tmp_path: Path, value: str) -> None:
        with pytest.raises(ConfigError) as exc_info:
            _config(tmp_path, locale_accessor_import_path=value)

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.CONFIG_INVALID_IMPORT_PATH

    def test_custom_helper_names(self, tmp_path: Path) -> None:
        config = _config(tmp_path, static_helper="tr", hook_helper="use_tr", component_helper="Tr")

        assert (config.static_helper, config.hook_helper, config.component_helper) == ("tr", "use_tr", "Tr")

    def test_frozen(self, tmp_path: Path) -> None:
        config = _config(tmp_path)

        with pytest.raises(AttributeError):
            config.default_locale = "en"  # type: ignore[misc]


class TestFileFilters:
    """Test relative_path, matches and excludes_directory."""

    def test_relative_path_inside_root(self, tmp_path: Path) -> None:
        config = _config(tmp_path)

        assert str(config.relative_path(tmp_path / "app" / "counter.py")) == "app/counter.py"

    def test_relative_path_drops_query(self, tmp_path: Path) -> None:
        config = _config(tmp_path)

        assert str(config.relative_path(f"{tmp_path}/app.py?v=2")) == "app.py"

    def test_relative_path_outside_root(self, tmp_path: Path) -> None:
        config = _config(tmp_path)

        assert config.relative_path(tmp_path.parent / "elsewhere.py") is None

    def test_matches_default_include(self, tmp_path: Path) -> None:
        config = _config(tmp_path)

        assert config.matches(tmp_path / "counter.py")
        assert config.matches(tmp_path / "app" / "pages" / "home.py")
        assert not config.matches(tmp_path / "styles.css")

    def test_matches_default_exclude(self, tmp_path: Path) -> None:
        config = _config(tmp_path)

        assert not config.matches(tmp_path / ".venv" / "lib" / "module.py")
        assert not config.matches(tmp_path / "app" / "__pycache__" / "counter.py")

    def test_custom_include_and_exclude(self, tmp_path: Path) -> None:
        config = _config(tmp_path, include=("app/**/*.py",), exclude=("app/legacy/**",))

        assert config.matches(tmp_path / "app" / "counter.py")
        assert not config.matches(tmp_path / "scripts" / "build.py")
        assert not config.matches(tmp_path / "app" / "legacy" / "old.py")

    def test_excludes_directory(self, tmp_path: Path) -> None:
        config = _config(tmp_path)

        assert config.excludes_directory(tmp_path / ".venv")
        assert not config.excludes_directory(tmp_path / "app")
