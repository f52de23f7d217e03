"""Performance benchmarks for the build-time pipeline.

Measures locating, rewriting and module synthesis on a generated component
file with many extraction points.

Python 3.13+.
"""

from __future__ import annotations

import ast
from pathlib import Path

import pytest

from lazylocale import LocaleConfig, LocalePlugin
from lazylocale.codegen import ModuleSynthesizer
from lazylocale.extraction import ExtractionLocator


def _component_file(count: int) -> str:
    lines = ["from i18n import T, t, use_t", ""]
    for index in range(count):
        lines += [
            "",
            f"def view_{index}(count):",
            f'    title = t({{"it": "Titolo {index}", "en": "Title {index}"}})',
            f'    label = use_t({{"it": lambda n: f"{{n}} clic", "en": lambda n: f"{{n}} clicks"}}, count, "s{index % 5}")',
            f'    return [title, label, T(it=html.p("Ciao {index}"), en=html.p("Hello {index}"), arg=count)]',
        ]
    return "\n".join(lines) + "\n"


SOURCE = _component_file(100)


@pytest.fixture
def config(tmp_path: Path) -> LocaleConfig:
    return LocaleConfig(locales=("it", "en", "fr"), default_locale="it", root=tmp_path)


class TestPipelineBenchmarks:
    """Benchmark extraction and code generation."""

    def test_locate_points(self, benchmark, config: LocaleConfig) -> None:
        """Benchmark the locator on 300 points."""
        locator = ExtractionLocator(config, "pages/views.py", 0)

        result = benchmark(lambda: locator.locate(ast.parse(SOURCE)))

        assert len(result.points) == 300
        assert result.diagnostics == ()

    def test_transform_file(self, benchmark, config: LocaleConfig) -> None:
        """Benchmark a full transform, including module regeneration."""
        plugin = LocalePlugin(config)

        result = benchmark(plugin.transform, SOURCE, "pages/views.py")

        assert result.modified
        assert result.points == 300

    def test_synthesize_all(self, benchmark, config: LocaleConfig) -> None:
        """Benchmark regeneration of every virtual module."""
        plugin = LocalePlugin(config)
        plugin.transform(SOURCE, "pages/views.py")
        synthesizer = ModuleSynthesizer(plugin.store)

        modules = benchmark(synthesizer.synthesize_all)

        # it/en/fr default scopes plus five hook scopes for it and en
        assert len(modules) == 13
