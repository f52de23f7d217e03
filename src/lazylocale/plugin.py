"""Build-tool facing plugin.

LocalePlugin ties the engine together behind the four hooks a module-graph
host calls:

    build_start          scan the whole project once
    transform            rewrite one source file
    resolve_id / load    serve the synthesized virtual modules
    handle_file_change   hot update: rescan, regenerate, report invalidations

Per-point problems never fail a transform: they come back as diagnostics in
the TransformResult and the offending call is left as written. Only an
invalid configuration is fatal, and it fails before the plugin exists.

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from lazylocale.codegen import (
    DispatchGenerator,
    ModuleSynthesizer,
    parse_virtual_module_id,
    virtual_module_id,
)
from lazylocale.config import LocaleConfig
from lazylocale.diagnostics import Diagnostic
from lazylocale.extraction import ExtractionLocator, LocateResult, parse_source
from lazylocale.store import TranslationStore
from lazylocale.versioning import VersionController

__all__ = ["LocalePlugin", "TransformResult"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TransformResult:
    """Output of one transform.

    Attributes:
        code: Rewritten source, or the input unchanged when not modified
        modified: Whether any extraction point was rewritten
        diagnostics: Problems found in the file
        points: Number of rewritten extraction points
    """

    code: str
    modified: bool
    diagnostics: tuple[Diagnostic, ...] = ()
    points: int = 0


class LocalePlugin:
    """Extraction engine facade for a module-graph host.

    Example:
        >>> plugin = LocalePlugin(LocaleConfig(locales=("it", "en"), default_locale="it"))
        >>> plugin.build_start()
        3
        >>> plugin.transform(source, "app/counter.py").modified
        True
        >>> plugin.resolve_id("lazylocale-virtual/en.py")
        'lazylocale-virtual/en'
    """

    name = "lazylocale"

    def __init__(
        self,
        config: LocaleConfig,
        *,
        store: TranslationStore | None = None,
        versions: VersionController | None = None,
    ) -> None:
        """Create the plugin and the process-wide state it owns.

        Args:
            config: Validated configuration
            store: Translation store to share (default: a fresh one)
            versions: Version counter to share (default: starts at 0)
        """
        self._config = config
        self._store = store if store is not None else TranslationStore(config.locales)
        for locale in config.locales:
            self._store.ensure_locale(locale)
        self._versions = versions if versions is not None else VersionController()
        self._synthesizer = ModuleSynthesizer(self._store)
        self._generator = DispatchGenerator(config)
        self._modules_lock = threading.Lock()
        # Serializes snapshot and install so an older snapshot never replaces a newer one.
        self._regenerate_lock = threading.Lock()
        self._modules: dict[tuple[str, str], str] = {}
        self._regenerate()

    @property
    def config(self) -> LocaleConfig:
        return self._config

    @property
    def store(self) -> TranslationStore:
        return self._store

    @property
    def version(self) -> int:
        return self._versions.version

    def virtual_module_ids(self) -> tuple[str, ...]:
        """Ids of every currently synthesized virtual module."""
        with self._modules_lock:
            return tuple(virtual_module_id(*pair) for pair in self._modules)

    # ------------------------------------------------------------------
    # Host hooks
    # ------------------------------------------------------------------

    def build_start(self) -> int:
        """Scan every matching file under the root.

        Populates the store before the first transform so each virtual
        module already holds the content of files not imported yet.

        Returns:
            Number of files scanned
        """
        root = self._config.root_path
        scanned = 0
        for directory, subdirectories, filenames in root.walk():
            subdirectories[:] = sorted(
                name for name in subdirectories if not self._config.excludes_directory(directory / name)
            )
            for filename in sorted(filenames):
                path = directory / filename
                if self._config.matches(path):
                    self._scan_file(path)
                    scanned += 1
        self._regenerate()
        logger.info("Scanned %d file(s) under %s", scanned, root)
        return scanned

    def transform(self, source: str, path: str | Path) -> TransformResult:
        """Rewrite the extraction points of one file.

        Args:
            source: File content
            path: File path, absolute or relative to the root

        Returns:
            TransformResult; ``modified`` is False for files outside the
            filters, files without points and files that do not parse
        """
        if not self._config.matches(path):
            return TransformResult(code=source, modified=False)
        relative = self._relative(path)

        tree, error = parse_source(source, str(relative))
        if tree is None:
            return TransformResult(code=source, modified=False, diagnostics=(error,) if error else ())

        result = self._locator(relative).locate(tree, self._store)
        if result.identities:
            self._regenerate()
        if not result.points:
            return TransformResult(code=source, modified=False, diagnostics=result.diagnostics)

        code = self._generator.render(tree, result.points)
        logger.info("Transformed %s: %d point(s)", relative, len(result.points))
        return TransformResult(
            code=code,
            modified=True,
            diagnostics=result.diagnostics,
            points=len(result.points),
        )

    def resolve_id(self, module_id: str) -> str | None:
        """Canonical id of a virtual module, or None for any other id."""
        parsed = parse_virtual_module_id(module_id)
        if parsed is None:
            return None
        return virtual_module_id(*parsed)

    def load(self, module_id: str) -> str | None:
        """Source of a virtual module, or None if ``module_id`` is not one.

        Configured locales always load, with an empty module for scopes
        nothing has been recorded in yet.
        """
        parsed = parse_virtual_module_id(module_id)
        if parsed is None or parsed[0] not in self._config.locales:
            return None
        with self._modules_lock:
            source = self._modules.get(parsed)
        if source is None:
            source = self._synthesizer.synthesize(*parsed)
        return source

    def handle_file_change(self, changed_file: str | Path, modules: Sequence[str]) -> tuple[str, ...]:
        """Hot update for one changed file.

        Bumps the version, rescans the file under the new version,
        regenerates every virtual module and reports what must reload.

        Args:
            changed_file: Path of the changed file
            modules: Host modules built from that file

        Returns:
            ``modules`` followed by every regenerated virtual module id;
            ``modules`` alone for files the plugin does not track
        """
        if not self._config.matches(changed_file):
            return tuple(modules)

        self._versions.bump()
        path = Path(str(changed_file).split("?", 1)[0])
        if not path.is_absolute():
            path = self._config.root_path / path
        self._scan_file(path)
        regenerated = self._regenerate()
        invalidated = VersionController.invalidation_set(
            modules, (virtual_module_id(*pair) for pair in regenerated)
        )
        logger.debug("Invalidating %d module(s) after change to %s", len(invalidated), changed_file)
        return invalidated

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _relative(self, path: str | Path) -> PurePosixPath:
        relative = self._config.relative_path(path)
        if relative is None:
            msg = f"{path} is outside the project root"
            raise ValueError(msg)
        return relative

    def _locator(self, relative: PurePosixPath) -> ExtractionLocator:
        return ExtractionLocator(self._config, str(relative), self._versions.version)

    def _scan_file(self, path: Path) -> LocateResult | None:
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Cannot read %s: %s", path, e)
            return None
        relative = self._relative(path)
        tree, _ = parse_source(source, str(relative))
        if tree is None:
            return None
        return self._locator(relative).locate(tree, self._store)

    def _regenerate(self) -> tuple[tuple[str, str], ...]:
        with self._regenerate_lock:
            modules = self._synthesizer.synthesize_all()
            with self._modules_lock:
                self._modules = modules
        return tuple(modules)
