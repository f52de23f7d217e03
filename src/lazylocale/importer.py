"""Import system host for LocalePlugin.

Python's import machinery plays the part of the module graph: a finder on
``sys.meta_path`` serves virtual locale modules from the plugin and runs
every matching source module through ``LocalePlugin.transform`` on import.

    with LocaleImportHook(plugin):
        app = importlib.import_module("app")
        ...
        hook.invalidate("app/counter.py")   # after an edit

Transformed modules are compiled from the rewritten source on every import;
bytecode caches are neither read nor written for them.

Python 3.13+.
"""

from __future__ import annotations

import importlib
import importlib.abc
import importlib.machinery
import importlib.util
import logging
import sys
import threading
from collections.abc import Sequence
from pathlib import Path
from types import CodeType, ModuleType, TracebackType

from lazylocale.constants import VIRTUAL_MODULE_SCHEME
from lazylocale.plugin import LocalePlugin

__all__ = ["LocaleImportHook", "TransformingLoader", "VirtualModuleLoader"]

logger = logging.getLogger(__name__)


class VirtualModuleLoader(importlib.abc.Loader):
    """Executes the plugin's source for one virtual module."""

    def __init__(self, plugin: LocalePlugin, module_id: str) -> None:
        self._plugin = plugin
        self._module_id = module_id

    def create_module(self, spec: importlib.machinery.ModuleSpec) -> ModuleType | None:
        return None

    def exec_module(self, module: ModuleType) -> None:
        source = self._plugin.load(self._module_id)
        if source is None:
            msg = f"No virtual module {self._module_id!r}"
            raise ImportError(msg, name=module.__name__)
        code = compile(source, self._module_id, "exec", dont_inherit=True)
        exec(code, module.__dict__)  # noqa: S102 - executing synthesized module source


class TransformingLoader(importlib.machinery.SourceFileLoader):
    """SourceFileLoader compiling the plugin's rewrite of the file."""

    def __init__(self, fullname: str, path: str, plugin: LocalePlugin) -> None:
        super().__init__(fullname, path)
        self._plugin = plugin

    def get_code(self, fullname: str) -> CodeType:
        path = self.get_filename(fullname)
        source = importlib.util.decode_source(self.get_data(path))
        result = self._plugin.transform(source, path)
        if result.modified:
            logger.debug("Importing rewritten %s (%d point(s))", fullname, result.points)
            # Virtual modules imported earlier predate this file's entries.
            _evict_virtual_modules()
        return self.source_to_code(result.code, path)


class LocaleImportHook(importlib.abc.MetaPathFinder):
    """Meta path finder wiring a LocalePlugin into the import system.

    Usable as a context manager: entering installs the hook at the front of
    ``sys.meta_path``; leaving removes it and evicts every module it loaded.
    """

    def __init__(self, plugin: LocalePlugin) -> None:
        self._plugin = plugin
        self._lock = threading.Lock()
        self._loaded: set[str] = set()

    @property
    def plugin(self) -> LocalePlugin:
        return self._plugin

    def find_spec(
        self,
        fullname: str,
        path: Sequence[str] | None = None,
        target: ModuleType | None = None,
    ) -> importlib.machinery.ModuleSpec | None:
        module_id = self._plugin.resolve_id(fullname)
        if module_id is not None:
            if self._plugin.load(module_id) is None:
                return None
            self._track(fullname)
            return importlib.util.spec_from_loader(
                fullname, VirtualModuleLoader(self._plugin, module_id), origin=module_id
            )

        spec = importlib.machinery.PathFinder.find_spec(fullname, path, target)
        if spec is None or spec.origin is None:
            return None
        if not isinstance(spec.loader, importlib.machinery.SourceFileLoader):
            return None
        if not self._plugin.config.matches(spec.origin):
            return None
        spec.loader = TransformingLoader(fullname, spec.origin, self._plugin)
        self._track(fullname)
        return spec

    def invalidate(self, changed_file: str | Path) -> tuple[str, ...]:
        """Hot update after ``changed_file`` was edited.

        Runs the plugin's change handler with the modules built from the file
        and evicts everything it reports from ``sys.modules``; the next
        import picks up the new generation.

        Returns:
            Names evicted (or due for eviction) from ``sys.modules``
        """
        target = Path(str(changed_file).split("?", 1)[0])
        if not target.is_absolute():
            target = self._plugin.config.root_path / target
        target = target.resolve()

        modules = [
            name
            for name, module in list(sys.modules.items())
            if (filename := getattr(module, "__file__", None)) and Path(filename).resolve() == target
        ]
        invalidated = self._plugin.handle_file_change(target, modules)
        for name in invalidated:
            sys.modules.pop(name, None)
        logger.info("Invalidated %d module(s) for %s", len(invalidated), target)
        return invalidated

    def install(self) -> None:
        if self not in sys.meta_path:
            sys.meta_path.insert(0, self)
        importlib.invalidate_caches()

    def uninstall(self) -> None:
        if self in sys.meta_path:
            sys.meta_path.remove(self)
        with self._lock:
            loaded, self._loaded = self._loaded, set()
        for name in loaded:
            sys.modules.pop(name, None)
        _evict_virtual_modules()

    def __enter__(self) -> LocaleImportHook:
        self.install()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.uninstall()

    def _track(self, fullname: str) -> None:
        with self._lock:
            self._loaded.add(fullname)


def _evict_virtual_modules() -> None:
    # A module still executing stays; the import machinery pops it on completion.
    for name, module in list(sys.modules.items()):
        if name.startswith(VIRTUAL_MODULE_SCHEME) and not getattr(module.__spec__, "_initializing", False):
            sys.modules.pop(name, None)
