"""Process-wide translation store.

Holds every locale's content for every extraction point seen so far:

    locale -> scope -> base -> TranslationEntry

The store is constructed once per build process and passed explicitly to
the locator (writer) and the synthesizer (reader). Entries are overwritten
when a file is re-scanned (same base) and never deleted.

Thread Safety:
    Different files may be transformed concurrently. Values never collide
    because every base is file-scoped; nested buckets are created on demand,
    so structural mutation goes through the RWLock's write side while
    enumeration shares its read side.

Python 3.13+.
"""

from __future__ import annotations

import ast
import copy
import logging
from collections.abc import Iterable
from dataclasses import dataclass

from lazylocale.core.rwlock import RWLock
from lazylocale.extraction.identity import ExtractionIdentity

__all__ = ["TranslationEntry", "TranslationStore"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, eq=False)
class TranslationEntry:
    """One locale's content for one extraction point.

    Attributes:
        identity: Identity of the extraction point
        content: Private copy of the content expression
        source: Relative path of the file the point lives in
    """

    identity: ExtractionIdentity
    content: ast.expr
    source: str

    @classmethod
    def capture(cls, identity: ExtractionIdentity, content: ast.expr, source: str) -> TranslationEntry:
        """Create an entry owning a deep copy of ``content``.

        The copy keeps the stored expression independent of the file's tree,
        which the dispatch generator rewrites in place afterwards.
        """
        return cls(identity=identity, content=copy.deepcopy(content), source=source)

    @property
    def export_key(self) -> str:
        return self.identity.export_key


class TranslationStore:
    """Nested map of recorded translations.

    Example:
        >>> store = TranslationStore(["it", "en"])
        >>> store.upsert("en", "", entry.identity.base, entry)
        >>> [e.export_key for e in store.entries("en", "")]
        ['app_py__0_0']
    """

    __slots__ = ("_imports", "_lock", "_translations")

    def __init__(self, locales: Iterable[str] = ()) -> None:
        """Initialize the store with one empty bucket per configured locale."""
        self._lock = RWLock()
        self._translations: dict[str, dict[str, dict[str, TranslationEntry]]] = {}
        # relative source path -> module-level import statements (source text)
        self._imports: dict[str, tuple[str, ...]] = {}
        for locale in locales:
            self.ensure_locale(locale)

    def ensure_locale(self, locale: str) -> None:
        """Create the locale bucket if missing (idempotent)."""
        with self._lock.write():
            self._translations.setdefault(locale, {})

    def upsert(self, locale: str, scope: str, base: str, entry: TranslationEntry) -> None:
        """Insert or overwrite the entry of one extraction point.

        Args:
            locale: Locale the content belongs to
            scope: Partition key ('' for the default partition)
            base: Version-independent identity of the point
            entry: Entry to store
        """
        with self._lock.write():
            scopes = self._translations.setdefault(locale, {})
            bucket = scopes.setdefault(scope, {})
            previous = bucket.get(base)
            bucket[base] = entry
        if previous is not None and previous.export_key != entry.export_key:
            logger.debug("Replaced %s/%r %s -> %s", locale, scope, previous.export_key, entry.export_key)

    def record(
        self,
        locale: str,
        scope: str,
        identity: ExtractionIdentity,
        content: ast.expr,
        source: str,
    ) -> TranslationEntry:
        """Capture content for one locale of one point and upsert it."""
        entry = TranslationEntry.capture(identity, content, source)
        self.upsert(locale, scope, identity.base, entry)
        return entry

    def entries(self, locale: str, scope: str) -> tuple[TranslationEntry, ...]:
        """Snapshot of the entries of one (locale, scope) pair, in insertion order."""
        with self._lock.read():
            return tuple(self._translations.get(locale, {}).get(scope, {}).values())

    def locales(self) -> tuple[str, ...]:
        with self._lock.read():
            return tuple(self._translations)

    def scopes(self) -> tuple[tuple[str, str], ...]:
        """Every (locale, scope) pair holding at least a bucket."""
        with self._lock.read():
            return tuple(
                (locale, scope)
                for locale, scopes in self._translations.items()
                for scope in scopes
            )

    def set_imports(self, source: str, statements: tuple[str, ...]) -> None:
        """Record the module-level imports of a scanned file."""
        with self._lock.write():
            self._imports[source] = statements

    def imports(self, sources: Iterable[str]) -> tuple[str, ...]:
        """Deduplicated imports of the given files, in first-seen order."""
        with self._lock.read():
            ordered = dict.fromkeys(
                statement for source in sources for statement in self._imports.get(source, ())
            )
        return tuple(ordered)

    def __len__(self) -> int:
        """Total number of stored entries across all locales and scopes."""
        with self._lock.read():
            return sum(len(bucket) for scopes in self._translations.values() for bucket in scopes.values())
