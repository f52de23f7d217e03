"""Version counter for incremental rebuilds.

Each tracked file change bumps a process-wide counter exactly once.
Identities assigned afterwards carry the new version in their export key, so
rewritten files never bind an export of a previous generation that the host
still has cached.

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

__all__ = ["VersionController"]

logger = logging.getLogger(__name__)


class VersionController:
    """Monotonic version counter plus invalidation bookkeeping.

    Thread Safety:
        ``bump`` is atomic; concurrent change events each get their own
        version.
    """

    __slots__ = ("_lock", "_version")

    def __init__(self, initial: int = 0) -> None:
        if initial < 0:
            msg = f"initial version must be >= 0, got {initial}"
            raise ValueError(msg)
        self._version = initial
        self._lock = threading.Lock()

    @property
    def version(self) -> int:
        with self._lock:
            return self._version

    def bump(self) -> int:
        """Advance the counter for one file change event.

        Returns:
            The new version
        """
        with self._lock:
            self._version += 1
            version = self._version
        logger.info("Locale version bumped to %d", version)
        return version

    @staticmethod
    def invalidation_set(changed: Iterable[str], regenerated: Iterable[str]) -> tuple[str, ...]:
        """Modules the host must reload after a change.

        Args:
            changed: Host modules of the changed file
            regenerated: Ids of every regenerated virtual module

        Returns:
            Changed modules first, then virtual module ids, without duplicates
        """
        return tuple(dict.fromkeys((*changed, *regenerated)))
