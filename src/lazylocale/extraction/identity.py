"""Stable identities for extraction points.

An identity names an extraction point inside the synthesized locale modules.
It has two forms:

    base      = <sanitized relative path> "__" <ordinal>
    versioned = <base> "_" <version>

``base`` keys the translation store: re-scanning an unchanged file yields the
same bases in the same order, so a re-scan overwrites instead of
accumulating. ``versioned`` is the exported binding name: it changes on every
tracked file change, so regenerated dispatch code never picks up a binding of
a previous generation still cached by the host.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import PurePosixPath

from lazylocale.constants import IDENTITY_SEPARATOR, VERSION_SEPARATOR

__all__ = [
    "ExtractionIdentity",
    "OrdinalCounter",
    "assign_identity",
    "sanitize_path",
]

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_]")


@dataclass(frozen=True, slots=True)
class ExtractionIdentity:
    """Identity of one extraction point.

    Attributes:
        base: Version-independent key, unique per file and scan pass
        versioned: ``base`` qualified with the global version
    """

    base: str
    versioned: str

    @property
    def export_key(self) -> str:
        """Binding name in the synthesized modules."""
        return self.versioned


@dataclass(slots=True)
class OrdinalCounter:
    """Allocates ordinals for one file during one scan pass.

    A fresh counter per pass is what makes identities stable: the n-th
    extraction point of a file always gets ordinal n.
    """

    next_ordinal: int = field(default=0)

    def allocate(self) -> int:
        ordinal = self.next_ordinal
        self.next_ordinal += 1
        return ordinal


def sanitize_path(relative_path: str | PurePosixPath) -> str:
    """Turn a relative file path into an identifier fragment.

    Separators are normalized to '/', leading '../' segments and any query
    suffix are dropped, then every character outside [A-Za-z0-9_] becomes
    '_'. A leading digit gets a '_' prefix so the result stays a valid
    Python identifier.

    Args:
        relative_path: Path relative to the project root

    Returns:
        Identifier-safe fragment

    Example:
        >>> sanitize_path("app/pages/home-page.py")
        'app_pages_home_page_py'
    """
    text = str(relative_path).replace("\\", "/").split("?", 1)[0]
    while text.startswith(("../", "./")):
        text = text.split("/", 1)[1]
    sanitized = _UNSAFE_CHARS.sub("_", text)
    if not sanitized or sanitized[0].isdigit():
        sanitized = f"_{sanitized}"
    return sanitized


def assign_identity(relative_path: str | PurePosixPath, ordinal: int, version: int) -> ExtractionIdentity:
    """Derive the identity of the ``ordinal``-th point of a file.

    Deterministic in (path, ordinal, version); distinct ordinals of the
    same file always give distinct identities.

    Args:
        relative_path: File path relative to the project root
        ordinal: Position of the point in the file's scan pass
        version: Current global version

    Returns:
        ExtractionIdentity

    Raises:
        ValueError: If ordinal or version is negative
    """
    if ordinal < 0:
        msg = f"ordinal must be >= 0, got {ordinal}"
        raise ValueError(msg)
    if version < 0:
        msg = f"version must be >= 0, got {version}"
        raise ValueError(msg)
    base = f"{sanitize_path(relative_path)}{IDENTITY_SEPARATOR}{ordinal}"
    return ExtractionIdentity(base=base, versioned=f"{base}{VERSION_SEPARATOR}{version}")
