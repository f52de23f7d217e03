"""Extraction of translation points from component source.

This package finds the helper calls in a parsed file, assigns each reactive
point a stable identity and records its per-locale content:

    identity <- points <- locator

Exports:
    ExtractionIdentity: base/versioned names of one point
    ExtractionLocator: NodeVisitor collecting and validating points
    LocateResult: Points and diagnostics of one scan pass
    StaticPoint, ComponentPoint, HookPoint: the three point variants

Python 3.13+.
"""

from .identity import ExtractionIdentity, OrdinalCounter, assign_identity, sanitize_path
from .locator import ExtractionLocator, LocateResult, parse_source
from .points import ComponentPoint, ExtractionPoint, HookPoint, StaticPoint

__all__ = [
    "ComponentPoint",
    "ExtractionIdentity",
    "ExtractionLocator",
    "ExtractionPoint",
    "HookPoint",
    "LocateResult",
    "OrdinalCounter",
    "StaticPoint",
    "assign_identity",
    "parse_source",
    "sanitize_path",
]
