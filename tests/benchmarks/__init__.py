"""Performance benchmarks for lazylocale.

Benchmarks use pytest-benchmark to track the cost of the build-time pipeline:
locating points, rewriting files and synthesizing virtual modules.

Python 3.13+.
"""

from __future__ import annotations

__all__: list[str] = []
