"""Core utilities shared across the extraction and code generation layers.

This package provides foundational utilities with no knowledge of extraction
points or generated code, keeping the dependency graph clean:

    core <- extraction <- codegen <- plugin

Exports:
    DepthGuard: Context manager for recursion depth limiting
    DepthLimitExceededError: Exception raised when depth limit exceeded
    RWLock: Readers-writer lock guarding the translation store

Python 3.13+.
"""

from .depth_guard import DepthGuard, DepthLimitExceededError
from .rwlock import RWLock

__all__ = ["DepthGuard", "DepthLimitExceededError", "RWLock"]
