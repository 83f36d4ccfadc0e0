"""Core error types for xcfoundry."""

from __future__ import annotations

from .errors import HeaderReadError, PathResolutionError, XCFoundryError

__all__ = [
    "HeaderReadError",
    "PathResolutionError",
    "XCFoundryError",
]
