"""Concrete filesystem adapter implementations."""

from .local import LocalFileSystem
from .memory import InMemoryFileSystem

__all__ = [
    "InMemoryFileSystem",
    "LocalFileSystem",
]
