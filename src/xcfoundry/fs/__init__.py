"""Filesystem interfaces and adapters for xcfoundry."""

from .adapters import InMemoryFileSystem, LocalFileSystem
from .interfaces import FileSystem

__all__ = [
    "FileSystem",
    "InMemoryFileSystem",
    "LocalFileSystem",
]
