"""Abstract filesystem capability consumed by the glob expander and parser."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from pathlib import Path


class FileSystem(ABC):
    """Read-only view of a file tree."""

    @abstractmethod
    def iter_files(self, directory: Path) -> Iterator[Path]:
        """Yield the absolute path of every file below ``directory``.

        Subtrees that cannot be listed are skipped silently. A missing
        ``directory`` yields nothing.
        """

    @abstractmethod
    def is_file(self, path: Path) -> bool:
        """Whether ``path`` names an existing regular file."""

    @abstractmethod
    def read_bytes(self, path: Path) -> bytes:
        """Return the raw content of ``path``.

        Raises :class:`FileNotFoundError` when the file does not exist and
        :class:`OSError` for any other read failure.
        """


__all__ = ["FileSystem"]
