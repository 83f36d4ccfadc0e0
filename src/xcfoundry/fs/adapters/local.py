"""Filesystem adapter backed by the operating system."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path

from ..interfaces import FileSystem

LOGGER = logging.getLogger(__name__)


def _skip_unreadable(error: OSError) -> None:
    LOGGER.debug("skipping unreadable directory %s: %s", error.filename, error.strerror)


class LocalFileSystem(FileSystem):
    """Read files from the local disk."""

    def __init__(self, *, follow_symlinks: bool = False) -> None:
        self._follow_symlinks = follow_symlinks

    def iter_files(self, directory: Path) -> Iterator[Path]:
        directory = Path(directory)
        for root, _dirs, files in os.walk(directory, onerror=_skip_unreadable, followlinks=self._follow_symlinks):
            root_path = Path(root)
            for filename in files:
                yield root_path / filename

    def is_file(self, path: Path) -> bool:
        try:
            return Path(path).is_file()
        except OSError:
            return False

    def read_bytes(self, path: Path) -> bytes:
        return Path(path).read_bytes()


__all__ = ["LocalFileSystem"]
