"""In-memory filesystem adapter for deterministic tests and dry runs."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from pathlib import Path, PurePosixPath

from ..interfaces import FileSystem

LOGGER = logging.getLogger(__name__)


def _key(path: str | Path) -> PurePosixPath:
    key = PurePosixPath(str(path))
    if not key.is_absolute():
        raise ValueError(f"in-memory paths must be absolute, got {path!r}")
    return key


class InMemoryFileSystem(FileSystem):
    """Serve a fixed set of files held in a dictionary.

    Directories are implicit: a directory exists when some file lives below
    it. Directories passed to :meth:`mark_unreadable` behave like folders the
    current user may not list; their files are invisible to :meth:`iter_files`
    and reading them raises :class:`PermissionError`.
    """

    def __init__(self, files: Mapping[str | Path, str | bytes] | None = None) -> None:
        self._files: dict[PurePosixPath, bytes] = {}
        self._unreadable: set[PurePosixPath] = set()
        for path, content in (files or {}).items():
            self.add_file(path, content)

    def add_file(self, path: str | Path, content: str | bytes = b"") -> Path:
        """Create or replace the file at ``path``."""

        data = content.encode("utf-8") if isinstance(content, str) else bytes(content)
        key = _key(path)
        self._files[key] = data
        return Path(key)

    def mark_unreadable(self, directory: str | Path) -> None:
        """Hide everything below ``directory`` from listings."""

        self._unreadable.add(_key(directory))

    def _is_hidden(self, key: PurePosixPath) -> bool:
        return any(blocked == key or blocked in key.parents for blocked in self._unreadable)

    def iter_files(self, directory: Path) -> Iterator[Path]:
        base = _key(directory)
        for key in sorted(self._files):
            if base not in key.parents:
                continue
            if self._is_hidden(key.parent):
                LOGGER.debug("skipping unreadable directory for %s", key)
                continue
            yield Path(key)

    def is_file(self, path: Path) -> bool:
        return _key(path) in self._files

    def read_bytes(self, path: Path) -> bytes:
        key = _key(path)
        if key not in self._files:
            raise FileNotFoundError(2, "No such file or directory", str(path))
        if self._is_hidden(key.parent):
            raise PermissionError(13, "Permission denied", str(path))
        return self._files[key]


__all__ = ["InMemoryFileSystem"]
