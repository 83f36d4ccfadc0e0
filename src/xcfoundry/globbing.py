"""Glob expansion of manifest file patterns into concrete header paths."""

from __future__ import annotations

import logging
import posixpath
import re
from collections.abc import Collection, Iterable
from functools import lru_cache
from pathlib import Path, PurePath

from .config import DEFAULT_HEADER_EXTENSIONS, has_header_extension
from .fs.adapters.local import LocalFileSystem
from .fs.interfaces import FileSystem

__all__ = ["GlobExpander", "glob_base", "has_magic", "translate_glob"]

LOGGER = logging.getLogger(__name__)

_MAGIC_CHARACTERS = re.compile(r"[*?\[]")
_NOT_HIDDEN = r"(?!\.)"
_VISIBLE_NAME = _NOT_HIDDEN + r"[^/]+"


def has_magic(pattern: str | PurePath) -> bool:
    """Whether ``pattern`` contains any wildcard character."""

    return _MAGIC_CHARACTERS.search(str(pattern)) is not None


def _translate_class(pattern: str, start: int) -> tuple[str, int] | None:
    index = start + 1
    if index < len(pattern) and pattern[index] in "!^":
        index += 1
    if index < len(pattern) and pattern[index] == "]":
        index += 1
    end = pattern.find("]", index)
    if end == -1:
        return None

    body = pattern[start + 1:end]
    negate = body[:1] in ("!", "^")
    if negate:
        body = body[1:]
    body = body.replace("\\", "\\\\").replace("[", "\\[").replace("/", "")
    if not body:
        return None
    prefix = "^/" if negate else ""
    return f"[{prefix}{body}]", end + 1


def _translate_component(component: str) -> str:
    pieces: list[str] = []
    index = 0
    length = len(component)
    while index < length:
        char = component[index]
        if char == "*":
            while index < length and component[index] == "*":
                index += 1
            pieces.append("[^/]*")
            continue
        if char == "?":
            pieces.append("[^/]")
        elif char == "[":
            translated = _translate_class(component, index)
            if translated is not None:
                piece, index = translated
                pieces.append(piece)
                continue
            pieces.append(re.escape(char))
        else:
            pieces.append(re.escape(char))
        index += 1

    translated = "".join(pieces)
    # Wildcards never match a leading dot; only a literal one does.
    if component[:1] in ("*", "?", "["):
        translated = _NOT_HIDDEN + translated
    return translated


@lru_cache(maxsize=256)
def translate_glob(pattern: str) -> re.Pattern[str]:
    """Compile ``pattern`` into a regular expression over ``/`` separated paths.

    Semantics follow :func:`glob.glob` with ``recursive=True``: ``**`` is
    recursive only as a whole path component (``**/`` matches zero or more
    directories, a trailing ``**`` matches everything below), elsewhere it
    behaves like ``*``. ``*`` and ``?`` never cross a ``/`` and ``[...]``
    classes (negated with ``!`` or ``^``) match a single character. Names
    starting with ``.`` are only matched by a literal leading dot.
    """

    components = pattern.split("/")
    last = len(components) - 1
    pieces: list[str] = []
    for position, component in enumerate(components):
        if component == "**":
            if position == last:
                pieces.append(f"{_VISIBLE_NAME}(?:/{_VISIBLE_NAME})*")
            else:
                pieces.append(f"(?:{_VISIBLE_NAME}/)*")
            continue
        pieces.append(_translate_component(component))
        if position != last:
            pieces.append("/")
    return re.compile("".join(pieces))


def glob_base(pattern: str | PurePath) -> Path:
    """Return the longest directory prefix of ``pattern`` without wildcards."""

    parts = PurePath(pattern).parts
    literal: list[str] = []
    for part in parts[:-1]:
        if has_magic(part):
            break
        literal.append(part)
    if not literal:
        return Path(parts[0]) if parts and PurePath(pattern).is_absolute() else Path(".")
    return Path(*literal)


class GlobExpander:
    """Expand glob patterns into sets of header files.

    Parameters
    ----------
    filesystem:
        Source of file listings. Defaults to the local disk.
    header_extensions:
        Extensions, with the leading dot, that :meth:`expand` keeps.
    """

    def __init__(
        self,
        filesystem: FileSystem | None = None,
        header_extensions: Iterable[str] = DEFAULT_HEADER_EXTENSIONS,
    ) -> None:
        self.filesystem = filesystem or LocalFileSystem()
        self.header_extensions = frozenset(header_extensions)

    def _absolute(self, pattern: str | PurePath, root: str | PurePath) -> str:
        candidate = PurePath(pattern)
        if not candidate.is_absolute():
            candidate = PurePath(root) / candidate
        return posixpath.normpath(candidate.as_posix())

    def match(self, pattern: str | PurePath, root: str | PurePath) -> set[Path]:
        """Return every file matched by ``pattern`` regardless of extension."""

        absolute = self._absolute(pattern, root)
        if not has_magic(absolute):
            path = Path(absolute)
            return {path} if self.filesystem.is_file(path) else set()

        regex = translate_glob(absolute)
        matches = {
            path
            for path in self.filesystem.iter_files(glob_base(absolute))
            if regex.fullmatch(path.as_posix())
        }
        LOGGER.debug("glob %s matched %d file(s)", absolute, len(matches))
        return matches

    def expand(
        self,
        pattern: str | PurePath,
        root: str | PurePath,
        *,
        basename_filter: Collection[str] | None = None,
        excluding: Collection[PurePath] = (),
    ) -> set[Path]:
        """Expand ``pattern`` into header files below ``root``.

        Non-header files are dropped, every path in ``excluding`` is removed
        and, when ``basename_filter`` is given, only files whose name is a
        member of it are kept. Zero matches is not an error.
        """

        excluded = excluding if isinstance(excluding, (set, frozenset)) else set(excluding)
        result: set[Path] = set()
        for path in self.match(pattern, root):
            if not has_header_extension(path, self.header_extensions) or path in excluded:
                continue
            if basename_filter is not None and path.name not in basename_filter:
                continue
            result.add(path)
        return result
