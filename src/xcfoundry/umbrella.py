"""Extraction of public header names from umbrella header files."""

from __future__ import annotations

import logging
from collections.abc import Collection
from pathlib import Path

from .config import DEFAULT_IGNORED_FRAMEWORKS
from .core.errors import HeaderReadError
from .fs.adapters.local import LocalFileSystem
from .fs.interfaces import FileSystem

__all__ = ["IMPORT_DIRECTIVE", "UmbrellaHeaderParser", "parse_import_line"]

LOGGER = logging.getLogger(__name__)

IMPORT_DIRECTIVE = "#import"

_CLOSING_DELIMITERS = {'"': '"', "<": ">"}


def parse_import_line(
    line: str,
    product_name: str | None,
    ignored_frameworks: Collection[str] = DEFAULT_IGNORED_FRAMEWORKS,
) -> str | None:
    """Return the header name imported by ``line`` or ``None``.

    Only ``#import "Header.h"``, ``#import <Header.h>`` and the
    ``ProductName/Header.h`` variants of both are accepted. Deeper paths,
    foreign product prefixes and imports of ignored system frameworks yield
    ``None``.
    """

    stripped = line.strip()
    if not stripped.startswith(IMPORT_DIRECTIVE):
        return None

    remainder = stripped[len(IMPORT_DIRECTIVE):].lstrip()
    if not remainder or remainder[0] not in _CLOSING_DELIMITERS:
        return None

    closing = _CLOSING_DELIMITERS[remainder[0]]
    end = remainder.find(closing, 1)
    if end == -1:
        return None

    reference = remainder[1:end]
    components = reference.split("/")
    if components[0] in ignored_frameworks:
        return None

    if len(components) == 1:
        name = components[0]
    elif len(components) == 2 and product_name is not None and components[0] == product_name:
        name = components[1]
    else:
        return None

    return name or None


class UmbrellaHeaderParser:
    """Read an umbrella header and collect the header names it exposes."""

    def __init__(
        self,
        filesystem: FileSystem | None = None,
        *,
        product_name: str | None = None,
        ignored_frameworks: Collection[str] = DEFAULT_IGNORED_FRAMEWORKS,
    ) -> None:
        self.filesystem = filesystem or LocalFileSystem()
        self.product_name = product_name
        self.ignored_frameworks = frozenset(ignored_frameworks)

    def _read_text(self, path: Path) -> str:
        try:
            data = self.filesystem.read_bytes(path)
        except FileNotFoundError:
            raise HeaderReadError("umbrella header does not exist", path=path) from None
        except OSError as exc:
            raise HeaderReadError(f"cannot read umbrella header: {exc.strerror or exc}", path=path) from exc

        try:
            return data.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise HeaderReadError("umbrella header is not valid UTF-8", path=path) from exc

    def extract_public_imports(self, path: Path) -> frozenset[str]:
        """Return the basenames of the local headers imported by ``path``."""

        content = self._read_text(Path(path))
        names = {
            name
            for line in content.splitlines()
            if (name := parse_import_line(line, self.product_name, self.ignored_frameworks)) is not None
        }
        LOGGER.debug("umbrella header %s exposes %d header(s)", path, len(names))
        return frozenset(names)
