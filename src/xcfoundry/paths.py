"""Resolution of manifest-relative path expressions into absolute paths."""

from __future__ import annotations

import os
import posixpath
import re
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping

from .core.errors import PathResolutionError

__all__ = ["ROOT_PREFIX", "ResolutionContext"]


ROOT_PREFIX = "//"

_VARIABLE_PATTERN = re.compile(r"\$(?:\((?P<paren>[A-Za-z_][A-Za-z0-9_]*)\)|\{(?P<brace>[A-Za-z_][A-Za-z0-9_]*)\})")


def _normalize(path: str) -> Path:
    # Lexical only; glob characters and missing files must survive untouched.
    return Path(posixpath.normpath(path.replace(os.sep, "/")))


@dataclass(frozen=True, slots=True)
class ResolutionContext:
    """Everything needed to turn a manifest path expression into an absolute path.

    Expressions take one of four forms:

    * absolute paths are returned unchanged (after normalisation),
    * ``//Sources/...`` is relative to :attr:`root_directory`,
    * ``$(NAME)`` or ``${NAME}`` expand entries of :attr:`variables`,
    * anything else is relative to :attr:`manifest_directory`.

    Resolution never touches the filesystem.
    """

    manifest_directory: Path
    root_directory: Path | None = None
    variables: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        manifest_directory = Path(self.manifest_directory)
        if not manifest_directory.is_absolute():
            raise PathResolutionError("manifest directory must be absolute", path=manifest_directory)
        object.__setattr__(self, "manifest_directory", _normalize(str(manifest_directory)))

        if self.root_directory is not None:
            root_directory = Path(self.root_directory)
            if not root_directory.is_absolute():
                raise PathResolutionError("root directory must be absolute", path=root_directory)
            object.__setattr__(self, "root_directory", _normalize(str(root_directory)))

        object.__setattr__(self, "variables", MappingProxyType(dict(self.variables)))

    def _expand_variables(self, expression: str) -> str:
        def substitute(match: re.Match[str]) -> str:
            name = match.group("paren") or match.group("brace")
            try:
                return self.variables[name]
            except KeyError:
                raise PathResolutionError(f"undefined path variable '{name}'", path=expression) from None

        return _VARIABLE_PATTERN.sub(substitute, expression)

    def resolve(self, expression: str | os.PathLike[str]) -> Path:
        """Return the absolute path described by ``expression``."""

        text = os.fspath(expression).strip()
        if not text:
            raise PathResolutionError("path expression must not be empty")

        expanded = self._expand_variables(text)

        if expanded.startswith(ROOT_PREFIX):
            if self.root_directory is None:
                raise PathResolutionError("no project root is defined", path=text)
            relative = expanded[len(ROOT_PREFIX):]
            return _normalize(str(self.root_directory / relative)) if relative else self.root_directory

        if Path(expanded).is_absolute():
            return _normalize(expanded)

        return _normalize(str(self.manifest_directory / expanded))

    def resolve_all(self, expressions: Iterable[str | os.PathLike[str]]) -> list[Path]:
        """Resolve every expression in ``expressions`` preserving order."""

        return [self.resolve(expression) for expression in expressions]
