"""Custom exception types raised while classifying target headers."""

from __future__ import annotations

from pathlib import PurePath


class XCFoundryError(RuntimeError):
    """Base class for failures that block generation of a target."""

    def __init__(
        self,
        message: str,
        *,
        path: str | PurePath | None = None,
        target: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.path = path
        self.target = target

    def for_target(self, target: str) -> XCFoundryError:
        """Return a copy of this error attributed to ``target``."""

        return type(self)(self.message, path=self.path, target=target)

    def __str__(self) -> str:
        parts: list[str] = []
        if self.target:
            parts.append(f"target '{self.target}'")
        if self.path is not None:
            parts.append(f"'{self.path}'")
        if not parts:
            return self.message
        return f"{': '.join(parts)}: {self.message}"


class PathResolutionError(XCFoundryError):
    """Raised when a manifest path references an unknown variable or root."""


class HeaderReadError(XCFoundryError):
    """Raised when an umbrella header is missing or cannot be decoded."""
