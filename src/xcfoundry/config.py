"""Static configuration shared by the header classifier and CLI."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Collection, Iterable, Mapping

from .naming import normalize_extension, normalize_product_name

__all__ = [
    "ClassifierConfig",
    "DEFAULT_HEADER_EXTENSIONS",
    "DEFAULT_IGNORED_FRAMEWORKS",
    "has_header_extension",
]


DEFAULT_HEADER_EXTENSIONS: frozenset[str] = frozenset(
    {".h", ".hh", ".hpp", ".ipp", ".tpp", ".hxx", ".def"}
)
DEFAULT_IGNORED_FRAMEWORKS: frozenset[str] = frozenset({"UIKit", "Foundation"})


def has_header_extension(path: str | PurePath, extensions: Collection[str]) -> bool:
    """Whether the suffix of ``path`` is one of ``extensions``."""

    suffix = PurePath(path).suffix
    return bool(suffix) and suffix in extensions


@dataclass(slots=True)
class ClassifierConfig:
    """Settings describing how headers of a single target are recognised.

    Attributes
    ----------
    product_name:
        The product module name of the target. Umbrella imports written as
        ``<ProductName/Header.h>`` are only accepted when their prefix matches
        this value. ``None`` accepts bare header names only.
    header_extensions:
        File extensions, including the leading dot, that mark a file as a
        header. Files with any other extension never appear in a classified
        header set.
    ignored_frameworks:
        System framework names whose imports are never treated as local
        headers, even when otherwise well formed.
    """

    product_name: str | None = None
    header_extensions: frozenset[str] = field(default=DEFAULT_HEADER_EXTENSIONS)
    ignored_frameworks: frozenset[str] = field(default=DEFAULT_IGNORED_FRAMEWORKS)

    @classmethod
    def from_target_name(
        cls,
        name: str,
        *,
        product_name: str | None = None,
        header_extensions: Iterable[str] | None = None,
        ignored_frameworks: Iterable[str] | None = None,
    ) -> "ClassifierConfig":
        """Build a :class:`ClassifierConfig` for the target called ``name``.

        Parameters
        ----------
        name:
            The target name as written in the manifest.
        product_name:
            Optionally override the product name derived from ``name``.
        header_extensions:
            Optionally replace the default header extensions.
        ignored_frameworks:
            Optionally replace the default ignored system frameworks.
        """

        if not name.strip():
            raise ValueError("target name must not be empty")

        extensions = DEFAULT_HEADER_EXTENSIONS
        if header_extensions is not None:
            extensions = frozenset(normalize_extension(ext) for ext in header_extensions)

        frameworks = DEFAULT_IGNORED_FRAMEWORKS
        if ignored_frameworks is not None:
            frameworks = frozenset(item.strip() for item in ignored_frameworks if item.strip())

        return cls(
            product_name=product_name or normalize_product_name(name),
            header_extensions=extensions,
            ignored_frameworks=frameworks,
        )

    def is_header(self, path: str | PurePath) -> bool:
        """Whether ``path`` carries one of the recognised header extensions."""

        return has_header_extension(path, self.header_extensions)

    def context(self) -> Mapping[str, object]:
        """Return a plain mapping describing this configuration."""

        return {
            "product_name": self.product_name,
            "header_extensions": sorted(self.header_extensions),
            "ignored_frameworks": sorted(self.ignored_frameworks),
        }
