"""Name normalisation utilities used throughout the project."""

from __future__ import annotations

import re
import unicodedata

__all__ = ["normalize_extension", "normalize_product_name"]


_SEPARATORS = re.compile(r"[\s\-]+")
_INVALID_IDENTIFIER = re.compile(r"[^0-9a-zA-Z_]")
_MULTIPLE_UNDERSCORES = re.compile(r"_+")


def normalize_product_name(name: str) -> str:
    """Return the product module name generated for a target called ``name``.

    Dashes and whitespace become underscores and any character that cannot
    appear in a module identifier is dropped. Letter case is preserved since
    umbrella imports compare product names case-sensitively.
    """

    text = unicodedata.normalize("NFKD", name.strip())
    text = text.encode("ascii", "ignore").decode("ascii")
    candidate = _SEPARATORS.sub("_", text)
    candidate = _INVALID_IDENTIFIER.sub("", candidate)
    candidate = _MULTIPLE_UNDERSCORES.sub("_", candidate)

    if not candidate.strip("_"):
        raise ValueError(f"cannot derive a product name from {name!r}")

    if candidate[0].isdigit():
        candidate = f"_{candidate}"

    return candidate


def normalize_extension(extension: str) -> str:
    """Return ``extension`` with exactly one leading dot."""

    stripped = extension.strip().lstrip(".")
    if not stripped:
        raise ValueError("extension must not be empty")
    return f".{stripped}"
