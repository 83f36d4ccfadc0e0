"""Header classification for generated native IDE projects.

The package turns the header declaration of a manifest target into the
public, private and project header sets consumed when building the native
project's header build phase. Glob patterns are expanded against a pluggable
filesystem, umbrella headers narrow the public scope, and an exclusion rule
decides which scope wins when several match the same file.
"""

from __future__ import annotations

from .classifier import ClassifiedHeaders, HeaderClassifier, HeaderScope, classify_headers, scope_order
from .config import ClassifierConfig
from .core.errors import HeaderReadError, PathResolutionError, XCFoundryError
from .globbing import GlobExpander
from .manifest.schema import ExclusionRule, FileList, GlobSpec, HeaderDeclaration
from .paths import ResolutionContext
from .umbrella import UmbrellaHeaderParser

__all__ = [
    "ClassifiedHeaders",
    "ClassifierConfig",
    "ExclusionRule",
    "FileList",
    "GlobExpander",
    "GlobSpec",
    "HeaderClassifier",
    "HeaderDeclaration",
    "HeaderReadError",
    "HeaderScope",
    "PathResolutionError",
    "ResolutionContext",
    "UmbrellaHeaderParser",
    "XCFoundryError",
    "classify_headers",
    "scope_order",
]

__version__ = "0.1.0"
