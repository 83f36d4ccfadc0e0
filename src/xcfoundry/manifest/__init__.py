"""Manifest schemas for xcfoundry."""

from .schema import ExclusionRule, FileList, GlobSpec, HeaderDeclaration

__all__ = [
    "ExclusionRule",
    "FileList",
    "GlobSpec",
    "HeaderDeclaration",
]
