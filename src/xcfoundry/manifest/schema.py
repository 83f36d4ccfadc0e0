"""Manifest schemas describing the headers declared by a target."""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterable, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ExclusionRule(str, Enum):
    """How to resolve headers matched by more than one scope.

    ``projectExcludesPrivateAndPublic`` searches public, then private, then
    project headers. ``publicExcludesPrivateAndProject`` searches in reverse.
    Each later scope skips every header claimed by an earlier one.
    """

    PROJECT_EXCLUDES_PRIVATE_AND_PUBLIC = "projectExcludesPrivateAndPublic"
    PUBLIC_EXCLUDES_PRIVATE_AND_PROJECT = "publicExcludesPrivateAndProject"


class GlobSpec(BaseModel):
    """A glob pattern plus the patterns of files it must not match."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    glob: str = Field(..., min_length=1, description="Glob pattern relative to the manifest directory.")
    excluding: Tuple[str, ...] = Field(default=(), description="Glob patterns of files removed from the match.")

    @model_validator(mode="before")
    @classmethod
    def _accept_bare_pattern(cls, value: Any) -> Any:
        if isinstance(value, str):
            return {"glob": value}
        return value

    @field_validator("excluding", mode="before")
    @classmethod
    def _accept_single_exclude(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, str):
            return (value,)
        return value


class FileList(BaseModel):
    """Ordered list of glob specifications."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    globs: Tuple[GlobSpec, ...] = Field(default=(), description="Glob specifications in declaration order.")

    @model_validator(mode="before")
    @classmethod
    def _accept_shorthand(cls, value: Any) -> Any:
        if isinstance(value, str):
            return {"globs": [value]}
        if isinstance(value, (list, tuple)):
            return {"globs": list(value)}
        return value

    @classmethod
    def paths(cls, paths: Iterable[str]) -> "FileList":
        """Build a list matching each of ``paths`` with no exclusions."""

        return cls(globs=tuple(GlobSpec(glob=path) for path in paths))


class HeaderDeclaration(BaseModel):
    """Headers of a target as declared in its manifest."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    umbrella_header: str | None = Field(
        None,
        alias="umbrellaHeader",
        description="Umbrella header whose imports select the public headers.",
    )
    public: FileList | None = Field(None, description="Globs of public headers.")
    private: FileList | None = Field(None, description="Globs of private headers.")
    project: FileList | None = Field(None, description="Globs of project headers.")
    exclusion_rule: ExclusionRule = Field(
        default=ExclusionRule.PROJECT_EXCLUDES_PRIVATE_AND_PUBLIC,
        alias="exclusionRule",
        description="Precedence applied when scopes match the same header.",
    )

    @classmethod
    def headers(
        cls,
        public: FileList | str | list[str] | None = None,
        private: FileList | str | list[str] | None = None,
        project: FileList | str | list[str] | None = None,
        exclusion_rule: ExclusionRule = ExclusionRule.PROJECT_EXCLUDES_PRIVATE_AND_PUBLIC,
    ) -> "HeaderDeclaration":
        """Declare headers from explicit per-scope lists."""

        return cls.model_validate(
            {
                "public": public,
                "private": private,
                "project": project,
                "exclusion_rule": exclusion_rule,
            }
        )

    @classmethod
    def _from_umbrella(
        cls,
        from_list: FileList | str | list[str],
        umbrella: str,
        private: FileList | str | list[str] | None,
        *,
        others_as_project: bool,
    ) -> "HeaderDeclaration":
        return cls.model_validate(
            {
                "public": from_list,
                "umbrella_header": umbrella,
                "private": private,
                "project": from_list if others_as_project else None,
                "exclusion_rule": ExclusionRule.PROJECT_EXCLUDES_PRIVATE_AND_PUBLIC,
            }
        )

    @classmethod
    def all_headers(
        cls,
        from_list: FileList | str | list[str],
        umbrella: str,
        private: FileList | str | list[str] | None = None,
    ) -> "HeaderDeclaration":
        """Split ``from_list`` using ``umbrella``.

        Headers imported by the umbrella become public, those matched by
        ``private`` become private and every remaining header is project.
        """

        return cls._from_umbrella(from_list, umbrella, private, others_as_project=True)

    @classmethod
    def only_headers(
        cls,
        from_list: FileList | str | list[str],
        umbrella: str,
        private: FileList | str | list[str] | None = None,
    ) -> "HeaderDeclaration":
        """Like :meth:`all_headers` but headers outside the umbrella are skipped."""

        return cls._from_umbrella(from_list, umbrella, private, others_as_project=False)


__all__ = [
    "ExclusionRule",
    "FileList",
    "GlobSpec",
    "HeaderDeclaration",
]
