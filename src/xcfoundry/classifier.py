"""Partition the headers declared by a target into public, private and project sets."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Mapping

from .config import ClassifierConfig
from .core.errors import XCFoundryError
from .fs.adapters.local import LocalFileSystem
from .fs.interfaces import FileSystem
from .globbing import GlobExpander
from .manifest.schema import ExclusionRule, FileList, GlobSpec, HeaderDeclaration
from .naming import normalize_product_name
from .paths import ResolutionContext
from .umbrella import UmbrellaHeaderParser

__all__ = [
    "ClassifiedHeaders",
    "HeaderClassifier",
    "HeaderScope",
    "classify_headers",
    "scope_order",
]

LOGGER = logging.getLogger(__name__)


class HeaderScope(str, Enum):
    """Visibility of a header within the generated project."""

    PUBLIC = "public"
    PRIVATE = "private"
    PROJECT = "project"


_SCOPE_ORDERS: Mapping[ExclusionRule, tuple[HeaderScope, ...]] = {
    ExclusionRule.PROJECT_EXCLUDES_PRIVATE_AND_PUBLIC: (
        HeaderScope.PUBLIC,
        HeaderScope.PRIVATE,
        HeaderScope.PROJECT,
    ),
    ExclusionRule.PUBLIC_EXCLUDES_PRIVATE_AND_PROJECT: (
        HeaderScope.PROJECT,
        HeaderScope.PRIVATE,
        HeaderScope.PUBLIC,
    ),
}


def scope_order(rule: ExclusionRule) -> tuple[HeaderScope, ...]:
    """Return the order in which scopes claim headers under ``rule``."""

    return _SCOPE_ORDERS[ExclusionRule(rule)]


@dataclass(frozen=True, slots=True)
class ClassifiedHeaders:
    """Absolute header paths grouped by scope. The three sets never overlap."""

    public: frozenset[Path] = frozenset()
    private: frozenset[Path] = frozenset()
    project: frozenset[Path] = frozenset()

    def scope(self, scope: HeaderScope) -> frozenset[Path]:
        return getattr(self, HeaderScope(scope).value)

    def all(self) -> frozenset[Path]:
        """Every classified header regardless of scope."""

        return self.public | self.private | self.project

    def to_dict(self) -> dict[str, list[str]]:
        """Return a JSON friendly mapping of sorted path strings per scope."""

        return {scope.value: sorted(str(path) for path in self.scope(scope)) for scope in HeaderScope}


@dataclass(slots=True)
class _ClassificationAccumulator:
    claimed: dict[HeaderScope, set[Path]] = field(
        default_factory=lambda: {scope: set() for scope in HeaderScope}
    )
    excluded: set[Path] = field(default_factory=set)

    def claim(self, scope: HeaderScope, paths: set[Path]) -> None:
        self.claimed[scope].update(paths)
        self.excluded.update(paths)

    def freeze(self) -> ClassifiedHeaders:
        return ClassifiedHeaders(
            public=frozenset(self.claimed[HeaderScope.PUBLIC]),
            private=frozenset(self.claimed[HeaderScope.PRIVATE]),
            project=frozenset(self.claimed[HeaderScope.PROJECT]),
        )


class HeaderClassifier:
    """Resolve which header files are public, private or project headers.

    The classifier is stateless between calls; one instance may serve many
    targets, including from several threads at once.
    """

    def __init__(
        self,
        filesystem: FileSystem | None = None,
        config: ClassifierConfig | None = None,
    ) -> None:
        self.filesystem = filesystem or LocalFileSystem()
        self.config = config or ClassifierConfig()
        self._expander = GlobExpander(self.filesystem, self.config.header_extensions)
        self._umbrella_parser = UmbrellaHeaderParser(
            self.filesystem,
            product_name=self.config.product_name,
            ignored_frameworks=self.config.ignored_frameworks,
        )

    def _resolved_excludes(self, spec: GlobSpec, context: ResolutionContext) -> set[Path]:
        excluded: set[Path] = set()
        for pattern in spec.excluding:
            excluded.update(self._expander.match(context.resolve(pattern), context.manifest_directory))
        return excluded

    def _expand_list(
        self,
        file_list: FileList | None,
        context: ResolutionContext,
        *,
        basename_filter: frozenset[str] | None,
        excluding: set[Path],
    ) -> set[Path]:
        if file_list is None:
            return set()

        result: set[Path] = set()
        for spec in file_list.globs:
            result.update(
                self._expander.expand(
                    context.resolve(spec.glob),
                    context.manifest_directory,
                    basename_filter=basename_filter,
                    excluding=excluding | self._resolved_excludes(spec, context),
                )
            )
        return result

    def _parser_for(self, target: str | None) -> UmbrellaHeaderParser:
        if self.config.product_name is not None or target is None:
            return self._umbrella_parser

        try:
            product_name = normalize_product_name(target)
        except ValueError:
            LOGGER.debug("target %r has no usable product name; accepting bare umbrella imports only", target)
            return self._umbrella_parser

        LOGGER.debug("using product name %s derived from target %r", product_name, target)
        return UmbrellaHeaderParser(
            self.filesystem,
            product_name=product_name,
            ignored_frameworks=self.config.ignored_frameworks,
        )

    def _classify(
        self,
        declaration: HeaderDeclaration,
        context: ResolutionContext,
        target: str | None,
    ) -> ClassifiedHeaders:
        accumulator = _ClassificationAccumulator()

        umbrella_path: Path | None = None
        umbrella_names: frozenset[str] | None = None
        if declaration.umbrella_header is not None:
            umbrella_path = context.resolve(declaration.umbrella_header)
            umbrella_names = self._parser_for(target).extract_public_imports(umbrella_path)
            if self.config.is_header(umbrella_path):
                accumulator.claim(HeaderScope.PUBLIC, {umbrella_path})
            else:
                LOGGER.warning("umbrella header %s has no header extension and is not classified", umbrella_path)

        lists = {
            HeaderScope.PUBLIC: declaration.public,
            HeaderScope.PRIVATE: declaration.private,
            HeaderScope.PROJECT: declaration.project,
        }
        for scope in scope_order(declaration.exclusion_rule):
            found = self._expand_list(
                lists[scope],
                context,
                basename_filter=umbrella_names if scope is HeaderScope.PUBLIC else None,
                excluding=set(accumulator.excluded),
            )
            LOGGER.debug("%s scope claimed %d header(s)", scope.value, len(found))
            accumulator.claim(scope, found)

        return accumulator.freeze()

    def classify(
        self,
        declaration: HeaderDeclaration,
        context: ResolutionContext,
        *,
        target: str | None = None,
    ) -> ClassifiedHeaders:
        """Classify the headers of ``declaration``.

        Parameters
        ----------
        declaration:
            Header declaration of a single target.
        context:
            Resolves the manifest path expressions used by ``declaration``.
        target:
            Name of the target, attached to any error raised so the user can
            locate the faulty manifest. When the configuration carries no
            product name, one is derived from ``target`` for umbrella imports.

        Raises
        ------
        PathResolutionError
            A path expression references an undefined variable or root.
        HeaderReadError
            The declared umbrella header is missing or not UTF-8.
        """

        try:
            return self._classify(declaration, context, target)
        except XCFoundryError as exc:
            if target is None or exc.target is not None:
                raise
            raise exc.for_target(target) from exc


def classify_headers(
    declaration: HeaderDeclaration,
    context: ResolutionContext,
    *,
    filesystem: FileSystem | None = None,
    config: ClassifierConfig | None = None,
    target: str | None = None,
) -> ClassifiedHeaders:
    """Classify ``declaration`` with a throwaway :class:`HeaderClassifier`."""

    return HeaderClassifier(filesystem, config).classify(declaration, context, target=target)
