"""The build graph of all the rules that make up the project.

A :class:`BuildGraphData` is immutable. A new instance is built on every sync
and replaces the previous one as a whole; nothing patches a published graph.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from collections.abc import Callable, Collection, Iterable, Mapping, Set
from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path
from types import MappingProxyType
from typing import ClassVar

from sync_graph.config import get_build_file_names
from sync_graph.core import rule_kinds
from sync_graph.core.context import PrintOutput
from sync_graph.core.labels import Label, Location
from sync_graph.core.languages import DependencyTrackingBehavior, QuerySyncLanguage
from sync_graph.core.packages import EMPTY_PACKAGE_SET, PackageSet
from sync_graph.core.ports.context import SyncContext
from sync_graph.core.project_target import ProjectTarget, SourceType
from sync_graph.core.target_tree import EMPTY_TARGET_TREE, TargetTree
from sync_graph.core.targets import RequestedTargets, TargetsToBuild

logger = logging.getLogger(__name__)


def _to_multimap(entries: Iterable[tuple[Label, Label]]) -> Mapping[Label, frozenset[Label]]:
    grouped: dict[Label, set[Label]] = {}
    for key, value in entries:
        grouped.setdefault(key, set()).add(value)
    return MappingProxyType({key: frozenset(values) for key, values in grouped.items()})


def _compute_reverse_deps(target_map: Mapping[Label, ProjectTarget]) -> Mapping[Label, frozenset[Label]]:
    return _to_multimap(
        (dep, target.label) for target in target_map.values() for dep in target.deps | target.runtime_deps
    )


def _compute_source_owners(target_map: Mapping[Label, ProjectTarget]) -> Mapping[Label, frozenset[Label]]:
    return _to_multimap((src, target.label) for target in target_map.values() for src in target.all_source_labels)


@dataclass(frozen=True, eq=False, repr=False)
class BuildGraphData:
    """Project targets, their dependency edges and source ownership.

    ``target_map`` holds every in-project target; any label missing from it is
    external. ``project_deps`` lists the labels the project treats as external
    dependencies, which may include labels that are also in ``target_map``.

    ``reverse_deps`` and ``source_owners`` are derived from ``target_map`` while
    the graph is constructed, so a failure building them surfaces at sync time.
    Transitive external dependencies are computed on first request and cached
    for the lifetime of the graph.
    """

    locations: Mapping[Label, Location] = field(default_factory=dict)
    packages: PackageSet = EMPTY_PACKAGE_SET
    file_to_target: Mapping[Path, Label] = field(default_factory=dict)
    project_deps: frozenset[Label] = frozenset()
    all_targets: TargetTree = EMPTY_TARGET_TREE
    target_map: Mapping[Label, ProjectTarget] = field(default_factory=dict)

    reverse_deps: Mapping[Label, frozenset[Label]] = field(init=False)
    source_owners: Mapping[Label, frozenset[Label]] = field(init=False)
    _transitive_deps: dict[Label, frozenset[Label]] = field(init=False)
    _cache_lock: threading.Lock = field(init=False)

    EMPTY: ClassVar[BuildGraphData]

    def __post_init__(self) -> None:
        object.__setattr__(self, "locations", MappingProxyType(dict(self.locations)))
        file_to_target = {Path(p): s for p, s in self.file_to_target.items()}
        object.__setattr__(self, "file_to_target", MappingProxyType(file_to_target))
        object.__setattr__(self, "project_deps", frozenset(self.project_deps))
        object.__setattr__(self, "target_map", MappingProxyType(dict(self.target_map)))
        object.__setattr__(self, "reverse_deps", _compute_reverse_deps(self.target_map))
        object.__setattr__(self, "source_owners", _compute_source_owners(self.target_map))
        object.__setattr__(self, "_transitive_deps", {})
        object.__setattr__(self, "_cache_lock", threading.Lock())
        logger.debug(
            "Indexed reverse deps for %d labels and owners for %d sources",
            len(self.reverse_deps),
            len(self.source_owners),
        )

    def __repr__(self) -> str:
        # The full contents are far too large to print.
        return (
            f"{type(self).__name__}(targets={len(self.target_map)}, packages={len(self.packages)}, "
            f"project_deps={len(self.project_deps)}, source_files={len(self.file_to_target)})"
        )

    # ------------------------------------------------------------------
    # Reverse dependencies
    # ------------------------------------------------------------------

    def get_same_language_targets_depending_on(self, targets: Set[Label]) -> frozenset[Label]:
        """Direct reverse dependencies of ``targets`` sharing a language with them, plus ``targets``."""
        result = set(targets)
        for target in targets:
            project_target = self.target_map.get(target)
            if project_target is None:
                continue
            for dependent in self.reverse_deps.get(target, frozenset()):
                if not self.target_map[dependent].languages.isdisjoint(project_target.languages):
                    result.add(dependent)
        return frozenset(result)

    def get_reverse_deps_for_source(self, source_path: Path | str) -> list[ProjectTarget]:
        """Returns all project targets depending on a source file through in-project edges.

        If project target A depends on external target B, and B depends on project
        target C, A is not reached from a source file of C.
        """
        owners = self.get_target_owners(source_path)
        if not owners:
            return []

        to_visit = deque(sorted(owners))
        visited: dict[Label, None] = {}
        while to_visit:
            label = to_visit.popleft()
            if label in visited:
                continue
            visited[label] = None
            to_visit.extend(sorted(self.reverse_deps.get(label, frozenset())))

        return [self.target_map[label] for label in visited if label in self.target_map]

    # ------------------------------------------------------------------
    # Source ownership
    # ------------------------------------------------------------------

    def get_target_owners(self, path: Path | str) -> frozenset[Label] | None:
        """Targets that own the source file at ``path``; None when ``path`` is not a known source."""
        source_label = self.file_to_target.get(Path(path))
        if source_label is None:
            return None
        return self.source_owners.get(source_label, frozenset())

    def get_file_dependencies(self, path: Path | str) -> frozenset[Label] | None:
        owners = self.get_target_owners(path)
        if owners is None:
            return None
        return frozenset().union(*(self.get_transitive_external_dependencies(t) for t in owners))

    def get_target_sources(self, target: Label, *source_types: SourceType) -> frozenset[Path]:
        project_target = self.target_map.get(target)
        if project_target is None:
            return frozenset()
        return frozenset(self._path_list_from_labels(project_target.sources(*source_types)))

    def targets_for_kind(self, kind: str) -> frozenset[ProjectTarget]:
        return frozenset(t for t in self.target_map.values() if t.kind == kind)

    # ------------------------------------------------------------------
    # External dependencies
    # ------------------------------------------------------------------

    def get_transitive_external_dependencies(self, target: Label) -> frozenset[Label]:
        cached = self._transitive_deps.get(target)
        if cached is not None:
            return cached
        computed = self._calculate_transitive_external_dependencies(target)
        with self._cache_lock:
            return self._transitive_deps.setdefault(target, computed)

    def _calculate_transitive_external_dependencies(self, target: Label) -> frozenset[Label]:
        found: set[Label] = set()

        # Targets with cyclic dependencies will not build, but the query does not check for cycles.
        visited: set[Label] = set()
        to_visit = deque([target])
        while to_visit:
            label = to_visit.popleft()
            if label in visited:
                continue
            visited.add(label)
            project_target = self.target_map.get(label)
            if project_target is None:
                found.add(label)
                continue
            if label in self.project_deps:
                found.add(label)
            to_visit.extend(project_target.deps)

        return frozenset(found & self.project_deps)

    def get_dependency_tracking_behaviors(self, target: Label) -> frozenset[DependencyTrackingBehavior]:
        project_target = self.target_map.get(target)
        if project_target is None:
            return frozenset()
        return project_target.dependency_tracking_behaviors

    def get_external_deps_to_build_for(self, project_target: Label) -> frozenset[Label]:
        """Returns the targets that must be built to enable analysis of a project target.

        For an ``EXTERNAL_DEPENDENCIES`` language this is the set of transitive
        external dependencies; for a ``SELF`` language it is the target itself.
        A target with several languages gets the union.
        """
        deps: set[Label] = set()
        for behavior in self.get_dependency_tracking_behaviors(project_target):
            if behavior is DependencyTrackingBehavior.EXTERNAL_DEPENDENCIES:
                deps.update(self.get_transitive_external_dependencies(project_target))
            elif behavior is DependencyTrackingBehavior.SELF:
                deps.add(project_target)
        return frozenset(deps)

    def get_target_languages(self, targets: Iterable[Label]) -> frozenset[QuerySyncLanguage]:
        languages: set[QuerySyncLanguage] = set()
        for target in targets:
            project_target = self.target_map.get(target)
            if project_target is not None:
                languages.update(project_target.languages)
        return frozenset(languages)

    def compute_requested_targets(self, project_targets: Set[Label]) -> RequestedTargets:
        """Pairs the targets to build with the external targets expected to come out of the build."""
        external_deps: set[Label] = set()
        for target in project_targets:
            behaviors = self.get_dependency_tracking_behaviors(target)
            if any(b.should_include_external_dependencies for b in behaviors):
                external_deps.update(self.get_transitive_external_dependencies(target))
        return RequestedTargets(
            build_targets=frozenset(project_targets),
            expected_dependency_targets=frozenset(external_deps),
        )

    # ------------------------------------------------------------------
    # Workspace paths
    # ------------------------------------------------------------------

    def get_project_targets(self, context: SyncContext, workspace_relative_path: Path | str) -> TargetsToBuild:
        """Returns the project targets related to a workspace file.

        For a build file these are the targets it defines. For a directory they
        are all targets defined in packages within it, recursively. For a source
        file they are the targets that build it. Anything else yields
        ``TargetsToBuild.NONE`` and a warning on ``context``.
        """
        path = Path(workspace_relative_path)
        if path.name in get_build_file_names():
            return TargetsToBuild.target_group(self.all_targets.get(path.parent))

        # Only non-empty for directories containing packages.
        subpackages = self.all_targets.get_subpackages(path)
        if not subpackages.is_empty():
            return TargetsToBuild.target_group(subpackages.to_label_set())

        if path in self.get_all_source_files():
            owners = self.get_target_owners(path)
            if owners:
                return TargetsToBuild.for_source_file(owners, path)
        else:
            context.output(PrintOutput.warning("Can't find any supported targets for %s", path))
            context.output(PrintOutput.warning("If this is a newly added supported rule, please re-sync your project."))
            context.set_has_warnings()
        return TargetsToBuild.NONE

    @cached_property
    def _all_source_files(self) -> frozenset[Path]:
        return frozenset(self.file_to_target)

    def get_all_source_files(self) -> frozenset[Path]:
        return self._all_source_files

    def get_all_custom_packages(self) -> frozenset[str]:
        return frozenset(t.custom_package for t in self.target_map.values() if t.custom_package is not None)

    # ------------------------------------------------------------------
    # Source listings
    # ------------------------------------------------------------------

    @cached_property
    def java_sources(self) -> frozenset[Label]:
        """All labels appearing in the regular sources of java rules."""
        return self._sources_by_rule_kind_and_type(rule_kinds.is_java, SourceType.REGULAR)

    def get_java_source_files(self) -> list[Path]:
        return self._path_list_from_labels(self.java_sources)

    @cached_property
    def _proto_source_files(self) -> list[Path]:
        return self.get_source_files_by_rule_kind_and_type(rule_kinds.is_proto_source, SourceType.REGULAR)

    def get_proto_source_files(self) -> list[Path]:
        return list(self._proto_source_files)

    @cached_property
    def _cc_source_files(self) -> list[Path]:
        return self.get_source_files_by_rule_kind_and_type(rule_kinds.is_cc, SourceType.REGULAR)

    def get_cc_source_files(self) -> list[Path]:
        return list(self._cc_source_files)

    def get_android_source_files(self) -> list[Path]:
        return self.get_source_files_by_rule_kind_and_type(rule_kinds.is_android, SourceType.REGULAR)

    def get_android_resource_files(self) -> list[Path]:
        return self.get_source_files_by_rule_kind_and_type(rule_kinds.is_android, SourceType.ANDROID_RESOURCES)

    def get_source_files_by_rule_kind_and_type(
        self, rule_kind_predicate: Callable[[str], bool], *source_types: SourceType
    ) -> list[Path]:
        return self._path_list_from_labels(self._sources_by_rule_kind_and_type(rule_kind_predicate, *source_types))

    def _sources_by_rule_kind_and_type(
        self, rule_kind_predicate: Callable[[str], bool], *source_types: SourceType
    ) -> frozenset[Label]:
        return frozenset().union(
            *(t.sources(*source_types) for t in self.target_map.values() if rule_kind_predicate(t.kind))
        )

    def _path_list_from_labels(self, labels: Collection[Label]) -> list[Path]:
        paths: list[Path] = []
        for src in sorted(labels):
            location = self.locations.get(src)
            # Generated sources have no location in the workspace.
            if location is None:
                continue
            paths.append(location.file)
        return paths


BuildGraphData.EMPTY = BuildGraphData()
