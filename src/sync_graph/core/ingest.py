import logging
from pathlib import Path

from sync_graph.core.build_graph import BuildGraphData
from sync_graph.core.labels import Label, Location, parse_labels
from sync_graph.core.languages import normalize_language
from sync_graph.core.packages import PackageSet
from sync_graph.core.project_target import ProjectTarget, SourceType
from sync_graph.core.rule_kinds import languages_for_kind
from sync_graph.core.target_tree import TargetTree
from sync_graph.models import QuerySummary, RuleRecord

logger = logging.getLogger(__name__)


def _to_source_type(name: str) -> SourceType:
    try:
        return SourceType(name.strip().lower())
    except ValueError:
        raise ValueError(f"Unknown source type '{name}'. Supported: {sorted(t.value for t in SourceType)}") from None


def to_project_target(rule: RuleRecord) -> ProjectTarget:
    if rule.languages is None:
        languages = languages_for_kind(rule.kind)
    else:
        languages = frozenset(normalize_language(language) for language in rule.languages)
    return ProjectTarget(
        label=Label.of(rule.label),
        kind=rule.kind,
        source_labels={_to_source_type(name): parse_labels(labels) for name, labels in rule.sources.items()},
        deps=parse_labels(rule.deps),
        runtime_deps=parse_labels(rule.runtime_deps),
        languages=languages,
        custom_package=rule.custom_package,
    )


def build_graph(summary: QuerySummary) -> BuildGraphData:
    """Build the project graph from one query summary.

    Raises ValueError on malformed labels, locations or languages. The whole
    graph, including its reverse-dependency and source-ownership indices, is
    complete when this returns.
    """
    locations = {Label.of(src): Location.parse(loc) for src, loc in summary.source_files.items()}
    file_to_target = {location.file: label for label, location in locations.items()}

    target_map: dict[Label, ProjectTarget] = {}
    for rule in summary.rules:
        target = to_project_target(rule)
        if target.label in target_map:
            raise ValueError(f"Duplicate rule in query summary: {target.label}")
        target_map[target.label] = target

    if summary.project_deps is None:
        project_deps = frozenset(dep for t in target_map.values() for dep in t.deps if dep not in target_map)
    else:
        project_deps = parse_labels(summary.project_deps)

    if summary.packages is None:
        packages = PackageSet(label.package_path for label in target_map if not label.is_external_workspace)
    else:
        packages = PackageSet(summary.packages)

    graph = BuildGraphData(
        locations=locations,
        packages=packages,
        file_to_target=file_to_target,
        project_deps=project_deps,
        all_targets=TargetTree.create(target_map),
        target_map=target_map,
    )
    logger.info(
        "Built graph: %d targets, %d packages, %d external deps, %d source files",
        len(target_map),
        len(packages),
        len(project_deps),
        len(file_to_target),
    )
    return graph


def load_query_summary(path: Path | str) -> QuerySummary:
    return QuerySummary.model_validate_json(Path(path).read_text(encoding="utf-8"))


def load_graph(path: Path | str) -> BuildGraphData:
    return build_graph(load_query_summary(path))
