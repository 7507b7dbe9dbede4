from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from sync_graph.core.labels import Label
from sync_graph.core.languages import DependencyTrackingBehavior, QuerySyncLanguage, dependency_tracking_behaviors


class SourceType(Enum):
    REGULAR = "regular"
    ANDROID_RESOURCES = "android_resources"


@dataclass(frozen=True)
class ProjectTarget:
    """A build target defined inside the project."""

    label: Label
    kind: str
    source_labels: Mapping[SourceType, frozenset[Label]] = field(default_factory=dict)
    deps: frozenset[Label] = frozenset()
    runtime_deps: frozenset[Label] = frozenset()
    languages: frozenset[QuerySyncLanguage] = frozenset()
    custom_package: str | None = None

    def __post_init__(self) -> None:
        sources = {source_type: frozenset(labels) for source_type, labels in self.source_labels.items()}
        object.__setattr__(self, "source_labels", MappingProxyType(sources))
        object.__setattr__(self, "deps", frozenset(self.deps))
        object.__setattr__(self, "runtime_deps", frozenset(self.runtime_deps))
        object.__setattr__(self, "languages", frozenset(self.languages))

    def __hash__(self) -> int:
        return hash(self.label)

    def sources(self, *source_types: SourceType) -> frozenset[Label]:
        return frozenset().union(*(self.source_labels.get(t, frozenset()) for t in source_types))

    @property
    def all_source_labels(self) -> frozenset[Label]:
        return frozenset().union(*self.source_labels.values())

    @property
    def dependency_tracking_behaviors(self) -> frozenset[DependencyTrackingBehavior]:
        return dependency_tracking_behaviors(self.languages)
