from collections.abc import Set
from pathlib import Path
from typing import Protocol

from sync_graph.core.labels import Label
from sync_graph.models import OutputInfo, UpdateResult


class ArtifactTracker(Protocol):
    def clear(self) -> None: ...

    def update(self, targets: Set[Label], output_info: OutputInfo) -> UpdateResult: ...

    def get_live_cached_targets(self) -> Set[Label]: ...

    def get_cached_artifacts(self, target: Label) -> frozenset[Path] | None: ...
