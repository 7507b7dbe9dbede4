from collections.abc import Set
from pathlib import Path

from sync_graph.core.labels import Label
from sync_graph.core.ports.artifact_tracker import ArtifactTracker
from sync_graph.core.snapshot import GraphSnapshotHolder


class DependencyTracker:
    """Tracks which project files can be analyzed and what they are still waiting on."""

    def __init__(self, snapshots: GraphSnapshotHolder, artifact_tracker: ArtifactTracker) -> None:
        self._snapshots = snapshots
        self._artifact_tracker = artifact_tracker

    def get_pending_external_deps(self, project_targets: Set[Label]) -> frozenset[Label]:
        """Returns the unbuilt dependencies of whichever of ``project_targets`` has the fewest.

        Once the dependencies of one target are built, nothing is reported as
        pending even if the other targets still have some.
        """
        graph = self._snapshots.get()
        cached = self._artifact_tracker.get_live_cached_targets()
        pending = [
            frozenset(graph.get_external_deps_to_build_for(target) - cached) for target in sorted(project_targets)
        ]
        return min(pending, key=len, default=frozenset())

    def get_pending_targets(self, workspace_relative_path: Path | str) -> frozenset[Label] | None:
        owners = self._snapshots.get().get_target_owners(workspace_relative_path)
        if owners is None:
            return None
        return self.get_pending_external_deps(owners)

    def get_cached_artifacts(self, target: Label) -> frozenset[Path] | None:
        return self._artifact_tracker.get_cached_artifacts(target)
