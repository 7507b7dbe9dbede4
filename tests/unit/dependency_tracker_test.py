"""Tests for pending dependency computation and graph snapshots."""

import json
from pathlib import Path

import pytest
from helpers import label

from sync_graph.core.build_graph import BuildGraphData
from sync_graph.core.dependency_tracker import DependencyTracker
from sync_graph.core.snapshot import GraphSnapshotHolder
from sync_graph.db import InMemoryArtifactTracker
from sync_graph.models import OutputInfo


@pytest.fixture
def tracker(sample_graph: BuildGraphData) -> tuple[DependencyTracker, InMemoryArtifactTracker]:
    artifacts = InMemoryArtifactTracker()
    return DependencyTracker(GraphSnapshotHolder(sample_graph), artifacts), artifacts


class TestDependencyTracker:
    def test_nothing_built_yet(self, tracker: tuple[DependencyTracker, InMemoryArtifactTracker]) -> None:
        deps, _ = tracker
        assert deps.get_pending_external_deps({label("//java/com/app:app")}) == {
            label("//third_party:guava"),
            label("//third_party:gson"),
        }

    def test_cached_targets_are_not_pending(self, tracker: tuple[DependencyTracker, InMemoryArtifactTracker]) -> None:
        deps, artifacts = tracker
        artifacts.update({label("//third_party:guava")}, OutputInfo())
        assert deps.get_pending_external_deps({label("//java/com/app:app")}) == {label("//third_party:gson")}

    def test_smallest_pending_set_wins(self, tracker: tuple[DependencyTracker, InMemoryArtifactTracker]) -> None:
        deps, artifacts = tracker
        artifacts.update({label("//third_party:guava")}, OutputInfo())
        # shared_too has no external deps, so the shared file is ready through it
        assert deps.get_pending_targets("java/com/app/Shared.java") == frozenset()

    def test_cc_target_waits_for_itself(self, tracker: tuple[DependencyTracker, InMemoryArtifactTracker]) -> None:
        deps, artifacts = tracker
        assert deps.get_pending_targets("cc/native/native.cc") == {label("//cc/native:native")}
        artifacts.update({label("//cc/native:native")}, OutputInfo())
        assert deps.get_pending_targets("cc/native/native.cc") == frozenset()

    def test_unknown_path(self, tracker: tuple[DependencyTracker, InMemoryArtifactTracker]) -> None:
        deps, _ = tracker
        assert deps.get_pending_targets("nope/Nope.java") is None

    def test_no_targets(self, tracker: tuple[DependencyTracker, InMemoryArtifactTracker]) -> None:
        deps, _ = tracker
        assert deps.get_pending_external_deps(set()) == frozenset()

    def test_cached_artifacts(self, tracker: tuple[DependencyTracker, InMemoryArtifactTracker]) -> None:
        deps, artifacts = tracker
        artifacts.update({label("//third_party:guava")}, OutputInfo(artifacts={"//third_party:guava": ["g.jar"]}))
        assert deps.get_cached_artifacts(label("//third_party:guava")) == {Path("g.jar")}
        assert deps.get_cached_artifacts(label("//third_party:gson")) is None


class TestGraphSnapshotHolder:
    def test_starts_empty(self) -> None:
        assert GraphSnapshotHolder().get() is BuildGraphData.EMPTY

    def test_replace_returns_previous(self, sample_graph: BuildGraphData) -> None:
        holder = GraphSnapshotHolder()
        previous = holder.replace(sample_graph)
        assert previous is BuildGraphData.EMPTY
        assert holder.get() is sample_graph

    def test_sync_from_file(self, summary_file: Path) -> None:
        holder = GraphSnapshotHolder()
        assert holder.sync_from(summary_file)
        assert len(holder.get().target_map) == 8

    def test_failed_sync_keeps_previous_graph(self, sample_graph: BuildGraphData, tmp_path: Path) -> None:
        holder = GraphSnapshotHolder(sample_graph)
        broken = tmp_path / "broken.json"
        broken.write_text(json.dumps({"source_files": {"//a:A.java": "/abs/A.java:1:1"}}), encoding="utf-8")

        assert not holder.sync_from(broken)
        assert not holder.sync_from(tmp_path / "missing.json")
        assert holder.get() is sample_graph
