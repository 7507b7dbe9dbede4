"""FastMCP server exposing the sync-graph queries."""

from __future__ import annotations

from fastmcp import FastMCP

from sync_graph.core.context import LoggingContext
from sync_graph.core.labels import Label, parse_labels
from sync_graph.core.snapshot import GraphSnapshotHolder


def _labels(labels: frozenset[Label]) -> list[str]:
    return [str(label) for label in sorted(labels)]


def create_mcp_server(snapshots: GraphSnapshotHolder) -> FastMCP:
    """Create a FastMCP server reading from the currently published graph."""

    mcp = FastMCP("sync-graph", instructions="Resolve build targets and dependencies for workspace paths.")

    @mcp.tool()
    async def project_targets(path: str) -> dict[str, object]:
        """Targets for a workspace file, directory or build file."""
        context = LoggingContext()
        result = snapshots.get().get_project_targets(context, path)
        return {
            "type": result.type.value,
            "targets": _labels(result.targets),
            "source_file": str(result.source_file) if result.source_file else None,
            "warnings": [o.text for o in context.outputs],
        }

    @mcp.tool()
    async def external_deps(label: str) -> list[str]:
        """Transitive external dependencies of a project target."""
        return _labels(snapshots.get().get_transitive_external_dependencies(Label.of(label)))

    @mcp.tool()
    async def build_deps(label: str) -> list[str]:
        """Targets to build so that a project target can be analyzed."""
        return _labels(snapshots.get().get_external_deps_to_build_for(Label.of(label)))

    @mcp.tool()
    async def reverse_deps(path: str) -> list[str]:
        """Project targets depending on a source file."""
        return [str(t.label) for t in snapshots.get().get_reverse_deps_for_source(path)]

    @mcp.tool()
    async def same_language_rdeps(labels: list[str]) -> list[str]:
        """Direct same-language reverse dependencies of targets, including the targets."""
        return _labels(snapshots.get().get_same_language_targets_depending_on(parse_labels(labels)))

    @mcp.tool()
    async def requested_targets(labels: list[str]) -> dict[str, list[str]]:
        """Targets to pass to the build tool and the dependency targets expected back."""
        requested = snapshots.get().compute_requested_targets(parse_labels(labels))
        return {
            "build_targets": _labels(requested.build_targets),
            "expected_dependency_targets": _labels(requested.expected_dependency_targets),
        }

    return mcp
