"""Tests for the MCP server tool definitions."""

from __future__ import annotations

from typing import Any

import pytest

from sync_graph.core.build_graph import BuildGraphData
from sync_graph.core.snapshot import GraphSnapshotHolder
from sync_graph.mcp.server import create_mcp_server


def _tool(server: Any, name: str) -> Any:
    return server._tool_manager._tools[name].fn


class TestMcpServerCreation:
    def test_creates_server(self) -> None:
        server = create_mcp_server(GraphSnapshotHolder())
        assert server is not None
        assert server.name == "sync-graph"

    def test_server_has_tools(self) -> None:
        server = create_mcp_server(GraphSnapshotHolder())
        tool_names = {t.name for t in server._tool_manager._tools.values()}
        assert tool_names >= {
            "project_targets",
            "external_deps",
            "build_deps",
            "reverse_deps",
            "same_language_rdeps",
            "requested_targets",
        }


class TestMcpTools:
    @pytest.mark.asyncio
    async def test_project_targets(self, sample_graph: BuildGraphData) -> None:
        server = create_mcp_server(GraphSnapshotHolder(sample_graph))
        result = await _tool(server, "project_targets")("java/com/app/Shared.java")
        assert result == {
            "type": "source_file",
            "targets": ["//java/com/app:app", "//java/com/app:shared_too"],
            "source_file": "java/com/app/Shared.java",
            "warnings": [],
        }

    @pytest.mark.asyncio
    async def test_project_targets_unknown_path(self, sample_graph: BuildGraphData) -> None:
        server = create_mcp_server(GraphSnapshotHolder(sample_graph))
        result = await _tool(server, "project_targets")("nope")
        assert result["type"] == "none"
        assert result["targets"] == []
        assert len(result["warnings"]) == 2

    @pytest.mark.asyncio
    async def test_external_deps(self, sample_graph: BuildGraphData) -> None:
        server = create_mcp_server(GraphSnapshotHolder(sample_graph))
        assert await _tool(server, "external_deps")("//java/com/app:app") == [
            "//third_party:gson",
            "//third_party:guava",
        ]

    @pytest.mark.asyncio
    async def test_build_deps(self, sample_graph: BuildGraphData) -> None:
        server = create_mcp_server(GraphSnapshotHolder(sample_graph))
        assert await _tool(server, "build_deps")("//cc/native:native") == ["//cc/native:native"]

    @pytest.mark.asyncio
    async def test_reverse_deps(self, sample_graph: BuildGraphData) -> None:
        server = create_mcp_server(GraphSnapshotHolder(sample_graph))
        result = await _tool(server, "reverse_deps")("java/com/app/util/Util.java")
        assert result[0] == "//java/com/app/util:util"
        assert set(result) == {"//java/com/app/util:util", "//java/com/app:app", "//java/com/app:app_test"}

    @pytest.mark.asyncio
    async def test_same_language_rdeps(self, sample_graph: BuildGraphData) -> None:
        server = create_mcp_server(GraphSnapshotHolder(sample_graph))
        result = await _tool(server, "same_language_rdeps")(["//cc/native:native"])
        assert result == ["//cc/native:native", "//java/com/app:jni"]

    @pytest.mark.asyncio
    async def test_requested_targets(self, sample_graph: BuildGraphData) -> None:
        server = create_mcp_server(GraphSnapshotHolder(sample_graph))
        result = await _tool(server, "requested_targets")(["//cc/native:native"])
        assert result == {"build_targets": ["//cc/native:native"], "expected_dependency_targets": []}

    @pytest.mark.asyncio
    async def test_tools_read_the_current_snapshot(self, sample_graph: BuildGraphData) -> None:
        snapshots = GraphSnapshotHolder()
        server = create_mcp_server(snapshots)
        assert await _tool(server, "external_deps")("//java/com/app:app") == []
        snapshots.replace(sample_graph)
        assert await _tool(server, "external_deps")("//java/com/app:app") == [
            "//third_party:gson",
            "//third_party:guava",
        ]
