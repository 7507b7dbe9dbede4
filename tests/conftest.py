"""Shared fixtures for tests."""

import json
from pathlib import Path

import pytest
from helpers import SAMPLE_SUMMARY

from sync_graph.core.build_graph import BuildGraphData
from sync_graph.core.ingest import build_graph
from sync_graph.models import QuerySummary

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


@pytest.fixture
def sample_summary() -> QuerySummary:
    return QuerySummary.model_validate(SAMPLE_SUMMARY)


@pytest.fixture
def sample_graph(sample_summary: QuerySummary) -> BuildGraphData:
    return build_graph(sample_summary)


@pytest.fixture
def summary_file(tmp_path: Path) -> Path:
    path = tmp_path / "query_summary.json"
    path.write_text(json.dumps(SAMPLE_SUMMARY), encoding="utf-8")
    return path
