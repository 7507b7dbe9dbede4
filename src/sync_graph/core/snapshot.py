import logging
import threading
from pathlib import Path

from sync_graph.core.build_graph import BuildGraphData
from sync_graph.core.ingest import load_graph

logger = logging.getLogger(__name__)


class GraphSnapshotHolder:
    """Holds the graph of the latest completed sync.

    Readers always get a complete graph: a new one is swapped in only after it
    has been fully constructed.
    """

    def __init__(self, graph: BuildGraphData = BuildGraphData.EMPTY) -> None:
        self._graph = graph
        self._lock = threading.Lock()

    def get(self) -> BuildGraphData:
        with self._lock:
            return self._graph

    def replace(self, graph: BuildGraphData) -> BuildGraphData:
        """Publishes ``graph`` and returns the one it replaced."""
        with self._lock:
            previous, self._graph = self._graph, graph
        logger.info("Published new graph %r", graph)
        return previous

    def sync_from(self, summary_path: Path | str) -> bool:
        """Rebuilds the graph from a query summary; keeps the current one if that fails."""
        try:
            graph = load_graph(summary_path)
        except (OSError, ValueError):
            logger.exception("Sync from %s failed, keeping the previous graph", summary_path)
            return False
        self.replace(graph)
        return True
