from sync_graph.db.memory import InMemoryArtifactTracker, InMemoryCachedTarget

__all__ = [
    "InMemoryArtifactTracker",
    "InMemoryCachedTarget",
]
