import logging
import threading
from collections.abc import Set
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from sync_graph.core.labels import Label
from sync_graph.models import OutputInfo, UpdateResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InMemoryCachedTarget:
    label: Label
    artifacts: frozenset[Path]
    exit_code: int
    updated: datetime


class InMemoryArtifactTracker:
    """Keeps track of built targets and their artifacts without touching disk.

    Implements the ``ArtifactTracker`` protocol.
    """

    def __init__(self) -> None:
        self.cached: dict[Label, InMemoryCachedTarget] = {}
        self._lock = threading.Lock()

    def clear(self) -> None:
        with self._lock:
            self.cached.clear()
        logger.info("Cleared all cached artifacts")

    def update(self, targets: Set[Label], output_info: OutputInfo) -> UpdateResult:
        with_errors = {Label.of(label) for label in output_info.targets_with_errors}
        artifacts = {
            Label.of(label): frozenset(Path(p) for p in paths) for label, paths in output_info.artifacts.items()
        }
        now = datetime.now(timezone.utc)

        result = UpdateResult()
        with self._lock:
            for label in sorted(targets):
                if label in with_errors:
                    continue
                new_artifacts = artifacts.get(label, frozenset())
                previous = self.cached.get(label)
                if previous is not None:
                    result.removed_keys.update(str(p) for p in previous.artifacts - new_artifacts)
                result.updated_files.update(str(p) for p in new_artifacts)
                self.cached[label] = InMemoryCachedTarget(
                    label=label,
                    artifacts=new_artifacts,
                    exit_code=output_info.exit_code,
                    updated=now,
                )

        failed = with_errors & set(targets)
        if failed:
            logger.warning("%d target(s) failed to build and were not cached", len(failed))
        return result

    def get_live_cached_targets(self) -> frozenset[Label]:
        with self._lock:
            return frozenset(self.cached)

    def get_cached_artifacts(self, target: Label) -> frozenset[Path] | None:
        with self._lock:
            entry = self.cached.get(target)
        return entry.artifacts if entry is not None else None
