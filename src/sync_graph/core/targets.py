from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import ClassVar

from sync_graph.core.labels import Label


class TargetsToBuildType(Enum):
    NONE = "none"
    TARGET_GROUP = "target_group"
    SOURCE_FILE = "source_file"


@dataclass(frozen=True)
class TargetsToBuild:
    """Targets resolved for a workspace path, tagged with how they were resolved.

    A ``TARGET_GROUP`` comes from package structure (a build file or a directory
    of packages). A ``SOURCE_FILE`` comes from the owners of one source file, in
    which case ``source_file`` is set and there may be several candidates.
    """

    type: TargetsToBuildType
    targets: frozenset[Label]
    source_file: Path | None = None

    NONE: ClassVar[TargetsToBuild]

    @classmethod
    def target_group(cls, targets: Iterable[Label]) -> TargetsToBuild:
        return cls(TargetsToBuildType.TARGET_GROUP, frozenset(targets))

    @classmethod
    def for_source_file(cls, targets: Iterable[Label], source_file: Path | str) -> TargetsToBuild:
        return cls(TargetsToBuildType.SOURCE_FILE, frozenset(targets), Path(source_file))

    def is_empty(self) -> bool:
        return not self.targets

    def is_ambiguous(self) -> bool:
        return self.type is TargetsToBuildType.SOURCE_FILE and len(self.targets) > 1

    def unambiguous_targets(self) -> frozenset[Label] | None:
        # Several owners of one source file are left for the caller to choose from.
        if self.is_ambiguous():
            return None
        return self.targets


TargetsToBuild.NONE = TargetsToBuild(TargetsToBuildType.NONE, frozenset())


@dataclass(frozen=True)
class RequestedTargets:
    """What to pass to the build tool, and which targets it should produce output for."""

    build_targets: frozenset[Label]
    expected_dependency_targets: frozenset[Label]
