from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from types import MappingProxyType

from sync_graph.core.labels import Label


class _Node:
    __slots__ = ("children", "targets")

    def __init__(self, targets: frozenset[Label], children: Mapping[str, _Node]) -> None:
        self.targets = targets
        self.children = children

    def iter_labels(self) -> Iterator[Label]:
        yield from self.targets
        for child in self.children.values():
            yield from child.iter_labels()

    def is_empty(self) -> bool:
        return not self.targets and all(child.is_empty() for child in self.children.values())


_EMPTY_NODE = _Node(frozenset(), MappingProxyType({}))


def _freeze(tree: dict[str, dict], targets: dict[tuple[str, ...], set[Label]], prefix: tuple[str, ...]) -> _Node:
    children = {name: _freeze(subtree, targets, (*prefix, name)) for name, subtree in tree.items()}
    return _Node(frozenset(targets.get(prefix, ())), MappingProxyType(children))


class TargetTree:
    """Targets indexed by the path of the package that defines them.

    Only main-repository labels are indexed; labels from external workspaces
    have no package directory in the workspace.

    Paths are split into components and stored as a trie so that all targets
    under a directory can be collected without scanning every package.
    """

    def __init__(self, root: _Node = _EMPTY_NODE) -> None:
        self._root = root

    @classmethod
    def create(cls, labels: Iterable[Label]) -> TargetTree:
        tree: dict[str, dict] = {}
        targets: dict[tuple[str, ...], set[Label]] = {}
        for label in labels:
            if label.is_external_workspace:
                continue
            parts = label.package_path.parts
            node = tree
            for part in parts:
                node = node.setdefault(part, {})
            targets.setdefault(parts, set()).add(label)
        return cls(_freeze(tree, targets, ()))

    def _find(self, path: Path | str) -> _Node | None:
        node = self._root
        for part in Path(path).parts:
            child = node.children.get(part)
            if child is None:
                return None
            node = child
        return node

    def get(self, package_path: Path | str) -> frozenset[Label]:
        node = self._find(package_path)
        return node.targets if node is not None else frozenset()

    def get_subpackages(self, path: Path | str) -> TargetTree:
        """Returns the tree of all targets in ``path`` and in every package below it."""
        node = self._find(path)
        return TargetTree(node) if node is not None else EMPTY_TARGET_TREE

    def to_label_set(self) -> frozenset[Label]:
        return frozenset(self._root.iter_labels())

    def is_empty(self) -> bool:
        return self._root.is_empty()

    def __iter__(self) -> Iterator[Label]:
        return self._root.iter_labels()

    def __repr__(self) -> str:
        return f"TargetTree({len(self.to_label_set())} targets)"


EMPTY_TARGET_TREE = TargetTree()
