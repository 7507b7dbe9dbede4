from collections.abc import Iterable, Iterator
from pathlib import Path


class PackageSet:
    """The set of directories holding a build file, relative to the workspace root."""

    def __init__(self, packages: Iterable[Path | str] = ()) -> None:
        self._packages = frozenset(Path(p) for p in packages)

    def __contains__(self, path: object) -> bool:
        return isinstance(path, (str, Path)) and Path(path) in self._packages

    def __iter__(self) -> Iterator[Path]:
        return iter(sorted(self._packages))

    def __len__(self) -> int:
        return len(self._packages)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, PackageSet) and other._packages == self._packages

    def __hash__(self) -> int:
        return hash(self._packages)

    def __repr__(self) -> str:
        return f"PackageSet({len(self._packages)} packages)"

    def is_empty(self) -> bool:
        return not self._packages

    def as_path_set(self) -> frozenset[Path]:
        return self._packages


EMPTY_PACKAGE_SET = PackageSet()
