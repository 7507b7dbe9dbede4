import re
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

_LABEL_PATTERN = re.compile(r"^(?:@@?(?P<workspace>[\w.~+-]*))?//(?P<package>[^:]*)(?::(?P<name>[^:]+))?$")
_LOCATION_PATTERN = re.compile(r"(.*):(\d+):(\d+)")


@dataclass(frozen=True, order=True)
class Label:
    """Identifier of a build target, e.g. ``//java/com/foo:bar`` or ``@maven//:guava``."""

    workspace: str
    package: str
    name: str

    @classmethod
    def of(cls, label: str) -> "Label":
        match = _LABEL_PATTERN.match(label.strip())
        if match is None:
            raise ValueError(f"Invalid label: {label!r}")
        package = match.group("package").rstrip("/")
        name = match.group("name")
        if name is None:
            if not package:
                raise ValueError(f"Label without a target name: {label!r}")
            name = package.rsplit("/", 1)[-1]
        return cls(workspace=match.group("workspace") or "", package=package, name=name)

    @property
    def package_path(self) -> Path:
        return Path(self.package)

    @property
    def is_external_workspace(self) -> bool:
        return bool(self.workspace)

    def __str__(self) -> str:
        prefix = f"@{self.workspace}" if self.workspace else ""
        return f"{prefix}//{self.package}:{self.name}"


def parse_labels(values: Iterable[str]) -> frozenset[Label]:
    return frozenset(Label.of(v) for v in values)


@dataclass(frozen=True)
class Location:
    """A ``path:row:column`` position in a workspace file. ``file`` is workspace relative."""

    file: Path
    row: int
    column: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "file", Path(self.file))
        if self.file.is_absolute() or str(self.file).startswith("/"):
            raise ValueError(
                f"Filename starts with /: {self}. Ensure that "
                "`--relative_locations=true` was specified in the query invocation."
            )

    @classmethod
    def parse(cls, location: str) -> "Location":
        match = _LOCATION_PATTERN.fullmatch(location)
        if match is None:
            raise ValueError(f"Location not recognized: {location}")
        return cls(file=Path(match.group(1)), row=int(match.group(2)), column=int(match.group(3)))

    def __str__(self) -> str:
        return f"{self.file}:{self.row}:{self.column}"
