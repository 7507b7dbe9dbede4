from pydantic import BaseModel, Field


class RuleRecord(BaseModel):
    label: str
    kind: str
    sources: dict[str, list[str]] = Field(default_factory=dict)
    deps: list[str] = Field(default_factory=list)
    runtime_deps: list[str] = Field(default_factory=list)
    languages: list[str] | None = None
    custom_package: str | None = None


class QuerySummary(BaseModel):
    """Result of one build-tool query, as produced for a sync."""

    rules: list[RuleRecord] = Field(default_factory=list)
    source_files: dict[str, str] = Field(default_factory=dict)
    packages: list[str] | None = None
    project_deps: list[str] | None = None


class OutputInfo(BaseModel):
    """What a build produced: artifact paths per target label."""

    artifacts: dict[str, list[str]] = Field(default_factory=dict)
    targets_with_errors: list[str] = Field(default_factory=list)
    exit_code: int = 0


class UpdateResult(BaseModel):
    updated_files: set[str] = Field(default_factory=set)
    removed_keys: set[str] = Field(default_factory=set)
