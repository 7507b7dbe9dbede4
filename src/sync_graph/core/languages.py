from enum import Enum


class DependencyTrackingBehavior(Enum):
    """What has to be built before a target of some language can be analyzed."""

    EXTERNAL_DEPENDENCIES = "external_dependencies"
    SELF = "self"

    @property
    def should_include_external_dependencies(self) -> bool:
        return self is DependencyTrackingBehavior.EXTERNAL_DEPENDENCIES


class QuerySyncLanguage(Enum):
    JAVA = "java"
    KOTLIN = "kotlin"
    CC = "cc"

    @property
    def dependency_tracking_behavior(self) -> DependencyTrackingBehavior:
        return _DEPENDENCY_TRACKING[self]


# C/C++ targets only need their own compilation info extracted.
_DEPENDENCY_TRACKING = {
    QuerySyncLanguage.JAVA: DependencyTrackingBehavior.EXTERNAL_DEPENDENCIES,
    QuerySyncLanguage.KOTLIN: DependencyTrackingBehavior.EXTERNAL_DEPENDENCIES,
    QuerySyncLanguage.CC: DependencyTrackingBehavior.SELF,
}

_LANGUAGE_ALIASES = {
    "c": "cc",
    "c++": "cc",
    "cc": "cc",
    "cpp": "cc",
    "java": "java",
    "jvm": "java",
    "kotlin": "kotlin",
    "kt": "kotlin",
}

_SUPPORTED_LANGUAGES = {language.value for language in QuerySyncLanguage}


def normalize_language(language: str) -> QuerySyncLanguage:
    normalized = language.strip().lower()
    resolved = _LANGUAGE_ALIASES.get(normalized, normalized)
    if resolved not in _SUPPORTED_LANGUAGES:
        raise ValueError(f"Unsupported language '{language}'. Supported: {sorted(_SUPPORTED_LANGUAGES)}")
    return QuerySyncLanguage(resolved)


def dependency_tracking_behaviors(languages: frozenset[QuerySyncLanguage]) -> frozenset[DependencyTrackingBehavior]:
    return frozenset(language.dependency_tracking_behavior for language in languages)
