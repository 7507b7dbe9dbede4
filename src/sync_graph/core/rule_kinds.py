"""Categories of build rule kinds.

Rule kinds arrive from the query output as plain strings. Everything that needs
to branch on a kind goes through :func:`predicate_for_category` or one of the
predicates below rather than matching strings at the call site.
"""

from collections.abc import Callable
from enum import Enum

from sync_graph.core.languages import QuerySyncLanguage


class KindCategory(Enum):
    JAVA = "java"
    ANDROID = "android"
    CC = "cc"
    PROTO = "proto"


_ANDROID_KINDS = frozenset(
    {
        "android_binary",
        "android_instrumentation_test",
        "android_library",
        "android_local_test",
        "kt_android_library",
        "kt_android_local_test",
    }
)

_KOTLIN_KINDS = frozenset(
    {
        "kt_android_library",
        "kt_android_local_test",
        "kt_jvm_binary",
        "kt_jvm_library",
        "kt_jvm_test",
    }
)

_JAVA_KINDS = (
    frozenset(
        {
            "java_binary",
            "java_import",
            "java_library",
            "java_lite_proto_library",
            "java_mutable_proto_library",
            "java_proto_library",
            "java_test",
        }
    )
    | _KOTLIN_KINDS
    | _ANDROID_KINDS
)

_CC_KINDS = frozenset({"cc_binary", "cc_library", "cc_shared_library", "cc_test"})

_PROTO_KINDS = frozenset({"proto_library"})

_KINDS_BY_CATEGORY = {
    KindCategory.JAVA: _JAVA_KINDS,
    KindCategory.ANDROID: _ANDROID_KINDS,
    KindCategory.CC: _CC_KINDS,
    KindCategory.PROTO: _PROTO_KINDS,
}


def is_java(kind: str) -> bool:
    return kind in _JAVA_KINDS


def is_android(kind: str) -> bool:
    return kind in _ANDROID_KINDS


def is_cc(kind: str) -> bool:
    return kind in _CC_KINDS


def is_proto_source(kind: str) -> bool:
    return kind in _PROTO_KINDS


def predicate_for_category(category: KindCategory) -> Callable[[str], bool]:
    kinds = _KINDS_BY_CATEGORY[category]
    return lambda kind: kind in kinds


def languages_for_kind(kind: str) -> frozenset[QuerySyncLanguage]:
    """Default language tags of a rule kind, used when the query output carries none."""
    if kind in _KOTLIN_KINDS:
        return frozenset({QuerySyncLanguage.KOTLIN})
    if kind in _JAVA_KINDS:
        return frozenset({QuerySyncLanguage.JAVA})
    if kind in _CC_KINDS:
        return frozenset({QuerySyncLanguage.CC})
    return frozenset()
