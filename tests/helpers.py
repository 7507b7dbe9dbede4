"""Builders and a sample workspace shared by the unit and integration tests."""

from typing import Any

from sync_graph.core.build_graph import BuildGraphData
from sync_graph.core.labels import Label
from sync_graph.core.languages import QuerySyncLanguage
from sync_graph.core.project_target import ProjectTarget


def label(value: str) -> Label:
    return Label.of(value)


def make_target(
    name: str,
    deps: tuple[str, ...] = (),
    runtime_deps: tuple[str, ...] = (),
    languages: tuple[QuerySyncLanguage, ...] = (QuerySyncLanguage.JAVA,),
    kind: str = "java_library",
) -> ProjectTarget:
    return ProjectTarget(
        label=label(name),
        kind=kind,
        deps=frozenset(label(d) for d in deps),
        runtime_deps=frozenset(label(d) for d in runtime_deps),
        languages=frozenset(languages),
    )


def make_graph(*targets: ProjectTarget, project_deps: tuple[str, ...] = ()) -> BuildGraphData:
    return BuildGraphData(
        target_map={t.label: t for t in targets},
        project_deps=frozenset(label(d) for d in project_deps),
    )


# ---------------------------------------------------------------------------
# Sample workspace
# ---------------------------------------------------------------------------

SAMPLE_SUMMARY: dict[str, Any] = {
    "packages": ["java/com/app", "java/com/app/util", "cc/native", "proto", "android/res", "docs"],
    "source_files": {
        "//java/com/app:App.java": "java/com/app/App.java:1:1",
        "//java/com/app:AppTest.java": "java/com/app/AppTest.java:1:1",
        "//java/com/app:Shared.java": "java/com/app/Shared.java:1:1",
        "//java/com/app/util:Util.java": "java/com/app/util/Util.java:1:1",
        "//cc/native:native.cc": "cc/native/native.cc:1:1",
        "//proto:messages.proto": "proto/messages.proto:1:1",
        "//android/res:Main.java": "android/res/Main.java:1:1",
        "//android/res:res/values/strings.xml": "android/res/res/values/strings.xml:1:1",
        "//docs:README.md": "docs/README.md:1:1",
    },
    "rules": [
        {
            "label": "//java/com/app:app",
            "kind": "java_library",
            "sources": {"regular": ["//java/com/app:App.java", "//java/com/app:Shared.java"]},
            "deps": ["//java/com/app/util:util", "//third_party:guava"],
            "runtime_deps": ["//third_party:runtime_only"],
        },
        {
            "label": "//java/com/app:app_test",
            "kind": "java_test",
            "sources": {"regular": ["//java/com/app:AppTest.java"]},
            "deps": ["//java/com/app:app", "//third_party:junit"],
        },
        {
            "label": "//java/com/app:shared_too",
            "kind": "java_library",
            "sources": {"regular": ["//java/com/app:Shared.java"]},
        },
        {
            "label": "//java/com/app:jni",
            "kind": "java_library",
            "deps": ["//cc/native:native", "//third_party:guava"],
            "languages": ["java", "cc"],
        },
        {
            "label": "//java/com/app/util:util",
            "kind": "java_library",
            "sources": {"regular": ["//java/com/app/util:Util.java", "//java/com/app/util:Gen.java"]},
            "deps": ["//third_party:gson"],
        },
        {
            "label": "//cc/native:native",
            "kind": "cc_library",
            "sources": {"regular": ["//cc/native:native.cc"]},
            "deps": ["//third_party:zlib"],
        },
        {
            "label": "//proto:messages",
            "kind": "proto_library",
            "sources": {"regular": ["//proto:messages.proto"]},
        },
        {
            "label": "//android/res:lib",
            "kind": "android_library",
            "sources": {
                "regular": ["//android/res:Main.java"],
                "android_resources": ["//android/res:res/values/strings.xml"],
            },
            "custom_package": "com.example.res",
        },
    ],
    "project_deps": [
        "//third_party:guava",
        "//third_party:junit",
        "//third_party:gson",
        "//third_party:zlib",
        "//third_party:runtime_only",
    ],
}


