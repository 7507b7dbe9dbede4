import os
from pathlib import Path

DEFAULT_SUMMARY_PATH = "query_summary.json"
DEFAULT_BUILD_FILE_NAMES = "BUILD,BUILD.bazel"


def get_summary_path() -> Path:
    return Path(os.getenv("SYNC_GRAPH_SUMMARY", DEFAULT_SUMMARY_PATH))


def get_build_file_names() -> frozenset[str]:
    raw = os.getenv("SYNC_GRAPH_BUILD_FILE_NAMES", DEFAULT_BUILD_FILE_NAMES)
    return frozenset(name.strip() for name in raw.split(",") if name.strip())


def get_log_level() -> str:
    return os.getenv("SYNC_GRAPH_LOG_LEVEL", "WARNING").upper()
