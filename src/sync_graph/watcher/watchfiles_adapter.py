from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable, Coroutine
from pathlib import Path
from typing import Any

from watchfiles import awatch

logger = logging.getLogger(__name__)


def _is_summary_file(path: Path, summary_path: Path) -> bool:
    return path.name == summary_path.name and path.resolve() == summary_path.resolve()


class SummaryFileWatcher:
    """Watch a query summary file and trigger a re-sync when it changes.

    Implements the ``FileWatcherPort`` protocol.
    """

    def __init__(
        self,
        summary_path: str | Path,
        on_change: Callable[[Path], Coroutine[Any, Any, None]],
    ) -> None:
        self._summary_path = Path(summary_path)
        self._on_change = on_change
        self._task: asyncio.Task[None] | None = None

    async def start(self) -> None:
        if self._task is not None:
            return
        self._task = asyncio.create_task(self._watch())
        logger.info("Watcher started for %s", self._summary_path)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.info("Watcher stopped for %s", self._summary_path)

    async def _watch(self) -> None:
        async for changes in awatch(self._summary_path.parent):
            if any(_is_summary_file(Path(p), self._summary_path) for _, p in changes):
                logger.info("Detected change in %s", self._summary_path)
                try:
                    await self._on_change(self._summary_path)
                except Exception:
                    logger.exception("Error in watcher callback")
