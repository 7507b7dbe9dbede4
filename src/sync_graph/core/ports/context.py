from typing import Protocol

from sync_graph.core.context import PrintOutput


class SyncContext(Protocol):
    def output(self, message: PrintOutput) -> None: ...

    def set_has_warnings(self) -> None: ...
