import logging
from dataclasses import dataclass, field
from enum import Enum

logger = logging.getLogger(__name__)


class OutputType(Enum):
    NORMAL = "normal"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class PrintOutput:
    text: str
    output_type: OutputType = OutputType.NORMAL

    @classmethod
    def warning(cls, text: str, *args: object) -> "PrintOutput":
        return cls(text % args if args else text, OutputType.WARNING)

    @classmethod
    def error(cls, text: str, *args: object) -> "PrintOutput":
        return cls(text % args if args else text, OutputType.ERROR)


_LOG_LEVELS = {
    OutputType.NORMAL: logging.INFO,
    OutputType.WARNING: logging.WARNING,
    OutputType.ERROR: logging.ERROR,
}


@dataclass
class LoggingContext:
    """Collects the messages of one operation and forwards them to ``logging``.

    Implements the ``SyncContext`` protocol.
    """

    outputs: list[PrintOutput] = field(default_factory=list)
    has_warnings: bool = False

    def output(self, message: PrintOutput) -> None:
        self.outputs.append(message)
        logger.log(_LOG_LEVELS[message.output_type], "%s", message.text)

    def set_has_warnings(self) -> None:
        self.has_warnings = True
