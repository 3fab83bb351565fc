"""Outbound notification sinks for stopwatches."""

import logging
import sys
from collections.abc import Callable
from typing import Protocol, TextIO, runtime_checkable

logger = logging.getLogger("pycowatch")


@runtime_checkable
class DiagnosticSink(Protocol):
    """Receives the slow-code warning of a stopwatch."""

    def warn(self, message: str) -> None: ...


@runtime_checkable
class ReportSink(Protocol):
    """Receives the runtime summary line of a stopwatch."""

    def print(self, line: str) -> None: ...


class LoggingDiagnosticSink:
    """Send slow-code warnings to a logger.

    Without any logging configuration in the host, the record falls through to
    Python's last-resort handler and lands on stderr.
    """

    def __init__(self, target: logging.Logger | None = None) -> None:
        self.logger = target or logger

    def warn(self, message: str) -> None:
        self.logger.warning(message)


class CallbackDiagnosticSink:
    """Adapt a plain callable to the DiagnosticSink protocol."""

    def __init__(self, callback: Callable[[str], None]) -> None:
        self.callback = callback

    def warn(self, message: str) -> None:
        self.callback(message)


class StreamReportSink:
    """Write report lines to a text stream (stdout by default)."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # Resolved late so pytest's capsys and redirect_stdout see the output
        return self._stream if self._stream is not None else sys.stdout

    def print(self, line: str) -> None:
        self.stream.write(line)
        self.stream.flush()


class RecordingSink:
    """Collect warnings and report lines in memory."""

    def __init__(self) -> None:
        self.warnings: list[str] = []
        self.lines: list[str] = []

    def warn(self, message: str) -> None:
        self.warnings.append(message)

    def print(self, line: str) -> None:
        self.lines.append(line)

    def clear(self) -> None:
        self.warnings.clear()
        self.lines.clear()
