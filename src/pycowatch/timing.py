"""Timing utilities for pycowatch."""

import functools
import logging
import threading
import time
from collections.abc import Callable
from typing import Any, TypeVar

from .sinks import DiagnosticSink, LoggingDiagnosticSink, ReportSink, StreamReportSink
from .types import StopwatchConfig

DEFAULT_NAME = "Stopwatch"
SOURCE_TAG = "pycowatch"

_NS_PER_MS = 1_000_000

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def format_duration(ms: int) -> str:
    """
    Format a millisecond count as a short human-readable duration.

    Examples:
        408 -> "408 ms", 3900 -> "3.0 secs", 28000 -> "28 secs",
        202000 -> "3m22s", 8220000 -> "2h17m"

    Between one and ten seconds the whole seconds are shown with a ".0"
    fraction; sub-second precision is never displayed.
    """
    ms = max(ms, 0)
    secs = ms // 1000

    if secs == 0:
        return f"{ms} ms"
    if secs < 10:
        return f"{float(secs):.1f} secs"
    if secs >= 3600:
        text = f"{secs // 3600}h"
        minutes = (secs % 3600) // 60
        if minutes:
            text += f"{minutes}m"
        return text
    if secs >= 60:
        text = f"{secs // 60}m"
        if secs % 60 != 0:
            text += f"{secs % 60}s"
        return text
    return f"{secs} secs"


class Stopwatch:
    """
    Wall-clock timer for a section of code.

    The stopwatch starts on construction and is frozen by the first call to
    stop(). Use it as a context manager so it is finalized on every exit path:

        with Stopwatch("load users", threshold_ms=200) as watch:
            load_users()
            watch.stop(report=True)

    Leaving the block without an explicit stop() finalizes silently. There is
    no finalizer hook; a stopwatch left to the garbage collector is never
    stopped and never warns.
    """

    def __init__(
        self,
        label: str = "",
        threshold_ms: int = 0,
        *,
        diagnostic_sink: DiagnosticSink | None = None,
        report_sink: ReportSink | None = None,
        clock: Callable[[], int] = time.monotonic_ns,
    ) -> None:
        if threshold_ms < 0:
            raise ValueError(f"threshold_ms must be >= 0, got {threshold_ms}")

        self.label = label or ""
        self.threshold_ms = int(threshold_ms)
        self.report = False
        self.diagnostic_sink = (
            diagnostic_sink if diagnostic_sink is not None else LoggingDiagnosticSink()
        )
        self.report_sink = report_sink if report_sink is not None else StreamReportSink()
        self._clock = clock
        self._lock = threading.Lock()
        self._start_time = clock()
        self._recorded_ms: int | None = None

    @classmethod
    def from_config(cls, config: StopwatchConfig, **kwargs: Any) -> "Stopwatch":
        """Start a stopwatch from a StopwatchConfig."""
        watch = cls(config.label, config.threshold_ms, **kwargs)
        watch.report = config.report
        return watch

    @property
    def start_time(self) -> int:
        """Clock reading taken at construction."""
        return self._start_time

    @property
    def recorded_ms(self) -> int | None:
        """Frozen runtime, or None while the stopwatch is running."""
        return self._recorded_ms

    @property
    def stopped(self) -> bool:
        """True once stop() has frozen the runtime."""
        return self._recorded_ms is not None

    @property
    def name(self) -> str:
        """Label used in messages, or the default name when the label is empty."""
        return self.label or DEFAULT_NAME

    def elapsed_ms(self) -> int:
        """Return the recorded runtime, or the runtime so far if still running."""
        if self._recorded_ms is not None:
            return self._recorded_ms
        elapsed_ns = self._clock() - self._start_time
        # A clock stepping backwards must not yield a negative duration
        return max(elapsed_ns, 0) // _NS_PER_MS

    def stop(self, report: bool | None = None) -> None:
        """
        Freeze the runtime, warn if it exceeded the threshold, optionally report it.

        Only the first call has any effect.

        Args:
            report: Also print a "<name>: Runtime <duration>" line to the report sink.
                None uses the report setting the stopwatch was configured with.
        """
        if report is None:
            report = self.report

        with self._lock:
            if self._recorded_ms is not None:
                return
            self._recorded_ms = self.elapsed_ms()

        if self.threshold_ms > 0 and self._recorded_ms > self.threshold_ms:
            self.diagnostic_sink.warn(
                f"{self.name}: Slow code took {self._recorded_ms} ms to run"
                f" - max = {self.threshold_ms} ms ({SOURCE_TAG})"
            )

        if report:
            self.report_sink.print(f"{self.name}: Runtime {self.format_duration()}\n")

    def format_duration(self) -> str:
        """Human-readable form of elapsed_ms()."""
        return format_duration(self.elapsed_ms())

    def __enter__(self) -> "Stopwatch":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.stop(report=False)
            return
        # Keep the exception raised inside the block
        try:
            self.stop(report=False)
        except Exception:
            logger.exception("%s: diagnostic sink failed while finalizing", self.name)

    def __repr__(self) -> str:
        state = "stopped" if self.stopped else "running"
        return (
            f"Stopwatch(label={self.label!r}, threshold_ms={self.threshold_ms}, "
            f"elapsed_ms={self.elapsed_ms()}, {state})"
        )


def timed(
    label: str | None = None,
    threshold_ms: int = 0,
    *,
    report: bool = False,
    config: StopwatchConfig | None = None,
    diagnostic_sink: DiagnosticSink | None = None,
    report_sink: ReportSink | None = None,
    clock: Callable[[], int] = time.monotonic_ns,
) -> Callable[[F], F]:
    """
    Decorator that times every call of the wrapped function.

    Usage:
        @timed(threshold_ms=500, report=True)
        def rebuild_index():
            ...

    Args:
        label: Stopwatch label, defaults to the function's qualified name
        threshold_ms: Slow-code threshold, 0 disables the warning
        report: Print a runtime line after each successful call
        config: StopwatchConfig overriding label, threshold_ms and report
        diagnostic_sink: Destination for slow-code warnings
        report_sink: Destination for runtime lines
        clock: Nanosecond clock, replaceable in tests

    Returns:
        The decorator
    """

    def decorator(func: F) -> F:
        if config is not None:
            settings = config
        else:
            settings = StopwatchConfig(
                label=label or "", threshold_ms=threshold_ms, report=report
            )
        if not settings.label:
            settings = settings.model_copy(update={"label": func.__qualname__})

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            with Stopwatch.from_config(
                settings,
                diagnostic_sink=diagnostic_sink,
                report_sink=report_sink,
                clock=clock,
            ) as watch:
                result = func(*args, **kwargs)
                watch.stop()
            return result

        return wrapper  # type: ignore[return-value]

    return decorator
