"""pytest plugin for timing assertions with pycowatch."""

from collections.abc import Callable
from typing import Any

import pytest

from .sinks import RecordingSink
from .timing import Stopwatch, format_duration


@pytest.fixture
def recording_sink() -> RecordingSink:
    """Sink that collects slow-code warnings and runtime lines."""
    return RecordingSink()


@pytest.fixture
def stopwatch_factory(recording_sink: RecordingSink) -> Callable[..., Stopwatch]:
    """Build stopwatches whose warnings and reports go to recording_sink."""

    def factory(label: str = "", threshold_ms: int = 0, **kwargs: Any) -> Stopwatch:
        kwargs.setdefault("diagnostic_sink", recording_sink)
        kwargs.setdefault("report_sink", recording_sink)
        return Stopwatch(label, threshold_ms, **kwargs)

    return factory


def assert_not_slow(watch: Stopwatch) -> None:
    """Assert that a stopped stopwatch stayed within its threshold."""
    if not watch.stopped:
        raise AssertionError(f"{watch.name} is still running")
    if watch.threshold_ms and watch.elapsed_ms() > watch.threshold_ms:
        raise AssertionError(
            f"{watch.name} took {format_duration(watch.elapsed_ms())}"
            f" ({watch.elapsed_ms()} ms), max = {watch.threshold_ms} ms"
        )


def assert_elapsed_under(watch: Stopwatch, max_ms: int) -> None:
    """Assert that a stopwatch has not run longer than max_ms."""
    elapsed = watch.elapsed_ms()
    if elapsed > max_ms:
        raise AssertionError(
            f"{watch.name} took {format_duration(elapsed)} ({elapsed} ms), expected <= {max_ms} ms"
        )
