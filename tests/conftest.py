"""Minimal pytest configuration and essential fixtures."""

import pytest

from pycowatch.sinks import RecordingSink
from pycowatch.timing import Stopwatch


class FakeClock:
    """Manually advanced nanosecond clock."""

    def __init__(self, start_ns: int = 1_000_000_000) -> None:
        self.now_ns = start_ns

    def __call__(self) -> int:
        return self.now_ns

    def advance(self, ms: int) -> None:
        self.now_ns += ms * 1_000_000

    def rewind(self, ms: int) -> None:
        self.now_ns -= ms * 1_000_000


@pytest.fixture
def clock():
    """Fake clock starting at one second."""
    return FakeClock()


@pytest.fixture
def sink():
    """Sink capturing both warnings and report lines."""
    return RecordingSink()


@pytest.fixture
def make_watch(clock, sink):
    """Factory for stopwatches on the fake clock, wired to the recording sink."""

    def factory(label="", threshold_ms=0):
        return Stopwatch(
            label, threshold_ms, diagnostic_sink=sink, report_sink=sink, clock=clock
        )

    return factory


# Pytest configuration
def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "unit: Unit tests")
