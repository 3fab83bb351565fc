"""pycowatch - Python package for timing sections of code."""

from .config import load_yaml_config, save_config_template
from .sinks import (
    CallbackDiagnosticSink,
    DiagnosticSink,
    LoggingDiagnosticSink,
    RecordingSink,
    ReportSink,
    StreamReportSink,
)
from .timing import DEFAULT_NAME, SOURCE_TAG, Stopwatch, format_duration, timed
from .types import StopwatchConfig, TimingConfig

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_NAME",
    "SOURCE_TAG",
    "CallbackDiagnosticSink",
    "DiagnosticSink",
    "LoggingDiagnosticSink",
    "RecordingSink",
    "ReportSink",
    "Stopwatch",
    "StopwatchConfig",
    "StreamReportSink",
    "TimingConfig",
    "format_duration",
    "load_yaml_config",
    "save_config_template",
    "timed",
]
