"""Type definitions for pycowatch."""

from pydantic import BaseModel, Field


class StopwatchConfig(BaseModel):
    """Settings for a single stopwatch."""

    label: str = Field(default="", description="Name shown in warnings and reports")
    threshold_ms: int = Field(
        default=0, ge=0, description="Warn when a run takes longer than this (0 disables)"
    )
    report: bool = Field(default=False, description="Print a runtime line when stopped")


class TimingConfig(BaseModel):
    """Configuration for a set of named stopwatches."""

    default_threshold_ms: int = Field(
        default=0, ge=0, description="Threshold for timers not listed under timers"
    )
    timers: dict[str, StopwatchConfig] = Field(
        default_factory=dict, description="Per-timer settings keyed by timer name"
    )

    def get(self, name: str) -> StopwatchConfig:
        """Return the settings for a named timer, falling back to the defaults."""
        config = self.timers.get(name)
        if config is None:
            return StopwatchConfig(label=name, threshold_ms=self.default_threshold_ms)
        if not config.label:
            return config.model_copy(update={"label": name})
        return config
