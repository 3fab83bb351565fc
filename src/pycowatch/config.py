"""Configuration loading for pycowatch."""

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .types import TimingConfig

logger = logging.getLogger(__name__)

_ENV_VAR = re.compile(r"^\$\{([A-Za-z_][A-Za-z0-9_]*)\}$")

CONFIG_TEMPLATE = """\
# pycowatch timing configuration
#
# default_threshold_ms applies to every timer not listed below (0 disables).
# Values of the exact form ${NAME} are read from the environment.
default_threshold_ms: 0

timers:
  # Example: warn when a database query runs longer than 200 ms
  db_query:
    threshold_ms: 200

  # Example: print a runtime line each time the nightly report is built
  nightly_report:
    label: Nightly report
    threshold_ms: 60000
    report: true

  # Example: threshold taken from the environment
  # cache_warmup:
  #   threshold_ms: ${CACHE_WARMUP_MAX_MS}
"""


def _expand_env_vars(value: Any) -> Any:
    """Replace values of the exact form ${NAME} with the environment variable NAME."""
    if isinstance(value, str):
        match = _ENV_VAR.match(value)
        if match:
            return os.environ.get(match.group(1), value)
        return value
    if isinstance(value, dict):
        return {key: _expand_env_vars(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_expand_env_vars(item) for item in value]
    return value


def load_yaml_config(path: str | Path) -> TimingConfig:
    """
    Load a timing configuration from a YAML file.

    Args:
        path: Path to the YAML file

    Returns:
        Validated TimingConfig

    Raises:
        FileNotFoundError: If the file does not exist
        yaml.YAMLError: If the file is not valid YAML
        ValueError: If the content is not a valid timing configuration
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path) as f:
        data = yaml.safe_load(f)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration in {path} must be a mapping, got {type(data).__name__}")

    data = _expand_env_vars(data)
    # An empty "timers:" key parses as None
    timers = data.get("timers")
    if timers is None:
        data.pop("timers", None)
    elif isinstance(timers, dict):
        data["timers"] = {
            name: settings if settings is not None else {} for name, settings in timers.items()
        }

    try:
        config = TimingConfig.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid timing configuration in {path}: {e}") from e

    logger.debug("Loaded %d timer(s) from %s", len(config.timers), path)
    return config


def save_config_template(path: str | Path) -> None:
    """Write an example configuration file."""
    path = Path(path)
    path.write_text(CONFIG_TEMPLATE)
    logger.debug("Wrote configuration template to %s", path)
