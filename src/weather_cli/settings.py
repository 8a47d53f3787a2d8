"""Runtime settings read from the process environment.

Settings cover the ambient knobs that are not part of the persisted
configuration: where the configuration file lives, which forecast
endpoint to call, how long to wait for it, and how chatty logging is.

Variables
---------
``WEATHER_CLI_CONFIG``
    Path of the JSON configuration file.
``WEATHER_CLI_API_URL``
    Forecast endpoint URL.
``WEATHER_CLI_TIMEOUT``
    Request timeout in seconds (positive number).
``WEATHER_CLI_LOG_LEVEL``
    Standard ``logging`` level name.
"""

from __future__ import annotations

import logging
import math
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from weather_cli.exceptions import InvalidArgumentError

DEFAULT_CONFIG_PATH: Path = Path("~/.weather-cli/config.json")
DEFAULT_API_URL: str = "https://api.openweathermap.org/data/2.5/forecast"
DEFAULT_TIMEOUT: float = 10.0
DEFAULT_LOG_LEVEL: str = "WARNING"


@dataclass(frozen=True, slots=True)
class Settings:
    """Resolved runtime settings."""

    config_path: Path
    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from *environ* (defaults to ``os.environ``).

        Raises
        ------
        InvalidArgumentError
            If a variable is set to an unusable value.
        """
        env = os.environ if environ is None else environ

        raw_path = env.get("WEATHER_CLI_CONFIG", "").strip()
        config_path = Path(raw_path) if raw_path else DEFAULT_CONFIG_PATH

        api_url = env.get("WEATHER_CLI_API_URL", "").strip() or DEFAULT_API_URL

        return cls(
            config_path=config_path.expanduser(),
            api_url=api_url,
            timeout=_parse_timeout(env.get("WEATHER_CLI_TIMEOUT", "")),
            log_level=_parse_log_level(env.get("WEATHER_CLI_LOG_LEVEL", "")),
        )


def _parse_timeout(raw: str) -> float:
    raw = raw.strip()
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        value = float(raw)
    except ValueError as exc:
        raise InvalidArgumentError(
            f"WEATHER_CLI_TIMEOUT must be a number, got {raw!r}.",
            field="WEATHER_CLI_TIMEOUT",
        ) from exc
    if not math.isfinite(value) or value <= 0:
        raise InvalidArgumentError(
            f"WEATHER_CLI_TIMEOUT must be a positive number, got {raw!r}.",
            field="WEATHER_CLI_TIMEOUT",
        )
    return value


def _parse_log_level(raw: str) -> str:
    level = raw.strip().upper()
    if not level:
        return DEFAULT_LOG_LEVEL
    if not isinstance(logging.getLevelName(level), int):
        raise InvalidArgumentError(
            f"WEATHER_CLI_LOG_LEVEL must be a logging level name, got {raw!r}.",
            field="WEATHER_CLI_LOG_LEVEL",
            hint="Use one of DEBUG, INFO, WARNING, ERROR, CRITICAL.",
        )
    return level
