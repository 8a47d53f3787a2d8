"""Shared pytest fixtures and configuration for the weather-cli test suite.

Guidelines
----------
* No internet access in any test.
* The forecast provider is mocked at the protocol boundary, or driven
  through ``httpx.MockTransport``.
* Core tests use :class:`MemoryStore`; no filesystem.
* The configuration path is always redirected into ``tmp_path``.
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

import pytest

from weather_cli.core.models import Configuration
from weather_cli.exceptions import StoreUnwritableError


class MemoryStore:
    """In-memory :class:`ConfigStore` that records every save."""

    def __init__(self, config: Configuration | None = None, *, fail_saves: bool = False) -> None:
        self.saved: list[Configuration] = []
        self.fail_saves = fail_saves
        self._persisted = copy.deepcopy(config) if config is not None else None

    def load(self) -> Configuration:
        if self._persisted is None:
            self.save(Configuration.default())
        assert self._persisted is not None
        return copy.deepcopy(self._persisted)

    def save(self, config: Configuration) -> None:
        if self.fail_saves:
            raise StoreUnwritableError("disk full")
        self._persisted = copy.deepcopy(config)
        self.saved.append(self._persisted)

    @property
    def persisted(self) -> Configuration | None:
        return self._persisted


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def config_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the CLI at a throwaway configuration file."""
    path = tmp_path / "weather-cli" / "config.json"
    monkeypatch.setenv("WEATHER_CLI_CONFIG", str(path))
    monkeypatch.delenv("WEATHER_CLI_API_URL", raising=False)
    monkeypatch.delenv("WEATHER_CLI_TIMEOUT", raising=False)
    monkeypatch.delenv("WEATHER_CLI_LOG_LEVEL", raising=False)
    return path


def raw_entry(
    *,
    dt: int = 1_700_000_000,
    temp: float = 20.0,
    feels_like: float = 19.5,
    humidity: int = 60,
    wind_speed: float = 3.2,
    condition_id: int = 800,
    description: str = "clear sky",
    rain: float | None = None,
    snow: float | None = None,
) -> dict[str, Any]:
    """Factory for one OpenWeather ``list`` element."""
    entry: dict[str, Any] = {
        "dt": dt,
        "main": {"temp": temp, "feels_like": feels_like, "humidity": humidity},
        "weather": [{"id": condition_id, "main": "Clear", "description": description}],
        "wind": {"speed": wind_speed, "deg": 180},
    }
    if rain is not None:
        entry["rain"] = {"3h": rain}
    if snow is not None:
        entry["snow"] = {"3h": snow}
    return entry


def raw_forecast(entries: list[dict[str, Any]] | None = None) -> dict[str, Any]:
    """Factory for an OpenWeather ``/forecast`` payload."""
    return {
        "cod": "200",
        "cnt": len(entries or []),
        "list": entries if entries is not None else [raw_entry()],
        "city": {"name": "Tokyo", "country": "JP", "coord": {"lat": 35.6895, "lon": 139.6917}},
    }
