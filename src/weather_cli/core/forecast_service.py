"""Core forecast service: provider delegation and payload parsing.

The service depends on a :class:`~weather_cli.core.protocols.ForecastProvider`
injected at construction time, keeping the core free of any HTTP imports.

Guarantees
----------
* Pure orchestration: no I/O of its own, no terminal output.
* Only :class:`~weather_cli.exceptions.WeatherCliError` subclasses escape.
* Entries keep the provider's order.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from weather_cli.core.models import Forecast, ForecastEntry
from weather_cli.core.protocols import ForecastProvider
from weather_cli.exceptions import (
    ProviderBadResponseError,
    ProviderUnavailableError,
    WeatherCliError,
)

# Everything a malformed payload can raise while being walked and converted.
_PARSE_ERRORS: tuple[type[Exception], ...] = (
    AttributeError,
    IndexError,
    KeyError,
    OSError,
    OverflowError,
    TypeError,
    ValueError,
)


class ForecastService:
    """Stateless service that fetches and parses forecasts.

    Parameters
    ----------
    provider:
        Any object satisfying the :class:`ForecastProvider` protocol.
    """

    def __init__(self, provider: ForecastProvider) -> None:
        self._provider: ForecastProvider = provider

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get_forecast(self, latitude: float, longitude: float, api_key: str) -> Forecast:
        """Fetch the forecast for a coordinate pair.

        Raises
        ------
        ProviderUnavailableError
            If the provider cannot be reached or fails unexpectedly.
        ProviderTimeoutError
            If the provider times out.
        ProviderBadResponseError
            If the payload does not have the expected shape.
        """
        payload = self._fetch(latitude, longitude, api_key)
        try:
            return self._parse_forecast(payload)
        except _PARSE_ERRORS as exc:
            raise ProviderBadResponseError(
                f"Malformed forecast data: {exc}",
            ) from exc

    # ------------------------------------------------------------------
    # Provider delegation (safe boundary)
    # ------------------------------------------------------------------

    def _fetch(self, latitude: float, longitude: float, api_key: str) -> dict[str, Any]:
        """Call the provider and ensure only our exceptions escape."""
        try:
            return self._provider.fetch_forecast(latitude, longitude, api_key)
        except WeatherCliError:
            raise
        except Exception as exc:
            raise ProviderUnavailableError(
                f"Unexpected provider error: {exc}",
            ) from exc

    # ------------------------------------------------------------------
    # Raw-dict → domain-model parsers (pure)
    # ------------------------------------------------------------------

    @classmethod
    def _parse_forecast(cls, payload: dict[str, Any]) -> Forecast:
        if not isinstance(payload, dict):
            raise TypeError("payload is not an object")

        city = payload.get("city") or {}
        if not isinstance(city, dict):
            raise TypeError("'city' is not an object")

        raw_entries = payload.get("list")
        if not isinstance(raw_entries, list):
            raise TypeError("'list' is missing or not an array")

        return Forecast(
            city=str(city.get("name") or "Unknown"),
            country=str(city.get("country") or ""),
            entries=tuple(cls._parse_entry(raw) for raw in raw_entries),
        )

    @staticmethod
    def _parse_entry(raw: dict[str, Any]) -> ForecastEntry:
        main = raw["main"]
        wind = raw.get("wind") or {}
        conditions = raw.get("weather") or []
        condition = conditions[0] if conditions else {}

        return ForecastEntry(
            timestamp=datetime.fromtimestamp(int(raw["dt"]), tz=timezone.utc),
            temperature_c=float(main["temp"]),
            feels_like_c=float(main.get("feels_like", main["temp"])),
            humidity=int(main.get("humidity", 0)),
            wind_speed=float(wind.get("speed", 0.0)),
            condition_code=int(condition.get("id", 0)),
            description=str(condition.get("description") or "unknown"),
            rain_mm=_precipitation(raw.get("rain")),
            snow_mm=_precipitation(raw.get("snow")),
        )


def _precipitation(block: object) -> float | None:
    """Return the 3-hour volume from a ``rain`` / ``snow`` block, if any."""
    if not isinstance(block, dict):
        return None
    volume = block.get("3h")
    return float(volume) if volume is not None else None
