"""Tests for ForecastService (core/forecast_service.py).

The :class:`ForecastProvider` dependency is **mocked**; no HTTP.  These
tests verify:

* Raw-dict → domain-model parsing
* Defaults for optional payload fields
* Malformed payloads surfaced as ``ProviderBadResponseError``
* Our own provider errors pass through untouched
* Unexpected provider errors wrapped as ``ProviderUnavailableError``
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any
from unittest.mock import MagicMock

import pytest
from conftest import raw_entry, raw_forecast

from weather_cli.core.forecast_service import ForecastService
from weather_cli.core.models import Forecast
from weather_cli.exceptions import (
    ProviderBadResponseError,
    ProviderTimeoutError,
    ProviderUnavailableError,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _fake_provider(payload: Any) -> MagicMock:
    """Return a mock ForecastProvider.

    If *payload* is an exception, ``fetch_forecast`` raises it; otherwise
    it is returned as-is.
    """
    provider = MagicMock()
    if isinstance(payload, Exception):
        provider.fetch_forecast.side_effect = payload
    else:
        provider.fetch_forecast.return_value = payload
    return provider


def _service(payload: Any) -> ForecastService:
    return ForecastService(_fake_provider(payload))


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

class TestParsing:
    def test_passes_coordinates_and_key(self) -> None:
        provider = _fake_provider(raw_forecast())
        ForecastService(provider).get_forecast(35.6895, 139.6917, "secret")

        provider.fetch_forecast.assert_called_once_with(35.6895, 139.6917, "secret")

    def test_basic_fields(self) -> None:
        forecast = _service(raw_forecast()).get_forecast(0.0, 0.0, "k")

        assert isinstance(forecast, Forecast)
        assert forecast.city == "Tokyo"
        assert forecast.country == "JP"
        assert len(forecast) == 1

        entry = forecast.entries[0]
        assert entry.timestamp == datetime.fromtimestamp(1_700_000_000, tz=timezone.utc)
        assert entry.temperature_c == 20.0
        assert entry.feels_like_c == 19.5
        assert entry.humidity == 60
        assert entry.wind_speed == 3.2
        assert entry.condition_code == 800
        assert entry.description == "clear sky"
        assert entry.rain_mm is None
        assert entry.snow_mm is None

    def test_timestamp_is_utc_aware(self) -> None:
        entry = _service(raw_forecast()).get_forecast(0.0, 0.0, "k").entries[0]
        assert entry.timestamp.tzinfo is timezone.utc

    def test_entries_keep_provider_order(self) -> None:
        payload = raw_forecast([raw_entry(dt=3), raw_entry(dt=1), raw_entry(dt=2)])
        forecast = _service(payload).get_forecast(0.0, 0.0, "k")

        assert [int(e.timestamp.timestamp()) for e in forecast.entries] == [3, 1, 2]

    def test_precipitation(self) -> None:
        payload = raw_forecast([raw_entry(rain=1.25, snow=0.5)])
        entry = _service(payload).get_forecast(0.0, 0.0, "k").entries[0]

        assert entry.rain_mm == 1.25
        assert entry.snow_mm == 0.5

    def test_precipitation_without_3h_volume(self) -> None:
        payload = raw_forecast([raw_entry()])
        payload["list"][0]["rain"] = {"1h": 0.3}

        entry = _service(payload).get_forecast(0.0, 0.0, "k").entries[0]
        assert entry.rain_mm is None

    def test_empty_list_is_valid(self) -> None:
        forecast = _service(raw_forecast([])).get_forecast(0.0, 0.0, "k")
        assert forecast.entries == ()
        assert not forecast

    def test_integer_temperatures_become_floats(self) -> None:
        payload = raw_forecast([raw_entry(temp=21, feels_like=20)])
        entry = _service(payload).get_forecast(0.0, 0.0, "k").entries[0]

        assert isinstance(entry.temperature_c, float)
        assert entry.temperature_c == 21.0


# ---------------------------------------------------------------------------
# Defaults for optional fields
# ---------------------------------------------------------------------------

class TestDefaults:
    def test_missing_city_block(self) -> None:
        payload = raw_forecast()
        del payload["city"]

        forecast = _service(payload).get_forecast(0.0, 0.0, "k")
        assert forecast.city == "Unknown"
        assert forecast.country == ""

    def test_missing_feels_like_uses_temperature(self) -> None:
        payload = raw_forecast()
        del payload["list"][0]["main"]["feels_like"]

        entry = _service(payload).get_forecast(0.0, 0.0, "k").entries[0]
        assert entry.feels_like_c == entry.temperature_c

    def test_missing_weather_block(self) -> None:
        payload = raw_forecast()
        payload["list"][0]["weather"] = []

        entry = _service(payload).get_forecast(0.0, 0.0, "k").entries[0]
        assert entry.condition_code == 0
        assert entry.description == "unknown"

    def test_missing_wind_and_humidity(self) -> None:
        payload = raw_forecast()
        del payload["list"][0]["wind"]
        del payload["list"][0]["main"]["humidity"]

        entry = _service(payload).get_forecast(0.0, 0.0, "k").entries[0]
        assert entry.wind_speed == 0.0
        assert entry.humidity == 0


# ---------------------------------------------------------------------------
# Malformed payloads
# ---------------------------------------------------------------------------

class TestMalformedPayloads:
    @pytest.mark.parametrize(
        "payload",
        [
            None,
            [],
            {"city": {"name": "Tokyo"}},
            {"list": "nope"},
            {"list": [{"dt": 1}]},
            {"list": [{"main": {"temp": 1.0}}]},
            {"list": [{"dt": "soon", "main": {"temp": 1.0}}]},
            {"list": [{"dt": 1, "main": {"temp": "warm"}}]},
            {"list": ["entry"]},
            {"city": "Tokyo", "list": []},
        ],
    )
    def test_bad_shape(self, payload: Any) -> None:
        with pytest.raises(ProviderBadResponseError, match="Malformed forecast data"):
            _service(payload).get_forecast(0.0, 0.0, "k")


# ---------------------------------------------------------------------------
# Exception mapping
# ---------------------------------------------------------------------------

class TestExceptionMapping:
    def test_our_errors_pass_through(self) -> None:
        original = ProviderTimeoutError("timed out")
        with pytest.raises(ProviderTimeoutError) as exc_info:
            _service(original).get_forecast(0.0, 0.0, "k")
        assert exc_info.value is original

    def test_unexpected_error_wrapped(self) -> None:
        with pytest.raises(ProviderUnavailableError, match="Unexpected provider error"):
            _service(RuntimeError("kaboom")).get_forecast(0.0, 0.0, "k")

    def test_wrapped_error_keeps_cause(self) -> None:
        cause = ConnectionError("reset")
        with pytest.raises(ProviderUnavailableError) as exc_info:
            _service(cause).get_forecast(0.0, 0.0, "k")
        assert exc_info.value.__cause__ is cause
