"""Domain models for weather-cli.

Value objects (:class:`Location`, :class:`Forecast`, :class:`ForecastEntry`)
are **frozen** dataclasses.  :class:`Preferences` and
:class:`Configuration` are deliberately mutable: they form the single
aggregate a command is allowed to change during one invocation.  None of
the models perform I/O.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from weather_cli.exceptions import InvalidUnitError

DEFAULT_FORECAST_INTERVAL: int = 24
"""Number of forecast entries shown when the user never set an interval."""


# ---------------------------------------------------------------------------
# Temperature unit
# ---------------------------------------------------------------------------

class TemperatureUnit(str, Enum):
    """Preferred display unit for temperatures."""

    CELSIUS = "C"
    FAHRENHEIT = "F"

    @classmethod
    def parse(cls, raw: str) -> TemperatureUnit:
        """Case-insensitively parse ``"C"`` / ``"F"``.

        Raises
        ------
        InvalidUnitError
            For any other value.
        """
        try:
            return cls(raw.strip().upper())
        except ValueError as exc:
            raise InvalidUnitError(
                f"Invalid temperature unit: {raw!r}.",
                field="unit",
                hint="Use C or F.",
            ) from exc


# ---------------------------------------------------------------------------
# Saved locations and preferences
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Location:
    """A named coordinate pair saved by the user."""

    name: str
    """Unique, case-sensitive identity within a configuration."""

    latitude: float

    longitude: float


@dataclass(slots=True)
class Preferences:
    """User preferences embedded in the configuration."""

    temperature_unit: TemperatureUnit = TemperatureUnit.CELSIUS
    forecast_interval: int = DEFAULT_FORECAST_INTERVAL
    api_key: str = ""


@dataclass(slots=True)
class Configuration:
    """The persisted aggregate: saved locations plus preferences.

    Invariant: no two entries of :attr:`locations` share a ``name``.
    Only :class:`~weather_cli.core.registry.LocationRegistry` mutates the
    location list.
    """

    locations: list[Location] = field(default_factory=list)
    preferences: Preferences = field(default_factory=Preferences)

    @classmethod
    def default(cls) -> Configuration:
        """Return the first-run configuration."""
        return cls()


# ---------------------------------------------------------------------------
# Forecast
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ForecastEntry:
    """One timestamped point of a forecast series."""

    timestamp: datetime
    """Forecast time, timezone-aware (UTC)."""

    temperature_c: float
    feels_like_c: float
    humidity: int
    """Relative humidity in percent."""

    wind_speed: float
    """Wind speed in metres per second."""

    condition_code: int
    """OpenWeather condition id (e.g. ``800`` for clear sky)."""

    description: str
    rain_mm: float | None = None
    snow_mm: float | None = None


@dataclass(frozen=True, slots=True)
class Forecast:
    """A provider forecast for a single place."""

    city: str
    country: str
    entries: tuple[ForecastEntry, ...]

    def __len__(self) -> int:
        return len(self.entries)

    def __bool__(self) -> bool:
        return len(self.entries) > 0
