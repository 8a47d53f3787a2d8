"""Core / service layer: pure business logic and data transformations.

Rules
-----
* No terminal output.
* No filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
* All functions must be fully typed and deterministic.
"""

from weather_cli.core.commands import (
    AddLocation,
    Command,
    GetWeather,
    Help,
    ListLocations,
    RemoveLocation,
    SetAPIKey,
    SetInterval,
    SetUnit,
)
from weather_cli.core.dispatcher import CommandDispatcher, DispatchResult
from weather_cli.core.forecast_service import ForecastService
from weather_cli.core.models import (
    Configuration,
    Forecast,
    ForecastEntry,
    Location,
    Preferences,
    TemperatureUnit,
)
from weather_cli.core.protocols import ConfigStore, ForecastProvider, Renderer
from weather_cli.core.registry import LocationRegistry
from weather_cli.core.resolver import CommandResolver

__all__: list[str] = [
    "AddLocation",
    "Command",
    "CommandDispatcher",
    "CommandResolver",
    "ConfigStore",
    "Configuration",
    "DispatchResult",
    "Forecast",
    "ForecastEntry",
    "ForecastProvider",
    "ForecastService",
    "GetWeather",
    "Help",
    "ListLocations",
    "Location",
    "LocationRegistry",
    "Preferences",
    "RemoveLocation",
    "Renderer",
    "SetAPIKey",
    "SetInterval",
    "SetUnit",
    "TemperatureUnit",
]
