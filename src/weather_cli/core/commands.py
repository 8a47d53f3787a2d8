"""The :data:`Command` tagged variant.

Each variant is a frozen dataclass produced once by
:class:`~weather_cli.core.resolver.CommandResolver` and consumed once by
:class:`~weather_cli.core.dispatcher.CommandDispatcher`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union

from weather_cli.core.models import TemperatureUnit


@dataclass(frozen=True, slots=True)
class GetWeather:
    """Fetch and render the forecast for a saved location."""

    location: str

    mutates: ClassVar[bool] = False


@dataclass(frozen=True, slots=True)
class AddLocation:
    """Save a new named location."""

    name: str
    latitude: float
    longitude: float

    mutates: ClassVar[bool] = True


@dataclass(frozen=True, slots=True)
class RemoveLocation:
    """Delete a saved location by name."""

    name: str

    mutates: ClassVar[bool] = True


@dataclass(frozen=True, slots=True)
class SetUnit:
    """Change the preferred temperature unit."""

    unit: TemperatureUnit

    mutates: ClassVar[bool] = True


@dataclass(frozen=True, slots=True)
class SetInterval:
    """Change how many forecast entries are shown."""

    hours: int

    mutates: ClassVar[bool] = True


@dataclass(frozen=True, slots=True)
class ListLocations:
    """Render the saved locations."""

    mutates: ClassVar[bool] = False


@dataclass(frozen=True, slots=True)
class SetAPIKey:
    """Store the forecast provider credential."""

    key: str

    mutates: ClassVar[bool] = True


@dataclass(frozen=True, slots=True)
class Help:
    """Render usage information."""

    mutates: ClassVar[bool] = False


Command = Union[
    GetWeather,
    AddLocation,
    RemoveLocation,
    SetUnit,
    SetInterval,
    ListLocations,
    SetAPIKey,
    Help,
]
