"""Command dispatcher: applies a resolved command.

Each :data:`~weather_cli.core.commands.Command` variant maps to exactly
one handler.  Handlers either mutate the configuration (through
:class:`~weather_cli.core.registry.LocationRegistry` for locations, or
directly on :class:`~weather_cli.core.models.Preferences`) and persist
it, or read from it and delegate to the forecast service and renderer.

The dispatcher never writes to the terminal; handlers return text and
:meth:`CommandDispatcher.dispatch` wraps it in a :class:`DispatchResult`
whose ``mutated`` flag comes from the command's ``mutates`` class flag.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

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
from weather_cli.core.forecast_service import ForecastService
from weather_cli.core.models import Configuration, Preferences
from weather_cli.core.protocols import ConfigStore, Renderer
from weather_cli.core.registry import LocationRegistry
from weather_cli.exceptions import UnknownCommandError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DispatchResult:
    """Outcome of a successfully dispatched command."""

    output: str
    """Text to show the user on stdout."""

    mutated: bool = False
    """Whether the configuration was changed and persisted."""


class CommandDispatcher:
    """Maps a resolved command to its mutation or read.

    Parameters
    ----------
    config:
        The configuration loaded for this invocation.  Mutated in place.
    store:
        Where mutations are persisted.
    forecast_service:
        Used by :class:`GetWeather` only.
    renderer:
        Formats forecasts, location lists and help text.
    """

    def __init__(
        self,
        config: Configuration,
        store: ConfigStore,
        forecast_service: ForecastService,
        renderer: Renderer,
    ) -> None:
        self._config: Configuration = config
        self._store: ConfigStore = store
        self._forecast_service: ForecastService = forecast_service
        self._renderer: Renderer = renderer
        self._registry: LocationRegistry = LocationRegistry(config, store)
        self._handlers: dict[type[Any], Callable[[Any], str]] = {
            GetWeather: self._get_weather,
            AddLocation: self._add_location,
            RemoveLocation: self._remove_location,
            SetUnit: self._set_unit,
            SetInterval: self._set_interval,
            ListLocations: self._list_locations,
            SetAPIKey: self._set_api_key,
            Help: self._help,
        }

    @property
    def registry(self) -> LocationRegistry:
        return self._registry

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def dispatch(self, command: Command) -> DispatchResult:
        """Apply *command* and return what to show the user.

        Raises
        ------
        UnknownCommandError
            If *command* is not one of the known variants.
        LocationNotFoundError
            For :class:`GetWeather` / :class:`RemoveLocation` on an unknown name.
        DuplicateLocationError
            For :class:`AddLocation` with a name already saved.
        StoreError
            If persisting a mutation fails.
        ProviderError
            If fetching the forecast fails.
        """
        handler = self._handlers.get(type(command))
        if handler is None:
            raise UnknownCommandError(
                f"Unknown command: {type(command).__name__}",
                hint="Run 'weather --help' for usage.",
            )
        logger.debug("Dispatching %s", type(command).__name__)
        return DispatchResult(handler(command), mutated=command.mutates)

    # ------------------------------------------------------------------
    # Read-only commands
    # ------------------------------------------------------------------

    def _get_weather(self, command: GetWeather) -> str:
        location = self._registry.get(command.location)
        preferences = self._config.preferences
        forecast = self._forecast_service.get_forecast(
            location.latitude,
            location.longitude,
            preferences.api_key,
        )
        return self._renderer.render_forecast(forecast, preferences)

    def _list_locations(self, _command: ListLocations) -> str:
        return self._renderer.render_locations(self._registry.list())

    def _help(self, _command: Help) -> str:
        return self._renderer.render_help()

    # ------------------------------------------------------------------
    # Location mutations
    # ------------------------------------------------------------------

    def _add_location(self, command: AddLocation) -> str:
        self._registry.add(command.name, command.latitude, command.longitude)
        return f"Location '{command.name}' added successfully."

    def _remove_location(self, command: RemoveLocation) -> str:
        self._registry.remove(command.name)
        return f"Location '{command.name}' removed successfully."

    # ------------------------------------------------------------------
    # Preference mutations
    # ------------------------------------------------------------------

    def _set_unit(self, command: SetUnit) -> str:
        self._update_preferences(temperature_unit=command.unit)
        return f"Temperature unit set to {command.unit.value}."

    def _set_interval(self, command: SetInterval) -> str:
        self._update_preferences(forecast_interval=command.hours)
        return f"Forecast interval set to {command.hours} hours."

    def _set_api_key(self, command: SetAPIKey) -> str:
        self._update_preferences(api_key=command.key)
        return "API key has been set successfully."

    def _update_preferences(self, **changes: Any) -> None:
        """Apply *changes* and persist, restoring the old values on failure."""
        preferences: Preferences = self._config.preferences
        previous = {name: getattr(preferences, name) for name in changes}
        for name, value in changes.items():
            setattr(preferences, name, value)
        try:
            self._store.save(self._config)
        except Exception:
            for name, value in previous.items():
                setattr(preferences, name, value)
            raise
        # Never log the values: one of them may be the API key.
        logger.debug("Updated preferences: %s", ", ".join(sorted(changes)))
