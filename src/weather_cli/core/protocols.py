"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure and presentation adapters
must satisfy.  Core code depends ONLY on these protocols, never on
concrete implementations, so the engine can be exercised without a
filesystem, a network, or a terminal.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol

from weather_cli.core.models import Configuration, Forecast, Location, Preferences


class ConfigStore(Protocol):
    """Contract for configuration persistence backends."""

    def load(self) -> Configuration:
        """Return the persisted configuration.

        When nothing has been persisted yet, implementations must build
        :meth:`Configuration.default`, save it, and return it.

        Raises
        ------
        StoreCorruptError
            When persisted data exists but is not well-formed.
        StoreUnwritableError
            When first-run defaults cannot be written.
        StoreUnreadableError
            On any other I/O failure.
        """
        ...  # pragma: no cover

    def save(self, config: Configuration) -> None:
        """Persist *config*, replacing previous content all-or-nothing.

        Raises
        ------
        StoreUnwritableError
            When the data cannot be written.
        """
        ...  # pragma: no cover


class ForecastProvider(Protocol):
    """Contract for forecast backends.

    Any object that implements :meth:`fetch_forecast` with the correct
    signature satisfies this protocol structurally (no explicit
    inheritance required).
    """

    def fetch_forecast(
        self,
        latitude: float,
        longitude: float,
        api_key: str,
    ) -> dict[str, Any]:
        """Fetch a raw forecast payload for the given coordinates.

        The returned dict follows the OpenWeather ``/forecast`` shape:

        * ``"city"``: ``{"name": str, "country": str}``
        * ``"list"``: list of entry dicts with ``dt``, ``main``,
          ``weather``, ``wind`` and optional ``rain`` / ``snow``

        Raises
        ------
        ProviderUnavailableError
            When the backend cannot be reached or rejects the request.
        ProviderTimeoutError
            When the backend does not answer in time.
        ProviderBadResponseError
            When the backend answers with an unusable body.
        """
        ...  # pragma: no cover


class Renderer(Protocol):
    """Contract for turning domain data into user-facing text."""

    def render_forecast(self, forecast: Forecast, preferences: Preferences) -> str:
        ...  # pragma: no cover

    def render_locations(self, locations: Sequence[Location]) -> str:
        ...  # pragma: no cover

    def render_help(self) -> str:
        ...  # pragma: no cover
