"""Infrastructure layer: external system integration.

This layer wraps all interaction with the filesystem (configuration
file) and the network (forecast API).  Every raw third-party or OS
exception must be caught here and re-raised as a
:class:`~weather_cli.exceptions.WeatherCliError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output.
* Must expose clean, typed interfaces consumed by the core layer.
"""

from weather_cli.infra.config_store import JsonConfigStore
from weather_cli.infra.openweather_provider import OpenWeatherProvider

__all__: list[str] = [
    "JsonConfigStore",
    "OpenWeatherProvider",
]
