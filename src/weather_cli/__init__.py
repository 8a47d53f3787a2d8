"""weather-cli: saved-location weather forecasts from the terminal.

Resolves command-line arguments into a single typed command and applies it
to a persisted location/preferences store or to the forecast provider.
"""

from weather_cli.version import __version__

__all__: list[str] = ["__version__"]
