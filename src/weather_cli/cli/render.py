"""Plain-text renderer for forecasts, location lists and help.

:class:`TextRenderer` satisfies :class:`~weather_cli.core.protocols.Renderer`.
Every method is pure: it returns a string and never prints, so the
output can be asserted on directly in tests.
"""

from __future__ import annotations

from collections.abc import Sequence

from weather_cli.cli.ascii_art import get_weather_ascii
from weather_cli.core.models import Forecast, ForecastEntry, Location, Preferences, TemperatureUnit
from weather_cli.core.units import convert_temperature

SEPARATOR: str = "-" * 40

DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"

HELP_LINES: tuple[tuple[str, str], ...] = (
    ("weather <location>", "Get weather for a location"),
    ("weather -i <latitude> <longitude> <name>", "Add a new location"),
    ("weather -r <name>", "Remove a location"),
    ("weather --unit <C|F>", "Set temperature unit"),
    ("weather --interval <hours>", "Set forecast interval"),
    ("weather --list", "List saved locations"),
    ("weather --set-api-key <api_key>", "Set the OpenWeather API key"),
    ("weather --help", "Show this help message"),
    ("weather --version", "Show the program version"),
)


class TextRenderer:
    """Formats domain data as human-readable text."""

    def render_forecast(self, forecast: Forecast, preferences: Preferences) -> str:
        """Render at most ``preferences.forecast_interval`` entries."""
        header = f"Weather forecast for {forecast.city}"
        if forecast.country:
            header += f", {forecast.country}"
        lines = [header, ""]

        shown = forecast.entries[: preferences.forecast_interval]
        if not shown:
            lines.append("No forecast data available.")
        for entry in shown:
            lines.extend(self._render_entry(entry, preferences.temperature_unit))
        return "\n".join(lines)

    def render_locations(self, locations: Sequence[Location]) -> str:
        if not locations:
            return "No saved locations. Add one with: weather -i <latitude> <longitude> <name>"
        lines = ["Saved Locations:"]
        lines.extend(
            f"- {loc.name} (Lat: {loc.latitude:.4f}, Lon: {loc.longitude:.4f})"
            for loc in locations
        )
        return "\n".join(lines)

    def render_help(self) -> str:
        width = max(len(usage) for usage, _ in HELP_LINES)
        lines = ["Weather CLI Application Usage:"]
        lines.extend(f"  {usage:<{width}}  {text}" for usage, text in HELP_LINES)
        return "\n".join(lines)

    @staticmethod
    def _render_entry(entry: ForecastEntry, unit: TemperatureUnit) -> list[str]:
        temp = convert_temperature(entry.temperature_c, TemperatureUnit.CELSIUS, unit)
        feels_like = convert_temperature(entry.feels_like_c, TemperatureUnit.CELSIUS, unit)
        symbol = unit.value

        lines = [
            f"Date: {entry.timestamp.astimezone().strftime(DATE_FORMAT)}",
            f"Temperature: {temp:.1f}°{symbol} (Feels like: {feels_like:.1f}°{symbol})",
            f"Humidity: {entry.humidity}%",
            f"Wind: {entry.wind_speed:.1f} m/s",
            f"Weather: {entry.description}",
            get_weather_ascii(entry.condition_code),
        ]
        if entry.rain_mm is not None and entry.rain_mm > 0:
            lines.append(f"Rain: {entry.rain_mm:.1f} mm")
        if entry.snow_mm is not None and entry.snow_mm > 0:
            lines.append(f"Snow: {entry.snow_mm:.1f} mm")
        lines.append(SEPARATOR)
        return lines
