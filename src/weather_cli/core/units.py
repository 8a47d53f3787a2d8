"""Temperature unit conversion.

Provider temperatures are always Celsius; these helpers convert them to
the user's preferred unit for display.
"""

from __future__ import annotations

import math

from weather_cli.core.models import TemperatureUnit


def celsius_to_fahrenheit(celsius: float) -> float:
    return celsius * 9 / 5 + 32


def fahrenheit_to_celsius(fahrenheit: float) -> float:
    return (fahrenheit - 32) * 5 / 9


def round_temperature(value: float) -> float:
    """Round to one decimal place, halves away from zero."""
    scaled = value * 10
    rounded = math.floor(abs(scaled) + 0.5)
    if rounded == 0:
        return 0.0
    return math.copysign(rounded, scaled) / 10


def convert_temperature(
    value: float,
    source: TemperatureUnit,
    target: TemperatureUnit,
) -> float:
    """Convert *value* from *source* to *target* and round it."""
    if source is target:
        return round_temperature(value)
    if target is TemperatureUnit.FAHRENHEIT:
        return round_temperature(celsius_to_fahrenheit(value))
    return round_temperature(fahrenheit_to_celsius(value))
