"""Process exit codes returned by the ``weather`` command.

Only :func:`weather_cli.cli.app.cli` turns these into a real exit; tests
assert against the names, never the numbers.
"""

from __future__ import annotations

SUCCESS: int = 0
"""The command ran; its output (forecast, list, help, confirmation) was printed."""

GENERAL_ERROR: int = 1
"""A WeatherCliError was reported on stderr with its hint."""

KEYBOARD_INTERRUPT: int = 130
"""Interrupted with Ctrl+C (128 + SIGINT)."""

UNEXPECTED_ERROR: int = 2
"""Anything that is not a WeatherCliError; indicates a bug."""
