"""CLI application entry point and wiring for weather-cli.

This module is the **sole error boundary** for the entire application.
It catches :class:`~weather_cli.exceptions.WeatherCliError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages on stderr and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here; resolution and dispatch are delegated
  to the core layer, persistence and HTTP to the infrastructure layer.
* Collaborators are built once per invocation in :func:`main` and
  passed explicitly; there is no module-level mutable state.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import logging
import sys

from weather_cli.cli import exit_codes
from weather_cli.cli.console import console, out
from weather_cli.cli.render import TextRenderer
from weather_cli.core.dispatcher import CommandDispatcher
from weather_cli.core.forecast_service import ForecastService
from weather_cli.core.models import Configuration
from weather_cli.core.protocols import ConfigStore
from weather_cli.core.resolver import CommandResolver
from weather_cli.exceptions import WeatherCliError
from weather_cli.settings import Settings

LOG_FORMAT: str = "%(levelname)s %(name)s: %(message)s"

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Wiring
# ---------------------------------------------------------------------------

def _configure_logging(level: str) -> None:
    """Send package log records to stderr at *level*."""
    logging.basicConfig(format=LOG_FORMAT, stream=sys.stderr)
    logging.getLogger("weather_cli").setLevel(level)


def _build_store(settings: Settings) -> ConfigStore:
    from weather_cli.infra.config_store import JsonConfigStore

    return JsonConfigStore(settings.config_path)


def _build_dispatcher(
    config: Configuration,
    store: ConfigStore,
    settings: Settings,
) -> CommandDispatcher:
    """Instantiate the infra provider and core services for one invocation."""
    from weather_cli.infra.openweather_provider import OpenWeatherProvider

    provider = OpenWeatherProvider(base_url=settings.api_url, timeout=settings.timeout)
    return CommandDispatcher(
        config,
        store,
        ForecastService(provider),
        TextRenderer(),
    )


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the weather CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    tokens = sys.argv[1:] if argv is None else argv

    settings = Settings.from_env()
    _configure_logging(settings.log_level)

    command = CommandResolver().resolve(tokens)
    logger.debug("Resolved %r", type(command).__name__)

    store = _build_store(settings)
    config = store.load()

    result = _build_dispatcher(config, store, settings).dispatch(command)
    if result.mutated:
        logger.info("Configuration saved to %s", settings.config_path)
    out.print(result.output, markup=False)
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except WeatherCliError as exc:
        console.print(f"Error: {exc}", markup=False)
        if exc.hint:
            console.print(f"Hint: {exc.hint}", markup=False)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "Unexpected error. Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}",
            markup=False,
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
