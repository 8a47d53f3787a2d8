"""Command resolver: raw argument tokens to a single typed command.

The resolver is a single-step classifier: the same token sequence always
yields the same :data:`~weather_cli.core.commands.Command` (or the same
error).  Option syntax is handled by :mod:`argparse`; everything after
that is the classification below.

Precedence
----------
When several command-selecting flags are supplied in one invocation,
the first one in :data:`FLAG_PRECEDENCE` wins and the others are
ignored::

    -i  >  -r  >  --unit  >  --interval  >  --list  >  --help  >  --set-api-key

With no command-selecting flag, the positional tokens (joined by single
spaces) name the location to fetch the forecast for.

Quirks kept on purpose
----------------------
* ``--interval 0`` is the "not supplied" sentinel, not a legal interval.
* An empty value for ``-r``, ``--unit`` or ``--set-api-key`` counts as
  not supplied.
* Coordinates are not range-checked; they only need to be finite.
"""

from __future__ import annotations

import argparse
import math
from collections.abc import Callable, Sequence
from typing import NoReturn

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
from weather_cli.core.models import TemperatureUnit
from weather_cli.exceptions import (
    ArgumentSyntaxError,
    InvalidArgumentError,
    InvalidIntervalError,
)
from weather_cli.version import __version__

PROG: str = "weather"

ADD_USAGE: str = "weather -i <latitude> <longitude> <name>"

FLAG_PRECEDENCE: tuple[str, ...] = (
    "add",
    "remove",
    "unit",
    "interval",
    "list",
    "help",
    "api_key",
)
"""Destination names of the command-selecting flags, highest priority first."""


class _RaisingArgumentParser(argparse.ArgumentParser):
    """``ArgumentParser`` that raises instead of printing and exiting."""

    def error(self, message: str) -> NoReturn:
        raise ArgumentSyntaxError(
            f"Invalid arguments: {message}",
            hint="Run 'weather --help' for usage.",
        )


def _build_parser() -> argparse.ArgumentParser:
    """Construct the option parser.

    ``add_help`` is disabled because ``--help`` is an ordinary command
    routed through the dispatcher, and ``allow_abbrev`` is disabled so
    that flags are recognised by exact token only.
    """
    parser = _RaisingArgumentParser(
        prog=PROG,
        description="Weather forecasts for saved locations.",
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-i",
        dest="add",
        action="store_true",
        help="Add a new location: -i <latitude> <longitude> <name>.",
    )
    parser.add_argument("-r", dest="remove", metavar="NAME", help="Remove a location.")
    parser.add_argument("--unit", metavar="C|F", help="Set temperature unit.")
    parser.add_argument(
        "--interval",
        type=int,
        default=0,
        metavar="HOURS",
        help="Set forecast interval.",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List saved locations.",
    )
    parser.add_argument(
        "-h",
        "--help",
        dest="help",
        action="store_true",
        help="Show usage information.",
    )
    parser.add_argument(
        "--set-api-key",
        dest="api_key",
        metavar="KEY",
        help="Set the OpenWeather API key.",
    )
    parser.add_argument("positionals", nargs="*", metavar="LOCATION")
    return parser


class CommandResolver:
    """Turns raw argument tokens into exactly one validated command.

    The resolver holds no state between calls; a fresh parse namespace is
    built for every :meth:`resolve`.
    """

    def __init__(self) -> None:
        self._parser: argparse.ArgumentParser = _build_parser()
        self._handlers: dict[str, Callable[[argparse.Namespace], Command]] = {
            "add": self._resolve_add,
            "remove": lambda ns: RemoveLocation(name=ns.remove),
            "unit": lambda ns: SetUnit(unit=TemperatureUnit.parse(ns.unit)),
            "interval": self._resolve_interval,
            "list": lambda ns: ListLocations(),
            "help": lambda ns: Help(),
            "api_key": lambda ns: SetAPIKey(key=ns.api_key),
        }

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def resolve(self, tokens: Sequence[str]) -> Command:
        """Resolve *tokens* (program name excluded) into a command.

        Raises
        ------
        ArgumentSyntaxError
            If the option syntax itself is invalid.
        InvalidArgumentError
            If ``-i`` has the wrong arity or a non-numeric coordinate, or
            no location was given.
        InvalidUnitError
            If ``--unit`` is not ``C`` or ``F``.
        InvalidIntervalError
            If ``--interval`` is negative.
        """
        if not tokens:
            return Help()

        namespace = self._parser.parse_intermixed_args(list(tokens))

        for flag in FLAG_PRECEDENCE:
            if getattr(namespace, flag):
                return self._handlers[flag](namespace)

        return self._resolve_get_weather(namespace.positionals)

    # ------------------------------------------------------------------
    # Per-command resolution
    # ------------------------------------------------------------------

    @staticmethod
    def _resolve_add(namespace: argparse.Namespace) -> AddLocation:
        args: list[str] = namespace.positionals
        if len(args) != 3:
            raise InvalidArgumentError(
                "Invalid arguments for adding a location.",
                field="add",
                hint=f"Use: {ADD_USAGE}",
            )
        if not args[2]:
            raise InvalidArgumentError(
                "Location name must not be empty.",
                field="name",
                hint=f"Use: {ADD_USAGE}",
            )
        return AddLocation(
            name=args[2],
            latitude=_parse_coordinate(args[0], "latitude"),
            longitude=_parse_coordinate(args[1], "longitude"),
        )

    @staticmethod
    def _resolve_interval(namespace: argparse.Namespace) -> SetInterval:
        hours: int = namespace.interval
        if hours < 0:
            raise InvalidIntervalError(
                f"Invalid forecast interval: {hours}.",
                field="interval",
                hint="The interval must be a positive number of hours.",
            )
        return SetInterval(hours=hours)

    @staticmethod
    def _resolve_get_weather(positionals: list[str]) -> GetWeather:
        if not positionals:
            raise InvalidArgumentError(
                "Location is required for getting weather.",
                field="location",
                hint="Run 'weather --help' for usage.",
            )
        return GetWeather(location=" ".join(positionals))


def _parse_coordinate(raw: str, field: str) -> float:
    """Parse a decimal coordinate, rejecting non-numbers and non-finite values."""
    try:
        value = float(raw)
    except ValueError as exc:
        raise InvalidArgumentError(
            f"Invalid {field}: {raw!r}.",
            field=field,
            hint=f"Use: {ADD_USAGE}",
        ) from exc
    if not math.isfinite(value):
        raise InvalidArgumentError(
            f"Invalid {field}: {raw!r}.",
            field=field,
            hint="Coordinates must be finite decimal numbers.",
        )
    return value


def resolve(tokens: Sequence[str]) -> Command:
    """Convenience wrapper around a fresh :class:`CommandResolver`."""
    return CommandResolver().resolve(tokens)
