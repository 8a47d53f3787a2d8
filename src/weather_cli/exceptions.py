"""Custom exception hierarchy for weather-cli.

All exceptions that cross layer boundaries must inherit from
:class:`WeatherCliError`.  Raw third-party and OS exceptions (``httpx``,
``OSError``, ``json``) must NEVER propagate beyond the infrastructure
layer; they must be caught and re-raised as a typed subclass defined here.

Hierarchy
---------
WeatherCliError
├── ArgumentSyntaxError
├── InvalidArgumentError
│   ├── InvalidUnitError
│   └── InvalidIntervalError
├── DuplicateLocationError
├── LocationNotFoundError
├── StoreError
│   ├── StoreCorruptError
│   ├── StoreUnwritableError
│   └── StoreUnreadableError
├── UnknownCommandError
├── DependencyMissingError
└── ProviderError
    ├── ProviderUnavailableError
    ├── ProviderTimeoutError
    └── ProviderBadResponseError
"""

from __future__ import annotations

from pathlib import Path


class WeatherCliError(Exception):
    """Base exception for all weather-cli errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Argument resolution ---------------------------------------------------

class ArgumentSyntaxError(WeatherCliError):
    """Raised when the option parser rejects the raw token sequence."""


class InvalidArgumentError(WeatherCliError):
    """Raised when a well-formed argument carries an unusable value."""

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.field: str | None = field
        """Name of the offending argument, when one can be singled out."""


class InvalidUnitError(InvalidArgumentError):
    """Raised when ``--unit`` is neither ``C`` nor ``F``."""


class InvalidIntervalError(InvalidArgumentError):
    """Raised when ``--interval`` is negative."""


# --- Location registry -----------------------------------------------------

class DuplicateLocationError(WeatherCliError):
    """Raised when adding a location whose name is already saved."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f"Location with name '{name}' already exists.",
            hint="Remove it first with: weather -r <name>",
        )
        self.name: str = name


class LocationNotFoundError(WeatherCliError):
    """Raised when no saved location matches the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f"Location '{name}' not found.",
            hint="List saved locations with: weather --list",
        )
        self.name: str = name


# --- Configuration store ---------------------------------------------------

class StoreError(WeatherCliError):
    """Base class for configuration persistence failures."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.path: Path | None = path


class StoreCorruptError(StoreError):
    """Raised when the configuration file exists but is not well-formed."""


class StoreUnwritableError(StoreError):
    """Raised when the configuration directory or file cannot be written."""


class StoreUnreadableError(StoreError):
    """Raised on any other I/O failure while reading the configuration."""


# --- Dispatch --------------------------------------------------------------

class UnknownCommandError(WeatherCliError):
    """Raised when the dispatcher receives a command it has no handler for."""


# --- Environment / tooling -------------------------------------------------

class DependencyMissingError(WeatherCliError):
    """Raised when an optional runtime dependency is not installed."""


# --- Forecast provider -----------------------------------------------------

class ProviderError(WeatherCliError):
    """Base class for forecast provider failures."""


class ProviderUnavailableError(ProviderError):
    """Raised when the provider cannot be reached or refuses the request."""


class ProviderTimeoutError(ProviderError):
    """Raised when the provider does not answer within the timeout."""


class ProviderBadResponseError(ProviderError):
    """Raised when the provider answers with a malformed body."""
