"""JSON-file backed implementation of :class:`~weather_cli.core.protocols.ConfigStore`.

This module is the **only** place that reads or writes the configuration
file.  ``OSError`` and ``json`` exceptions are caught here and re-raised
as typed :class:`~weather_cli.exceptions.StoreError` subclasses.

File layout::

    {
      "locations": [{"name": "Tokyo", "latitude": 35.6895, "longitude": 139.6917}],
      "temperature_unit": "C",
      "forecast_interval": 24,
      "api_key": ""
    }

Rules
-----
* A missing file is bootstrapped with defaults, and the defaults are saved.
* Missing keys fall back to defaults; wrongly typed values are corrupt.
* Writes go to a temporary sibling file that is then renamed over the
  target, so readers see either the old or the new full content.
"""

from __future__ import annotations

import json
import logging
import math
import os
import tempfile
from pathlib import Path
from typing import Any

from weather_cli.core.models import (
    DEFAULT_FORECAST_INTERVAL,
    Configuration,
    Location,
    Preferences,
    TemperatureUnit,
)
from weather_cli.exceptions import (
    StoreCorruptError,
    StoreUnreadableError,
    StoreUnwritableError,
    WeatherCliError,
)

logger = logging.getLogger(__name__)

_CORRUPT_HINT = "Fix or delete the file to start over with defaults."


class JsonConfigStore:
    """Concrete :class:`ConfigStore` persisting to a single JSON file.

    Usage::

        store = JsonConfigStore(Path("~/.weather-cli/config.json").expanduser())
        config = store.load()
        store.save(config)
    """

    def __init__(self, path: Path) -> None:
        self._path: Path = path

    @property
    def path(self) -> Path:
        return self._path

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def load(self) -> Configuration:
        """Read the configuration, creating and saving defaults on first run.

        Raises
        ------
        StoreCorruptError
            If the file is not valid JSON or does not have the expected shape.
        StoreUnwritableError
            If first-run defaults cannot be written.
        StoreUnreadableError
            On any other I/O failure.
        """
        try:
            text = self._path.read_text(encoding="utf-8")
        except (FileNotFoundError, NotADirectoryError):
            logger.debug("No configuration at %s; creating defaults", self._path)
            config = Configuration.default()
            self.save(config)
            return config
        except UnicodeDecodeError as exc:
            raise StoreCorruptError(
                f"Configuration file {self._path} is not valid UTF-8: {exc}",
                path=self._path,
                hint=_CORRUPT_HINT,
            ) from exc
        except OSError as exc:
            raise StoreUnreadableError(
                f"Cannot read configuration file {self._path}: {exc}",
                path=self._path,
            ) from exc

        try:
            raw = json.loads(text)
        except json.JSONDecodeError as exc:
            raise StoreCorruptError(
                f"Configuration file {self._path} is not valid JSON: {exc}",
                path=self._path,
                hint=_CORRUPT_HINT,
            ) from exc

        config = self._decode(raw)
        logger.debug(
            "Loaded configuration from %s (%d locations)",
            self._path,
            len(config.locations),
        )
        return config

    def save(self, config: Configuration) -> None:
        """Write *config* as pretty-printed JSON, all-or-nothing.

        Raises
        ------
        StoreUnwritableError
            If the directory cannot be created, the file cannot be written,
            or *config* holds text that cannot be encoded as UTF-8.  The
            temporary file is removed in every case.
        """
        data = json.dumps(self._encode(config), indent=2, ensure_ascii=False) + "\n"
        directory = self._path.parent

        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StoreUnwritableError(
                f"Cannot create configuration directory {directory}: {exc}",
                path=self._path,
            ) from exc

        tmp_name: str | None = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=directory,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                tmp_name = handle.name
                handle.write(data)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, self._path)
        except (OSError, ValueError) as exc:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            raise StoreUnwritableError(
                f"Cannot write configuration file {self._path}: {exc}",
                path=self._path,
            ) from exc

        logger.debug("Saved configuration to %s", self._path)

    # ------------------------------------------------------------------
    # Encoding
    # ------------------------------------------------------------------

    @staticmethod
    def _encode(config: Configuration) -> dict[str, Any]:
        preferences = config.preferences
        return {
            "locations": [
                {
                    "name": loc.name,
                    "latitude": loc.latitude,
                    "longitude": loc.longitude,
                }
                for loc in config.locations
            ],
            "temperature_unit": preferences.temperature_unit.value,
            "forecast_interval": preferences.forecast_interval,
            "api_key": preferences.api_key,
        }

    # ------------------------------------------------------------------
    # Decoding (raw JSON → domain model)
    # ------------------------------------------------------------------

    def _decode(self, raw: object) -> Configuration:
        if not isinstance(raw, dict):
            raise self._corrupt("top-level value must be an object")

        raw_locations = raw.get("locations") or []
        if not isinstance(raw_locations, list):
            raise self._corrupt("'locations' must be an array")

        locations: list[Location] = []
        seen: set[str] = set()
        for index, entry in enumerate(raw_locations):
            location = self._decode_location(entry, index)
            if location.name in seen:
                raise self._corrupt(f"duplicate location name {location.name!r}")
            seen.add(location.name)
            locations.append(location)

        return Configuration(locations=locations, preferences=self._decode_preferences(raw))

    def _decode_location(self, entry: object, index: int) -> Location:
        if not isinstance(entry, dict):
            raise self._corrupt(f"locations[{index}] must be an object")

        name = entry.get("name")
        if not isinstance(name, str) or not name:
            raise self._corrupt(f"locations[{index}].name must be a non-empty string")

        return Location(
            name=name,
            latitude=self._decode_number(entry.get("latitude"), f"locations[{index}].latitude"),
            longitude=self._decode_number(entry.get("longitude"), f"locations[{index}].longitude"),
        )

    def _decode_number(self, value: object, label: str) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise self._corrupt(f"{label} must be a number")
        try:
            number = float(value)
        except OverflowError as exc:
            raise self._corrupt(f"{label} is out of range") from exc
        if not math.isfinite(number):
            raise self._corrupt(f"{label} must be finite")
        return number

    def _decode_preferences(self, raw: dict[str, Any]) -> Preferences:
        raw_unit = raw.get("temperature_unit") or TemperatureUnit.CELSIUS.value
        if not isinstance(raw_unit, str):
            raise self._corrupt("'temperature_unit' must be a string")
        try:
            unit = TemperatureUnit.parse(raw_unit)
        except WeatherCliError as exc:
            raise self._corrupt(f"unknown temperature unit {raw_unit!r}") from exc

        interval = raw.get("forecast_interval") or DEFAULT_FORECAST_INTERVAL
        if isinstance(interval, bool) or not isinstance(interval, int) or interval <= 0:
            raise self._corrupt("'forecast_interval' must be a positive integer")

        api_key = raw.get("api_key") or ""
        if not isinstance(api_key, str):
            raise self._corrupt("'api_key' must be a string")

        return Preferences(temperature_unit=unit, forecast_interval=interval, api_key=api_key)

    def _corrupt(self, reason: str) -> StoreCorruptError:
        return StoreCorruptError(
            f"Configuration file {self._path} is malformed: {reason}.",
            path=self._path,
            hint=_CORRUPT_HINT,
        )
