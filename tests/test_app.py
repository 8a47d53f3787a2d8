"""End-to-end tests for the CLI entry point (cli/app.py).

The configuration file lives in ``tmp_path`` (see the ``config_path``
fixture) and the forecast provider is patched at the class level, so
the full resolve → load → dispatch → print path runs without network.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from unittest.mock import patch

import pytest
from conftest import raw_entry, raw_forecast

from weather_cli.cli import exit_codes
from weather_cli.cli.app import cli, main
from weather_cli.exceptions import (
    InvalidUnitError,
    LocationNotFoundError,
    StoreCorruptError,
)

FETCH = "weather_cli.infra.openweather_provider.OpenWeatherProvider.fetch_forecast"


def _on_disk(path: Path) -> dict:
    return json.loads(path.read_text(encoding="utf-8"))


# ---------------------------------------------------------------------------
# main()
# ---------------------------------------------------------------------------

class TestMain:
    def test_no_arguments_prints_usage(
        self, config_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main([]) == exit_codes.SUCCESS
        assert "Weather CLI Application Usage:" in capsys.readouterr().out

    def test_first_run_creates_default_config(self, config_path: Path) -> None:
        main(["--list"])

        assert _on_disk(config_path) == {
            "locations": [],
            "temperature_unit": "C",
            "forecast_interval": 24,
            "api_key": "",
        }

    def test_add_then_list(
        self, config_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main(["-i", "35.6895", "139.6917", "Tokyo"]) == exit_codes.SUCCESS
        assert "Location 'Tokyo' added successfully." in capsys.readouterr().out

        main(["--list"])
        out = capsys.readouterr().out
        assert "Saved Locations:" in out
        assert "- Tokyo (Lat: 35.6895, Lon: 139.6917)" in out

    def test_remove(self, config_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(["-i", "1", "2", "Tokyo"])
        main(["-r", "Tokyo"])

        assert "Location 'Tokyo' removed successfully." in capsys.readouterr().out
        assert _on_disk(config_path)["locations"] == []

    def test_preferences_persist(self, config_path: Path) -> None:
        main(["--unit", "f"])
        main(["--interval", "6"])
        main(["--set-api-key", "abc123"])

        data = _on_disk(config_path)
        assert data["temperature_unit"] == "F"
        assert data["forecast_interval"] == 6
        assert data["api_key"] == "abc123"

    def test_api_key_not_echoed(
        self, config_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        main(["--set-api-key", "abc123"])
        captured = capsys.readouterr()

        assert "API key has been set successfully." in captured.out
        assert "abc123" not in captured.out + captured.err

    def test_get_weather(self, config_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(["-i", "35.6895", "139.6917", "Tokyo"])
        main(["--set-api-key", "k"])
        main(["--unit", "F"])
        capsys.readouterr()

        with patch(FETCH, return_value=raw_forecast()) as fetch:
            assert main(["Tokyo"]) == exit_codes.SUCCESS

        fetch.assert_called_once_with(35.6895, 139.6917, "k")
        out = capsys.readouterr().out
        assert "Weather forecast for Tokyo, JP" in out
        assert "Temperature: 68.0°F" in out

    def test_get_weather_respects_interval(
        self, config_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        main(["-i", "1", "2", "Tokyo"])
        main(["--interval", "2"])
        capsys.readouterr()

        payload = raw_forecast([raw_entry(dt=1_700_000_000 + 10_800 * i) for i in range(5)])
        with patch(FETCH, return_value=payload):
            main(["Tokyo"])

        assert capsys.readouterr().out.count("Date: ") == 2

    def test_get_weather_multi_word_name(self, config_path: Path) -> None:
        main(["-i", "40.7", "-74.0", "New York"])

        with patch(FETCH, return_value=raw_forecast()) as fetch:
            main(["New", "York"])

        fetch.assert_called_once_with(40.7, -74.0, "")

    def test_saves_logged_only_for_mutating_commands(
        self,
        config_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        monkeypatch.setenv("WEATHER_CLI_LOG_LEVEL", "INFO")

        main(["--list"])
        assert "Configuration saved" not in caplog.text

        main(["-i", "1", "2", "Tokyo"])
        assert f"Configuration saved to {config_path}" in caplog.text

    def test_unknown_location_propagates(self, config_path: Path) -> None:
        with pytest.raises(LocationNotFoundError):
            main(["Nowhere"])

    def test_validation_error_does_not_touch_store(self, config_path: Path) -> None:
        with pytest.raises(InvalidUnitError):
            main(["--unit", "K"])
        assert not config_path.exists()

    def test_corrupt_config_propagates(self, config_path: Path) -> None:
        config_path.parent.mkdir(parents=True)
        config_path.write_text("{", encoding="utf-8")

        with pytest.raises(StoreCorruptError):
            main(["--list"])

    def test_uses_sys_argv_when_none(
        self,
        config_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setattr(sys, "argv", ["weather", "--list"])

        assert main() == exit_codes.SUCCESS
        assert "No saved locations." in capsys.readouterr().out


# ---------------------------------------------------------------------------
# cli() error boundary
# ---------------------------------------------------------------------------

class TestCliBoundary:
    def _run(self, monkeypatch: pytest.MonkeyPatch, *argv: str) -> int:
        monkeypatch.setattr(sys, "argv", ["weather", *argv])
        with pytest.raises(SystemExit) as exc_info:
            cli()
        return exc_info.value.code  # type: ignore[return-value]

    def test_success(self, config_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        assert self._run(monkeypatch, "--list") == exit_codes.SUCCESS

    def test_domain_error(
        self,
        config_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        assert self._run(monkeypatch, "Nowhere") == exit_codes.GENERAL_ERROR

        captured = capsys.readouterr()
        assert "Error: Location 'Nowhere' not found." in captured.err
        assert captured.out == ""

    def test_syntax_error_shows_hint(
        self,
        config_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        assert self._run(monkeypatch, "--bogus") == exit_codes.GENERAL_ERROR

        err = capsys.readouterr().err
        assert "Error: Invalid arguments" in err
        assert "Hint: Run 'weather --help' for usage." in err

    def test_duplicate_location(
        self,
        config_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        self._run(monkeypatch, "-i", "1", "2", "Tokyo")

        assert self._run(monkeypatch, "-i", "3", "4", "Tokyo") == exit_codes.GENERAL_ERROR
        assert "already exists" in capsys.readouterr().err
        assert [loc["latitude"] for loc in _on_disk(config_path)["locations"]] == [1.0]

    def test_undecodable_name_reported_as_store_error(
        self,
        config_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        assert self._run(monkeypatch, "-i", "1", "2", "\udcff") == exit_codes.GENERAL_ERROR

        assert "Error: Cannot write configuration file" in capsys.readouterr().err
        assert [p.name for p in config_path.parent.iterdir()] == ["config.json"]
        assert _on_disk(config_path)["locations"] == []

    def test_keyboard_interrupt(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with patch("weather_cli.cli.app.main", side_effect=KeyboardInterrupt):
            with pytest.raises(SystemExit) as exc_info:
                cli()

        assert exc_info.value.code == exit_codes.KEYBOARD_INTERRUPT
        assert "Aborted by user." in capsys.readouterr().err

    def test_unexpected_error(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with patch("weather_cli.cli.app.main", side_effect=RuntimeError("kaboom")):
            with pytest.raises(SystemExit) as exc_info:
                cli()

        assert exc_info.value.code == exit_codes.UNEXPECTED_ERROR
        err = capsys.readouterr().err
        assert "Unexpected error" in err
        assert "RuntimeError: kaboom" in err
