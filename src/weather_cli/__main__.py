"""``python -m weather_cli`` runs the same error boundary as ``weather``."""

from __future__ import annotations

from weather_cli.cli.app import cli

if __name__ == "__main__":
    cli()
