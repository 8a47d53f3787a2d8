"""CLI console helpers with optional Rich support.

Two consoles are exposed: :data:`out` for command output on stdout and
:data:`console` for diagnostics on stderr.  This module intentionally
avoids module-level imports of Rich so the tool keeps working (with
plain ``print``) when Rich is not installed.
"""

from __future__ import annotations

import sys
from typing import Any

from weather_cli.exceptions import DependencyMissingError


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` class or raise ``DependencyMissingError``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise DependencyMissingError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Console


def get_rich_console(*, stderr: bool = True) -> Any:
    """Create a Rich console instance targeting stderr (or stdout)."""
    console_class = _load_rich_console_class()
    return console_class(stderr=stderr)


class _ConsoleProxy:
    """Minimal ``print``-compatible proxy with Rich fallback.

    ``markup`` controls Rich markup interpretation; it must be ``False``
    for user-supplied text (location names, provider descriptions).
    """

    def __init__(self, *, stderr: bool) -> None:
        self._stderr: bool = stderr

    def print(self, *objects: object, markup: bool = True) -> None:
        """Render with Rich when available, else plain print."""
        stream = sys.stderr if self._stderr else sys.stdout
        try:
            rich_console = get_rich_console(stderr=self._stderr)
        except DependencyMissingError:
            print(*objects, file=stream)
            return
        rich_console.print(
            *objects,
            markup=markup,
            highlight=False,
            emoji=False,
            soft_wrap=True,
        )


console = _ConsoleProxy(stderr=True)
out = _ConsoleProxy(stderr=False)
