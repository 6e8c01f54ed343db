"""CLI console helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``--help``, ``--version``) remain
functional even when Rich is not installed.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

from picklaunch.exceptions import EnvironmentError

LOG_FORMAT: str = "%(name)s: %(message)s"


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Console


def get_rich_console() -> Any:
    """Create a Rich console instance targeting stderr."""
    console_class = _load_rich_console_class()
    return console_class(stderr=True)


class _ConsoleProxy:
    """Minimal ``print``-compatible proxy with Rich fallback."""

    def print(self, *objects: object) -> None:
        """Render with Rich when available, else plain stderr print."""
        try:
            rich_console = get_rich_console()
        except EnvironmentError:
            print(*objects, file=sys.stderr)
            return
        rich_console.print(*objects)


console = _ConsoleProxy()


def _rich_log_handler() -> logging.Handler:
    """Return a ``RichHandler`` on stderr or raise ``EnvironmentError``."""
    try:
        from rich.logging import RichHandler
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    handler = RichHandler(
        console=get_rich_console(),
        show_time=False,
        show_path=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    return handler


def configure_logging(verbose: bool = False) -> None:
    """Route ``logging`` records to stderr.

    Uses :class:`rich.logging.RichHandler` when Rich is installed.
    *verbose* lowers the threshold from WARNING to DEBUG.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    handler: logging.Handler
    try:
        handler = _rich_log_handler()
    except EnvironmentError:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger("picklaunch")
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)
