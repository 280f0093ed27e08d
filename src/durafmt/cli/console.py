"""Shared Rich consoles and log routing for the CLI."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

DURAFMT_THEME = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "red bold",
        "header": "bold cyan",
        "unit": "blue bold",
        "count": "green",
        "alias": "yellow",
    }
)

# Results go to stdout, diagnostics to stderr
console = Console(theme=DURAFMT_THEME)
error_console = Console(stderr=True, theme=DURAFMT_THEME)

# While set, commands emit a single JSON document and nothing else
_json_output_mode = False


def set_json_output_mode(enabled: bool) -> None:
    global _json_output_mode
    _json_output_mode = enabled


def is_json_output_mode() -> bool:
    return _json_output_mode


def print_warning(message: str) -> None:
    """Print a themed warning to stderr unless JSON output is active."""
    if not _json_output_mode:
        error_console.print(f"[warning]{message}[/warning]")


def print_error(markup: str) -> None:
    """Print pre-formatted error markup to stderr unless JSON output is active."""
    if not _json_output_mode:
        error_console.print(markup)


def configure_logging(debug: bool = False) -> None:
    """Route log records through Rich on stderr.

    Args:
        debug: Log at DEBUG level instead of WARNING
    """
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=error_console, show_path=debug, rich_tracebacks=True)],
        force=True,
    )
