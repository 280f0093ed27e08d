"""Helpers shared by the CLI commands."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import TYPE_CHECKING, Any

import typer

from durafmt.cli.console import error_console, print_error
from durafmt.cli.errors import format_error_with_suggestion, get_error_info
from durafmt.cli.output import format_error_json, print_json
from durafmt.core.formatter import DurationFormatter, FormatOptions, RenderMode, Separators
from durafmt.core.labels import load_label_table

if TYPE_CHECKING:
    from decimal import Decimal

    from durafmt.config import Settings

logger = logging.getLogger(__name__)


def build_formatter(
    settings: Settings,
    labels_file: Path | None = None,
    precision: int | None = None,
    left: str | None = None,
    right: str | None = None,
    separator: str | None = None,
) -> DurationFormatter:
    """Create a formatter from settings, with command-line values taking precedence.

    Raises:
        LabelTableError: If a label file or directory cannot be loaded
    """
    defaults = settings.format
    options = FormatOptions(
        precision=precision if precision is not None else defaults.precision,
        separators=Separators(
            left=left if left is not None else defaults.left_separator,
            right=right if right is not None else defaults.right_separator,
        ),
        compact_separator=separator if separator is not None else defaults.compact_separator,
    )

    labels = load_label_table(labels_file) if labels_file is not None else settings.labels.load()
    logger.debug(f"Formatter options: {options}")
    return DurationFormatter(labels=labels, options=options)


def select_modes(settings: Settings, mode: RenderMode | None, all_modes: bool) -> list[RenderMode]:
    """Return the modes to render: every mode, the requested one, or the configured default."""
    if all_modes:
        return list(RenderMode)
    return [mode or settings.format.mode]


def render_all(formatter: DurationFormatter, magnitude: Decimal, modes: list[RenderMode]) -> dict[str, Any]:
    """Render ``magnitude`` in each mode, keyed by mode name."""
    return {mode.value: formatter.render(magnitude, mode) for mode in modes}


def handle_error(
    e: Exception,
    prefix: str,
    verbose: bool,
    json_output: bool,
    start_time: float,
) -> None:
    """Handle an error with appropriate output format, then exit with code 2."""
    duration = time.time() - start_time
    error_info = get_error_info(e)

    if json_output:
        json_data = format_error_json(
            error_type=error_info.error_type,
            message=f"{prefix}: {error_info.message}",
            details=error_info.details,
            recovery_suggestion=error_info.recovery_suggestion,
        )
        json_data["meta"]["duration_seconds"] = duration
        print_json(json_data)
    else:
        print_error(format_error_with_suggestion(error_info, prefix=prefix))
        if verbose and not isinstance(e, ValueError):
            error_console.print_exception()

    raise typer.Exit(2) from None
