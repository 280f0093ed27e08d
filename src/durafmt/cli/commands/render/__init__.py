"""Render command for formatting a raw duration magnitude."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Annotated

import typer

from durafmt.cli.common import build_formatter, handle_error, render_all, select_modes
from durafmt.cli.console import set_json_output_mode
from durafmt.cli.formatters import print_rendered, print_renders
from durafmt.cli.output import format_render_result_json, print_json
from durafmt.config import get_settings
from durafmt.core import numeric
from durafmt.core.exceptions import InvalidDurationError, LabelTableError
from durafmt.core.formatter import RenderMode, coerce_magnitude, exact_arithmetic
from durafmt.core.units import MAGNITUDES, TimeUnit


def render(
    value: Annotated[
        str,
        typer.Argument(help="Duration as a number, e.g. 93784000 or 1.5e3"),
    ],
    unit: Annotated[
        TimeUnit,
        typer.Option(
            "--unit",
            "-u",
            help="Unit the value is expressed in",
        ),
    ] = TimeUnit.MILLISECOND,
    mode: Annotated[
        RenderMode | None,
        typer.Option(
            "--mode",
            "-m",
            help="Rendering mode (default: verbose, or the configured mode)",
        ),
    ] = None,
    all_modes: Annotated[
        bool,
        typer.Option(
            "--all",
            "-a",
            help="Render in every mode",
        ),
    ] = False,
    precision: Annotated[
        int | None,
        typer.Option(
            "--precision",
            "-p",
            min=1,
            help="Maximum number of units in verbose and elegant output",
        ),
    ] = None,
    left: Annotated[
        str | None,
        typer.Option(
            "--left",
            help="Separator between a count and its label",
        ),
    ] = None,
    right: Annotated[
        str | None,
        typer.Option(
            "--right",
            help="Separator between verbose entries",
        ),
    ] = None,
    separator: Annotated[
        str | None,
        typer.Option(
            "--separator",
            "-s",
            help="Separator between compact entries",
        ),
    ] = None,
    labels_file: Annotated[
        Path | None,
        typer.Option(
            "--labels",
            help="JSON or YAML file with unit label overrides",
        ),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option(
            "--config",
            help="Path to configuration file (YAML)",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            help="Show detailed output",
        ),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output results as JSON",
        ),
    ] = False,
) -> None:
    """Render a numeric duration in one or every output mode.

    Examples:

        durafmt render 93784000

        durafmt render 3661 --unit second --mode colon

        # Negative values need a "--" so they are not read as options

        durafmt render --mode elegant -- -90000

        durafmt render 1e12 --unit year --all --json
    """
    if json_output:
        set_json_output_mode(True)

    start_time = time.time()

    try:
        settings = get_settings(config_file=config_file)
        formatter = build_formatter(
            settings,
            labels_file=labels_file,
            precision=precision,
            left=left,
            right=right,
            separator=separator,
        )

        with exact_arithmetic(value):
            magnitude = numeric.multiply(coerce_magnitude(value), MAGNITUDES[unit])
        renders = render_all(formatter, magnitude, select_modes(settings, mode, all_modes))

        elapsed = time.time() - start_time

        if json_output:
            print_json(format_render_result_json(value, unit, magnitude, renders, duration_seconds=elapsed))
        elif len(renders) == 1:
            print_rendered(next(iter(renders.values())))
        else:
            print_renders(renders)

        raise typer.Exit(0)

    except typer.Exit:
        raise
    except InvalidDurationError as e:
        handle_error(e, "Could not render duration", verbose, json_output, start_time)
    except LabelTableError as e:
        handle_error(e, "Invalid label table", verbose, json_output, start_time)
    except ValueError as e:
        handle_error(e, "Invalid value", verbose, json_output, start_time)
    except Exception as e:
        handle_error(e, "Unexpected error", verbose, json_output, start_time)
