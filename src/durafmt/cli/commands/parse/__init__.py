"""Parse command for turning duration text into formatted output."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Annotated

import typer

from durafmt.cli.common import build_formatter, handle_error, render_all, select_modes
from durafmt.cli.console import print_warning, set_json_output_mode
from durafmt.cli.formatters import print_breakdown, print_rendered, print_renders
from durafmt.cli.output import format_parse_result_json, print_json
from durafmt.config import get_settings
from durafmt.core.exceptions import InvalidDurationError, InvalidPatternError, LabelTableError
from durafmt.core.formatter import RenderMode
from durafmt.core.parser import parse as parse_duration
from durafmt.core.parser import tokenize

logger = logging.getLogger(__name__)


def parse(
    text: Annotated[
        str,
        typer.Argument(help="Duration text, e.g. '3 days, 4hrs and 5 mins'"),
    ],
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
            help="Show the per-unit breakdown and ignored words",
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
    """Parse human-entered duration text and render it.

    Every number followed by a known unit is added up; anything else in the
    text is ignored.

    Examples:

        durafmt parse "3 days, 4hrs and 5 mins"

        durafmt parse "1h30m" --mode colon

        # Every rendering mode at once

        durafmt parse "a week and 2.5 days" --all

        # JSON for scripts

        durafmt parse "90 minutes" --mode compact --json
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

        duration = parse_duration(text, formatter=formatter)
        renders = render_all(formatter, duration.magnitude, select_modes(settings, mode, all_modes))

        elapsed = time.time() - start_time

        if json_output:
            print_json(format_parse_result_json(text, duration, renders, duration_seconds=elapsed))
            raise typer.Exit(0)

        if verbose:
            print_breakdown(duration, text)
            ignored = [token.alias or "(no unit)" for token in tokenize(text) if not token.is_valid]
            if ignored:
                print_warning(f"Ignored unknown units: {', '.join(ignored)}")

        if len(renders) == 1:
            print_rendered(next(iter(renders.values())))
        else:
            print_renders(renders)

        raise typer.Exit(0)

    except typer.Exit:
        raise
    except InvalidPatternError as e:
        handle_error(e, "Could not parse duration", verbose, json_output, start_time)
    except InvalidDurationError as e:
        handle_error(e, "Could not render duration", verbose, json_output, start_time)
    except LabelTableError as e:
        handle_error(e, "Invalid label table", verbose, json_output, start_time)
    except ValueError as e:
        handle_error(e, "Invalid value", verbose, json_output, start_time)
    except Exception as e:
        handle_error(e, "Unexpected error", verbose, json_output, start_time)
