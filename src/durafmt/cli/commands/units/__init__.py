"""Units command for listing canonical units and their aliases."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Annotated

import typer

from durafmt.cli.common import handle_error
from durafmt.cli.console import set_json_output_mode
from durafmt.cli.formatters import print_units
from durafmt.cli.output import format_units_json, print_json
from durafmt.config import get_settings
from durafmt.core.exceptions import LabelTableError
from durafmt.core.labels import load_label_table


def units(
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
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output results as JSON",
        ),
    ] = False,
) -> None:
    """List every unit with its magnitude, labels and accepted aliases.

    Examples:

        durafmt units

        # Check a translated label file

        durafmt units --labels languages/de.yaml
    """
    if json_output:
        set_json_output_mode(True)

    start_time = time.time()

    try:
        settings = get_settings(config_file=config_file)
        labels = load_label_table(labels_file) if labels_file is not None else settings.labels.load()

        if json_output:
            print_json(format_units_json(labels))
        else:
            print_units(labels)

        raise typer.Exit(0)

    except typer.Exit:
        raise
    except LabelTableError as e:
        handle_error(e, "Invalid label table", False, json_output, start_time)
    except Exception as e:
        handle_error(e, "Unexpected error", False, json_output, start_time)
