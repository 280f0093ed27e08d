"""Entry point for the durafmt command line."""

from __future__ import annotations

from typing import Annotated

import typer

from durafmt import __version__
from durafmt.cli.commands import parse, render, units
from durafmt.cli.console import configure_logging, console

app = typer.Typer(
    name="durafmt",
    help="durafmt: parse human-entered durations and render them as text, clock time or unit counts.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command()(parse)
app.command()(render)
app.command()(units)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"durafmt {__version__}")
        raise typer.Exit(0)


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Show the version and exit",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option(
            "--debug",
            help="Log parsing and formatting details to stderr",
        ),
    ] = False,
) -> None:
    """durafmt: parse human-entered durations and render them as text, clock time or unit counts."""
    configure_logging(debug)


if __name__ == "__main__":
    app()
