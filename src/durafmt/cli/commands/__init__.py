"""CLI commands for durafmt."""

from durafmt.cli.commands.parse import parse
from durafmt.cli.commands.render import render
from durafmt.cli.commands.units import units

__all__ = ["parse", "render", "units"]
