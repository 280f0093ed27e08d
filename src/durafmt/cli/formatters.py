"""Rich formatters for displaying durations in the terminal."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich import box
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from durafmt.cli.console import console
from durafmt.core import numeric
from durafmt.core.units import MAGNITUDES, UNITS, aliases_for

if TYPE_CHECKING:
    from durafmt.core.duration import Duration
    from durafmt.core.labels import LabelTable


def format_breakdown(duration: Duration, text: str) -> Panel:
    """Create a panel showing what each unit contributed to a parsed duration.

    Args:
        duration: Parsed Duration
        text: The text it was parsed from

    Returns:
        Rich Panel with one row per unit found in the text
    """
    table = Table(show_header=True, box=None, padding=(0, 2))
    table.add_column("Unit", style="unit")
    table.add_column("Quantity", justify="right", style="count")
    table.add_column("Milliseconds", justify="right")

    # Parts keep the order in which units first appeared; show largest first
    for unit in UNITS:
        if unit not in duration.parts:
            continue
        quantity = duration.parts[unit]
        contribution = numeric.multiply(quantity, MAGNITUDES[unit])
        table.add_row(unit.value, f"{quantity:,}", f"{contribution:,}")

    table.add_row("", "", "")  # Spacer
    table.add_row(Text("Total", style="bold"), "", Text(f"{duration.magnitude:,}", style="bold"))

    return Panel(table, title=f"Parsed: {text}", border_style="cyan")


def format_renders(renders: dict[str, Any]) -> Table:
    """Create a table with one row per rendering mode.

    Args:
        renders: Rendered output keyed by mode name

    Returns:
        Rich Table
    """
    table = Table(show_header=True, box=box.ROUNDED, header_style="header")
    table.add_column("Mode", style="bold")
    table.add_column("Output", overflow="fold")

    for mode, value in renders.items():
        if isinstance(value, dict):
            value = ", ".join(f"{unit}={count:,}" for unit, count in value.items() if count) or "all zero"
        table.add_row(mode, str(value))

    return table


def format_units_table(labels: LabelTable) -> Table:
    """Create a table listing every canonical unit.

    Args:
        labels: Label table whose labels are shown next to each unit

    Returns:
        Rich Table with magnitude, labels and aliases per unit
    """
    table = Table(title="Units (magnitudes in milliseconds)", show_lines=True)
    table.add_column("Unit", style="unit")
    table.add_column("Magnitude", justify="right")
    table.add_column("Label")
    table.add_column("Compact", justify="center")
    table.add_column("Aliases", style="alias", overflow="fold")

    for unit in UNITS:
        label = labels[unit]
        table.add_row(
            unit.value,
            f"{MAGNITUDES[unit].normalize():f}",
            label.default,
            label.compact,
            ", ".join(aliases_for(unit)),
        )

    return table


def print_rendered(value: Any) -> None:
    """Print a single rendered value; unit-count mappings become a small table."""
    if isinstance(value, dict):
        table = Table(show_header=False, box=None, padding=(0, 2))
        table.add_column("Unit", style="unit")
        table.add_column("Count", justify="right", style="count")
        for unit, count in value.items():
            table.add_row(unit, f"{count:,}")
        console.print(table)
        return

    console.print(Text(str(value)))


def print_breakdown(duration: Duration, text: str) -> None:
    """Print the per-unit breakdown of a parsed duration."""
    console.print()
    console.print(format_breakdown(duration, text))
    console.print()


def print_renders(renders: dict[str, Any]) -> None:
    """Print every rendered mode as a table."""
    console.print()
    console.print(format_renders(renders))
    console.print()


def print_units(labels: LabelTable) -> None:
    """Print the unit table."""
    console.print()
    console.print(format_units_table(labels))
    console.print()
