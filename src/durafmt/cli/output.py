"""JSON documents printed by the ``--json`` flag of each command.

Every document has the same envelope (``status``, ``exit_code``, ``meta``)
so scripts can check the outcome before looking at the payload.
"""

from __future__ import annotations

import json
import sys
from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any, TextIO

from durafmt import __version__
from durafmt.core.units import MAGNITUDES, UNITS, TimeUnit, aliases_for

if TYPE_CHECKING:
    from durafmt.core.duration import Duration
    from durafmt.core.labels import LabelTable


@dataclass
class JSONOutputMeta:
    """Envelope metadata: producing tool, version, time and elapsed seconds."""

    tool: str = "durafmt"
    version: str = __version__
    timestamp: str = field(default_factory=lambda: datetime.now(UTC).isoformat())
    duration_seconds: float | None = None


@dataclass
class JSONParseOutput:
    status: str  # "success" or "error"
    exit_code: int
    meta: JSONOutputMeta
    input: dict[str, Any]
    duration: dict[str, Any]
    renders: dict[str, Any]
    error: dict[str, Any] | None = None


@dataclass
class JSONRenderOutput:
    status: str
    exit_code: int
    meta: JSONOutputMeta
    input: dict[str, Any]
    magnitude: str
    renders: dict[str, Any]
    error: dict[str, Any] | None = None


@dataclass
class JSONUnitsOutput:
    status: str
    exit_code: int
    meta: JSONOutputMeta
    base_unit: str
    units: list[dict[str, Any]]


@dataclass
class JSONErrorOutput:
    """Document printed instead of a result when a command fails."""

    status: str = "error"
    exit_code: int = 2
    meta: JSONOutputMeta = field(default_factory=JSONOutputMeta)
    error: dict[str, Any] = field(default_factory=dict)


def format_parse_result_json(
    text: str,
    duration: Duration,
    renders: dict[str, Any],
    duration_seconds: float | None = None,
) -> dict[str, Any]:
    """Build the ``durafmt parse --json`` document.

    Args:
        text: The text that was parsed
        duration: Parsed Duration
        renders: Rendered output keyed by mode name
        duration_seconds: Time spent parsing and rendering

    Returns:
        Dictionary suitable for JSON serialization; magnitudes and quantities
        are strings so no precision is lost
    """
    output = JSONParseOutput(
        status="success",
        exit_code=0,
        meta=JSONOutputMeta(duration_seconds=duration_seconds),
        input={"text": text},
        duration={"unit": TimeUnit.MILLISECOND.value, **duration.as_dict()},
        renders=renders,
    )
    return asdict(output)


def format_render_result_json(
    value: str,
    unit: TimeUnit,
    magnitude: Decimal,
    renders: dict[str, Any],
    duration_seconds: float | None = None,
) -> dict[str, Any]:
    """Build the ``durafmt render --json`` document.

    Args:
        value: The value as given on the command line
        unit: Unit the value is expressed in
        magnitude: Value converted to milliseconds
        renders: Rendered output keyed by mode name
        duration_seconds: Time spent rendering
    """
    output = JSONRenderOutput(
        status="success",
        exit_code=0,
        meta=JSONOutputMeta(duration_seconds=duration_seconds),
        input={"value": value, "unit": unit.value},
        magnitude=str(magnitude),
        renders=renders,
    )
    return asdict(output)


def format_units_json(labels: LabelTable) -> dict[str, Any]:
    """Build the ``durafmt units --json`` document, one entry per unit, largest first."""
    output = JSONUnitsOutput(
        status="success",
        exit_code=0,
        meta=JSONOutputMeta(),
        base_unit=TimeUnit.MILLISECOND.value,
        units=[
            {
                "unit": unit.value,
                "magnitude": str(MAGNITUDES[unit]),
                "label": labels[unit].default,
                "compact": labels[unit].compact,
                "counts": {str(count): label for count, label in labels[unit].counts.items()},
                "aliases": list(aliases_for(unit)),
            }
            for unit in UNITS
        ],
    )
    return asdict(output)


def format_error_json(
    error_type: str,
    message: str,
    details: str | None = None,
    recovery_suggestion: str | None = None,
    exit_code: int = 2,
) -> dict[str, Any]:
    """Build the error document shared by every command.

    Args:
        error_type: Exception class name, e.g. ``"InvalidPatternError"``
        message: Message including the command's prefix
        details: Technical details, if any
        recovery_suggestion: Hint on how to fix the input
        exit_code: Process exit code reported in the envelope
    """
    output = JSONErrorOutput(
        exit_code=exit_code,
        error={
            "type": error_type,
            "message": message,
            "details": details,
            "recovery_suggestion": recovery_suggestion,
        },
    )
    return asdict(output)


def print_json(data: dict[str, Any], file: TextIO | None = None) -> None:
    """Write ``data`` as indented JSON; non-ASCII labels such as ``μs`` are kept as is."""
    print(json.dumps(data, indent=2, default=str, ensure_ascii=False), file=file or sys.stdout)
