"""Rendering of duration magnitudes.

The DurationFormatter turns a magnitude in milliseconds into verbose,
elegant, compact, colon, scientific, binary or structured output. The text
modes share one largest-unit-first decomposition: walk the canonical units
from terayears down to nanoseconds, emit ``floor(remaining / unit)`` for each
unit that fits at least once, and carry the rest over to the next unit.
"""

from __future__ import annotations

import logging
from collections.abc import Generator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field
from decimal import Decimal, DecimalException
from enum import Enum
from typing import Any

from durafmt.core import numeric
from durafmt.core.exceptions import InvalidDurationError
from durafmt.core.labels import DEFAULT_LABELS, LabelTable, UnitLabel, build_label_table
from durafmt.core.units import HOUR, MAGNITUDES, MINUTE, SECOND, SMALLEST_UNIT, UNITS, TimeUnit

logger = logging.getLogger(__name__)

DEFAULT_PRECISION = 7


class RenderMode(str, Enum):
    """Supported rendering modes."""

    VERBOSE = "verbose"  # "1 day 2 hours"
    ELEGANT = "elegant"  # "1 day, 2 hours and 3 minutes"
    COMPACT = "compact"  # "1d 2h 3m"
    COLON = "colon"  # "26:03:00"
    SCIENTIFIC = "scientific"  # "9.378e+7"
    BINARY = "binary"  # whole seconds in base 2
    OBJECT = "object"  # count for every unit


@dataclass(frozen=True)
class Separators:
    """Separators used by the verbose and elegant modes.

    ``left`` goes between a count and its label, ``right`` between entries.
    """

    left: str = " "
    right: str = " "


@dataclass(frozen=True)
class FormatOptions:
    """Every formatting option with its default."""

    precision: int = DEFAULT_PRECISION
    separators: Separators = field(default_factory=Separators)
    compact_separator: str = " "

    def __post_init__(self) -> None:
        _check_precision(self.precision)


@dataclass(frozen=True)
class DurationPart:
    """One emitted entry of a decomposition."""

    count: Decimal
    unit: TimeUnit


@dataclass(frozen=True)
class Decomposition:
    """Result of a largest-unit-first remainder walk.

    ``sum(part.count * magnitude(part.unit)) + remainder`` equals the
    decomposed magnitude exactly.
    """

    parts: list[DurationPart]
    remainder: Decimal


def _check_precision(precision: int) -> None:
    if isinstance(precision, bool) or not isinstance(precision, int) or precision < 1:
        raise ValueError(f"Precision must be a positive integer, got {precision!r}")


@contextmanager
def exact_arithmetic(value: Any) -> Generator[None, None, None]:
    """Report arithmetic that would lose digits as an invalid duration."""
    try:
        yield
    except DecimalException as e:
        raise InvalidDurationError(
            value,
            message=f"Duration {value!r} cannot be represented exactly",
            details=f"Exceeds {numeric.PRECISION} significant digits",
        ) from e


def coerce_magnitude(value: Any) -> Decimal:
    """Convert a magnitude to a Decimal, rejecting NaN and infinities.

    Raises:
        InvalidDurationError: If the value is not a finite number or has more
            significant digits than the working precision
    """
    magnitude = numeric.to_decimal(value)
    if numeric.is_nan(magnitude) or not numeric.is_finite(magnitude):
        raise InvalidDurationError(value)
    with exact_arithmetic(value):
        return numeric.ensure_exact(magnitude)


def decompose(magnitude: Any, precision: int | None = None) -> Decomposition:
    """Split a non-negative magnitude into unit counts, largest unit first.

    Units whose count would be below one are skipped, so no part has a zero
    count and units strictly decrease across parts.

    Args:
        magnitude: Non-negative magnitude in milliseconds
        precision: Stop after this many parts (None = no limit)

    Returns:
        Decomposition with the emitted parts and the leftover remainder

    Raises:
        InvalidDurationError: If the magnitude is not a finite, non-negative number

    Example:
        >>> [(int(p.count), p.unit.value) for p in decompose(90_061_000).parts]
        [(1, 'day'), (1, 'hour'), (1, 'minute'), (1, 'second')]
    """
    remaining = coerce_magnitude(magnitude)
    if numeric.is_negative(remaining):
        raise InvalidDurationError(magnitude, message=f"Cannot decompose negative duration {magnitude!r}")
    if precision is not None:
        _check_precision(precision)

    parts: list[DurationPart] = []
    with exact_arithmetic(magnitude):
        for unit in UNITS:
            if precision is not None and len(parts) >= precision:
                break
            unit_magnitude = MAGNITUDES[unit]
            count = numeric.floor_divide(remaining, unit_magnitude)
            if count < numeric.ONE:
                continue
            remaining = numeric.subtract(remaining, numeric.multiply(count, unit_magnitude))
            parts.append(DurationPart(count=count, unit=unit))

    return Decomposition(parts=parts, remainder=remaining)


def join_with_conjunction(items: list[str], separator: str = ", ", conjunction: str = " and ") -> str:
    """Join items as natural language: ``"a, b and c"``."""
    if len(items) <= 1:
        return "".join(items)
    return separator.join(items[:-1]) + conjunction + items[-1]


class DurationFormatter:
    """Render duration magnitudes in several text and structured formats.

    Magnitudes are in milliseconds and may be given as Decimal, int, float or
    numeric string. Every method validates the magnitude first and raises
    InvalidDurationError before producing any output.

    Example:
        >>> formatter = DurationFormatter()
        >>> formatter.verbose(93_784_000)
        '1 day 2 hours 3 minutes 4 seconds'
        >>> formatter.elegant(93_784_000, precision=2)
        '1 day and 2 hours'
        >>> formatter.colon(3_661_000)
        '01:01:01'
    """

    def __init__(
        self,
        labels: Mapping[TimeUnit | str, UnitLabel | Mapping[str, Any]] | None = None,
        options: FormatOptions | None = None,
    ) -> None:
        """Initialize the formatter.

        Args:
            labels: Label overrides merged over the built-in English table
            options: Default options for the text modes
        """
        self._labels: LabelTable = build_label_table(labels) if labels else DEFAULT_LABELS
        self._options = options or FormatOptions()

    @property
    def labels(self) -> LabelTable:
        return self._labels

    @property
    def options(self) -> FormatOptions:
        return self._options

    def render(
        self,
        magnitude: Any,
        mode: RenderMode | str = RenderMode.VERBOSE,
        *,
        precision: int | None = None,
        separators: Separators | None = None,
        separator: str | None = None,
    ) -> str | dict[str, int]:
        """Render a magnitude in the given mode.

        Args:
            magnitude: Duration in milliseconds
            mode: Rendering mode
            precision: Maximum entries for verbose/elegant
            separators: Separators for verbose/elegant
            separator: Entry separator for compact

        Returns:
            Rendered string, or a unit-count mapping for the object mode

        Raises:
            InvalidDurationError: If the magnitude is not a valid number
            ValueError: If the mode is unknown
        """
        mode = RenderMode(mode)
        if mode is RenderMode.VERBOSE:
            return self.verbose(magnitude, precision=precision, separators=separators)
        if mode is RenderMode.ELEGANT:
            return self.elegant(magnitude, precision=precision, separators=separators)
        if mode is RenderMode.COMPACT:
            return self.compact(magnitude, separator=separator)
        if mode is RenderMode.COLON:
            return self.colon(magnitude)
        if mode is RenderMode.SCIENTIFIC:
            return self.scientific(magnitude)
        if mode is RenderMode.BINARY:
            return self.binary(magnitude)
        return self.object(magnitude)

    def verbose(
        self,
        magnitude: Any,
        precision: int | None = None,
        separators: Separators | None = None,
    ) -> str:
        """Render as ``"1 day 2 hours"``, at most ``precision`` entries."""
        separators = separators or self._options.separators
        negative, entries = self._labelled_entries(magnitude, precision, separators.left)
        return ("-" if negative else "") + separators.right.join(entries)

    def elegant(
        self,
        magnitude: Any,
        precision: int | None = None,
        separators: Separators | None = None,
    ) -> str:
        """Render as ``"1 day, 2 hours and 3 minutes"``.

        Only the left separator applies; entries are joined with a comma and
        a final ``" and "``.
        """
        separators = separators or self._options.separators
        negative, entries = self._labelled_entries(magnitude, precision, separators.left)
        return ("-" if negative else "") + join_with_conjunction(entries)

    def compact(self, magnitude: Any, separator: str | None = None) -> str:
        """Render every non-zero unit with its compact label: ``"1d 2h 3m"``."""
        separator = self._options.compact_separator if separator is None else separator
        value = coerce_magnitude(magnitude)
        decomposition = decompose(numeric.absolute(value))

        entries = [
            f"{numeric.group_thousands(part.count)}{self._labels[part.unit].compact}"
            for part in decomposition.parts
        ]
        if not entries:
            return "0"
        return ("-" if numeric.is_negative(value) else "") + separator.join(entries)

    def colon(self, magnitude: Any) -> str:
        """Render as ``HH:MM:SS``; hours are not capped at two digits."""
        value = coerce_magnitude(magnitude)
        remaining = numeric.absolute(value)

        with exact_arithmetic(magnitude):
            hours = numeric.floor_divide(remaining, HOUR)
            remaining = numeric.modulo(remaining, HOUR)
            minutes = numeric.floor_divide(remaining, MINUTE)
            remaining = numeric.modulo(remaining, MINUTE)
            seconds = numeric.floor_divide(remaining, SECOND)

        sign = "-" if numeric.is_negative(value) and (hours or minutes or seconds) else ""
        return f"{sign}{int(hours):02d}:{int(minutes):02d}:{int(seconds):02d}"

    def scientific(self, magnitude: Any) -> str:
        """Render in mantissa and power-of-ten notation, e.g. ``1.5e+3``."""
        return numeric.to_exponential(coerce_magnitude(magnitude))

    def binary(self, magnitude: Any) -> str:
        """Render the whole number of seconds in base 2.

        Sub-second remainders are discarded; negative durations are rendered
        as ``-`` followed by the digits of their absolute value.
        """
        value = coerce_magnitude(magnitude)
        with exact_arithmetic(magnitude):
            seconds = numeric.floor_divide(numeric.absolute(value), SECOND)
        digits = numeric.to_radix(seconds, 2)
        if numeric.is_negative(value) and seconds:
            return "-" + digits
        return digits

    def object(self, magnitude: Any) -> dict[str, int]:
        """Return a count for every canonical unit, zero counts included.

        Negative durations are split on their absolute value and every count
        is negated, so the counts still sum back to the input.
        """
        value = coerce_magnitude(magnitude)
        remaining = numeric.absolute(value)
        sign = -1 if numeric.is_negative(value) else 1

        result: dict[str, int] = {}
        with exact_arithmetic(magnitude):
            for unit in UNITS:
                unit_magnitude = MAGNITUDES[unit]
                count = numeric.floor_divide(remaining, unit_magnitude)
                remaining = numeric.modulo(remaining, unit_magnitude)
                result[unit.value] = sign * int(count)
        return result

    def _labelled_entries(
        self,
        magnitude: Any,
        precision: int | None,
        left_separator: str,
    ) -> tuple[bool, list[str]]:
        """Decompose ``|magnitude|`` and attach labels.

        Returns:
            Tuple of (negative, entries); a zero duration yields a single
            entry with the smallest unit's default label
        """
        precision = self._options.precision if precision is None else precision
        value = coerce_magnitude(magnitude)
        decomposition = decompose(numeric.absolute(value), precision=precision)

        entries = [self._entry(part, left_separator) for part in decomposition.parts]
        if not entries:
            entries = [f"0{left_separator}{self._labels[SMALLEST_UNIT].default}"]
            return False, entries
        return numeric.is_negative(value), entries

    def _entry(self, part: DurationPart, left_separator: str) -> str:
        label = self._labels[part.unit].label_for(int(part.count))
        return f"{numeric.group_thousands(part.count)}{left_separator}{label}"
