"""Parsed duration value.

A Duration holds an exact magnitude in milliseconds and the per-unit
quantities it was parsed from. Rendering is delegated to a DurationFormatter
held by composition, so the same value can be rendered with different label
tables without re-parsing.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from decimal import Decimal, DecimalException
from types import MappingProxyType
from typing import Any

from durafmt.core import numeric
from durafmt.core.formatter import DurationFormatter, RenderMode, Separators, coerce_magnitude, exact_arithmetic
from durafmt.core.units import MAGNITUDES, TimeUnit

_MICROSECONDS_PER_MILLISECOND = Decimal(1000)


@dataclass(frozen=True)
class Duration:
    """An immutable duration.

    Attributes:
        magnitude: Total duration in milliseconds
        parts: Summed quantity per unit as written in the parsed text
            (``"1h 30m 1h"`` gives ``{hour: 2, minute: 30}``)
        formatter: Formatter used by the rendering methods
    """

    magnitude: Decimal
    parts: Mapping[TimeUnit, Decimal] = field(default_factory=lambda: MappingProxyType({}))
    formatter: DurationFormatter = field(default_factory=DurationFormatter, compare=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "magnitude", coerce_magnitude(self.magnitude))
        if not isinstance(self.parts, MappingProxyType):
            object.__setattr__(self, "parts", MappingProxyType(dict(self.parts)))

    def __hash__(self) -> int:
        return hash((self.magnitude, frozenset(self.parts.items())))

    @classmethod
    def from_text(cls, text: str, formatter: DurationFormatter | None = None) -> Duration:
        """Parse ``text`` into a Duration (see :func:`durafmt.core.parser.parse`)."""
        from durafmt.core.parser import parse

        return parse(text, formatter=formatter)

    @classmethod
    def of(cls, quantity: Any, unit: TimeUnit | str = TimeUnit.MILLISECOND) -> Duration:
        """Build a Duration from a quantity of a single unit."""
        unit = TimeUnit(unit)
        amount = coerce_magnitude(quantity)
        with exact_arithmetic(quantity):
            magnitude = numeric.multiply(amount, MAGNITUDES[unit])
        return cls(
            magnitude=magnitude,
            parts=MappingProxyType({unit: amount}),
        )

    def with_formatter(self, formatter: DurationFormatter) -> Duration:
        """Return a copy rendered through another formatter."""
        return replace(self, formatter=formatter)

    def verbose(self, precision: int | None = None, separators: Separators | None = None) -> str:
        return self.formatter.verbose(self.magnitude, precision=precision, separators=separators)

    def elegant(self, precision: int | None = None, separators: Separators | None = None) -> str:
        return self.formatter.elegant(self.magnitude, precision=precision, separators=separators)

    def compact(self, separator: str | None = None) -> str:
        return self.formatter.compact(self.magnitude, separator=separator)

    def colon(self) -> str:
        return self.formatter.colon(self.magnitude)

    def scientific(self) -> str:
        return self.formatter.scientific(self.magnitude)

    def binary(self) -> str:
        return self.formatter.binary(self.magnitude)

    def object(self) -> dict[str, int]:
        return self.formatter.object(self.magnitude)

    def render(self, mode: RenderMode | str = RenderMode.VERBOSE, **options: Any) -> str | dict[str, int]:
        return self.formatter.render(self.magnitude, mode, **options)

    def to_timedelta(self) -> timedelta:
        """Convert to a timedelta, truncated to whole microseconds.

        Raises:
            OverflowError: If the duration exceeds the timedelta range
        """
        try:
            microseconds = numeric.floor(numeric.multiply(self.magnitude, _MICROSECONDS_PER_MILLISECOND))
        except DecimalException as e:
            raise OverflowError(f"Duration of {self.magnitude} ms is outside the timedelta range") from e
        return timedelta(microseconds=int(microseconds))

    def date_from(self, moment: datetime) -> datetime:
        """Return ``moment`` shifted by this duration.

        Raises:
            OverflowError: If the result falls outside the datetime range
        """
        return moment + self.to_timedelta()

    @property
    def from_now(self) -> datetime:
        """Current UTC time shifted by this duration."""
        return self.date_from(datetime.now(UTC))

    def as_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly representation."""
        return {
            "magnitude": str(self.magnitude),
            "parts": {unit.value: str(quantity) for unit, quantity in self.parts.items()},
        }

    def __str__(self) -> str:
        return self.verbose()
