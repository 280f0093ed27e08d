"""Canonical time units, their magnitudes and free-text aliases.

Magnitudes are expressed in milliseconds. Months and years use fixed average
lengths (a Julian year of 365.25 days, a month of one twelfth of that), so no
calendar arithmetic is involved anywhere.
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from types import MappingProxyType


class TimeUnit(str, Enum):
    """Canonical unit identifiers, declared largest first."""

    TERAYEAR = "terayear"
    GIGAYEAR = "gigayear"
    MEGAYEAR = "megayear"
    MILLENNIUM = "millennium"
    CENTURY = "century"
    DECADE = "decade"
    YEAR = "year"
    MONTH = "month"
    WEEK = "week"
    DAY = "day"
    HOUR = "hour"
    MINUTE = "minute"
    SECOND = "second"
    MILLISECOND = "millisecond"
    MICROSECOND = "microsecond"
    NANOSECOND = "nanosecond"


NANOSECOND = Decimal("0.000001")
MICROSECOND = Decimal("0.001")
MILLISECOND = Decimal(1)
SECOND = 1000 * MILLISECOND
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE
DAY = 24 * HOUR
WEEK = 7 * DAY
YEAR = Decimal("365.25") * DAY
MONTH = YEAR / 12
DECADE = 10 * YEAR
CENTURY = 100 * YEAR
MILLENNIUM = 1_000 * YEAR
MEGAYEAR = 1_000_000 * YEAR
GIGAYEAR = 1_000_000_000 * YEAR
TERAYEAR = 1_000_000_000_000 * YEAR

MAGNITUDES: MappingProxyType[TimeUnit, Decimal] = MappingProxyType(
    {
        TimeUnit.TERAYEAR: TERAYEAR,
        TimeUnit.GIGAYEAR: GIGAYEAR,
        TimeUnit.MEGAYEAR: MEGAYEAR,
        TimeUnit.MILLENNIUM: MILLENNIUM,
        TimeUnit.CENTURY: CENTURY,
        TimeUnit.DECADE: DECADE,
        TimeUnit.YEAR: YEAR,
        TimeUnit.MONTH: MONTH,
        TimeUnit.WEEK: WEEK,
        TimeUnit.DAY: DAY,
        TimeUnit.HOUR: HOUR,
        TimeUnit.MINUTE: MINUTE,
        TimeUnit.SECOND: SECOND,
        TimeUnit.MILLISECOND: MILLISECOND,
        TimeUnit.MICROSECOND: MICROSECOND,
        TimeUnit.NANOSECOND: NANOSECOND,
    }
)

# Descending magnitude order, used by every decomposition.
UNITS: tuple[TimeUnit, ...] = tuple(MAGNITUDES)
SMALLEST_UNIT = UNITS[-1]

# Several short aliases overlap across units ("m" is a minute, "mo" a month,
# "ms" a millisecond, "mil" a millennium). Lookup is exact-match only.
_UNIT_ALIASES: dict[TimeUnit, tuple[str, ...]] = {
    TimeUnit.NANOSECOND: ("nanoseconds", "nanosecond", "nsecs", "nsec", "ns", "n"),
    TimeUnit.MICROSECOND: (
        "microseconds",
        "microsecond",
        "musecs",
        "musec",
        "mus",
        "mu",
        "μs",
        "us",
        "u",
    ),
    TimeUnit.MILLISECOND: ("milliseconds", "millisecond", "msecs", "msec", "ms"),
    TimeUnit.SECOND: ("seconds", "second", "secon", "seco", "secs", "sec", "se", "s"),
    TimeUnit.MINUTE: ("minutes", "minute", "minu", "mins", "min", "mi", "mn", "m"),
    TimeUnit.HOUR: ("hours", "hour", "hrs", "hr", "hs", "h"),
    TimeUnit.DAY: ("days", "day", "dys", "da", "dy", "ds", "d"),
    TimeUnit.WEEK: ("weeks", "week", "wks", "we", "ws", "wk", "w"),
    TimeUnit.MONTH: ("months", "month", "mos", "mo", "b"),
    TimeUnit.YEAR: ("years", "year", "yrs", "yea", "ye", "yr", "ys", "y"),
    TimeUnit.DECADE: ("decades", "decade", "decad", "deca", "decs", "dec", "de"),
    TimeUnit.CENTURY: ("centuries", "century", "cents", "cent", "cen", "ce", "c"),
    TimeUnit.MILLENNIUM: (
        "millennia",
        "millennium",
        "millennias",
        "milleniums",
        "millenium",
        "milly",
        "mill",
        "mil",
        "ml",
    ),
    TimeUnit.MEGAYEAR: (
        "megayears",
        "megayear",
        "megayea",
        "megayes",
        "megayer",
        "megay",
        "mega",
        "megayrs",
        "megary",
        "myr",
    ),
    TimeUnit.GIGAYEAR: (
        "gigayears",
        "gigayear",
        "gigayea",
        "gigayes",
        "gigayer",
        "gigay",
        "gyr",
        "gigary",
        "gy",
    ),
    TimeUnit.TERAYEAR: (
        "terayears",
        "terayear",
        "terayea",
        "terayer",
        "terayes",
        "teray",
        "tera",
        "teryrs",
        "teryr",
        "tery",
        "tyr",
        "ty",
    ),
}


def _build_alias_table(aliases: dict[TimeUnit, tuple[str, ...]]) -> dict[str, TimeUnit]:
    """Invert the per-unit alias lists, refusing any alias claimed twice."""
    table: dict[str, TimeUnit] = {}
    for unit, names in aliases.items():
        for name in names:
            owner = table.get(name)
            if owner is not None and owner is not unit:
                raise ValueError(f"Alias '{name}' is mapped to both '{owner.value}' and '{unit.value}'")
            table[name] = unit
    return table


ALIASES: MappingProxyType[str, TimeUnit] = MappingProxyType(_build_alias_table(_UNIT_ALIASES))


def resolve(alias: str) -> TimeUnit | None:
    """Resolve a free-text alias token to its canonical unit.

    Args:
        alias: Token as produced by the tokenizer (any case)

    Returns:
        The canonical unit, or None if the token is not a known alias

    Example:
        >>> resolve("hrs")
        <TimeUnit.HOUR: 'hour'>
        >>> resolve("mo")
        <TimeUnit.MONTH: 'month'>
        >>> resolve("fortnight") is None
        True
    """
    return ALIASES.get(alias.lower())


def magnitude_of(unit: TimeUnit | str) -> Decimal:
    """Return the magnitude of a unit in milliseconds."""
    return MAGNITUDES[TimeUnit(unit)]


def aliases_for(unit: TimeUnit | str) -> tuple[str, ...]:
    """Return every alias that resolves to ``unit``."""
    return _UNIT_ALIASES[TimeUnit(unit)]
