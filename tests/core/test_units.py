"""Tests for durafmt.core.units module."""

from __future__ import annotations

from decimal import Decimal

import pytest

from durafmt.core.labels import DEFAULT_LABELS
from durafmt.core.units import (
    ALIASES,
    DAY,
    MAGNITUDES,
    MONTH,
    SMALLEST_UNIT,
    TERAYEAR,
    UNITS,
    YEAR,
    TimeUnit,
    _build_alias_table,
    aliases_for,
    magnitude_of,
    resolve,
)


class TestMagnitudes:
    """Test the unit magnitude table."""

    def test_sixteen_units_largest_first(self):
        """Test that every unit is listed from terayear down to nanosecond."""
        assert len(UNITS) == 16
        assert UNITS[0] is TimeUnit.TERAYEAR
        assert UNITS[-1] is TimeUnit.NANOSECOND
        assert SMALLEST_UNIT is TimeUnit.NANOSECOND

    def test_magnitudes_strictly_decrease(self):
        """Test that each unit is larger than the next one."""
        values = [MAGNITUDES[unit] for unit in UNITS]
        assert all(a > b for a, b in zip(values, values[1:], strict=False))

    def test_base_unit_is_millisecond(self):
        """Test that magnitudes are expressed in milliseconds."""
        assert MAGNITUDES[TimeUnit.MILLISECOND] == 1
        assert MAGNITUDES[TimeUnit.SECOND] == 1000
        assert MAGNITUDES[TimeUnit.NANOSECOND] == Decimal("0.000001")

    def test_year_and_month_lengths(self):
        """Test the average year and month lengths."""
        assert YEAR == Decimal("365.25") * DAY
        assert YEAR == Decimal("31557600000")
        assert MONTH == Decimal("2629800000")
        assert MONTH * 12 == YEAR

    def test_terayear_is_exact(self):
        """Test that the largest magnitude keeps every digit."""
        assert TERAYEAR == Decimal("31557600000000000000000")

    def test_magnitude_of_accepts_strings(self):
        """Test magnitude lookup by unit identifier."""
        assert magnitude_of("day") == Decimal(86_400_000)
        assert magnitude_of(TimeUnit.WEEK) == Decimal(604_800_000)

    def test_magnitude_of_unknown_unit(self):
        """Test that an unknown unit identifier raises."""
        with pytest.raises(ValueError):
            magnitude_of("fortnight")


class TestResolve:
    """Test alias resolution."""

    @pytest.mark.parametrize(
        "alias,expected",
        [
            ("m", TimeUnit.MINUTE),
            ("mo", TimeUnit.MONTH),
            ("ms", TimeUnit.MILLISECOND),
            ("mil", TimeUnit.MILLENNIUM),
            ("μs", TimeUnit.MICROSECOND),
            ("us", TimeUnit.MICROSECOND),
            ("hrs", TimeUnit.HOUR),
            ("ty", TimeUnit.TERAYEAR),
            ("centuries", TimeUnit.CENTURY),
        ],
    )
    def test_known_aliases(self, alias, expected):
        """Test that overlapping short aliases resolve to distinct units."""
        assert resolve(alias) is expected

    def test_case_insensitive(self):
        """Test that aliases match regardless of case."""
        assert resolve("HRS") is TimeUnit.HOUR
        assert resolve("Days") is TimeUnit.DAY

    def test_exact_match_only(self):
        """Test that prefixes of an alias do not resolve."""
        assert resolve("mont") is None
        assert resolve("millisec") is None

    def test_unknown_alias(self):
        """Test that unknown words resolve to None."""
        assert resolve("fortnight") is None
        assert resolve("") is None


class TestAliasTable:
    """Test alias table construction."""

    def test_aliases_are_disjoint(self):
        """Test that no alias belongs to two units."""
        total = sum(len(aliases_for(unit)) for unit in TimeUnit)
        assert total == len(ALIASES)

    def test_every_alias_resolves_to_its_unit(self):
        """Test that each listed alias resolves back to the unit listing it."""
        for unit in TimeUnit:
            for alias in aliases_for(unit):
                assert resolve(alias) is unit

    def test_conflicting_aliases_rejected(self):
        """Test that an alias claimed by two units is refused."""
        with pytest.raises(ValueError, match="'m'"):
            _build_alias_table({TimeUnit.MINUTE: ("m",), TimeUnit.MONTH: ("m",)})

    def test_default_labels_resolve(self):
        """Test that every built-in label parses back to its own unit."""
        for unit, label in DEFAULT_LABELS.items():
            assert resolve(label.compact) is unit
            assert resolve(label.default) is unit
            assert resolve(label.label_for(1)) is unit
