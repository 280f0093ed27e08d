"""Tests for durafmt.core.numeric module."""

from __future__ import annotations

from decimal import Decimal, Inexact

import pytest

from durafmt.core import numeric


class TestToDecimal:
    """Test value coercion."""

    def test_decimal_passthrough(self):
        """Test that Decimals are returned unchanged."""
        value = Decimal("1.25")
        assert numeric.to_decimal(value) is value

    def test_int(self):
        """Test integer coercion."""
        assert numeric.to_decimal(5) == Decimal(5)

    def test_float_uses_shortest_repr(self):
        """Test that floats do not carry their binary expansion."""
        assert numeric.to_decimal(0.1) == Decimal("0.1")

    def test_numeric_string(self):
        """Test numeric strings including exponents and whitespace."""
        assert numeric.to_decimal("1.5e3") == Decimal(1500)
        assert numeric.to_decimal("  42 ") == Decimal(42)

    @pytest.mark.parametrize("value", ["banana", "", None, True, False, [1]])
    def test_unparseable_becomes_nan(self, value):
        """Test that anything unparseable becomes NaN."""
        assert numeric.to_decimal(value).is_nan()


class TestArithmetic:
    """Test exact arithmetic helpers."""

    def test_addition_is_exact(self):
        """Test that decimal fractions add without binary rounding."""
        assert numeric.add(Decimal("0.1"), Decimal("0.2")) == Decimal("0.3")

    def test_large_and_small_magnitudes(self):
        """Test that terayears and nanoseconds combine without loss."""
        total = numeric.add(Decimal("31557600000000000000000"), Decimal("0.000001"))
        assert total == Decimal("31557600000000000000000.000001")

    @pytest.mark.parametrize(
        "value,expected",
        [("1.5", 1), ("-1.5", -2), ("3", 3), ("-0.000001", -1)],
    )
    def test_floor(self, value, expected):
        """Test rounding toward negative infinity."""
        assert numeric.floor(Decimal(value)) == Decimal(expected)

    @pytest.mark.parametrize(
        "a,b,expected",
        [(7, 2, 3), (-7, 2, -4), (-6, 2, -3), (7, -2, -4), ("1.5", "0.5", 3)],
    )
    def test_floor_divide(self, a, b, expected):
        """Test exact floor division."""
        assert numeric.floor_divide(Decimal(a), Decimal(b)) == Decimal(expected)

    def test_modulo_carries_dividend_sign(self):
        """Test that the remainder takes the sign of the dividend."""
        assert numeric.modulo(Decimal(7), Decimal(2)) == Decimal(1)
        assert numeric.modulo(Decimal(-7), Decimal(2)) == Decimal(-1)

    def test_rounding_is_trapped(self):
        """Test that results needing more than the working digits raise."""
        with pytest.raises(Inexact):
            numeric.add(Decimal("1e100"), Decimal("0.000001"))
        with pytest.raises(Inexact):
            numeric.divide(Decimal(1), Decimal(3))

    def test_ensure_exact(self):
        """Test the digit check on values built outside the context."""
        assert numeric.ensure_exact(Decimal("1e200")) == Decimal("1e200")
        with pytest.raises(Inexact):
            numeric.ensure_exact(Decimal(10**100 + 1))

    def test_divide_by_zero_raises(self):
        """Test that division by zero is trapped."""
        with pytest.raises(ArithmeticError):
            numeric.divide(Decimal(1), Decimal(0))

    def test_negative_zero_is_not_negative(self):
        """Test the sign test on signed zero."""
        assert not numeric.is_negative(Decimal("-0"))
        assert numeric.is_negative(Decimal("-0.000001"))


class TestToRadix:
    """Test integer rendering in other bases."""

    @pytest.mark.parametrize(
        "value,base,expected",
        [(10, 2, "1010"), (255, 16, "ff"), (0, 2, "0"), (-5, 2, "-101"), ("5.9", 2, "101"), (35, 36, "z")],
    )
    def test_to_radix(self, value, base, expected):
        """Test rendering of the integer part."""
        assert numeric.to_radix(Decimal(value), base) == expected

    @pytest.mark.parametrize("base", [1, 37])
    def test_base_out_of_range(self, base):
        """Test that unsupported bases raise."""
        with pytest.raises(ValueError, match="Radix"):
            numeric.to_radix(Decimal(1), base)

    def test_non_finite(self):
        """Test that NaN cannot be rendered."""
        with pytest.raises(ValueError):
            numeric.to_radix(Decimal("NaN"), 2)


class TestToExponential:
    """Test mantissa/exponent rendering."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("1500", "1.5e+3"),
            ("1000", "1e+3"),
            ("0", "0e+0"),
            ("0.000001", "1e-6"),
            ("-250", "-2.5e+2"),
            ("123.456", "1.23456e+2"),
            ("7", "7e+0"),
        ],
    )
    def test_to_exponential(self, value, expected):
        """Test that every significant digit is kept and trailing zeros dropped."""
        assert numeric.to_exponential(Decimal(value)) == expected

    def test_infinity_rejected(self):
        """Test that infinities cannot be rendered."""
        with pytest.raises(ValueError):
            numeric.to_exponential(Decimal("Infinity"))


class TestGroupThousands:
    """Test thousands grouping."""

    def test_group_thousands(self):
        """Test comma separators."""
        assert numeric.group_thousands(Decimal(1_234_567)) == "1,234,567"
        assert numeric.group_thousands(Decimal(999)) == "999"
