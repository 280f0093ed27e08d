"""Exact decimal arithmetic for duration magnitudes.

All magnitude arithmetic in the parser and formatter goes through this module.
Values are ``decimal.Decimal`` instances evaluated under a dedicated context
with enough significant digits to hold tera-year magnitudes down to the
nanosecond without loss. Any operation whose exact result needs more digits
raises ``decimal.Inexact`` instead of rounding.
"""

from __future__ import annotations

from decimal import (
    ROUND_FLOOR,
    ROUND_HALF_EVEN,
    Context,
    Decimal,
    DecimalException,
    DivisionByZero,
    Inexact,
    InvalidOperation,
    Overflow,
)
from typing import Any

PRECISION = 100

CONTEXT = Context(
    prec=PRECISION,
    rounding=ROUND_HALF_EVEN,
    traps=[InvalidOperation, DivisionByZero, Overflow, Inexact],
)

ZERO = Decimal(0)
ONE = Decimal(1)
NAN = Decimal("NaN")

_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"

Numeric = Decimal | int | float | str


def to_decimal(value: Any) -> Decimal:
    """Coerce a value to a Decimal, returning NaN for anything unparseable.

    Floats go through ``repr`` so that ``0.1`` becomes ``Decimal("0.1")``
    instead of its binary expansion. Booleans are rejected.

    Example:
        >>> to_decimal("1.5e3")
        Decimal('1.5E+3')
        >>> to_decimal("banana").is_nan()
        True
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        return NAN
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(repr(value))
    if isinstance(value, str):
        try:
            return CONTEXT.create_decimal(value.strip())
        except DecimalException:
            return NAN
    return NAN


def ensure_exact(value: Decimal) -> Decimal:
    """Return ``value`` unchanged if it fits the working precision without rounding.

    Raises:
        decimal.Inexact: If digits would be lost
    """
    CONTEXT.plus(value)
    return value


def add(a: Decimal, b: Decimal) -> Decimal:
    return CONTEXT.add(a, b)


def subtract(a: Decimal, b: Decimal) -> Decimal:
    return CONTEXT.subtract(a, b)


def multiply(a: Decimal, b: Decimal) -> Decimal:
    return CONTEXT.multiply(a, b)


def divide(a: Decimal, b: Decimal) -> Decimal:
    return CONTEXT.divide(a, b)


def modulo(a: Decimal, b: Decimal) -> Decimal:
    """Remainder of ``a / b`` carrying the sign of the dividend."""
    return CONTEXT.remainder(a, b)


def floor(value: Decimal) -> Decimal:
    """Round toward negative infinity."""
    return value.to_integral_value(rounding=ROUND_FLOOR, context=CONTEXT)


def floor_divide(a: Decimal, b: Decimal) -> Decimal:
    """Exact ``floor(a / b)``.

    Unlike ``divide`` followed by ``floor`` this never rounds the quotient,
    so a remainder walk built on it always sums back to the dividend.
    """
    quotient = CONTEXT.divide_int(a, b)
    if not CONTEXT.remainder(a, b).is_zero() and (a.is_signed() != b.is_signed()):
        quotient = CONTEXT.subtract(quotient, ONE)
    return quotient


def absolute(value: Decimal) -> Decimal:
    return CONTEXT.abs(value)


def is_negative(value: Decimal) -> bool:
    """True for values strictly below zero (``-0`` is not negative)."""
    return value.is_signed() and not value.is_zero()


def is_nan(value: Decimal) -> bool:
    return value.is_nan()


def is_finite(value: Decimal) -> bool:
    return value.is_finite()


def to_radix(value: Decimal, base: int = 10) -> str:
    """Render the integer part of ``value`` in the given base (2 to 36).

    Args:
        value: Value to render; any fractional part is truncated
        base: Target radix

    Returns:
        Digit string, prefixed with ``-`` for negative values

    Raises:
        ValueError: If the base is out of range or the value is not finite
    """
    if not 2 <= base <= 36:
        raise ValueError(f"Radix must be between 2 and 36, got {base}")
    if not value.is_finite():
        raise ValueError(f"Cannot convert {value} to radix {base}")

    number = int(value)
    if number == 0:
        return "0"

    sign = "-" if number < 0 else ""
    number = abs(number)
    digits: list[str] = []
    while number:
        number, digit = divmod(number, base)
        digits.append(_DIGITS[digit])
    return sign + "".join(reversed(digits))


def to_exponential(value: Decimal) -> str:
    """Render a value as mantissa and power of ten, e.g. ``1.5e+3``.

    The mantissa keeps every significant digit and drops trailing zeros.
    """
    if not value.is_finite():
        raise ValueError(f"Cannot render {value} in exponential notation")
    if value.is_zero():
        return "0e+0"

    sign, digits, exponent = value.normalize(CONTEXT).as_tuple()
    adjusted = exponent + len(digits) - 1
    mantissa = str(digits[0])
    if len(digits) > 1:
        mantissa += "." + "".join(str(d) for d in digits[1:])
    exponent_sign = "-" if adjusted < 0 else "+"
    return f"{'-' if sign else ''}{mantissa}e{exponent_sign}{abs(adjusted)}"


def group_thousands(value: Decimal) -> str:
    """Format an integral value with comma thousands separators."""
    return f"{int(value):,}"
