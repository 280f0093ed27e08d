"""Free-text duration parsing.

The parser is tolerant: it pulls every ``<number><unit>`` pair out of the
text and ignores everything else, so ``"3 days, 4hrs and 5 mins"`` and
``"1h30m"`` both parse. Numbers followed by an unknown unit are dropped
rather than rejected; a text only fails when nothing in it resolves.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from decimal import Decimal
from types import MappingProxyType

from durafmt.core import numeric
from durafmt.core.duration import Duration
from durafmt.core.exceptions import InvalidPatternError
from durafmt.core.formatter import DurationFormatter, exact_arithmetic
from durafmt.core.units import MAGNITUDES, TimeUnit, resolve

logger = logging.getLogger(__name__)

# Signed decimal with optional exponent, optional whitespace, then a run of
# letters (ASCII plus the Greek mu for "μs").
PATTERN_RE = re.compile(r"(-?[0-9]*\.?[0-9]+(?:e[-+]?[0-9]+)?)\s*([a-zμ]*)", re.IGNORECASE)
ARTICLE_RE = re.compile(r"\ban?\b", re.IGNORECASE | re.ASCII)


@dataclass(frozen=True)
class Token:
    """A quantity and the alias that followed it."""

    quantity: Decimal
    alias: str
    unit: TimeUnit | None

    @property
    def is_valid(self) -> bool:
        return self.unit is not None


def normalize(text: str) -> str:
    """Lower-case, drop commas and turn standalone ``a``/``an`` into ``1``.

    Example:
        >>> normalize("An Hour, 1,500 ms")
        '1 hour 1500 ms'
    """
    text = text.lower().replace(",", "")
    return ARTICLE_RE.sub("1", text)


def tokenize(text: str) -> list[Token]:
    """Extract every quantity/alias pair from ``text``.

    Tokens whose alias is unknown are returned with ``unit=None``.

    Example:
        >>> [(str(t.quantity), t.alias) for t in tokenize("2 days, 3 apples")]
        [('2', 'days'), ('3', 'apples')]
    """
    if not isinstance(text, str):
        raise TypeError(f"Duration text must be a string, got {type(text).__name__}")

    tokens: list[Token] = []
    for match in PATTERN_RE.finditer(normalize(text)):
        quantity, alias = match.groups()
        tokens.append(Token(quantity=numeric.to_decimal(quantity), alias=alias, unit=resolve(alias)))
    return tokens


def parse(text: str, formatter: DurationFormatter | None = None) -> Duration:
    """Parse a human-entered duration into an exact Duration.

    Args:
        text: Text such as ``"3 days, 4hrs and 5 mins"`` or ``"a week"``
        formatter: Formatter attached to the result (default: English labels)

    Returns:
        Duration whose magnitude is the sum of quantity x unit over all
        recognised tokens, in milliseconds

    Raises:
        InvalidPatternError: If no token resolves to a known unit
        InvalidDurationError: If the total cannot be held exactly in the
            working precision
        TypeError: If ``text`` is not a string

    Example:
        >>> parse("1h30m").magnitude
        Decimal('5400000')
        >>> parse("a day and a half").verbose()
        '1 day'
    """
    total = numeric.ZERO
    parts: dict[TimeUnit, Decimal] = {}
    valid = False

    for token in tokenize(text):
        if token.unit is None:
            logger.debug(f"Ignoring unknown unit alias '{token.alias}' in {text!r}")
            continue

        with exact_arithmetic(text):
            total = numeric.add(total, numeric.multiply(token.quantity, MAGNITUDES[token.unit]))
            parts[token.unit] = numeric.add(parts.get(token.unit, numeric.ZERO), token.quantity)
        valid = True

    if not valid:
        raise InvalidPatternError(text, details="No number followed by a known unit was found")

    logger.debug(f"Parsed {text!r} as {total} ms")
    return Duration(
        magnitude=total,
        parts=MappingProxyType(parts),
        formatter=formatter or DurationFormatter(),
    )
