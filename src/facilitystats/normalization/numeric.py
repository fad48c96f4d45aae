"""
Numeric normalization for population counts.

Source values mix plain decimals, scientific notation ("1.80E-02"),
decimal commas and thousands grouping. Parsing goes through Decimal so
that rounding acts on the written value, not on its binary approximation.

Rounding is ROUND_HALF_UP to two decimals: "2.675" -> 2.68, "0.125" -> 0.13.
"""

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

import pandas as pd

TWO_PLACES = Decimal("0.01")

# "1,234" and "1,234.5" are grouped thousands, not decimal commas
_COMMA_GROUPED = re.compile(r"^[+-]?\d{1,3}(,\d{3})+(\.\d+)?$")
# "1.234,5" is European grouping with a decimal comma
_PERIOD_GROUPED = re.compile(r"^[+-]?\d{1,3}(\.\d{3})+,\d+$")
_INNER_SPACE = re.compile(r"\s+")


def _canonical_separators(text: str) -> str | None:
    """Rewrite separators to plain decimal notation, or None if ambiguous."""
    if "," not in text:
        return text
    if _COMMA_GROUPED.match(text):
        return text.replace(",", "")
    if _PERIOD_GROUPED.match(text):
        return text.replace(".", "").replace(",", ".")
    if text.count(",") == 1 and "." not in text:
        return text.replace(",", ".")
    return None


def parse_numeric(value: Any) -> Decimal | None:
    """
    Parse a raw numeric string into a non-negative Decimal.

    Args:
        value: Raw field value (string, number or missing).

    Returns:
        The parsed value, or None when the input is missing, blank,
        unparseable, non-finite or negative.
    """
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return None

    text = _INNER_SPACE.sub("", str(value))
    if not text:
        return None

    canonical = _canonical_separators(text)
    if canonical is None:
        return None

    try:
        number = Decimal(canonical)
    except InvalidOperation:
        return None

    if not number.is_finite() or number < 0:
        return None
    if number == 0:
        return Decimal(0)
    return number


def to_two_places(value: Any) -> float | None:
    """Parse and round to two decimals, or None when a default is needed."""
    number = parse_numeric(value)
    if number is None:
        return None
    try:
        return float(number.quantize(TWO_PLACES, rounding=ROUND_HALF_UP))
    except InvalidOperation:
        # Exponent too large for the decimal context
        return None


def normalize_numeric(value: Any, default: float = 0.0) -> float:
    """
    Parse and round a raw numeric string, substituting a default on failure.

    Missing population data means nobody is held at that level, so the
    default is 0.0.
    """
    rounded = to_two_places(value)
    return default if rounded is None else rounded
