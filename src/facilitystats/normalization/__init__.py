"""
Field-level normalization for raw facility records.

Free text, state codes, population counts and inspection dates are each
handled by a pure function that never raises on malformed input.
"""

from facilitystats.normalization.codes import VALID_STATE_CODES, validate_state
from facilitystats.normalization.numeric import normalize_numeric, parse_numeric
from facilitystats.normalization.temporal import (
    SERIAL_EPOCH,
    parse_inspection_date,
    parse_serial_date,
    parse_text_date,
)
from facilitystats.normalization.text import (
    normalize_city,
    normalize_name,
    normalize_text,
)

__all__ = [
    "SERIAL_EPOCH",
    "VALID_STATE_CODES",
    "normalize_city",
    "normalize_name",
    "normalize_numeric",
    "normalize_text",
    "parse_inspection_date",
    "parse_numeric",
    "parse_serial_date",
    "parse_text_date",
    "validate_state",
]
