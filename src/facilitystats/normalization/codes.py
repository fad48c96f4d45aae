"""
State code validation.

Codes are normalized and flagged, never corrected: an unknown code is
kept as-is with its validity flag set to False.
"""

import re
from typing import Any

import pandas as pd

VALID_STATE_CODES: frozenset[str] = frozenset(
    {
        "AL", "AK", "AZ", "AR", "CA", "CO", "CT", "DE", "FL", "GA",
        "HI", "ID", "IL", "IN", "IA", "KS", "KY", "LA", "ME", "MD",
        "MA", "MI", "MN", "MS", "MO", "MT", "NE", "NV", "NH", "NJ",
        "NM", "NY", "NC", "ND", "OH", "OK", "OR", "PA", "RI", "SC",
        "SD", "TN", "TX", "UT", "VT", "VA", "WA", "WV", "WI", "WY",
        # District of Columbia and territories
        "DC", "PR", "GU", "MP", "VI",
    }
)

_NON_ALPHA = re.compile(r"[^A-Za-z]")


def normalize_state(value: Any) -> str:
    """Strip everything but letters and uppercase."""
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return ""
    return _NON_ALPHA.sub("", str(value)).upper()


def validate_state(value: Any) -> tuple[str, bool]:
    """
    Normalize a state code and check it against the reference set.

    Args:
        value: Raw state field.

    Returns:
        Tuple of (normalized code, is valid).
    """
    code = normalize_state(value)
    return code, code in VALID_STATE_CODES
