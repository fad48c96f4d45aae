"""
Free-text normalization for facility names and cities.

Strips noise characters, collapses whitespace, uppercases, then applies
the name abbreviation rules or the city spelling corrections.
"""

import re
from collections.abc import Iterable, Mapping, Sequence
from types import MappingProxyType
from typing import Any

import pandas as pd

NameRule = tuple[re.Pattern[str], str]

# Whitespace survives this pass so it can be collapsed afterwards
_DISALLOWED_CHARS = re.compile(r"[^A-Za-z0-9\s\-,.()]")
_WHITESPACE_RUN = re.compile(r"\s+")

# Ordered by priority; the first matching rule is the only one applied.
# No replacement may itself match a pattern, otherwise normalization
# stops being idempotent. Common multi-token abbreviations come first so
# they expand in one step.
NAME_RULES: tuple[NameRule, ...] = tuple(
    (re.compile(pattern), replacement)
    for pattern, replacement in (
        (r"\bCO DET (?:CTR|CNTR)\b", "COUNTY DETENTION CENTER"),
        (r"\bCO DET FAC\b", "COUNTY DETENTION FACILITY"),
        (r"\bCO CORR (?:CTR|CNTR)\b", "COUNTY CORRECTIONAL CENTER"),
        (r"\bCO CORR FAC\b", "COUNTY CORRECTIONAL FACILITY"),
        (r"\bDET (?:CTR|CNTR)\b", "DETENTION CENTER"),
        (r"\bDET FAC\b", "DETENTION FACILITY"),
        (r"\bCORR (?:CTR|CNTR)\b", "CORRECTIONAL CENTER"),
        (r"\bCORR FAC\b", "CORRECTIONAL FACILITY"),
        (r"\bPROC (?:CTR|CNTR)\b", "PROCESSING CENTER"),
        (r"\bSPC\b", "SERVICE PROCESSING CENTER"),
        (r"\bIPC\b", "IMMIGRATION PROCESSING CENTER"),
        (r"\bCDF\b", "CONTRACT DETENTION FACILITY"),
        (r"\bCTR\b", "CENTER"),
        (r"\bCNTR\b", "CENTER"),
        (r"\bDET\b", "DETENTION"),
        (r"\bCORR\b", "CORRECTIONAL"),
        (r"\bFAC\b", "FACILITY"),
        (r"\bPROC\b", "PROCESSING"),
        (r"\bCO\b", "COUNTY"),
    )
)

CITY_CORRECTIONS: Mapping[str, str] = MappingProxyType(
    {
        "FTLAUDERDALE": "FORT LAUDERDALE",
        "FT LAUDERDALE": "FORT LAUDERDALE",
        "FT. LAUDERDALE": "FORT LAUDERDALE",
        "FT WORTH": "FORT WORTH",
        "FT. WORTH": "FORT WORTH",
        "ELPASO": "EL PASO",
        "LOSANGELES": "LOS ANGELES",
        "SANDIEGO": "SAN DIEGO",
        "SANANTONIO": "SAN ANTONIO",
        "NEWYORK": "NEW YORK",
        "ST LOUIS": "SAINT LOUIS",
        "ST. LOUIS": "SAINT LOUIS",
    }
)


def normalize_text(value: Any) -> str:
    """
    Reduce a raw text field to the allowed character set.

    Keeps letters, digits, spaces, hyphens, commas, periods and
    parentheses; collapses whitespace; trims; uppercases.
    Missing values become an empty string.
    """
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return ""
    text = _DISALLOWED_CHARS.sub("", str(value))
    return _WHITESPACE_RUN.sub(" ", text).strip().upper()


def compile_name_rules(
    extra: Iterable[tuple[str, str]] = (),
    base: Sequence[NameRule] = NAME_RULES,
) -> tuple[NameRule, ...]:
    """
    Build a rule table with extra rules ahead of the built-in ones.

    Args:
        extra: (regex, replacement) pairs, matched against uppercase text.
        base: Rules evaluated after the extra ones.

    Returns:
        Ordered rule table.
    """
    compiled = tuple(
        (re.compile(pattern), replacement.upper()) for pattern, replacement in extra
    )
    return compiled + tuple(base)


def merge_city_corrections(
    extra: Mapping[str, str] | None = None,
    base: Mapping[str, str] = CITY_CORRECTIONS,
) -> Mapping[str, str]:
    """Overlay extra corrections on the built-in table."""
    if not extra:
        return base
    merged = dict(base)
    merged.update({k.upper(): v.upper() for k, v in extra.items()})
    return MappingProxyType(merged)


def expand_name(value: str, rules: Sequence[NameRule] = NAME_RULES) -> str:
    """
    Apply the first matching abbreviation rule.

    Every occurrence of the winning pattern is replaced; later rules are
    not consulted even if they would match.
    """
    for pattern, replacement in rules:
        if pattern.search(value):
            return pattern.sub(replacement, value)
    return value


def correct_city(value: str, corrections: Mapping[str, str] = CITY_CORRECTIONS) -> str:
    """Map a known misspelling to its canonical form; pass others through."""
    return corrections.get(value.upper(), value)


def normalize_name(value: Any, rules: Sequence[NameRule] = NAME_RULES) -> str:
    """Normalize a facility name."""
    return expand_name(normalize_text(value), rules)


def normalize_city(
    value: Any, corrections: Mapping[str, str] = CITY_CORRECTIONS
) -> str:
    """Normalize a city name."""
    return correct_city(normalize_text(value), corrections)
