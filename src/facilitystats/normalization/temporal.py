"""
Mixed-format parsing of last-inspection dates.

A raw value is tried against an ordered chain of parsers, each returning
a date or None. The first date wins; if every parser declines, the value
is unparseable and stays that way (no default date is invented).

Chain:
    1. Spreadsheet serial day number (exactly five digits), accepted only
       when the decoded year lies inside the plausibility window.
    2. Textual formats, in this order:
       9/19/2024, 9-19-2024, 2024-09-19, 19-09-2024, September 19, 2024

Ambiguous values such as "01-02-2024" resolve by format order
(month-day-year first), not by calendar plausibility.
"""

import re
from collections.abc import Callable, Iterable
from datetime import date, datetime, timedelta
from functools import partial
from typing import Any

import pandas as pd

DateParser = Callable[[str], date | None]

# Day 0 of the 1900 spreadsheet date system. Serial 1 is 1899-12-31 here,
# which keeps every serial after the phantom 1900-02-29 aligned with the
# source spreadsheets. Do not "correct" this constant.
SERIAL_EPOCH = date(1899, 12, 30)

MIN_SERIAL_YEAR = 2000
MAX_SERIAL_YEAR = 2030

TEXT_DATE_FORMATS: tuple[str, ...] = (
    "%m/%d/%Y",
    "%m-%d-%Y",
    "%Y-%m-%d",
    "%d-%m-%Y",
    "%B %d, %Y",
)

_SERIAL_PATTERN = re.compile(r"[0-9]{5}")

# Midnight dates a nanosecond timestamp column can hold
EARLIEST_DATE = (pd.Timestamp.min + pd.Timedelta(days=1)).date()
LATEST_DATE = pd.Timestamp.max.date()


def _as_text(value: Any) -> str:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return ""
    return str(value).strip()


def decode_serial(serial: int) -> date:
    """Convert a serial day number to a calendar date."""
    return SERIAL_EPOCH + timedelta(days=serial)


def parse_serial_date(
    value: Any,
    min_year: int = MIN_SERIAL_YEAR,
    max_year: int = MAX_SERIAL_YEAR,
) -> date | None:
    """
    Decode a five-digit serial date.

    Args:
        value: Raw date field.
        min_year: Earliest plausible year (inclusive).
        max_year: Latest plausible year (inclusive).

    Returns:
        The decoded date, or None if the value is not a five-digit serial
        or decodes outside the year window.
    """
    text = _as_text(value)
    if not _SERIAL_PATTERN.fullmatch(text):
        return None
    decoded = decode_serial(int(text))
    if not min_year <= decoded.year <= max_year:
        return None
    return decoded


def _strptime_parser(fmt: str) -> DateParser:
    def parser(text: str) -> date | None:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            return None

    parser.__name__ = f"parse_{fmt}"
    return parser


TEXT_DATE_PARSERS: tuple[DateParser, ...] = tuple(
    _strptime_parser(fmt) for fmt in TEXT_DATE_FORMATS
)


def first_success(parsers: Iterable[DateParser], value: str) -> date | None:
    """Return the result of the first parser that accepts the value."""
    for parser in parsers:
        result = parser(value)
        if result is not None:
            return result
    return None


def parse_text_date(value: Any) -> date | None:
    """Parse a textual date using the fixed format priority."""
    text = _as_text(value)
    if not text:
        return None
    return first_success(TEXT_DATE_PARSERS, text)


def build_date_chain(
    min_year: int = MIN_SERIAL_YEAR,
    max_year: int = MAX_SERIAL_YEAR,
) -> tuple[DateParser, ...]:
    """Build the full parser chain for a given serial year window."""
    return (
        partial(parse_serial_date, min_year=min_year, max_year=max_year),
        parse_text_date,
    )


DEFAULT_DATE_CHAIN = build_date_chain()


def parse_inspection_date(
    value: Any,
    chain: Iterable[DateParser] = DEFAULT_DATE_CHAIN,
) -> date | None:
    """
    Parse a raw last-inspection date.

    Args:
        value: Raw date field.
        chain: Ordered parsers; defaults to serial then textual formats.

    Returns:
        The calendar date, or None when the value is unparseable or lies
        outside EARLIEST_DATE..LATEST_DATE.
    """
    text = _as_text(value)
    if not text:
        return None
    parsed = first_success(chain, text)
    if parsed is None or not EARLIEST_DATE <= parsed <= LATEST_DATE:
        return None
    return parsed
