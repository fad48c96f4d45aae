"""Tests for population count normalization."""

import math
from decimal import Decimal

import numpy as np
import pytest

from facilitystats.normalization.numeric import (
    normalize_numeric,
    parse_numeric,
    to_two_places,
)


class TestParseNumeric:
    """Tests for parse_numeric."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("12", Decimal("12")),
            ("0.018", Decimal("0.018")),
            ("1.80E-02", Decimal("0.0180")),
            ("1.2e+02", Decimal("120")),
            (" 44 ", Decimal("44")),
            ("+7", Decimal("7")),
        ],
    )
    def test_plain_and_scientific(self, raw: str, expected: Decimal) -> None:
        """Plain decimals and scientific notation parse to the written value."""
        assert parse_numeric(raw) == expected

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("1,5", Decimal("1.5")),
            ("1,234", Decimal("1234")),
            ("1,034.6", Decimal("1034.6")),
            ("12,345,678", Decimal("12345678")),
            ("1.234,5", Decimal("1234.5")),
            ("1 234", Decimal("1234")),
        ],
    )
    def test_separators(self, raw: str, expected: Decimal) -> None:
        """Grouped thousands and decimal commas are both understood."""
        assert parse_numeric(raw) == expected

    @pytest.mark.parametrize(
        "raw",
        [None, math.nan, np.nan, "", "   ", "abc", "1,2,3", "1.2.3", "12abc", "1,23,4"],
    )
    def test_unparseable(self, raw: object) -> None:
        """Missing, blank and malformed values give None."""
        assert parse_numeric(raw) is None

    @pytest.mark.parametrize("raw", ["-3", "-0.5", "inf", "-Infinity", "NaN"])
    def test_negative_and_non_finite(self, raw: str) -> None:
        """Counts cannot be negative or infinite."""
        assert parse_numeric(raw) is None

    def test_negative_zero(self) -> None:
        """Negative zero is zero, not a failure."""
        assert parse_numeric("-0") == Decimal(0)
        assert not parse_numeric("-0").is_signed()

    def test_numeric_input(self) -> None:
        """Already-numeric values are accepted."""
        assert parse_numeric(15) == Decimal("15")


class TestToTwoPlaces:
    """Tests for two-decimal rounding."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("1.80E-02", 0.02),
            ("0.018", 0.02),
            ("2.675", 2.68),
            ("0.125", 0.13),
            ("0.005", 0.01),
            ("0.004", 0.0),
            ("9.999", 10.0),
            ("401.25", 401.25),
        ],
    )
    def test_rounds_half_up(self, raw: str, expected: float) -> None:
        """Halves round away from zero on the written decimal value."""
        assert to_two_places(raw) == expected

    def test_huge_exponent(self) -> None:
        """Values beyond the decimal context are treated as unparseable."""
        assert to_two_places("1E+999999") is None

    def test_failure(self) -> None:
        """Unparseable values give None, not a default."""
        assert to_two_places("N/A") is None


class TestNormalizeNumeric:
    """Tests for normalize_numeric."""

    @pytest.mark.parametrize("raw", [None, "", "   ", "N/A", "abc", "-1"])
    def test_substitutes_zero(self, raw: object) -> None:
        """Missing or unparseable values become 0.0."""
        assert normalize_numeric(raw) == 0.0

    def test_custom_default(self) -> None:
        """The substitute value can be chosen."""
        assert normalize_numeric("", default=-1.0) == -1.0

    def test_result_is_float(self) -> None:
        """Parsed values come back as floats."""
        result = normalize_numeric("1,034.6")
        assert isinstance(result, float)
        assert result == 1034.6

    def test_scientific_and_plain_agree(self) -> None:
        """Equivalent spellings normalize to the same value."""
        assert normalize_numeric("1.80E-02") == normalize_numeric("0.018") == 0.02
