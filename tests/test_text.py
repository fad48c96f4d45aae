"""Tests for facility name and city normalization."""

import math
import re

import pytest

from facilitystats.normalization.text import (
    CITY_CORRECTIONS,
    NAME_RULES,
    compile_name_rules,
    correct_city,
    expand_name,
    merge_city_corrections,
    normalize_city,
    normalize_name,
    normalize_text,
)


class TestNormalizeText:
    """Tests for the shared character/whitespace/case pass."""

    def test_strips_noise_and_collapses_whitespace(self) -> None:
        """Disallowed characters vanish and whitespace runs become one space."""
        assert normalize_text("  b^aker   county\tctr ") == "BAKER COUNTY CTR"

    def test_keeps_allowed_punctuation(self) -> None:
        """Hyphens, commas, periods and parentheses survive."""
        assert normalize_text("St. Mary's (North), Bldg-2") == "ST. MARYS (NORTH), BLDG-2"

    @pytest.mark.parametrize("value", [None, math.nan, "", "   ", "^^*"])
    def test_missing_or_empty(self, value: object) -> None:
        """Missing values and noise-only strings become empty."""
        assert normalize_text(value) == ""

    def test_non_string_input(self) -> None:
        """Numbers are normalized through their string form."""
        assert normalize_text(123) == "123"


class TestExpandName:
    """Tests for the abbreviation rule table."""

    def test_expands_abbreviation(self) -> None:
        """A recognized abbreviation is replaced."""
        assert expand_name("BAKER COUNTY CTR") == "BAKER COUNTY CENTER"

    def test_first_matching_rule_wins(self) -> None:
        """Only the first matching rule applies; later ones are ignored."""
        assert expand_name("ANNEX CTR CO") == "ANNEX CENTER CO"

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("STEWART DET CTR", "STEWART DETENTION CENTER"),
            ("CAROLINE DET FAC", "CAROLINE DETENTION FACILITY"),
            ("HARRIS CO DET CNTR", "HARRIS COUNTY DETENTION CENTER"),
            ("PINE PRAIRIE CORR FAC", "PINE PRAIRIE CORRECTIONAL FACILITY"),
            ("OTERO PROC CTR", "OTERO PROCESSING CENTER"),
        ],
    )
    def test_compound_abbreviations(self, raw: str, expected: str) -> None:
        """Common abbreviation pairs expand together in a single rule."""
        assert expand_name(raw) == expected

    def test_replaces_every_occurrence_of_winner(self) -> None:
        """All occurrences of the winning pattern are replaced."""
        assert expand_name("CTR ANNEX CTR") == "CENTER ANNEX CENTER"

    def test_word_boundaries(self) -> None:
        """Abbreviations inside longer words are left alone."""
        assert expand_name("CTRL FACILITIES") == "CTRL FACILITIES"
        assert expand_name("COUNTY JAIL") == "COUNTY JAIL"

    def test_no_match_passes_through(self) -> None:
        """Names without abbreviations are unchanged."""
        assert expand_name("ADELANTO ICE PROCESSING CENTER") == (
            "ADELANTO ICE PROCESSING CENTER"
        )

    def test_replacements_never_match_a_rule(self) -> None:
        """No built-in replacement re-triggers a built-in pattern."""
        for _, replacement in NAME_RULES:
            assert all(not pattern.search(replacement) for pattern, _ in NAME_RULES)


class TestNormalizeName:
    """Tests for full name normalization."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("B^AKER COUNTY CTR", "BAKER COUNTY CENTER"),
            ("krome north spc", "KROME NORTH SERVICE PROCESSING CENTER"),
            ("Otero County PROC Center", "OTERO COUNTY PROCESSING CENTER"),
            ("caroline det fac", "CAROLINE DETENTION FACILITY"),
            ("ELOY FEDERAL CONTRACT FACILITY", "ELOY FEDERAL CONTRACT FACILITY"),
        ],
    )
    def test_examples(self, raw: str, expected: str) -> None:
        """Normalization of representative raw names."""
        assert normalize_name(raw) == expected

    @pytest.mark.parametrize(
        "raw",
        [
            "B^AKER COUNTY CTR",
            "KROME NORTH SPC",
            "ELIZABETH CDF",
            "pine prairie corr",
            "  york   co  ",
            "STEWART DET CTR",
            "CAROLINE DET FAC",
            "harris co det ctr",
            "Pine Prairie Corr Ctr",
            "",
        ],
    )
    def test_idempotent(self, raw: str) -> None:
        """Normalizing twice gives the same result as normalizing once."""
        once = normalize_name(raw)
        assert normalize_name(once) == once

    def test_extra_rules_run_first(self) -> None:
        """Configured rules are evaluated ahead of the built-in table."""
        rules = compile_name_rules([(r"\bFED\b", "federal")])
        assert normalize_name("fed detention", rules) == "FEDERAL DETENTION"
        assert rules[1:] == NAME_RULES

    def test_extra_rules_are_compiled(self) -> None:
        """Patterns are compiled once when the table is built."""
        rules = compile_name_rules([(r"\bX\b", "Y")])
        assert isinstance(rules[0][0], re.Pattern)


class TestNormalizeCity:
    """Tests for city spelling correction."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("FTLAUDERDALE", "FORT LAUDERDALE"),
            ("ft   lauderdale", "FORT LAUDERDALE"),
            ("Ft. Lauderdale", "FORT LAUDERDALE"),
            ("elpaso", "EL PASO"),
            ("St. Louis", "SAINT LOUIS"),
        ],
    )
    def test_known_misspellings(self, raw: str, expected: str) -> None:
        """Known misspellings map to their canonical spelling."""
        assert normalize_city(raw) == expected

    def test_unknown_city_passes_through(self) -> None:
        """Cities outside the table are only normalized."""
        assert normalize_city(" miami ") == "MIAMI"

    def test_exact_match_only(self) -> None:
        """Corrections are not applied to substrings."""
        assert correct_city("FTLAUDERDALE BEACH") == "FTLAUDERDALE BEACH"

    def test_corrections_are_read_only(self) -> None:
        """The built-in table cannot be modified in place."""
        with pytest.raises(TypeError):
            CITY_CORRECTIONS["X"] = "Y"  # type: ignore[index]

    def test_merge_overrides_builtin(self) -> None:
        """Extra corrections win on key collision and keep the rest."""
        merged = merge_city_corrections(
            {"bowlinggreen": "bowling green", "ELPASO": "EL PASO TX"}
        )
        assert merged["BOWLINGGREEN"] == "BOWLING GREEN"
        assert merged["ELPASO"] == "EL PASO TX"
        assert merged["FTLAUDERDALE"] == "FORT LAUDERDALE"
        assert CITY_CORRECTIONS["ELPASO"] == "EL PASO"

    def test_merge_without_extras_returns_base(self) -> None:
        """No extras means the built-in table is used unchanged."""
        assert merge_city_corrections(None) is CITY_CORRECTIONS
        assert merge_city_corrections({}) is CITY_CORRECTIONS
