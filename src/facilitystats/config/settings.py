"""
Typed configuration models using Pydantic.

All configuration is defined here with explicit typing and validation.
Reference tables that ship with the code (state codes, built-in name
rules) are not configuration; only per-source adjustments live here.
"""

from datetime import date
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_NULL_TOKENS: tuple[str, ...] = ("", " ", "NA", "N/A")


class InputConfig(BaseModel):
    """Raw facility file layout."""

    model_config = ConfigDict(frozen=True)

    path: Path = Field(description="Path to the raw facility file")
    delimiter: str = Field(default=",", min_length=1, max_length=1)
    preamble_rows: int = Field(
        default=0, ge=0, description="Metadata lines before the column header"
    )
    has_header: bool = Field(
        default=True, description="Whether a column header row follows the preamble"
    )
    encoding: str = Field(default="utf-8")
    null_tokens: list[str] = Field(default_factory=lambda: list(DEFAULT_NULL_TOKENS))


class DateConfig(BaseModel):
    """Plausibility window for spreadsheet serial dates."""

    model_config = ConfigDict(frozen=True)

    min_year: int = Field(default=2000, ge=1900, le=9999)
    max_year: int = Field(default=2030, ge=1900, le=9999)

    @field_validator("max_year")
    @classmethod
    def validate_year_window(cls, v: int, info: Any) -> int:
        """Ensure the window is not empty."""
        if "min_year" in info.data and v < info.data["min_year"]:
            msg = "max_year must not be before min_year"
            raise ValueError(msg)
        return v


class CleaningConfig(BaseModel):
    """Per-source additions to the built-in cleaning tables."""

    model_config = ConfigDict(frozen=True)

    # Evaluated before the built-in rules, in the order given
    name_rules: list[tuple[str, str]] = Field(
        default_factory=list,
        description="Extra (regex, replacement) rules for facility names",
    )
    # Override built-in corrections on key collision
    city_corrections: dict[str, str] = Field(
        default_factory=dict,
        description="Extra exact-match city spelling corrections",
    )
    dates: DateConfig = Field(default_factory=DateConfig)

    @field_validator("city_corrections")
    @classmethod
    def uppercase_city_keys(cls, v: dict[str, str]) -> dict[str, str]:
        """Lookups happen on uppercased values, so keys must be uppercase too."""
        return {key.strip().upper(): value.strip().upper() for key, value in v.items()}


class SummaryConfig(BaseModel):
    """Aggregation options."""

    model_config = ConfigDict(frozen=True)

    reference_date: date | None = Field(
        default=None,
        description="Date inspection age is measured against (defaults to today)",
    )
    valid_states_only: bool = Field(
        default=False,
        description="Drop rows with an unknown state code from the state breakdown",
    )
    top_states: int = Field(default=15, ge=1, le=60)


class OutputConfig(BaseModel):
    """Output paths configuration.

    Structure: ./output/{project}/facilities_clean.csv, ./output/{project}/plots
    """

    model_config = ConfigDict(frozen=True)

    output_root: Path = Field(
        default=Path("./output"), description="Root directory for all outputs"
    )
    delimiter: str = Field(
        default=",", min_length=1, max_length=1, description="Clean CSV separator"
    )


class PipelineConfig(BaseModel):
    """Complete pipeline configuration."""

    model_config = ConfigDict(frozen=True)

    project: str = Field(description="Project identifier (e.g., 'facilities-2024')")

    input: InputConfig
    cleaning: CleaningConfig = Field(default_factory=CleaningConfig)
    summary: SummaryConfig = Field(default_factory=SummaryConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @property
    def project_dir(self) -> Path:
        """Path to the project output directory."""
        return self.output.output_root / self.project

    @property
    def clean_table_path(self) -> Path:
        """Default path of the cleaned CSV."""
        return self.project_dir / "facilities_clean.csv"

    @property
    def plots_dir(self) -> Path:
        """Path to plots output directory."""
        return self.project_dir / "plots"

    @property
    def report_path(self) -> Path:
        """Path of the Markdown summary."""
        return self.project_dir / "summary.md"
