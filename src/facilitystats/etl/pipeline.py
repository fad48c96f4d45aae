"""
Cleaning pipeline implementation.

Raw rows pass through five stages, each a pure DataFrame -> DataFrame
function working column-wise:

    fields -> state codes -> population levels -> inspection dates -> size

Stages never raise on malformed values; a row that needs a fallback is
recorded in the issue frame instead. Aggregation runs only after every
row has been cleaned.
"""

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date
from operator import itemgetter
from pathlib import Path

import pandas as pd

from facilitystats.analysis.summary import SummaryStatistics, summarize
from facilitystats.config.settings import CleaningConfig, PipelineConfig
from facilitystats.etl.export import write_clean_table
from facilitystats.features.size import add_population_features
from facilitystats.ingestion.facilities import load_facilities
from facilitystats.normalization.codes import validate_state
from facilitystats.normalization.columns import (
    CLEAN_COLUMNS,
    LEVEL_COLUMNS,
    RAW_COLUMNS,
    normalize_columns,
    require_columns,
)
from facilitystats.normalization.numeric import to_two_places
from facilitystats.normalization.temporal import (
    DEFAULT_DATE_CHAIN,
    DateParser,
    build_date_chain,
    parse_inspection_date,
)
from facilitystats.normalization.text import (
    CITY_CORRECTIONS,
    NAME_RULES,
    NameRule,
    compile_name_rules,
    merge_city_corrections,
    normalize_city,
    normalize_name,
)
from facilitystats.schemas.facilities import CleanFacilitySchema
from facilitystats.utils.logging import get_logger, log_context

log = get_logger(__name__)

ISSUE_COLUMNS: tuple[str, ...] = (
    "invalid_state",
    "numeric_substituted",
    "unparseable_date",
)


@dataclass
class CleanResult:
    """
    Result of cleaning a raw facility table.

    Attributes:
        table: Cleaned table (CleanFacilitySchema).
        issues: Per-row flags, one column per issue kind plus 'any'.
    """

    table: pd.DataFrame
    issues: pd.DataFrame

    @property
    def issue_count(self) -> int:
        """Rows that needed at least one fallback substitution."""
        return int(self.issues["any"].sum())

    def issue_breakdown(self) -> dict[str, int]:
        """Number of rows affected by each issue kind."""
        return {name: int(self.issues[name].sum()) for name in ISSUE_COLUMNS}

    def __iter__(self) -> Iterator[object]:
        """Unpack as (table, issue_count)."""
        return iter((self.table, self.issue_count))


@dataclass
class PipelineResult:
    """
    Result of a full pipeline run.

    Attributes:
        cleaned: Clean table and issue flags.
        summary: Aggregates over the clean table.
        source_path: File the raw table was read from.
        output_path: Where the clean table was written, if anywhere.
        warnings: Human-readable notes for the CLI.
    """

    cleaned: CleanResult
    summary: SummaryStatistics
    source_path: Path
    output_path: Path | None = None
    warnings: list[str] = field(default_factory=list)


def normalize_fields(
    df: pd.DataFrame,
    name_rules: Sequence[NameRule] = NAME_RULES,
    city_corrections: Mapping[str, str] = CITY_CORRECTIONS,
) -> pd.DataFrame:
    """Normalize facility names and cities."""
    df = df.copy()
    df["name"] = df["name"].map(lambda value: normalize_name(value, name_rules))
    df["city"] = df["city"].map(lambda value: normalize_city(value, city_corrections))
    return df.astype({"name": str, "city": str})


def validate_states(df: pd.DataFrame) -> pd.DataFrame:
    """Normalize state codes and add the state_valid flag."""
    df = df.copy()
    checked = df["state"].map(validate_state)
    df["state"] = checked.map(itemgetter(0)).astype(str)
    df["state_valid"] = checked.map(itemgetter(1)).astype(bool)
    return df


def normalize_levels(
    df: pd.DataFrame, default: float = 0.0
) -> tuple[pd.DataFrame, pd.Series]:
    """
    Normalize the four population levels.

    Returns:
        Tuple of (frame with float levels, per-row flag set where any level
        fell back to the default).
    """
    df = df.copy()
    substituted = pd.Series(False, index=df.index)
    for column in LEVEL_COLUMNS:
        parsed = df[column].map(to_two_places)
        missing = parsed.isna()
        substituted |= missing
        df[column] = parsed.where(~missing, default).astype(float)
    return df, substituted


def parse_dates(
    df: pd.DataFrame, chain: Iterable[DateParser] = DEFAULT_DATE_CHAIN
) -> pd.DataFrame:
    """Decode last-inspection dates and add the date_valid flag."""
    df = df.copy()
    chain = tuple(chain)
    parsed = df["last_inspection_date"].map(
        lambda value: parse_inspection_date(value, chain)
    )
    df["last_inspection_date"] = pd.to_datetime(
        parsed.map(lambda day: pd.NaT if day is None else pd.Timestamp(day))
    )
    df["date_valid"] = df["last_inspection_date"].notna()
    return df


def clean(raw: pd.DataFrame, config: CleaningConfig | None = None) -> CleanResult:
    """
    Clean a raw facility table.

    Args:
        raw: Table with RAW_COLUMNS, or their source header spellings
            (extra columns are dropped).
        config: Optional per-source cleaning tables and date window.

    Returns:
        CleanResult with the validated clean table and per-row issue flags.

    Raises:
        ValueError: If a raw column is missing.
    """
    raw = normalize_columns(raw)
    require_columns(raw, RAW_COLUMNS)
    config = config or CleaningConfig()

    name_rules = compile_name_rules(config.name_rules)
    city_corrections = merge_city_corrections(config.city_corrections)
    chain = build_date_chain(config.dates.min_year, config.dates.max_year)

    df = raw.loc[:, list(RAW_COLUMNS)]
    df = normalize_fields(df, name_rules, city_corrections)
    df = validate_states(df)
    df, numeric_substituted = normalize_levels(df)
    df = parse_dates(df, chain)
    df = add_population_features(df)

    table = CleanFacilitySchema.validate(df.loc[:, list(CLEAN_COLUMNS)])

    issues = pd.DataFrame(
        {
            "invalid_state": ~table["state_valid"],
            "numeric_substituted": numeric_substituted,
            "unparseable_date": ~table["date_valid"],
        },
        index=table.index,
    )
    issues["any"] = issues.any(axis=1)

    result = CleanResult(table=table, issues=issues)
    log.info(
        "Cleaned facilities",
        rows=len(table),
        issues=result.issue_count,
        **result.issue_breakdown(),
    )
    return result


class CleaningPipeline:
    """
    End-to-end run: load, clean, export, summarize.

    Loading and writing happen here; clean() itself does no I/O.
    """

    def __init__(self, config: PipelineConfig) -> None:
        """
        Initialize the pipeline.

        Args:
            config: Pipeline configuration.
        """
        self.config = config

    def run(
        self,
        output_path: Path | None = None,
        *,
        write_output: bool = True,
        reference_date: date | None = None,
    ) -> PipelineResult:
        """
        Run the full pipeline.

        Args:
            output_path: Where to write the clean table. Defaults to the
                project's clean_table_path.
            write_output: Skip writing when False.
            reference_date: Overrides the configured inspection-age reference.

        Returns:
            PipelineResult with clean table, issues and summary.
        """
        source = self.config.input.path
        with log_context(project=self.config.project, source=source.name):
            raw = load_facilities(self.config)
            cleaned = clean(raw, self.config.cleaning)

            written: Path | None = None
            if write_output:
                written = write_clean_table(
                    cleaned.table,
                    output_path or self.config.clean_table_path,
                    delimiter=self.config.output.delimiter,
                )

            summary = summarize(
                cleaned.table,
                reference_date=reference_date or self.config.summary.reference_date,
                valid_states_only=self.config.summary.valid_states_only,
            )

        warnings = []
        if cleaned.issue_count:
            warnings.append(
                f"{cleaned.issue_count} of {len(cleaned.table)} rows needed a fallback"
            )

        return PipelineResult(
            cleaned=cleaned,
            summary=summary,
            source_path=source,
            output_path=written,
            warnings=warnings,
        )


def run_pipeline(
    config: PipelineConfig,
    output_path: Path | None = None,
    *,
    write_output: bool = True,
) -> PipelineResult:
    """
    Convenience function to run the cleaning pipeline.

    Args:
        config: Pipeline configuration.
        output_path: Optional path for the clean CSV.
        write_output: Whether to write the clean CSV.

    Returns:
        PipelineResult.
    """
    return CleaningPipeline(config).run(output_path, write_output=write_output)
