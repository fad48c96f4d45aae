"""
Descriptive aggregates over the cleaned facility table.

All functions expect a table conforming to CleanFacilitySchema and are
order-independent, so they may only run once every row has been cleaned.
"""

from dataclasses import dataclass
from datetime import date

import pandas as pd

from facilitystats.features.size import SIZE_LABELS
from facilitystats.normalization.columns import LEVEL_COLUMNS, LEVEL_LABELS
from facilitystats.utils.logging import get_logger

log = get_logger(__name__)


@dataclass
class InspectionAge:
    """
    Age of the last inspection, in days before the reference date.

    Attributes:
        reference_date: Date ages are measured against.
        n_parsed: Rows with a decoded inspection date.
        n_unparseable: Rows whose date could not be decoded.
        mean_days: Mean age (None if no dates).
        median_days: Median age (None if no dates).
        min_days: Most recent inspection (None if no dates).
        max_days: Oldest inspection (None if no dates).
        pct_over_one_year: Share of dated rows older than 365 days.
    """

    reference_date: date
    n_parsed: int
    n_unparseable: int
    mean_days: float | None = None
    median_days: float | None = None
    min_days: int | None = None
    max_days: int | None = None
    pct_over_one_year: float | None = None


@dataclass
class SummaryStatistics:
    """Bundle of all aggregates over one clean table."""

    n_facilities: int
    total_population: float
    sizes: pd.DataFrame
    levels: pd.DataFrame
    states: pd.DataFrame
    inspection: InspectionAge


def _percent(part: pd.Series, whole: float) -> pd.Series:
    if whole == 0:
        return pd.Series(0.0, index=part.index)
    return part / whole * 100


def size_distribution(df: pd.DataFrame) -> pd.DataFrame:
    """
    Facility count and share per size bucket.

    Returns:
        DataFrame with columns facility_size, facilities, percent; one row
        per bucket in size order, including empty buckets.
    """
    counts = (
        df["facility_size"]
        .astype(str)
        .value_counts()
        .reindex(list(SIZE_LABELS), fill_value=0)
        .astype(int)
    )
    return pd.DataFrame(
        {
            "facility_size": list(SIZE_LABELS),
            "facilities": counts.to_numpy(),
            "percent": _percent(counts, len(df)).to_numpy(),
        }
    )


def level_distribution(df: pd.DataFrame) -> pd.DataFrame:
    """
    Population and share of the total population per security level.

    Returns:
        DataFrame with columns level, population, percent.
    """
    totals = df[list(LEVEL_COLUMNS)].sum().round(2)
    return pd.DataFrame(
        {
            "level": [LEVEL_LABELS[col] for col in LEVEL_COLUMNS],
            "population": totals.to_numpy(),
            "percent": _percent(totals, float(totals.sum())).to_numpy(),
        }
    )


def state_distribution(df: pd.DataFrame, *, valid_only: bool = False) -> pd.DataFrame:
    """
    Facilities and population per state.

    Rows with an empty state are always excluded. Rows with a non-empty
    but unknown code are kept (flagged via state_valid) unless valid_only.

    Returns:
        DataFrame with columns state, state_valid, facilities, population,
        percent, sorted by facility count descending.
    """
    subset = df[df["state"].fillna("") != ""]
    if valid_only:
        subset = subset[subset["state_valid"]]

    if subset.empty:
        return pd.DataFrame(
            columns=["state", "state_valid", "facilities", "population", "percent"]
        )

    grouped = subset.groupby("state", sort=True).agg(
        state_valid=("state_valid", "first"),
        facilities=("name", "size"),
        population=("total_population", "sum"),
    )
    grouped["population"] = grouped["population"].round(2)
    grouped["percent"] = _percent(grouped["facilities"], len(subset))
    grouped = grouped.reset_index()
    return grouped.sort_values(
        ["facilities", "state"], ascending=[False, True], kind="stable"
    ).reset_index(drop=True)


def inspection_ages(df: pd.DataFrame, reference_date: date) -> pd.Series:
    """Days between each decoded inspection date and the reference date."""
    dates = df.loc[df["date_valid"], "last_inspection_date"]
    return (pd.Timestamp(reference_date) - dates).dt.days


def inspection_age(df: pd.DataFrame, reference_date: date | None = None) -> InspectionAge:
    """
    Summarize inspection age.

    Args:
        df: Clean facility table.
        reference_date: Date to measure against (defaults to today).

    Returns:
        InspectionAge statistics.
    """
    reference_date = reference_date or date.today()
    ages = inspection_ages(df, reference_date)
    n_unparseable = int((~df["date_valid"]).sum())

    if ages.empty:
        return InspectionAge(
            reference_date=reference_date,
            n_parsed=0,
            n_unparseable=n_unparseable,
        )

    return InspectionAge(
        reference_date=reference_date,
        n_parsed=len(ages),
        n_unparseable=n_unparseable,
        mean_days=float(ages.mean()),
        median_days=float(ages.median()),
        min_days=int(ages.min()),
        max_days=int(ages.max()),
        pct_over_one_year=float((ages > 365).mean() * 100),
    )


def summarize(
    df: pd.DataFrame,
    *,
    reference_date: date | None = None,
    valid_states_only: bool = False,
) -> SummaryStatistics:
    """
    Compute every aggregate over a clean table.

    Args:
        df: Clean facility table.
        reference_date: Inspection-age reference (defaults to today).
        valid_states_only: Drop unknown state codes from the state breakdown.

    Returns:
        SummaryStatistics.
    """
    summary = SummaryStatistics(
        n_facilities=len(df),
        total_population=round(float(df["total_population"].sum()), 2),
        sizes=size_distribution(df),
        levels=level_distribution(df),
        states=state_distribution(df, valid_only=valid_states_only),
        inspection=inspection_age(df, reference_date),
    )
    log.info(
        "Summarized facilities",
        facilities=summary.n_facilities,
        population=summary.total_population,
        states=len(summary.states),
    )
    return summary
