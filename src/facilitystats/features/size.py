"""
Derived population features.

Features are declared with their dependencies so the pipeline can check
inputs before computing them.
"""

import math
from collections.abc import Callable
from dataclasses import dataclass

import pandas as pd

from facilitystats.normalization.columns import LEVEL_COLUMNS
from facilitystats.utils.logging import get_logger

log = get_logger(__name__)

SIZE_LABELS: tuple[str, ...] = (
    "Very Small (<100)",
    "Small (100-499)",
    "Medium (500-999)",
    "Large (1000+)",
)

# Left-closed intervals: [100, 500) is Small, 1000 and above is Large
SIZE_BINS: tuple[float, ...] = (-math.inf, 100, 500, 1000, math.inf)

SIZE_DTYPE = pd.CategoricalDtype(categories=list(SIZE_LABELS), ordered=True)


@dataclass(frozen=True)
class DerivedFeature:
    """
    Definition of a derived feature.

    Attributes:
        name: Feature name (column name in output).
        formula: Function that computes the feature from a DataFrame.
        dependencies: Columns required for computation.
        description: Human-readable description.
    """

    name: str
    formula: Callable[[pd.DataFrame], pd.Series]
    dependencies: tuple[str, ...]
    description: str = ""


def classify_facility_size(total: float) -> str:
    """Bucket a total population into its facility size label."""
    if total >= 1000:
        return SIZE_LABELS[3]
    if total >= 500:
        return SIZE_LABELS[2]
    if total >= 100:
        return SIZE_LABELS[1]
    return SIZE_LABELS[0]


def classify_series(totals: pd.Series) -> pd.Series:
    """Vectorised classify_facility_size returning an ordered categorical."""
    sizes = pd.cut(totals, bins=list(SIZE_BINS), labels=list(SIZE_LABELS), right=False)
    return sizes.astype(SIZE_DTYPE)


def total_population(df: pd.DataFrame) -> pd.Series:
    """Sum of the four security-level counts, kept at two decimals."""
    return df[list(LEVEL_COLUMNS)].sum(axis=1).round(2)


# Order matters: facility_size reads total_population
DERIVED_FEATURES: tuple[DerivedFeature, ...] = (
    DerivedFeature(
        name="total_population",
        formula=total_population,
        dependencies=LEVEL_COLUMNS,
        description="Detainees across all security levels",
    ),
    DerivedFeature(
        name="facility_size",
        formula=lambda df: classify_series(df["total_population"]),
        dependencies=("total_population",),
        description="Ordered size bucket of total_population",
    ),
)


def add_population_features(df: pd.DataFrame) -> pd.DataFrame:
    """
    Add total_population and facility_size to a frame of normalized levels.

    Args:
        df: DataFrame with the four level columns.

    Returns:
        Copy of df with the derived columns.

    Raises:
        ValueError: If a level column is missing.
    """
    df = df.copy()
    for feature in DERIVED_FEATURES:
        missing = [col for col in feature.dependencies if col not in df.columns]
        if missing:
            msg = f"Cannot compute {feature.name}: missing {missing}"
            raise ValueError(msg)
        df[feature.name] = feature.formula(df)
        log.debug("Computed derived feature", feature=feature.name)
    return df
