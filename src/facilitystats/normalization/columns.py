"""
Column naming for the raw, clean and exported facility tables.

Internally every table uses snake_case names. Source files and the
published export use their own spellings; the mappings here translate
between them.
"""

from collections.abc import Iterable, Mapping

import pandas as pd

from facilitystats.utils.logging import get_logger

log = get_logger(__name__)

LEVEL_COLUMNS: tuple[str, ...] = ("level_a", "level_b", "level_c", "level_d")

# Logical columns of the raw file, in positional order
RAW_COLUMNS: tuple[str, ...] = (
    "name",
    "city",
    "state",
    *LEVEL_COLUMNS,
    "last_inspection_date",
)

CLEAN_COLUMNS: tuple[str, ...] = (
    "name",
    "city",
    "state",
    "state_valid",
    *LEVEL_COLUMNS,
    "total_population",
    "facility_size",
    "last_inspection_date",
    "date_valid",
)

# Internal -> published names of the clean table
EXPORT_MAPPING: dict[str, str] = {
    "name": "Name",
    "city": "City",
    "state": "State",
    "state_valid": "StateValid",
    "level_a": "Level_A",
    "level_b": "Level_B",
    "level_c": "Level_C",
    "level_d": "Level_D",
    "total_population": "TotalPopulation",
    "facility_size": "FacilitySize",
    "last_inspection_date": "LastInspectionDate",
    "date_valid": "DateValid",
}

# Source header spellings -> internal names. The published names are
# accepted too, so an exported table can be fed back in.
COLUMN_MAPPING: dict[str, str] = {
    **{published: internal for internal, published in EXPORT_MAPPING.items()},
    "Facility Name": "name",
    "Level A": "level_a",
    "Level B": "level_b",
    "Level C": "level_c",
    "Level D": "level_d",
    "Last Inspection End Date": "last_inspection_date",
}

LEVEL_LABELS: dict[str, str] = {
    "level_a": "Level A",
    "level_b": "Level B",
    "level_c": "Level C",
    "level_d": "Level D",
}


def _rename(df: pd.DataFrame, mapping: Mapping[str, str], event: str) -> pd.DataFrame:
    renames = {old: new for old, new in mapping.items() if old in df.columns}
    if not renames:
        return df
    log.debug(event, renamed=sorted(renames))
    return df.rename(columns=renames)


def normalize_columns(
    df: pd.DataFrame, mapping: Mapping[str, str] | None = None
) -> pd.DataFrame:
    """Rename source header spellings to internal names; others are kept."""
    return _rename(df, mapping or COLUMN_MAPPING, "Normalizing columns")


def export_columns(
    df: pd.DataFrame, mapping: Mapping[str, str] | None = None
) -> pd.DataFrame:
    """Rename internal names to the published export names."""
    return _rename(df, mapping or EXPORT_MAPPING, "Exporting columns")


def require_columns(df: pd.DataFrame, required: Iterable[str]) -> None:
    """
    Check that required columns are present.

    Args:
        df: DataFrame to check.
        required: Column names that must exist.

    Raises:
        ValueError: Naming every missing column.
    """
    missing = [col for col in required if col not in df.columns]
    if missing:
        msg = f"Missing required columns: {missing}"
        raise ValueError(msg)
