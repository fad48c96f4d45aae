"""
Export of the cleaned facility table.

Writes the published column names, ISO dates, and an empty cell where
the inspection date could not be decoded.
"""

from pathlib import Path

import pandas as pd

from facilitystats.normalization.columns import CLEAN_COLUMNS, export_columns
from facilitystats.utils.logging import get_logger

log = get_logger(__name__)


def to_export_frame(table: pd.DataFrame) -> pd.DataFrame:
    """Reorder to the clean schema and rename to the published names."""
    df = table.loc[:, list(CLEAN_COLUMNS)].copy()
    df["last_inspection_date"] = df["last_inspection_date"].dt.strftime("%Y-%m-%d")
    df["facility_size"] = df["facility_size"].astype(str)
    return export_columns(df)


def write_clean_table(
    table: pd.DataFrame,
    path: Path,
    *,
    delimiter: str = ",",
) -> Path:
    """
    Write the clean table as a delimited file.

    Args:
        table: Table conforming to CleanFacilitySchema.
        path: Output file path; parent directories are created.
        delimiter: Field separator.

    Returns:
        The written path.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    to_export_frame(table).to_csv(
        path, sep=delimiter, index=False, float_format="%.2f"
    )
    log.info("Wrote clean table", path=str(path), rows=len(table))
    return path
