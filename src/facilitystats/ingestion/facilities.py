"""
Facility file ingestion.

The source file starts with a fixed number of metadata lines, then an
optional header row, then one facility per line. Columns are taken by
position; anything after the eighth column is ignored, and rows that are
longer than the first data row are truncated rather than dropped.
"""

from pathlib import Path
from typing import Any

import pandas as pd

from facilitystats.config.settings import InputConfig, PipelineConfig
from facilitystats.ingestion.base import DataLoader
from facilitystats.normalization.columns import RAW_COLUMNS
from facilitystats.schemas.facilities import RawFacilitySchema
from facilitystats.utils.logging import get_logger

log = get_logger(__name__)


def _read_text_table(path: Path, settings: InputConfig, encoding: str) -> pd.DataFrame:
    """Read every field as text, keeping all rows regardless of width."""
    skip = settings.preamble_rows + (1 if settings.has_header else 0)
    options: dict[str, Any] = {
        "sep": settings.delimiter,
        "skiprows": skip,
        "header": None,
        "dtype": str,
        "keep_default_na": False,
        "na_values": settings.null_tokens,
        "encoding": encoding,
        "engine": "python",
    }

    probe = pd.read_csv(path, nrows=1, **options)
    width = probe.shape[1]

    def truncate(fields: list[str]) -> list[str]:
        return fields[:width]

    return pd.read_csv(path, on_bad_lines=truncate, **options)


def _assign_columns(df: pd.DataFrame, path: Path) -> pd.DataFrame:
    """Name the first eight columns positionally and drop the rest."""
    n_expected = len(RAW_COLUMNS)
    if df.shape[1] < n_expected:
        msg = (
            f"Expected at least {n_expected} columns in {path}, "
            f"found {df.shape[1]}"
        )
        raise ValueError(msg)

    if df.shape[1] > n_expected:
        log.debug("Ignoring trailing columns", n_ignored=df.shape[1] - n_expected)

    df = df.iloc[:, :n_expected].copy()
    df.columns = list(RAW_COLUMNS)
    return df


class FacilityLoader(DataLoader[RawFacilitySchema]):
    """Loader for the raw facility file."""

    def __init__(self, settings: InputConfig) -> None:
        """Initialize facility loader."""
        super().__init__(settings, RawFacilitySchema)

    def _read(self, encoding: str) -> pd.DataFrame:
        log.debug(
            "Reading facility file",
            preamble=self.settings.preamble_rows,
            header=self.settings.has_header,
            encoding=encoding,
        )
        try:
            df = _read_text_table(self.path, self.settings, encoding)
        except pd.errors.EmptyDataError as e:
            msg = f"No data rows in {self.path} after skipping the preamble"
            raise ValueError(msg) from e
        return _assign_columns(df, self.path)


def read_facility_file(settings: InputConfig) -> pd.DataFrame:
    """
    Read a raw facility file into the canonical raw columns.

    Args:
        settings: Input file layout.

    Returns:
        DataFrame with RAW_COLUMNS, all values text or missing.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file has no data rows or fewer than eight columns.
    """
    return FacilityLoader(settings).load(validate=False)


def load_facilities(config: PipelineConfig, *, validate: bool = True) -> pd.DataFrame:
    """
    Convenience function to load the raw facility table.

    Args:
        config: Pipeline configuration.
        validate: Whether to validate against RawFacilitySchema.

    Returns:
        Raw facility DataFrame.
    """
    return FacilityLoader(config.input).load(validate=validate)
