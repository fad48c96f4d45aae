"""
Pandera schemas for facility data.

RawFacilitySchema describes the file as read (all text, nulls allowed);
CleanFacilitySchema is the contract of the cleaned table handed to
aggregation and export.
"""

from typing import Annotated

import numpy as np
import pandas as pd
import pandera.pandas as pa
from pandera.typing import Series

from facilitystats.features.size import SIZE_LABELS, classify_series
from facilitystats.normalization.columns import LEVEL_COLUMNS


class RawFacilitySchema(pa.DataFrameModel):
    """
    Schema for the raw facility table.

    Every field is kept as text; malformed values are the cleaning
    pipeline's problem, not the loader's.
    """

    name: Series[str] = pa.Field(nullable=True, description="Facility name")
    city: Series[str] = pa.Field(nullable=True)
    state: Series[str] = pa.Field(nullable=True)
    level_a: Series[str] = pa.Field(nullable=True, description="Level A population")
    level_b: Series[str] = pa.Field(nullable=True, description="Level B population")
    level_c: Series[str] = pa.Field(nullable=True, description="Level C population")
    level_d: Series[str] = pa.Field(nullable=True, description="Level D population")
    last_inspection_date: Series[str] = pa.Field(
        nullable=True,
        description="Serial day number or one of several textual date formats",
    )

    class Config:
        """Schema configuration."""

        name = "RawFacilitySchema"
        strict = False  # Allow extra columns
        coerce = False  # Nulls must stay nulls, not "nan"


class CleanFacilitySchema(pa.DataFrameModel):
    """
    Schema for the cleaned facility table.

    Cross-column checks pin the derived columns to their sources.
    """

    name: Series[str] = pa.Field(str_matches=r"^[A-Z0-9 \-,.()]*$")
    city: Series[str] = pa.Field(str_matches=r"^[A-Z0-9 \-,.()]*$")
    state: Series[str] = pa.Field(
        str_matches=r"^[A-Z]*$",
        description="Letters-only state code, kept even when invalid",
    )
    state_valid: Series[bool]
    level_a: Series[float] = pa.Field(ge=0)
    level_b: Series[float] = pa.Field(ge=0)
    level_c: Series[float] = pa.Field(ge=0)
    level_d: Series[float] = pa.Field(ge=0)
    total_population: Series[float] = pa.Field(ge=0)
    facility_size: Series[
        Annotated[pd.CategoricalDtype, list(SIZE_LABELS), True]
    ] = pa.Field(description="Ordered facility size bucket")
    last_inspection_date: Series[pa.DateTime] = pa.Field(
        nullable=True,
        description="NaT marks an unparseable source date",
    )
    date_valid: Series[bool]

    @pa.dataframe_check
    @classmethod
    def total_is_sum_of_levels(cls, df: pd.DataFrame) -> pd.Series:
        """total_population equals the rounded sum of the four levels."""
        expected = df[list(LEVEL_COLUMNS)].sum(axis=1).round(2)
        return pd.Series(
            np.isclose(df["total_population"], expected), index=df.index
        )

    @pa.dataframe_check
    @classmethod
    def size_matches_total(cls, df: pd.DataFrame) -> pd.Series:
        """facility_size is the bucket of total_population."""
        expected = classify_series(df["total_population"]).astype(str)
        return df["facility_size"].astype(str) == expected

    @pa.dataframe_check
    @classmethod
    def date_flag_matches_date(cls, df: pd.DataFrame) -> pd.Series:
        """date_valid is set exactly when a date was decoded."""
        return df["date_valid"] == df["last_inspection_date"].notna()

    class Config:
        """Schema configuration."""

        name = "CleanFacilitySchema"
        strict = False
        coerce = True
