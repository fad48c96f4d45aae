"""Tests for the clean table export."""

from pathlib import Path

import pandas as pd

from facilitystats.etl.export import to_export_frame, write_clean_table
from facilitystats.etl.pipeline import clean
from facilitystats.normalization.columns import EXPORT_MAPPING


class TestExport:
    """Tests for to_export_frame and write_clean_table."""

    def test_published_column_names(self, raw_facilities: pd.DataFrame) -> None:
        """Columns are renamed to the published names, in order."""
        frame = to_export_frame(clean(raw_facilities).table)
        assert list(frame.columns) == list(EXPORT_MAPPING.values())

    def test_written_file(self, raw_facilities: pd.DataFrame, tmp_path: Path) -> None:
        """Dates are ISO, unparseable dates empty, levels at two decimals."""
        path = write_clean_table(
            clean(raw_facilities).table, tmp_path / "out" / "clean.csv"
        )
        written = pd.read_csv(path, dtype=str, keep_default_na=False)

        first = written.iloc[0]
        assert first["Name"] == "BAKER COUNTY CENTER"
        assert first["Level_A"] == "0.02"
        assert first["Level_B"] == "0.00"
        assert first["TotalPopulation"] == "15.02"
        assert first["FacilitySize"] == "Very Small (<100)"
        assert first["LastInspectionDate"] == "2024-09-15"
        assert first["StateValid"] == "True"

        assert written.loc[6, "LastInspectionDate"] == ""
        assert written.loc[6, "DateValid"] == "False"

    def test_table_not_modified(self, raw_facilities: pd.DataFrame) -> None:
        """Export formatting works on a copy."""
        table = clean(raw_facilities).table
        to_export_frame(table)
        assert pd.api.types.is_datetime64_any_dtype(table["last_inspection_date"])

    def test_delimiter(self, raw_facilities: pd.DataFrame, tmp_path: Path) -> None:
        """A custom delimiter is used for every field."""
        path = write_clean_table(
            clean(raw_facilities).table, tmp_path / "clean.tsv", delimiter="\t"
        )
        header = path.read_text(encoding="utf-8").splitlines()[0]
        assert header.split("\t")[0] == "Name"
