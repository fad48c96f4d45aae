"""Pytest configuration and shared fixtures."""

from pathlib import Path
from typing import Any

import matplotlib
import pandas as pd
import pytest
import structlog

matplotlib.use("Agg")

SAMPLE_FILE = """\
Detention facility population statistics
Source: facility listing export
Population counts are average daily population by security level
,,,,,,,,
Name,City,State,Level A,Level B,Level C,Level D,Last Inspection End Date,Notes
B^AKER COUNTY CTR,FTLAUDERDALE,f l,1.80E-02,,5,10,45550,
ADELANTO ICE PROCESSING CENTER,ADELANTO,CA,612.5,401.25,220.1,90,9/19/2024,
OTERO COUNTY PROC CENTER,CHAPARRAL,NM,1.2E+02,NA,85.75,12,2024-03-07,
KROME NORTH SPC,MIAMI,FL,"1,5",300,N/A,44,19-09-2024,
STEWART DET CTR,LUMPKIN,GA,"1,034.6",210,150,75,"June 5, 2023",
MONTGOMERY PROCESSING CENTER,CONROE,TX,250,180,60,9.999,45000,
ELOY FEDERAL CONTRACT FACILITY,ELOY,AZ,300,200,120,40,99999,
UNKNOWN ANNEX,SOMEWHERE,XX,12,3,0,0,not inspected,
CAROLINE DET FAC,BOWLING GREEN,va,14.2,8,3,,01-02-2024,extra,columns
"""


@pytest.fixture(autouse=True)
def reset_structlog() -> Any:
    """Drop logging configuration made by a test (the CLI binds its stream)."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def raw_facilities() -> pd.DataFrame:
    """Raw facility rows as the loader returns them (text or missing)."""
    return pd.DataFrame(
        {
            "name": [
                "B^AKER COUNTY CTR",
                "ADELANTO ICE PROCESSING CENTER",
                "OTERO COUNTY PROC CENTER",
                "KROME NORTH SPC",
                "STEWART DET CTR",
                "MONTGOMERY PROCESSING CENTER",
                "ELOY FEDERAL CONTRACT FACILITY",
                "UNKNOWN ANNEX",
                "CAROLINE DET FAC",
            ],
            "city": [
                "FTLAUDERDALE",
                "ADELANTO",
                "CHAPARRAL",
                "MIAMI",
                "LUMPKIN",
                "CONROE",
                "ELOY",
                "SOMEWHERE",
                "BOWLING GREEN",
            ],
            "state": ["f l", "CA", "NM", "FL", "GA", "TX", "AZ", "XX", "va"],
            "level_a": [
                "1.80E-02", "612.5", "1.2E+02", "1,5", "1,034.6", "250", "300", "12", "14.2"
            ],
            "level_b": [None, "401.25", None, "300", "210", "180", "200", "3", "8"],
            "level_c": ["5", "220.1", "85.75", None, "150", "60", "120", "0", "3"],
            "level_d": ["10", "90", "12", "44", "75", "9.999", "40", "0", None],
            "last_inspection_date": [
                "45550",
                "9/19/2024",
                "2024-03-07",
                "19-09-2024",
                "June 5, 2023",
                "45000",
                "99999",
                "not inspected",
                "01-02-2024",
            ],
        }
    )


@pytest.fixture
def sample_file(tmp_path: Path) -> Path:
    """Write the sample facility file (four preamble lines, header, 9 rows)."""
    path = tmp_path / "facilities.csv"
    path.write_text(SAMPLE_FILE, encoding="utf-8")
    return path


@pytest.fixture
def config_file(tmp_path: Path, sample_file: Path) -> Path:
    """Write a configuration pointing at the sample file."""
    path = tmp_path / "config.yaml"
    path.write_text(
        f"""\
project: facilities-test

input:
  path: {sample_file.name}
  preamble_rows: 4

summary:
  reference_date: "2025-01-01"

output:
  root: {tmp_path / "output"}
""",
        encoding="utf-8",
    )
    return path
