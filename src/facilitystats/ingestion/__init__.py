"""
Data ingestion layer for loading raw data with schema validation.

All raw data loading happens through this module to ensure
consistent validation at system boundaries.
"""

from facilitystats.ingestion.facilities import (
    FacilityLoader,
    load_facilities,
    read_facility_file,
)

__all__ = ["FacilityLoader", "load_facilities", "read_facility_file"]
