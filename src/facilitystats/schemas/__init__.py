"""
Schema definitions using Pandera for data validation.

The raw and clean facility tables are validated at the pipeline's
boundaries.
"""

from facilitystats.schemas.facilities import CleanFacilitySchema, RawFacilitySchema

__all__ = [
    "CleanFacilitySchema",
    "RawFacilitySchema",
]
