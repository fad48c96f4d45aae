"""
Derived features computed from normalized population counts.
"""

from facilitystats.features.size import (
    SIZE_DTYPE,
    SIZE_LABELS,
    add_population_features,
    classify_facility_size,
    classify_series,
)

__all__ = [
    "SIZE_DTYPE",
    "SIZE_LABELS",
    "add_population_features",
    "classify_facility_size",
    "classify_series",
]
