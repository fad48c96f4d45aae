"""
Aggregation, charts and reports over the cleaned facility table.
"""

from facilitystats.analysis.summary import (
    InspectionAge,
    SummaryStatistics,
    inspection_age,
    level_distribution,
    size_distribution,
    state_distribution,
    summarize,
)

__all__ = [
    "InspectionAge",
    "SummaryStatistics",
    "inspection_age",
    "level_distribution",
    "size_distribution",
    "state_distribution",
    "summarize",
]
