"""
Cleaning pipeline for raw facility data.

Orchestrates ingestion, the five cleaning stages, export and summary.
"""

from facilitystats.etl.export import write_clean_table
from facilitystats.etl.pipeline import (
    CleaningPipeline,
    CleanResult,
    PipelineResult,
    clean,
    run_pipeline,
)

__all__ = [
    "CleanResult",
    "CleaningPipeline",
    "PipelineResult",
    "clean",
    "run_pipeline",
    "write_clean_table",
]
