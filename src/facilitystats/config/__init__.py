"""
Configuration management with typed Pydantic models.

Provides file layout, cleaning-table extensions and summary options,
loaded from YAML with environment interpolation.
"""

from facilitystats.config.loader import load_config
from facilitystats.config.settings import (
    CleaningConfig,
    DateConfig,
    InputConfig,
    OutputConfig,
    PipelineConfig,
    SummaryConfig,
)

__all__ = [
    "CleaningConfig",
    "DateConfig",
    "InputConfig",
    "OutputConfig",
    "PipelineConfig",
    "SummaryConfig",
    "load_config",
]
