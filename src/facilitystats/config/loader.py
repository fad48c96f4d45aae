"""
Configuration loading utilities.

Supports environment variable interpolation and config inheritance.
Minimal configs only need: project, input.path
"""

import os
import re
from datetime import date
from pathlib import Path
from typing import Any

import yaml

from facilitystats.config.settings import (
    DEFAULT_NULL_TOKENS,
    CleaningConfig,
    DateConfig,
    InputConfig,
    OutputConfig,
    PipelineConfig,
    SummaryConfig,
)


# ${VAR} or ${VAR:default}
_ENV_VAR = re.compile(r"\$\{([^}:]+)(?::([^}]*))?\}")


def _env_value(match: re.Match[str]) -> str:
    name, default = match.groups()
    return os.environ.get(name, default or "")


def _interpolate_env_vars(value: str) -> str:
    """Replace ${VAR} and ${VAR:default} references in a string."""
    return _ENV_VAR.sub(_env_value, value)


def _process_config_values(obj: Any) -> Any:
    """Recursively process config values for env var interpolation."""
    if isinstance(obj, str):
        return _interpolate_env_vars(obj)
    if isinstance(obj, dict):
        return {k: _process_config_values(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_process_config_values(item) for item in obj]
    return obj


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _parse_date(value: Any) -> date | None:
    """Parse an optional date from string or return as-is if already a date."""
    if value is None or isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value)
    msg = f"Cannot parse date from {type(value)}: {value}"
    raise ValueError(msg)


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file and process environment variables."""
    with path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return _process_config_values(data) if data else {}


def load_config(
    config_path: Path,
    base_path: Path | None = None,
) -> PipelineConfig:
    """
    Load pipeline configuration from YAML file(s).

    Minimal config requires only:
        - project: str
        - input.path: path to the raw facility file

    Relative input paths are resolved against the config file's directory.

    Args:
        config_path: Path to the main configuration file.
        base_path: Optional path to base configuration for inheritance.

    Returns:
        Fully validated PipelineConfig instance.
    """
    if base_path is not None:
        base_data = load_yaml(base_path)
    else:
        potential_base = config_path.parent / "base.yaml"
        same_file = potential_base.resolve() == config_path.resolve()
        base_data = (
            load_yaml(potential_base)
            if potential_base.exists() and not same_file
            else {}
        )

    merged = _deep_merge(base_data, load_yaml(config_path))

    project = merged.get("project")
    if not project:
        msg = "Config must specify 'project' name"
        raise ValueError(msg)

    input_data = merged.get("input", {})
    raw_path = input_data.get("path")
    if not raw_path:
        msg = "Config must specify 'input.path'"
        raise ValueError(msg)
    input_path = Path(raw_path)
    if not input_path.is_absolute():
        input_path = config_path.parent / input_path

    input_config = InputConfig(
        path=input_path,
        delimiter=input_data.get("delimiter", ","),
        preamble_rows=input_data.get("preamble_rows", 0),
        has_header=input_data.get("has_header", True),
        encoding=input_data.get("encoding", "utf-8"),
        null_tokens=input_data.get("null_tokens", list(DEFAULT_NULL_TOKENS)),
    )

    cleaning_data = merged.get("cleaning", {})
    dates_data = cleaning_data.get("dates", {})
    cleaning = CleaningConfig(
        name_rules=[tuple(rule) for rule in cleaning_data.get("name_rules", [])],
        city_corrections=cleaning_data.get("city_corrections", {}),
        dates=DateConfig(
            min_year=dates_data.get("min_year", 2000),
            max_year=dates_data.get("max_year", 2030),
        ),
    )

    summary_data = merged.get("summary", {})
    summary = SummaryConfig(
        reference_date=_parse_date(summary_data.get("reference_date")),
        valid_states_only=summary_data.get("valid_states_only", False),
        top_states=summary_data.get("top_states", 15),
    )

    output_data = merged.get("output", {})
    output = OutputConfig(
        output_root=Path(output_data.get("root", "./output")),
        delimiter=output_data.get("delimiter", ","),
    )

    return PipelineConfig(
        project=project,
        input=input_config,
        cleaning=cleaning,
        summary=summary,
        output=output,
    )
