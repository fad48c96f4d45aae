"""Basic package tests to verify installation."""


def test_package_imports() -> None:
    """Verify the main package can be imported."""
    import facilitystats

    assert facilitystats.__version__


def test_config_module_imports() -> None:
    """Verify config module structure is correct."""
    from facilitystats.config import (
        CleaningConfig,
        DateConfig,
        InputConfig,
        OutputConfig,
        PipelineConfig,
        SummaryConfig,
        load_config,
    )

    assert CleaningConfig is not None
    assert DateConfig is not None
    assert InputConfig is not None
    assert OutputConfig is not None
    assert PipelineConfig is not None
    assert SummaryConfig is not None
    assert load_config is not None


def test_schemas_module_imports() -> None:
    """Verify schemas module structure is correct."""
    from facilitystats.schemas import CleanFacilitySchema, RawFacilitySchema

    assert CleanFacilitySchema is not None
    assert RawFacilitySchema is not None


def test_pipeline_module_imports() -> None:
    """Verify the cleaning entry points are exported."""
    from facilitystats.etl import CleaningPipeline, clean, run_pipeline

    assert callable(clean)
    assert callable(run_pipeline)
    assert CleaningPipeline is not None
