"""Command-line interface for the facilitystats pipeline."""

from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console

if TYPE_CHECKING:
    from facilitystats.config.settings import PipelineConfig
    from facilitystats.etl.pipeline import PipelineResult

app = typer.Typer(
    name="facilitystats",
    help="Clean and summarize detention facility data.",
    no_args_is_help=True,
)

console = Console()

ConfigOption = Annotated[
    Path,
    typer.Option(
        "--config",
        "-c",
        help="Path to configuration YAML file.",
        exists=True,
        dir_okay=False,
    ),
]


@app.callback()
def main(
    log_level: Annotated[
        str,
        typer.Option("--log-level", help="DEBUG, INFO, WARNING or ERROR."),
    ] = "WARNING",
    json_logs: Annotated[
        bool,
        typer.Option("--json-logs", help="Emit logs as JSON lines."),
    ] = False,
) -> None:
    """Clean and summarize detention facility data."""
    from facilitystats.utils.logging import configure_logging

    configure_logging(level=log_level, json_output=json_logs)


def _load(config: Path) -> "PipelineConfig":
    from facilitystats.config.loader import load_config

    console.print(f"[blue]Loading configuration from {config}[/blue]")
    try:
        return load_config(config)
    except ValueError as e:
        console.print(f"[red]Invalid configuration: {e}[/red]")
        raise typer.Exit(code=1) from e


def _run(
    pipeline_config: "PipelineConfig",
    output: Path | None,
    *,
    write_output: bool,
) -> "PipelineResult":
    import pandera.errors

    from facilitystats.etl.pipeline import run_pipeline

    try:
        return run_pipeline(pipeline_config, output, write_output=write_output)
    except FileNotFoundError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1) from e
    except (pandera.errors.SchemaError, pandera.errors.SchemaErrors) as e:
        console.print(f"[red]Schema validation failed: {e}[/red]")
        raise typer.Exit(code=1) from e
    except ValueError as e:
        console.print(f"[red]Cleaning failed: {e}[/red]")
        raise typer.Exit(code=1) from e


@app.command()
def clean(
    config: ConfigOption,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path for the clean CSV. Defaults to the project output dir.",
        ),
    ] = None,
) -> None:
    """Clean the raw facility file and write the clean table."""
    from facilitystats.analysis.reporter import ConsoleReporter

    pipeline_config = _load(config)
    console.print(f"[blue]Cleaning {pipeline_config.input.path}[/blue]")

    result = _run(pipeline_config, output, write_output=True)
    cleaned = result.cleaned

    ConsoleReporter(console).print_issues(
        len(cleaned.table), cleaned.issue_count, cleaned.issue_breakdown()
    )
    if result.output_path:
        console.print(f"\n[green]Saved to: {result.output_path}[/green]")


@app.command()
def summarize(
    config: ConfigOption,
    reference_date: Annotated[
        datetime | None,
        typer.Option(
            "--reference-date",
            "-r",
            formats=["%Y-%m-%d"],
            help="Date inspection age is measured against. Defaults to config or today.",
        ),
    ] = None,
    no_charts: Annotated[
        bool,
        typer.Option("--no-charts", help="Skip chart rendering."),
    ] = False,
) -> None:
    """Clean the raw facility file, then print and write the summary.

    The clean table itself is not written; use `clean` for that.
    """
    from facilitystats.analysis.charts import write_charts
    from facilitystats.analysis.report import write_markdown_report
    from facilitystats.analysis.reporter import ConsoleReporter

    pipeline_config = _load(config)
    if reference_date is not None:
        summary_config = pipeline_config.summary.model_copy(
            update={"reference_date": reference_date.date()}
        )
        pipeline_config = pipeline_config.model_copy(update={"summary": summary_config})

    result = _run(pipeline_config, None, write_output=False)
    cleaned = result.cleaned
    top_states = pipeline_config.summary.top_states

    reporter = ConsoleReporter(console)
    reporter.print_issues(
        len(cleaned.table), cleaned.issue_count, cleaned.issue_breakdown()
    )
    reporter.print_summary(result.summary, top_states=top_states)

    report_path = write_markdown_report(
        pipeline_config.report_path,
        result.summary,
        cleaned.issue_breakdown(),
        cleaned.issue_count,
        top_states=top_states,
    )
    console.print(f"\n[green]Report: {report_path}[/green]")

    if not no_charts:
        paths = write_charts(
            cleaned.table,
            result.summary,
            pipeline_config.plots_dir,
            top_states=top_states,
        )
        console.print(
            f"[green]Charts: {len(paths)} written to {pipeline_config.plots_dir}[/green]"
        )


@app.command()
def version() -> None:
    """Show version information."""
    from facilitystats import __version__

    console.print(f"facilitystats version {__version__}")


if __name__ == "__main__":
    app()
