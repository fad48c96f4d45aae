"""
Markdown summary report.

Renders the aggregates and the data-quality breakdown as a short
Markdown document next to the charts.
"""

from datetime import datetime
from pathlib import Path

import pandas as pd

from facilitystats.analysis.summary import InspectionAge, SummaryStatistics
from facilitystats.utils.logging import get_logger

log = get_logger(__name__)

ISSUE_LABELS: dict[str, str] = {
    "invalid_state": "Unknown state code",
    "numeric_substituted": "Population level set to 0",
    "unparseable_date": "Unparseable inspection date",
}


def _markdown_table(df: pd.DataFrame, formats: dict[str, str]) -> list[str]:
    """Render a DataFrame as Markdown table lines."""
    header = "| " + " | ".join(str(col) for col in df.columns) + " |"
    divider = "|" + "|".join("---" for _ in df.columns) + "|"
    lines = [header, divider]
    for row in df.itertuples(index=False):
        cells = [
            format(value, formats.get(col, "")) for col, value in zip(df.columns, row)
        ]
        lines.append("| " + " | ".join(cells) + " |")
    return lines


def _inspection_lines(inspection: InspectionAge) -> list[str]:
    lines = [
        f"- Reference date: {inspection.reference_date.isoformat()}",
        f"- Decoded dates: {inspection.n_parsed}",
        f"- Unparseable dates: {inspection.n_unparseable}",
    ]
    if inspection.n_parsed:
        lines += [
            f"- Mean age: {inspection.mean_days:.0f} days",
            f"- Median age: {inspection.median_days:.0f} days",
            f"- Range: {inspection.min_days} to {inspection.max_days} days",
            f"- Older than one year: {inspection.pct_over_one_year:.1f}%",
        ]
    return lines


def render_markdown(
    summary: SummaryStatistics,
    issue_breakdown: dict[str, int],
    issue_count: int,
    *,
    title: str = "Facility Summary",
    top_states: int = 15,
) -> str:
    """
    Render the summary as Markdown.

    Args:
        summary: Aggregates over the clean table.
        issue_breakdown: Rows affected per issue kind.
        issue_count: Rows with at least one issue.
        title: Document title.
        top_states: Number of states listed.

    Returns:
        Markdown text.
    """
    generated = datetime.now().strftime("%Y-%m-%d %H:%M")
    lines = [
        f"# {title}",
        "",
        f"Generated {generated}. {summary.n_facilities} facilities, "
        f"{summary.total_population:,.2f} detainees in total.",
        "",
        "## Data quality",
        "",
        f"{issue_count} of {summary.n_facilities} rows needed at least one fallback.",
        "",
    ]
    lines += [
        f"- {ISSUE_LABELS.get(name, name)}: {count}"
        for name, count in issue_breakdown.items()
    ]

    lines += ["", "## Facility size", ""]
    lines += _markdown_table(
        summary.sizes, {"facilities": "d", "percent": ".1f"}
    )

    lines += ["", "## Security levels", ""]
    lines += _markdown_table(
        summary.levels, {"population": ",.2f", "percent": ".1f"}
    )

    lines += ["", f"## States (top {top_states})", ""]
    states = summary.states.head(top_states)
    if states.empty:
        lines.append("No rows with a state code.")
    else:
        lines += _markdown_table(
            states,
            {"facilities": "d", "population": ",.2f", "percent": ".1f"},
        )

    lines += ["", "## Inspection age", ""]
    lines += _inspection_lines(summary.inspection)

    return "\n".join(lines) + "\n"


def write_markdown_report(
    path: Path,
    summary: SummaryStatistics,
    issue_breakdown: dict[str, int],
    issue_count: int,
    **kwargs: object,
) -> Path:
    """Render and write the Markdown summary."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        render_markdown(summary, issue_breakdown, issue_count, **kwargs),
        encoding="utf-8",
    )
    log.info("Wrote summary report", path=str(path))
    return path
