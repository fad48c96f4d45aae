"""
Chart rendering for facility summaries.

Every chart is a standalone PNG written into the plots directory.
"""

from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd
from matplotlib.figure import Figure

from facilitystats.analysis.summary import SummaryStatistics, inspection_ages
from facilitystats.utils.logging import get_logger

log = get_logger(__name__)


def _save(fig: Figure, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, format="png", dpi=150, bbox_inches="tight")
    plt.close(fig)
    log.debug("Saved chart", path=str(path))
    return path


def _bar_chart(
    labels: list[str],
    values: list[float],
    *,
    title: str,
    ylabel: str,
    annotations: list[str],
) -> Figure:
    fig, ax = plt.subplots(figsize=(9, 5))
    bars = ax.bar(labels, values, color="steelblue", edgecolor="none")

    for bar, text in zip(bars, annotations):
        ax.text(
            bar.get_x() + bar.get_width() / 2,
            bar.get_height(),
            text,
            ha="center",
            va="bottom",
            fontsize=9,
        )

    ax.set_title(title, fontsize=12)
    ax.set_ylabel(ylabel, fontsize=11)
    ax.grid(axis="y", alpha=0.3)
    top = max(values) if values else 0
    ax.set_ylim(0, top * 1.15 if top > 0 else 1)
    plt.setp(ax.get_xticklabels(), rotation=20, ha="right")
    fig.tight_layout()
    return fig


def plot_size_distribution(sizes: pd.DataFrame, path: Path) -> Path:
    """Bar chart of facility counts per size bucket."""
    fig = _bar_chart(
        sizes["facility_size"].tolist(),
        sizes["facilities"].tolist(),
        title="Facilities by Size",
        ylabel="Facilities",
        annotations=[f"{pct:.1f}%" for pct in sizes["percent"]],
    )
    return _save(fig, path)


def plot_level_distribution(levels: pd.DataFrame, path: Path) -> Path:
    """Bar chart of population per security level."""
    fig = _bar_chart(
        levels["level"].tolist(),
        levels["population"].tolist(),
        title="Population by Security Level",
        ylabel="Detainees",
        annotations=[f"{pct:.1f}%" for pct in levels["percent"]],
    )
    return _save(fig, path)


def plot_state_distribution(states: pd.DataFrame, path: Path, top_n: int = 15) -> Path:
    """Bar chart of facility counts for the top_n states."""
    top = states.head(top_n)
    fig = _bar_chart(
        top["state"].tolist(),
        top["facilities"].tolist(),
        title=f"Facilities by State (top {min(top_n, len(top))})",
        ylabel="Facilities",
        annotations=[str(n) for n in top["facilities"]],
    )
    return _save(fig, path)


def plot_inspection_age(ages: pd.Series, path: Path) -> Path:
    """Histogram of days since the last inspection."""
    fig, ax = plt.subplots(figsize=(9, 5))

    if ages.empty:
        ax.text(0.5, 0.5, "No decodable inspection dates", ha="center", va="center")
    else:
        ax.hist(ages, bins=30, color="steelblue", edgecolor="black", alpha=0.7)
        median_val = ages.median()
        ax.axvline(
            median_val, color="r", linestyle="--", label=f"median={median_val:.0f}"
        )
        ax.legend()

    ax.set_xlabel("Days since last inspection", fontsize=11)
    ax.set_ylabel("Facilities", fontsize=11)
    ax.set_title(f"Inspection Age (n={len(ages):,})", fontsize=12)
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    return _save(fig, path)


def write_charts(
    table: pd.DataFrame,
    summary: SummaryStatistics,
    output_dir: Path,
    *,
    top_states: int = 15,
) -> list[Path]:
    """
    Render all summary charts.

    Args:
        table: Clean facility table (needed for the age histogram).
        summary: Aggregates computed from the same table.
        output_dir: Directory for the PNG files.
        top_states: Number of states in the state chart.

    Returns:
        Paths of the written charts.
    """
    paths = [
        plot_size_distribution(summary.sizes, output_dir / "facility_size.png"),
        plot_level_distribution(summary.levels, output_dir / "security_levels.png"),
        plot_state_distribution(
            summary.states, output_dir / "states.png", top_n=top_states
        ),
        plot_inspection_age(
            inspection_ages(table, summary.inspection.reference_date),
            output_dir / "inspection_age.png",
        ),
    ]
    log.info("Wrote charts", n_charts=len(paths), output_dir=str(output_dir))
    return paths
