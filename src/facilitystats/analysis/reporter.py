"""
Console reporter for cleaning and summary results.

Formats results using Rich for clear, colored output.
"""

from rich.console import Console
from rich.table import Table

from facilitystats.analysis.report import ISSUE_LABELS
from facilitystats.analysis.summary import SummaryStatistics


class ConsoleReporter:
    """Formats and displays pipeline results to the console."""

    def __init__(self, console: Console) -> None:
        """
        Initialize console reporter.

        Args:
            console: Rich Console instance for output.
        """
        self.console = console

    def print_issues(
        self, n_rows: int, issue_count: int, breakdown: dict[str, int]
    ) -> None:
        """
        Print the data-quality breakdown.

        Args:
            n_rows: Rows cleaned.
            issue_count: Rows with at least one fallback.
            breakdown: Rows affected per issue kind.
        """
        table = Table(title="Data Quality", show_header=True)
        table.add_column("Issue", style="cyan")
        table.add_column("Rows", justify="right")

        for name, count in breakdown.items():
            style = "yellow" if count else "green"
            table.add_row(ISSUE_LABELS.get(name, name), f"[{style}]{count}[/{style}]")

        self.console.print(table)

        status = "yellow" if issue_count else "green"
        self.console.print(
            f"[{status}]{issue_count} of {n_rows} rows needed a fallback[/{status}]"
        )

    def print_summary(self, summary: SummaryStatistics, top_states: int = 15) -> None:
        """
        Print the aggregate tables.

        Args:
            summary: Aggregates over the clean table.
            top_states: Number of states listed.
        """
        self.console.print()
        self.console.print(
            f"[bold]{summary.n_facilities} facilities, "
            f"{summary.total_population:,.2f} detainees[/bold]"
        )

        sizes = Table(title="Facility Size")
        sizes.add_column("Size", style="cyan")
        sizes.add_column("Facilities", justify="right")
        sizes.add_column("%", style="green", justify="right")
        for row in summary.sizes.itertuples(index=False):
            sizes.add_row(row.facility_size, str(row.facilities), f"{row.percent:.1f}")
        self.console.print(sizes)

        levels = Table(title="Security Levels")
        levels.add_column("Level", style="cyan")
        levels.add_column("Population", justify="right")
        levels.add_column("%", style="green", justify="right")
        for row in summary.levels.itertuples(index=False):
            levels.add_row(row.level, f"{row.population:,.2f}", f"{row.percent:.1f}")
        self.console.print(levels)

        states = Table(title=f"States (top {top_states})")
        states.add_column("State", style="cyan")
        states.add_column("Facilities", justify="right")
        states.add_column("Population", justify="right")
        states.add_column("%", style="green", justify="right")
        for row in summary.states.head(top_states).itertuples(index=False):
            label = row.state if row.state_valid else f"[red]{row.state}?[/red]"
            states.add_row(
                label,
                str(row.facilities),
                f"{row.population:,.2f}",
                f"{row.percent:.1f}",
            )
        self.console.print(states)

        self._print_inspection(summary)

    def _print_inspection(self, summary: SummaryStatistics) -> None:
        """Print inspection-age statistics."""
        inspection = summary.inspection
        self.console.print()
        self.console.print("[bold]Inspection age:[/bold]")
        self.console.print(f"  Reference date: {inspection.reference_date}")
        self.console.print(f"  [green]Decoded: {inspection.n_parsed}[/green]")
        self.console.print(f"  [yellow]Unparseable: {inspection.n_unparseable}[/yellow]")
        if inspection.n_parsed:
            self.console.print(f"  Median age: {inspection.median_days:.0f} days")
            self.console.print(
                f"  Older than one year: {inspection.pct_over_one_year:.1f}%"
            )
