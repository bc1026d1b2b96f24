from rich.console import Console
from rich.table import Table

from juiced_ball.domain.contingency import ContingencyTable
from juiced_ball.domain.distribution import DistanceSummary
from juiced_ball.domain.errors import StepError
from juiced_ball.domain.hypothesis import ChiSquaredResult, HypothesisTestResult, Verdict
from juiced_ball.domain.result import Err, Ok, Result
from juiced_ball.domain.segment import Segment
from juiced_ball.ingest.normalize import NormalizeReport
from juiced_ball.services.analysis import AnalysisReport, interpret

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def print_error(message: str) -> None:
    err_console.print(f"[red bold]Error:[/red bold] {message}")


def print_ingest_summary(report: NormalizeReport) -> None:
    console.print(f"[bold green]Ingested[/bold green] {len(report.records)} of {report.rows_read} rows")
    console.print(f"  Inside-the-park home runs excluded: {report.excluded_inside_the_park}")
    if report.errors:
        counts = ", ".join(f"{kind}={n}" for kind, n in sorted(report.error_counts().items()))
        console.print(f"  [yellow]Skipped rows: {len(report.errors)} ({counts})[/yellow]")


def print_contingency_table(table: ContingencyTable) -> None:
    console.print("[bold]Event type by segment[/bold]")
    grid = Table(show_edge=False, pad_edge=False)
    grid.add_column("Event")
    for column in table.column_labels:
        grid.add_column(column.value, justify="right")
    grid.add_column("Total", justify="right")
    for label, row, total in zip(table.row_labels, table.counts, table.row_totals, strict=True):
        grid.add_row(label, *(str(c) for c in row), str(total))
    grid.add_row("[dim]Total[/dim]", *(str(c) for c in table.column_totals), str(table.grand_total))
    console.print(grid)


def _format_verdict(verdict: Verdict) -> str:
    if verdict.reject_null:
        return f"[red]reject H0 at {verdict.alpha:g}[/red]"
    return f"[green]fail to reject H0 at {verdict.alpha:g}[/green]"


def print_test_results(steps: dict[str, Result[HypothesisTestResult, StepError]], alpha: float) -> None:
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("Test")
    table.add_column("Statistic", justify="right")
    table.add_column("df", justify="right")
    table.add_column("p-value", justify="right")
    table.add_column("Verdict")
    for name, step in steps.items():
        match step:
            case Ok(result):
                dof = "-" if result.degrees_of_freedom is None else str(result.degrees_of_freedom)
                verdict = _format_verdict(interpret(result, alpha))
                table.add_row(name, f"{result.statistic:.4f}", dof, f"{result.p_value:.4g}", verdict)
            case Err(error):
                table.add_row(name, "-", "-", "-", f"[yellow]skipped: {error.message}[/yellow]")
    console.print(table)
    for step in steps.values():
        if isinstance(step, Ok) and isinstance(step.value, ChiSquaredResult) and step.value.has_small_expected_counts:
            cells = ", ".join(f"{row}/{col}" for row, col in step.value.low_expected_cells)
            console.print(f"  [yellow]Expected count below {step.value.min_expected:g} in: {cells}[/yellow]")


def print_distance_summaries(summaries: dict[Segment, DistanceSummary | None]) -> None:
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("Segment")
    for name in ("N", "Mean", "Median", "SD", "Min", "Max"):
        table.add_column(name, justify="right")
    for segment, s in summaries.items():
        if s is None:
            table.add_row(segment.value, "0", "-", "-", "-", "-", "-")
            continue
        table.add_row(
            segment.value,
            str(s.count),
            f"{s.mean:.1f}",
            f"{s.median:.1f}",
            f"{s.std:.1f}",
            f"{s.minimum:.0f}",
            f"{s.maximum:.0f}",
        )
    console.print(table)


def print_analysis_report(report: AnalysisReport) -> None:
    print_ingest_summary(report.ingest)
    console.print(
        f"Breakpoint: [bold]{report.breakpoint.isoformat()}[/bold] "
        f"(season {report.settings.target_year} + {report.settings.day_offset} days)"
    )
    console.print()
    print_contingency_table(report.contingency)
    console.print()
    label = report.settings.distance_event or "all batted balls"
    console.print(f"[bold]Hit distance ({label})[/bold]")
    print_distance_summaries(report.distance_summaries)
    console.print()
    print_test_results(
        {"Chi-squared": report.chi_squared, "Kruskal-Wallis": report.kruskal_wallis},
        report.settings.alpha,
    )
