import csv
from pathlib import Path
from typing import Annotated

import typer

from juiced_ball.cli._logging import configure_logging
from juiced_ball.cli._output import (
    console,
    print_analysis_report,
    print_error,
    print_ingest_summary,
    print_test_results,
)
from juiced_ball.config import create_config, load_analysis_settings
from juiced_ball.domain.distribution import QuantilePair
from juiced_ball.domain.errors import ConfigError, InsufficientSampleError, UndefinedBreakpointError
from juiced_ball.domain.result import Err, Ok
from juiced_ball.ingest.csv_source import CsvSource
from juiced_ball.ingest.normalize import normalize
from juiced_ball.services.analysis import kruskal_by_season, run_analysis
from juiced_ball.services.tables import records_to_frame

app = typer.Typer(name="juiced-ball", help="Test whether a mid-season ball change moved batted-ball outcomes.")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable DEBUG logging")] = False,
) -> None:
    """Test whether a mid-season ball change moved batted-ball outcomes."""
    configure_logging(verbose=verbose)
    if ctx.invoked_subcommand is None:
        raise typer.Exit()


_PathsArg = Annotated[list[Path], typer.Argument(help="Statcast CSV export(s); several files are concatenated")]
_ConfigOpt = Annotated[str, typer.Option("--config", help="YAML config file")]
_SepOpt = Annotated[str, typer.Option("--sep", help="Field delimiter")]


def _write_quantile_pairs(path: Path, pairs: list[QuantilePair]) -> None:
    with open(path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["probability", "pre", "post"])
        for pair in pairs:
            writer.writerow([f"{pair.probability:.6f}", pair.q_a, pair.q_b])


@app.command()
def analyze(
    paths: _PathsArg,
    config: _ConfigOpt = "juiced.yaml",
    sep: _SepOpt = ",",
    target_year: Annotated[
        int | None, typer.Option("--target-year", help="Season whose opening day anchors the breakpoint")
    ] = None,
    day_offset: Annotated[int | None, typer.Option("--day-offset", help="Days after opening day")] = None,
    alpha: Annotated[float | None, typer.Option("--alpha", help="Significance level for verdicts")] = None,
    yates: Annotated[
        bool | None, typer.Option("--yates/--no-yates", help="Yates continuity correction for 2x2 tables")
    ] = None,
    qq_out: Annotated[Path | None, typer.Option("--qq-out", help="Write paired quantiles to this CSV")] = None,
    cleaned_out: Annotated[
        Path | None, typer.Option("--cleaned-out", help="Write segmented records to this CSV")
    ] = None,
) -> None:
    """Segment batted balls around the breakpoint and compare the cohorts."""
    try:
        settings = load_analysis_settings(
            create_config(
                yaml_path=config,
                overrides={
                    "target_year": target_year,
                    "day_offset": day_offset,
                    "alpha": alpha,
                    "yates_correction": yates,
                },
            )
        )
    except ConfigError as exc:
        print_error(str(exc))
        raise typer.Exit(code=2) from exc

    rows = CsvSource(paths).fetch(sep=sep)
    try:
        report = run_analysis(rows, settings)
    except UndefinedBreakpointError as exc:
        print_error(str(exc))
        raise typer.Exit(code=1) from exc

    print_analysis_report(report)

    if qq_out is not None:
        match report.quantile_pairs:
            case Ok(pairs):
                _write_quantile_pairs(qq_out, pairs)
                console.print(f"Quantile pairs written to {qq_out}")
            case Err(error):
                print_error(f"No quantile pairs written: {error.message}")
    if cleaned_out is not None:
        records_to_frame(report.records).to_csv(cleaned_out, index=False)
        console.print(f"Segmented records written to {cleaned_out}")


@app.command()
def seasons(
    paths: _PathsArg,
    config: _ConfigOpt = "juiced.yaml",
    sep: _SepOpt = ",",
    event: Annotated[str, typer.Option("--event", help="Event type whose distances are compared")] = "home_run",
) -> None:
    """Compare hit distances across seasons with a Kruskal-Wallis test."""
    try:
        alpha = load_analysis_settings(create_config(yaml_path=config)).alpha
    except ConfigError as exc:
        print_error(str(exc))
        raise typer.Exit(code=2) from exc

    ingest = normalize(CsvSource(paths).fetch(sep=sep))
    print_ingest_summary(ingest)
    try:
        result = kruskal_by_season(ingest.records, event)
    except InsufficientSampleError as exc:
        print_error(str(exc))
        raise typer.Exit(code=1) from exc
    print_test_results({"Kruskal-Wallis (by season)": Ok(result)}, alpha)
