import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from datetime import date
from typing import Any

from juiced_ball.config import AnalysisSettings
from juiced_ball.domain.batted_ball import BattedBall
from juiced_ball.domain.contingency import ContingencyTable
from juiced_ball.domain.distribution import DistanceSummary, DistributionSample, QuantilePair
from juiced_ball.domain.errors import InsufficientSampleError, StepError
from juiced_ball.domain.hypothesis import ChiSquaredResult, HypothesisTestResult, Verdict
from juiced_ball.domain.result import Err, Ok, Result
from juiced_ball.domain.segment import Segment
from juiced_ball.ingest.normalize import NormalizeReport, normalize
from juiced_ball.services.segmentation import compute_breakpoint, segment
from juiced_ball.services.tables import (
    build_contingency_table,
    distance_samples,
    distance_samples_by_season,
    summarize,
)
from juiced_ball.stats.hypothesis import chi_squared_independence, kruskal_wallis
from juiced_ball.stats.quantiles import paired_quantiles

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisReport:
    settings: AnalysisSettings
    ingest: NormalizeReport
    breakpoint: date
    records: list[BattedBall]
    contingency: ContingencyTable
    chi_squared: Result[ChiSquaredResult, StepError]
    kruskal_wallis: Result[HypothesisTestResult, StepError]
    quantile_pairs: Result[list[QuantilePair], StepError]
    distance_summaries: dict[Segment, DistanceSummary | None]

    def verdicts(self) -> list[Verdict]:
        return [
            interpret(step.value, self.settings.alpha)
            for step in (self.chi_squared, self.kruskal_wallis)
            if isinstance(step, Ok)
        ]


def interpret(result: HypothesisTestResult, alpha: float) -> Verdict:
    """Decide whether ``result`` rejects its null hypothesis at significance ``alpha``."""
    return Verdict(result=result, alpha=alpha, reject_null=result.p_value < alpha)


def _run_step[T](step: str, fn: Callable[[], T]) -> Result[T, StepError]:
    try:
        return Ok(fn())
    except InsufficientSampleError as exc:
        logger.warning("Step %s skipped: %s", step, exc)
        return Err(StepError(step=step, message=str(exc), sizes=exc.sizes))


def run_analysis(raw_rows: Iterable[Mapping[str, Any]], settings: AnalysisSettings | None = None) -> AnalysisReport:
    """Clean, segment and test one dataset.

    An ``UndefinedBreakpointError`` propagates since no cohort exists without
    a breakpoint. The individual tests fail independently of each other.
    """
    if settings is None:
        settings = AnalysisSettings()

    ingest = normalize(raw_rows)
    logger.info(
        "Ingested %d of %d rows (%d inside-the-park excluded, %d skipped)",
        len(ingest.records),
        ingest.rows_read,
        ingest.excluded_inside_the_park,
        len(ingest.errors),
    )

    breakpoint = compute_breakpoint(ingest.records, settings.target_year, settings.day_offset)
    records = segment(ingest.records, breakpoint)

    table = build_contingency_table(records, settings.event_types)
    chi_squared = _run_step(
        "chi_squared",
        lambda: chi_squared_independence(
            table, correction=settings.yates_correction, min_expected=settings.min_expected
        ),
    )

    samples = distance_samples(records, settings.distance_event)
    pre, post = samples[Segment.PRE], samples[Segment.POST]
    kruskal = _run_step("kruskal_wallis", lambda: kruskal_wallis([pre, post]))
    pairs = _run_step("paired_quantiles", lambda: paired_quantiles(pre, post, settings.quantile_resolution))

    logger.info("Analysis complete: %d pre / %d post distance observations", pre.size, post.size)
    return AnalysisReport(
        settings=settings,
        ingest=ingest,
        breakpoint=breakpoint,
        records=records,
        contingency=table,
        chi_squared=chi_squared,
        kruskal_wallis=kruskal,
        quantile_pairs=pairs,
        distance_summaries={seg: summarize(sample) for seg, sample in samples.items()},
    )


def kruskal_by_season(records: Iterable[BattedBall], event_type: str | None = "home_run") -> HypothesisTestResult:
    """Rank-test hit distances across seasons instead of across cohorts."""
    samples: list[DistributionSample] = distance_samples_by_season(records, event_type)
    return kruskal_wallis(samples)
