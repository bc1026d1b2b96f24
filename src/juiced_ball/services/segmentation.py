import logging
from collections.abc import Iterable, Sequence
from datetime import date, timedelta

from juiced_ball.domain.batted_ball import BattedBall
from juiced_ball.domain.errors import UndefinedBreakpointError
from juiced_ball.domain.segment import Segment

logger = logging.getLogger(__name__)


def compute_breakpoint(records: Iterable[BattedBall], target_year: int, day_offset: int) -> date:
    """Return the first recorded game date of ``target_year`` shifted by ``day_offset`` days."""
    season_dates = [r.game_date for r in records if r.season_year == target_year]
    if not season_dates:
        raise UndefinedBreakpointError(target_year)
    opening_day = min(season_dates)
    breakpoint = opening_day + timedelta(days=day_offset)
    logger.info("Breakpoint %s (season %d opened %s, offset %d days)", breakpoint, target_year, opening_day, day_offset)
    return breakpoint


def segment(records: Iterable[BattedBall], breakpoint: date) -> list[BattedBall]:
    labeled = [r.with_segment(Segment.for_date(r.game_date, breakpoint)) for r in records]
    pre = sum(1 for r in labeled if r.segment is Segment.PRE)
    logger.debug("Segmented %d batted balls: %d pre, %d post", len(labeled), pre, len(labeled) - pre)
    return labeled


def split_by_segment(records: Sequence[BattedBall]) -> dict[Segment, list[BattedBall]]:
    """Group labeled records by segment, keyed in segment order. Unlabeled records are skipped."""
    groups: dict[Segment, list[BattedBall]] = {s: [] for s in Segment.ordered()}
    for r in records:
        if r.segment is not None:
            groups[r.segment].append(r)
    return groups
