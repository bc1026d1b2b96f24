import logging
from collections import Counter
from collections.abc import Callable, Hashable, Iterable, Sequence

import numpy as np
import pandas as pd

from juiced_ball.domain.batted_ball import BattedBall
from juiced_ball.domain.contingency import ContingencyTable
from juiced_ball.domain.distribution import DistanceSummary, DistributionSample
from juiced_ball.domain.segment import Segment

logger = logging.getLogger(__name__)

SEGMENT_DTYPE = pd.CategoricalDtype(categories=[s.value for s in Segment.ordered()], ordered=True)


def build_contingency_table(
    records: Iterable[BattedBall],
    event_types: Sequence[str] | None = None,
) -> ContingencyTable:
    """Count labeled records by event type and segment.

    With ``event_types`` given, rows follow that order and other event types
    are left out; otherwise every observed event type gets a row, sorted.
    Records without an event type or a segment are never counted.
    """
    counts: Counter[tuple[str, Segment]] = Counter(
        (r.event_type, r.segment) for r in records if r.event_type is not None and r.segment is not None
    )
    if event_types is None:
        rows = tuple(sorted({event for event, _ in counts}))
    else:
        rows = tuple(event_types)
    columns = Segment.ordered()
    table = ContingencyTable(
        row_labels=rows,
        column_labels=columns,
        counts=tuple(tuple(counts[(event, seg)] for seg in columns) for event in rows),
    )
    logger.debug("Built %dx%d contingency table over %d batted balls", *table.shape, table.grand_total)
    return table


def _grouped_samples[K: Hashable](
    records: Iterable[BattedBall],
    key: Callable[[BattedBall], K | None],
    event_type: str | None,
) -> dict[K, list[float]]:
    groups: dict[K, list[float]] = {}
    for r in records:
        group = key(r)
        if group is None or r.hit_distance is None:
            continue
        if event_type is not None and r.event_type != event_type:
            continue
        groups.setdefault(group, []).append(r.hit_distance)
    return groups


def distance_samples(
    records: Iterable[BattedBall],
    event_type: str | None = None,
) -> dict[Segment, DistributionSample]:
    """Hit distances per segment, optionally restricted to a single event type.

    Both segments are always present, possibly empty.
    """
    groups = _grouped_samples(records, lambda r: r.segment, event_type)
    return {seg: DistributionSample(label=seg.value, values=tuple(groups.get(seg, ()))) for seg in Segment.ordered()}


def distance_samples_by_season(
    records: Iterable[BattedBall],
    event_type: str | None = None,
) -> list[DistributionSample]:
    groups = _grouped_samples(records, lambda r: r.season_year, event_type)
    return [DistributionSample(label=str(year), values=tuple(groups[year])) for year in sorted(groups)]


def summarize(sample: DistributionSample) -> DistanceSummary | None:
    if sample.size == 0:
        return None
    values = sample.as_array()
    return DistanceSummary(
        label=sample.label,
        count=sample.size,
        mean=float(values.mean()),
        median=float(np.median(values)),
        std=float(values.std(ddof=1)) if sample.size > 1 else 0.0,
        minimum=float(values.min()),
        maximum=float(values.max()),
    )


def records_to_frame(records: Iterable[BattedBall]) -> pd.DataFrame:
    """Tabulate records for plotting or export; ``segment`` is an ordered categorical."""
    frame = pd.DataFrame(
        [
            {
                "game_date": r.game_date,
                "season_year": r.season_year,
                "event_type": r.event_type,
                "description": r.description,
                "hit_distance": r.hit_distance,
                "segment": r.segment.value if r.segment is not None else None,
            }
            for r in records
        ],
        columns=["game_date", "season_year", "event_type", "description", "hit_distance", "segment"],
    )
    frame["segment"] = frame["segment"].astype(SEGMENT_DTYPE)
    return frame
