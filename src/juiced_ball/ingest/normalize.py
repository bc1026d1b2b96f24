import logging
from collections import Counter
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

import pandas as pd

from juiced_ball.domain.batted_ball import BattedBall
from juiced_ball.domain.errors import MalformedDateError, RowError, SchemaError
from juiced_ball.domain.result import Err, Ok, Result, partition
from juiced_ball.ingest.parsing import parse_game_date, to_optional_distance, to_optional_str, to_required_int

logger = logging.getLogger(__name__)

REQUIRED_FIELDS: tuple[str, ...] = ("game_date", "game_year", "des", "hit_distance_sc", "events")


@dataclass(frozen=True)
class NormalizeReport:
    records: list[BattedBall]
    errors: tuple[RowError, ...]
    excluded_inside_the_park: int
    rows_read: int

    def error_counts(self) -> dict[str, int]:
        return dict(Counter(e.kind for e in self.errors))


def batted_ball_mapper(row: Mapping[str, Any]) -> BattedBall | None:
    """Map one raw row to a ``BattedBall``.

    Returns None for inside-the-park home runs, which are dropped rather than
    relabeled. Raises ``SchemaError`` or ``MalformedDateError`` for rows that
    cannot be parsed.
    """
    missing = [f for f in REQUIRED_FIELDS if f not in row]
    if missing:
        raise SchemaError(missing[0], f"required field absent (missing: {', '.join(missing)})")

    record = BattedBall(
        game_date=parse_game_date(row["game_date"]),
        season_year=to_required_int(row["game_year"], "game_year"),
        event_type=to_optional_str(row["events"]),
        description=to_optional_str(row["des"]),
        hit_distance=to_optional_distance(row["hit_distance_sc"], "hit_distance_sc"),
    )
    if record.is_inside_the_park:
        return None
    return record


def _map_row(index: int, row: Mapping[str, Any]) -> Result[BattedBall | None, RowError]:
    try:
        return Ok(batted_ball_mapper(row))
    except MalformedDateError as exc:
        return Err(RowError(row_index=index, kind="malformed_date", message=str(exc)))
    except SchemaError as exc:
        return Err(RowError(row_index=index, kind="schema", message=str(exc)))


def normalize(raw_rows: Iterable[Mapping[str, Any]]) -> NormalizeReport:
    results = [_map_row(i, row) for i, row in enumerate(raw_rows)]
    mapped, errors = partition(results)
    records = [r for r in mapped if r is not None]
    excluded = len(mapped) - len(records)

    logger.debug("Normalized %d rows: %d kept, %d inside-the-park excluded", len(results), len(records), excluded)
    if errors:
        counts = Counter(e.kind for e in errors)
        logger.warning(
            "Skipped %d of %d rows (%s)",
            len(errors),
            len(results),
            ", ".join(f"{kind}={n}" for kind, n in sorted(counts.items())),
        )

    return NormalizeReport(
        records=records,
        errors=tuple(errors),
        excluded_inside_the_park=excluded,
        rows_read=len(results),
    )


def normalize_frame(frame: pd.DataFrame) -> NormalizeReport:
    return normalize(frame.to_dict("records"))
