"""Field-level parsing for raw Statcast rows.

Raw rows come either from ``csv.DictReader`` (all text) or from a pandas
frame (floats, with NaN for blanks). Every coercion here accepts both.
"""

import math
from datetime import date, datetime
from typing import Any

from juiced_ball.domain.errors import MalformedDateError, SchemaError

# Tried in order; the first format that parses wins.
DATE_FORMATS: tuple[str, ...] = ("%Y-%m-%d", "%m/%d/%Y")

# The tracking system writes these for untracked values. A real zero
# distance is therefore indistinguishable from a missing one.
MISSING_TOKENS: frozenset[str] = frozenset({"null", "0", "0.0"})


def is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float):
        return math.isnan(value) or value == 0.0
    if isinstance(value, int) and not isinstance(value, bool):
        return value == 0
    text = str(value).strip()
    return text == "" or text in MISSING_TOKENS


def parse_game_date(value: Any, formats: tuple[str, ...] = DATE_FORMATS) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raw = "" if value is None else str(value).strip()
    for fmt in formats:
        try:
            return datetime.strptime(raw, fmt).date()
        except ValueError:
            continue
    raise MalformedDateError(raw, formats)


def to_optional_str(value: Any) -> str | None:
    if is_missing(value):
        return None
    return str(value).strip()


def to_required_int(value: Any, field: str) -> int:
    if is_missing(value):
        raise SchemaError(field, "value is missing")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise SchemaError(field, f"{value!r} is not a number") from exc
    if not number.is_integer():
        raise SchemaError(field, f"{value!r} is not an integer")
    return int(number)


def to_optional_distance(value: Any, field: str) -> float | None:
    if is_missing(value):
        return None
    try:
        distance = float(value)
    except (TypeError, ValueError) as exc:
        raise SchemaError(field, f"{value!r} is not a number") from exc
    if distance == 0.0:
        return None
    if not math.isfinite(distance) or distance < 0:
        raise SchemaError(field, f"{value!r} is not a positive finite distance")
    return distance
