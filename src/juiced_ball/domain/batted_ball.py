from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import date

    from juiced_ball.domain.segment import Segment

HOME_RUN = "home_run"
INSIDE_THE_PARK_MARKER = "inside-the-park"

_MISSING_TEXT = "null"


@dataclass(frozen=True)
class BattedBall:
    game_date: date
    season_year: int
    event_type: str | None = None
    description: str | None = None
    hit_distance: float | None = None
    segment: Segment | None = None

    @property
    def is_home_run(self) -> bool:
        return self.event_type == HOME_RUN

    @property
    def is_inside_the_park(self) -> bool:
        return self.description is not None and INSIDE_THE_PARK_MARKER in self.description.lower()

    def with_segment(self, segment: Segment) -> BattedBall:
        """Return a copy labeled with ``segment``.

        A record keeps the first label it is given; relabeling it with a
        different segment raises ``ValueError``.
        """
        if self.segment is not None and self.segment is not segment:
            raise ValueError(
                f"Batted ball on {self.game_date.isoformat()} already labeled {self.segment.value!r}, "
                f"refusing to relabel as {segment.value!r}"
            )
        return dataclasses.replace(self, segment=segment)

    def to_row(self) -> dict[str, str]:
        """Render the record in the raw Statcast row shape it was parsed from."""
        return {
            "game_date": self.game_date.isoformat(),
            "game_year": str(self.season_year),
            "des": self.description if self.description is not None else _MISSING_TEXT,
            "hit_distance_sc": repr(self.hit_distance) if self.hit_distance is not None else _MISSING_TEXT,
            "events": self.event_type if self.event_type is not None else _MISSING_TEXT,
        }
