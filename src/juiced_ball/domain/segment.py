from __future__ import annotations

from enum import Enum
from functools import total_ordering
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import date


@total_ordering
class Segment(Enum):
    """Cohort a batted ball falls into relative to the breakpoint date.

    Ordering follows declaration order, so ``PRE < POST`` regardless of
    how the values sort as text.
    """

    PRE = "pre"
    POST = "post"

    @classmethod
    def ordered(cls) -> tuple[Segment, ...]:
        return tuple(cls)

    @classmethod
    def for_date(cls, game_date: date, breakpoint: date) -> Segment:
        # The breakpoint day itself belongs to the earlier cohort.
        return cls.PRE if game_date <= breakpoint else cls.POST

    @property
    def rank(self) -> int:
        return Segment.ordered().index(self)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Segment):
            return NotImplemented
        return self.rank < other.rank
