from __future__ import annotations

from dataclasses import dataclass

import pandas as pd

from juiced_ball.domain.segment import Segment


@dataclass(frozen=True)
class ContingencyTable:
    """Counts of event type (rows) by cohort (columns)."""

    row_labels: tuple[str, ...]
    column_labels: tuple[Segment, ...]
    counts: tuple[tuple[int, ...], ...]

    def __post_init__(self) -> None:
        if len(self.counts) != len(self.row_labels):
            raise ValueError(f"Expected {len(self.row_labels)} rows of counts, got {len(self.counts)}")
        for label, row in zip(self.row_labels, self.counts, strict=True):
            if len(row) != len(self.column_labels):
                raise ValueError(f"Row {label!r} has {len(row)} counts for {len(self.column_labels)} columns")
            if any(c < 0 for c in row):
                raise ValueError(f"Row {label!r} has a negative count")

    @property
    def shape(self) -> tuple[int, int]:
        return len(self.row_labels), len(self.column_labels)

    @property
    def row_totals(self) -> tuple[int, ...]:
        return tuple(sum(row) for row in self.counts)

    @property
    def column_totals(self) -> tuple[int, ...]:
        return tuple(sum(column) for column in zip(*self.counts, strict=True)) if self.counts else ()

    @property
    def grand_total(self) -> int:
        return sum(self.row_totals)

    def count(self, row: str, column: Segment) -> int:
        return self.counts[self.row_labels.index(row)][self.column_labels.index(column)]

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            [list(row) for row in self.counts],
            index=pd.Index(self.row_labels, name="event_type"),
            columns=pd.CategoricalIndex(
                [c.value for c in self.column_labels],
                categories=[s.value for s in Segment.ordered()],
                ordered=True,
                name="segment",
            ),
        )
