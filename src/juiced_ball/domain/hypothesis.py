from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class HypothesisTestResult:
    name: str
    statistic: float
    degrees_of_freedom: int | None
    p_value: float


@dataclass(frozen=True)
class ChiSquaredResult(HypothesisTestResult):
    expected: tuple[tuple[float, ...], ...] = ()
    low_expected_cells: tuple[tuple[str, str], ...] = ()
    min_expected: float = 5.0
    correction: bool = False

    @property
    def has_small_expected_counts(self) -> bool:
        return bool(self.low_expected_cells)


@dataclass(frozen=True)
class Verdict:
    result: HypothesisTestResult
    alpha: float
    reject_null: bool
