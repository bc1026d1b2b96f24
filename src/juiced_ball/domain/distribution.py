from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class DistributionSample:
    label: str
    values: tuple[float, ...]

    @property
    def size(self) -> int:
        return len(self.values)

    def as_array(self) -> np.ndarray:
        return np.asarray(self.values, dtype=float)


@dataclass(frozen=True)
class QuantilePair:
    probability: float
    q_a: float
    q_b: float


@dataclass(frozen=True)
class DistanceSummary:
    label: str
    count: int
    mean: float
    median: float
    std: float
    minimum: float
    maximum: float
