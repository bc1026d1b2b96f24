"""Chi-squared independence and Kruskal-Wallis rank tests.

Both return the statistic, degrees of freedom and upper-tail p-value and
leave the accept/reject decision to the caller.
"""

import logging
from collections.abc import Sequence

import numpy as np
from scipy.stats import chi2, rankdata

from juiced_ball.domain.contingency import ContingencyTable
from juiced_ball.domain.distribution import DistributionSample
from juiced_ball.domain.errors import InsufficientSampleError
from juiced_ball.domain.hypothesis import ChiSquaredResult, HypothesisTestResult

logger = logging.getLogger(__name__)

CHI_SQUARED = "chi_squared_independence"
KRUSKAL_WALLIS = "kruskal_wallis"


def chi_squared_independence(
    table: ContingencyTable,
    *,
    correction: bool = False,
    min_expected: float = 5.0,
) -> ChiSquaredResult:
    """Pearson's chi-squared test of independence between event type and cohort.

    With ``correction`` set, a 2x2 table (one degree of freedom) gets Yates'
    continuity correction: each observed count moves up to 0.5 toward its
    expected count.
    """
    n_rows, n_cols = table.shape
    if n_rows < 2 or n_cols < 2:
        raise InsufficientSampleError(CHI_SQUARED, f"table is {n_rows}x{n_cols}, need at least 2x2", table.shape)

    observed = np.asarray(table.counts, dtype=float)
    row_totals = observed.sum(axis=1)
    col_totals = observed.sum(axis=0)
    empty_rows = [label for label, total in zip(table.row_labels, row_totals, strict=True) if total == 0]
    empty_cols = [label.value for label, total in zip(table.column_labels, col_totals, strict=True) if total == 0]
    if empty_rows or empty_cols:
        raise InsufficientSampleError(
            CHI_SQUARED,
            f"expected counts undefined for empty rows {empty_rows} / columns {empty_cols}",
            tuple(int(t) for t in row_totals),
        )

    grand_total = observed.sum()
    expected = np.outer(row_totals, col_totals) / grand_total
    dof = (n_rows - 1) * (n_cols - 1)

    if correction and dof == 1:
        diff = expected - observed
        observed = observed + np.sign(diff) * np.minimum(0.5, np.abs(diff))

    statistic = float(((observed - expected) ** 2 / expected).sum())
    p_value = float(chi2.sf(statistic, dof))

    low_cells = tuple(
        (table.row_labels[i], table.column_labels[j].value)
        for i in range(n_rows)
        for j in range(n_cols)
        if expected[i, j] < min_expected
    )
    if low_cells:
        logger.warning(
            "%d of %d cells have expected count below %.1f; chi-squared approximation may be poor",
            len(low_cells),
            n_rows * n_cols,
            min_expected,
        )
    logger.debug("Chi-squared %.4f on %d df, p=%.4g", statistic, dof, p_value)

    return ChiSquaredResult(
        name=CHI_SQUARED,
        statistic=statistic,
        degrees_of_freedom=dof,
        p_value=p_value,
        expected=tuple(tuple(float(v) for v in row) for row in expected),
        low_expected_cells=low_cells,
        min_expected=min_expected,
        correction=correction and dof == 1,
    )


def kruskal_wallis(samples: Sequence[DistributionSample]) -> HypothesisTestResult:
    """Kruskal-Wallis H test over two or more samples, with tie correction."""
    sizes = tuple(s.size for s in samples)
    if len(samples) < 2:
        raise InsufficientSampleError(KRUSKAL_WALLIS, f"got {len(samples)} groups, need at least 2", sizes)
    empty = [s.label for s in samples if s.size == 0]
    if empty:
        raise InsufficientSampleError(KRUSKAL_WALLIS, f"groups {empty} have no observations", sizes)

    pooled = np.concatenate([s.as_array() for s in samples])
    if not np.isfinite(pooled).all():
        raise ValueError("Kruskal-Wallis requires finite observations")

    n = pooled.size
    ranks = rankdata(pooled)  # ties share the average rank of their block
    rank_sums = [group.sum() for group in np.split(ranks, np.cumsum(sizes)[:-1])]
    h = 12.0 / (n * (n + 1)) * sum(r**2 / size for r, size in zip(rank_sums, sizes, strict=True)) - 3 * (n + 1)

    tie_counts = np.unique(pooled, return_counts=True)[1].astype(float)
    tie_correction = 1.0 - float((tie_counts**3 - tie_counts).sum()) / (n**3 - n)
    if tie_correction == 0.0:
        raise InsufficientSampleError(KRUSKAL_WALLIS, "all observations are tied", sizes)
    h /= tie_correction

    dof = len(samples) - 1
    p_value = float(chi2.sf(h, dof))
    logger.debug("Kruskal-Wallis H=%.4f on %d df, p=%.4g (N=%d)", h, dof, p_value, n)
    return HypothesisTestResult(name=KRUSKAL_WALLIS, statistic=float(h), degrees_of_freedom=dof, p_value=p_value)
