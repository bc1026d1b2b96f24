import numpy as np

from juiced_ball.domain.distribution import DistributionSample, QuantilePair
from juiced_ball.domain.errors import InsufficientSampleError

_OPERATION = "paired_quantiles"


def paired_quantiles(
    sample_a: DistributionSample,
    sample_b: DistributionSample,
    resolution: int | None = None,
) -> list[QuantilePair]:
    """Match empirical quantiles of two samples at common probability points.

    Probability points are evenly spaced over [0, 1]; there are ``resolution``
    of them, or as many as the larger sample has observations. Each sample's
    quantile is interpolated linearly between its order statistics, so two
    samples of equal size pair up their sorted values exactly.
    """
    sizes = (sample_a.size, sample_b.size)
    for sample in (sample_a, sample_b):
        if sample.size < 2:
            raise InsufficientSampleError(
                _OPERATION, f"sample {sample.label!r} has {sample.size} observations, need at least 2", sizes
            )
    points = resolution if resolution is not None else max(sizes)
    if points < 2:
        raise InsufficientSampleError(_OPERATION, f"resolution {points} gives fewer than 2 probability points", sizes)

    a = sample_a.as_array()
    b = sample_b.as_array()
    if not (np.isfinite(a).all() and np.isfinite(b).all()):
        raise ValueError("Quantile comparison requires finite observations")

    probabilities = np.linspace(0.0, 1.0, points)
    q_a = np.quantile(a, probabilities, method="linear")
    q_b = np.quantile(b, probabilities, method="linear")
    return [
        QuantilePair(probability=float(p), q_a=float(x), q_b=float(y))
        for p, x, y in zip(probabilities, q_a, q_b, strict=True)
    ]
