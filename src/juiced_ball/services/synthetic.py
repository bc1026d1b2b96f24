from datetime import date, timedelta

import numpy as np

from juiced_ball.domain.batted_ball import HOME_RUN, BattedBall


def generate_home_runs(
    season_start: date,
    day_offset: int,
    n_pre: int,
    n_post: int,
    *,
    seed: int,
    mean: float = 400.0,
    sd: float = 25.0,
    post_shift: float = 0.0,
) -> list[BattedBall]:
    """Draw synthetic home runs on either side of ``season_start + day_offset``.

    The first record always falls on ``season_start`` so the generated set
    reproduces the same breakpoint. Pre-breakpoint games fall on or before the
    breakpoint, post-breakpoint games within the following 100 days. Distances
    are normal with ``post_shift`` added to the later cohort, clipped to stay
    positive.
    """
    if n_pre < 1:
        raise ValueError("n_pre must be at least 1 to anchor the season start")
    rng = np.random.default_rng(seed)

    pre_days = rng.integers(0, day_offset + 1, size=n_pre)
    pre_days[0] = 0
    post_days = rng.integers(day_offset + 1, day_offset + 101, size=n_post)
    pre_distances = rng.normal(mean, sd, size=n_pre)
    post_distances = rng.normal(mean + post_shift, sd, size=n_post)

    records: list[BattedBall] = []
    for days, distance in zip(
        np.concatenate([pre_days, post_days]),
        np.concatenate([pre_distances, post_distances]),
        strict=True,
    ):
        game_date = season_start + timedelta(days=int(days))
        records.append(
            BattedBall(
                game_date=game_date,
                season_year=season_start.year,
                event_type=HOME_RUN,
                description="homers (1) on a fly ball to center field.",
                hit_distance=round(max(float(distance), 1.0), 1),
            )
        )
    return records
