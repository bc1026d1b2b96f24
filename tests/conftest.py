"""Shared pytest fixtures for test modules."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

import pytest

from juiced_ball.domain.batted_ball import BattedBall

if TYPE_CHECKING:
    from collections.abc import Callable


def raw_row(
    game_date: str = "2016-04-03",
    game_year: str = "2016",
    des: str = "Mookie Betts homers (2) on a fly ball to left field.",
    hit_distance_sc: str = "412",
    events: str = "home_run",
) -> dict[str, str]:
    return {
        "game_date": game_date,
        "game_year": game_year,
        "des": des,
        "hit_distance_sc": hit_distance_sc,
        "events": events,
    }


@pytest.fixture
def make_row() -> Callable[..., dict[str, str]]:
    """Factory for raw Statcast rows with sensible defaults."""
    return raw_row


@pytest.fixture
def make_ball() -> Callable[..., BattedBall]:
    def factory(
        game_date: date = date(2016, 4, 3),
        season_year: int | None = None,
        event_type: str | None = "home_run",
        hit_distance: float | None = 410.0,
        description: str | None = "homers on a fly ball to center field.",
    ) -> BattedBall:
        return BattedBall(
            game_date=game_date,
            season_year=season_year if season_year is not None else game_date.year,
            event_type=event_type,
            description=description,
            hit_distance=hit_distance,
        )

    return factory
