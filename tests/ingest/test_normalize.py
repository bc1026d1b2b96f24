from collections.abc import Callable
from datetime import date

import pandas as pd
import pytest

from juiced_ball.domain.batted_ball import INSIDE_THE_PARK_MARKER
from juiced_ball.domain.errors import MalformedDateError, SchemaError
from juiced_ball.ingest.normalize import REQUIRED_FIELDS, batted_ball_mapper, normalize, normalize_frame

RowFactory = Callable[..., dict[str, str]]


class TestBattedBallMapper:
    def test_maps_fields(self, make_row: RowFactory) -> None:
        ball = batted_ball_mapper(make_row(game_date="05/14/2016", hit_distance_sc="398.0", events="home_run"))
        assert ball is not None
        assert ball.game_date == date(2016, 5, 14)
        assert ball.season_year == 2016
        assert ball.event_type == "home_run"
        assert ball.hit_distance == 398.0
        assert ball.segment is None

    def test_sentinel_distance_becomes_missing(self, make_row: RowFactory) -> None:
        for token in ("null", "0", "0.0"):
            ball = batted_ball_mapper(make_row(hit_distance_sc=token))
            assert ball is not None
            assert ball.hit_distance is None

    def test_sentinel_event_becomes_missing(self, make_row: RowFactory) -> None:
        ball = batted_ball_mapper(make_row(events="null"))
        assert ball is not None
        assert ball.event_type is None

    def test_inside_the_park_is_dropped(self, make_row: RowFactory) -> None:
        row = make_row(des="Delino DeShields hits an inside-the-park home run (2) on a fly ball.")
        assert batted_ball_mapper(row) is None

    def test_missing_field_raises_schema_error(self, make_row: RowFactory) -> None:
        row = make_row()
        del row["events"]
        with pytest.raises(SchemaError, match="events"):
            batted_ball_mapper(row)

    def test_bad_date_raises(self, make_row: RowFactory) -> None:
        with pytest.raises(MalformedDateError):
            batted_ball_mapper(make_row(game_date="2016.04.03"))


class TestNormalize:
    def test_keeps_valid_rows(self, make_row: RowFactory) -> None:
        report = normalize([make_row(), make_row(events="single", hit_distance_sc="220")])
        assert len(report.records) == 2
        assert report.rows_read == 2
        assert report.errors == ()
        assert report.excluded_inside_the_park == 0

    def test_bad_rows_are_skipped_and_reported(self, make_row: RowFactory) -> None:
        rows = [
            make_row(),
            make_row(game_date="not a date"),
            {"game_date": "2016-04-03"},
            make_row(game_year="null"),
            make_row(events="double"),
        ]
        report = normalize(rows)

        assert [r.event_type for r in report.records] == ["home_run", "double"]
        assert [e.row_index for e in report.errors] == [1, 2, 3]
        assert report.error_counts() == {"malformed_date": 1, "schema": 2}
        assert report.rows_read == 5

    def test_inside_the_park_excluded_not_errors(self, make_row: RowFactory) -> None:
        rows = [make_row(), make_row(des="Inside-the-park home run by Byron Buxton.")]
        report = normalize(rows)
        assert len(report.records) == 1
        assert report.excluded_inside_the_park == 1
        assert report.errors == ()

    def test_home_runs_never_carry_inside_the_park_marker(self, make_row: RowFactory) -> None:
        descriptions = [
            "homers (10) on a fly ball to right field.",
            "hits an inside-the-park home run (1) on a line drive to center field.",
            "hits an INSIDE-THE-PARK home run (2).",
            "null",
        ]
        report = normalize([make_row(des=d) for d in descriptions])
        home_runs = [r for r in report.records if r.is_home_run]
        assert home_runs
        assert all(INSIDE_THE_PARK_MARKER not in (r.description or "").lower() for r in home_runs)

    def test_both_date_formats_agree(self, make_row: RowFactory) -> None:
        report = normalize([make_row(game_date="2016-07-15"), make_row(game_date="07/15/2016")])
        assert {r.game_date for r in report.records} == {date(2016, 7, 15)}

    def test_idempotent_on_clean_records(self, make_row: RowFactory) -> None:
        raw = [
            make_row(),
            make_row(game_date="08/01/2015", game_year="2015", events="field_out", hit_distance_sc="0"),
            make_row(des="null", events="triple", hit_distance_sc="287.25"),
        ]
        clean = normalize(raw).records

        again = normalize([r.to_row() for r in clean])

        assert again.records == clean
        assert again.errors == ()
        assert again.excluded_inside_the_park == 0

    def test_required_fields(self) -> None:
        assert REQUIRED_FIELDS == ("game_date", "game_year", "des", "hit_distance_sc", "events")


class TestNormalizeFrame:
    def test_accepts_pandas_rows(self) -> None:
        frame = pd.DataFrame(
            {
                "game_date": ["2016-04-03", "04/10/2016"],
                "game_year": [2016, 2016],
                "des": ["homers.", "flies out."],
                "hit_distance_sc": [405.0, float("nan")],
                "events": ["home_run", "field_out"],
            }
        )
        report = normalize_frame(frame)
        assert len(report.records) == 2
        assert report.records[0].hit_distance == 405.0
        assert report.records[1].hit_distance is None
        assert report.records[1].game_date == date(2016, 4, 10)
