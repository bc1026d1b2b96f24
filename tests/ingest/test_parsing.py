import math
from datetime import date, datetime

import pytest

from juiced_ball.domain.errors import MalformedDateError, SchemaError
from juiced_ball.ingest.parsing import (
    DATE_FORMATS,
    is_missing,
    parse_game_date,
    to_optional_distance,
    to_optional_str,
    to_required_int,
)


class TestParseGameDate:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("2016-04-03", date(2016, 4, 3)),
            ("04/03/2016", date(2016, 4, 3)),
            ("4/3/2016", date(2016, 4, 3)),
            ("2015-12-31", date(2015, 12, 31)),
            ("  2017-07-04 ", date(2017, 7, 4)),
        ],
    )
    def test_accepted_formats(self, raw: str, expected: date) -> None:
        assert parse_game_date(raw) == expected

    def test_iso_format_tried_first(self) -> None:
        assert DATE_FORMATS[0] == "%Y-%m-%d"

    @pytest.mark.parametrize("raw", ["2016/04/03", "03-04-2016", "April 3, 2016", "", "2016-02-30", "null"])
    def test_unparseable_raises(self, raw: str) -> None:
        with pytest.raises(MalformedDateError):
            parse_game_date(raw)

    def test_none_raises(self) -> None:
        with pytest.raises(MalformedDateError):
            parse_game_date(None)

    def test_passes_through_dates(self) -> None:
        assert parse_game_date(date(2016, 4, 3)) == date(2016, 4, 3)
        assert parse_game_date(datetime(2016, 4, 3, 19, 5)) == date(2016, 4, 3)


class TestIsMissing:
    @pytest.mark.parametrize("value", ["null", "0", "0.0", "", "  ", None, float("nan"), 0.0, 0])
    def test_missing(self, value: object) -> None:
        assert is_missing(value)

    @pytest.mark.parametrize("value", ["412", "0.5", "home_run", "NULL", 3.0, 2016])
    def test_present(self, value: object) -> None:
        assert not is_missing(value)


class TestFieldCoercion:
    def test_optional_str_strips(self) -> None:
        assert to_optional_str("  home_run ") == "home_run"
        assert to_optional_str("null") is None

    def test_required_int(self) -> None:
        assert to_required_int("2016", "game_year") == 2016
        assert to_required_int(2016.0, "game_year") == 2016

    def test_required_int_missing_raises(self) -> None:
        with pytest.raises(SchemaError, match="game_year"):
            to_required_int("null", "game_year")

    def test_required_int_rejects_fractions(self) -> None:
        with pytest.raises(SchemaError):
            to_required_int("2016.5", "game_year")

    def test_required_int_rejects_text(self) -> None:
        with pytest.raises(SchemaError):
            to_required_int("twenty", "game_year")

    def test_distance(self) -> None:
        assert to_optional_distance("412", "hit_distance_sc") == 412.0

    @pytest.mark.parametrize("raw", ["0", "0.0", "null", "", "0.00", "00", "0e0", "-0.0"])
    def test_distance_sentinels_are_missing_not_zero(self, raw: str) -> None:
        assert to_optional_distance(raw, "hit_distance_sc") is None

    @pytest.mark.parametrize("raw", ["-5", "inf", "far"])
    def test_distance_invalid_raises(self, raw: str) -> None:
        with pytest.raises(SchemaError):
            to_optional_distance(raw, "hit_distance_sc")

    def test_distance_nan_is_missing(self) -> None:
        assert to_optional_distance(math.nan, "hit_distance_sc") is None

    @pytest.mark.parametrize("raw", ["0.00", "-0.0"])
    def test_zero_distance_text_matches_frame_value(self, raw: str) -> None:
        assert to_optional_distance(raw, "hit_distance_sc") == to_optional_distance(0.0, "hit_distance_sc")
