from datetime import date, datetime, time, timedelta, timezone

import pytest

from attendance_engine.common.datetime_utils import (
    anchor_window,
    in_zone,
    iter_days,
    minutes_between,
    parse_time_of_day,
)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("08:00", time(8, 0)),
        ("8:30", time(8, 30)),
        ("22:15:30", time(22, 15, 30)),
        ("0630", time(6, 30)),
        ("2024-03-05T17:45:00", time(17, 45)),
        (time(9, 0), time(9, 0)),
    ],
)
def test_parse_time_of_day_accepts_supported_formats(raw, expected):
    assert parse_time_of_day(raw) == expected


@pytest.mark.parametrize("raw", ["", "8", "noon", "25:99", 830])
def test_parse_time_of_day_rejects_garbage(raw):
    with pytest.raises(ValueError):
        parse_time_of_day(raw)


def test_anchor_window_moves_end_to_next_day_for_overnight():
    start, end = anchor_window(date(2024, 3, 5), time(22, 0), time(6, 0))

    assert start == datetime(2024, 3, 5, 22, 0)
    assert end == datetime(2024, 3, 6, 6, 0)
    # Exactly 24h after the naive same-day end.
    assert (end - datetime(2024, 3, 5, 6, 0)).total_seconds() == 24 * 3600


def test_minutes_between_never_negative():
    assert minutes_between(datetime(2024, 1, 1, 8, 0), datetime(2024, 1, 1, 8, 45, 59)) == 45
    assert minutes_between(datetime(2024, 1, 1, 9, 0), datetime(2024, 1, 1, 8, 0)) == 0


def test_iter_days_is_inclusive():
    days = list(iter_days(date(2024, 2, 28), date(2024, 3, 1)))
    assert days == [date(2024, 2, 28), date(2024, 2, 29), date(2024, 3, 1)]


def test_in_zone_localizes_naive_and_converts_aware():
    plus7 = timezone(timedelta(hours=7))

    assert in_zone(datetime(2024, 3, 5, 8, 0), plus7) == datetime(2024, 3, 5, 8, 0, tzinfo=plus7)
    converted = in_zone(datetime(2024, 3, 5, 23, 10, tzinfo=timezone.utc), plus7)
    assert converted.date() == date(2024, 3, 6)
    assert converted.hour == 6


def test_in_zone_without_zone_rejects_aware_instants():
    assert in_zone(datetime(2024, 3, 5, 8, 0), None) == datetime(2024, 3, 5, 8, 0)
    with pytest.raises(ValueError):
        in_zone(datetime(2024, 3, 5, 8, 0, tzinfo=timezone.utc), None)
