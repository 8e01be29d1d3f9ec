from datetime import date, datetime

import pytest

from accountability.errors import InvalidDateError
from accountability.utils.datetime_utils import (
    add_days,
    as_date,
    date_range,
    format_date,
    get_day_of_week,
    get_month_end,
    get_month_start,
    get_week_start,
    is_same_day,
    parse_date,
)


@pytest.mark.parametrize("value", ["2024-01-01", "2024-02-29", "1999-12-31", "2030-07-04"])
def test_format_parse_round_trip(value):
    assert format_date(parse_date(value)) == value


@pytest.mark.parametrize("value", ["2024-1-05", "2024/01/05", "nope", "2023-02-29", ""])
def test_parse_date_rejects_malformed(value):
    with pytest.raises(InvalidDateError):
        parse_date(value)


def test_invalid_date_is_value_error():
    with pytest.raises(ValueError):
        parse_date("2024-13-01")


def test_as_date_truncates_datetime():
    assert as_date(datetime(2024, 1, 1, 23, 59)) == date(2024, 1, 1)
    assert as_date("2024-01-01") == date(2024, 1, 1)


@pytest.mark.parametrize("day,expected", [
    (date(2024, 1, 1), date(2024, 1, 1)),   # Monday
    (date(2024, 1, 3), date(2024, 1, 1)),   # Wednesday
    (date(2024, 1, 7), date(2024, 1, 1)),   # Sunday
    (date(2024, 3, 1), date(2024, 2, 26)),  # crosses month
])
def test_week_start_is_most_recent_monday(day, expected):
    assert get_week_start(day) == expected


def test_month_bounds_handle_leap_year():
    assert get_month_start(date(2024, 2, 29)) == date(2024, 2, 1)
    assert get_month_end(date(2024, 2, 10)) == date(2024, 2, 29)
    assert get_month_end(date(2023, 2, 10)) == date(2023, 2, 28)


def test_add_days_crosses_boundaries():
    assert add_days(date(2024, 1, 31), 1) == date(2024, 2, 1)
    assert add_days("2024-03-01", -1) == date(2024, 2, 29)


def test_day_of_week_monday_is_zero():
    assert get_day_of_week(date(2024, 1, 1)) == 0
    assert get_day_of_week(date(2024, 1, 7)) == 6


def test_is_same_day_ignores_time():
    assert is_same_day(datetime(2024, 1, 1, 8), date(2024, 1, 1))
    assert not is_same_day(date(2024, 1, 1), date(2024, 1, 2))


def test_date_range_inclusive_and_ascending():
    days = list(date_range(date(2024, 1, 30), date(2024, 2, 2)))
    assert days == [date(2024, 1, 30), date(2024, 1, 31), date(2024, 2, 1), date(2024, 2, 2)]
    assert list(date_range(date(2024, 1, 2), date(2024, 1, 1))) == []
