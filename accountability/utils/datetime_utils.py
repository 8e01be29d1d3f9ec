"""Date and calendar utilities.

All dates are calendar dates (no time of day). Weekdays follow the
0 = Monday ... 6 = Sunday convention used by ``datetime.date.weekday``.
"""

import calendar
from datetime import date, datetime, timedelta
from typing import Iterator, Union

from ..errors import InvalidDateError

DateLike = Union[date, datetime, str]

DATE_FORMAT = "%Y-%m-%d"


def as_date(value: DateLike) -> date:
    """Truncate a date, datetime or YYYY-MM-DD string to a calendar date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return parse_date(value)
    raise InvalidDateError(f"Unsupported date value: {value!r}")


def format_date(value: Union[date, datetime]) -> str:
    """Format as canonical fixed-width YYYY-MM-DD."""
    return as_date(value).strftime(DATE_FORMAT)


def parse_date(date_str: str) -> date:
    """Parse a canonical YYYY-MM-DD string."""
    try:
        parsed = datetime.strptime(date_str, DATE_FORMAT).date()
    except (TypeError, ValueError) as exc:
        raise InvalidDateError(f"Invalid date string: {date_str!r}") from exc

    # strptime accepts "2024-1-5"; only the fixed-width form round-trips
    if parsed.strftime(DATE_FORMAT) != date_str:
        raise InvalidDateError(f"Date must be zero-padded YYYY-MM-DD: {date_str!r}")
    return parsed


def add_days(value: DateLike, days: int) -> date:
    """Shift a date by a whole number of days."""
    return as_date(value) + timedelta(days=days)


def get_day_of_week(value: DateLike) -> int:
    """Weekday index, 0 = Monday."""
    return as_date(value).weekday()


def is_same_day(first: DateLike, second: DateLike) -> bool:
    return as_date(first) == as_date(second)


def get_week_start(value: DateLike) -> date:
    """Most recent Monday on or before the date."""
    day = as_date(value)
    return day - timedelta(days=day.weekday())


def get_month_start(value: DateLike) -> date:
    day = as_date(value)
    return day.replace(day=1)


def get_month_end(value: DateLike) -> date:
    day = as_date(value)
    last = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=last)


def date_range(start: DateLike, end: DateLike) -> Iterator[date]:
    """Yield every calendar day in [start, end], ascending."""
    current = as_date(start)
    last = as_date(end)

    while current <= last:
        yield current
        current += timedelta(days=1)
