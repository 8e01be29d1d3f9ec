"""Utility functions."""

from .config import get_default_config, get_setting, load_config, merge_config
from .datetime_utils import (
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

__all__ = [
    'add_days',
    'as_date',
    'date_range',
    'format_date',
    'get_day_of_week',
    'get_default_config',
    'get_month_end',
    'get_month_start',
    'get_setting',
    'get_week_start',
    'is_same_day',
    'load_config',
    'merge_config',
    'parse_date',
]
