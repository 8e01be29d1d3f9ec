"""Scoring and streak engine."""

from .daily import (
    calculate_daily_score,
    calculate_task_points,
    calculate_task_weight,
    get_goal_multiplier,
    is_task_completed,
)
from .index import CompletionIndex, build_completion_index
from .late_edit import can_edit_date
from .period import (
    calculate_all_time_average,
    calculate_completion,
    calculate_consistency,
    calculate_daily_scores_for_range,
    calculate_monthly_score,
    calculate_period_score,
    calculate_weekly_score,
)
from .probability import (
    calculate_goal_probability,
    calculate_time_elapsed_fraction,
    probability_from_pace,
)
from .reports import Report, build_daily_report, build_period_report, build_report
from .schedule import get_tasks_for_date, is_task_scheduled_for_date
from .stats import StatsSnapshot, build_stats_snapshot
from .streaks import calculate_streak, calculate_streak_as_of_date, count_perfect_days, is_perfect_day
from .trends import calculate_comparison, calculate_trend

__all__ = [
    'CompletionIndex',
    'Report',
    'StatsSnapshot',
    'build_completion_index',
    'build_daily_report',
    'build_period_report',
    'build_report',
    'build_stats_snapshot',
    'calculate_all_time_average',
    'calculate_comparison',
    'calculate_completion',
    'calculate_consistency',
    'calculate_daily_score',
    'calculate_daily_scores_for_range',
    'calculate_goal_probability',
    'calculate_monthly_score',
    'calculate_period_score',
    'calculate_streak',
    'calculate_streak_as_of_date',
    'calculate_task_points',
    'calculate_task_weight',
    'calculate_time_elapsed_fraction',
    'calculate_trend',
    'calculate_weekly_score',
    'can_edit_date',
    'count_perfect_days',
    'get_goal_multiplier',
    'get_tasks_for_date',
    'is_perfect_day',
    'is_task_completed',
    'is_task_scheduled_for_date',
    'probability_from_pace',
]
