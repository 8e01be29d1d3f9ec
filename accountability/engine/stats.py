"""Dashboard stats snapshot.

Bundles every headline number a dashboard or achievement check needs into
one flat, immutable snapshot computed from a single completion index.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..models.scores import Comparison, DailyScore, Trend
from ..models.task import Completion, Goal, GoalId, Task, with_goal_priorities
from ..utils.config import get_setting
from ..utils.datetime_utils import DateLike, add_days, as_date, get_month_start, get_week_start
from ..utils.math_utils import calculate_percentage
from .daily import calculate_daily_score
from .index import build_completion_index
from .period import (
    active_days,
    calculate_all_time_average,
    calculate_completion,
    calculate_consistency,
    calculate_daily_scores_for_range,
    calculate_period_score,
)
from .probability import calculate_goal_probability
from .streaks import calculate_streak, count_perfect_days
from .trends import calculate_comparison, calculate_trend

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatsSnapshot:
    """Headline stats as of one day."""

    date: str
    today: DailyScore
    weekly_score: int
    monthly_score: int
    all_time_average: int
    current_streak: int
    longest_streak: int
    consistency: int
    today_completion: int
    weekly_completion: int
    monthly_completion: int
    daily_trend: Trend
    weekly_trend: Trend
    perfect_days_this_week: int
    perfect_days_this_month: int
    perfect_days_all_time: int
    vs_last_week: Optional[Comparison]
    vs_all_time: Optional[Comparison]
    goal_probabilities: Dict[GoalId, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Flat camelCase view for downstream readers."""
        return {
            'date': self.date,
            'todayScore': self.today.score,
            'todayTasksScheduled': self.today.tasks_scheduled,
            'todayTasksCompleted': self.today.tasks_completed,
            'weeklyScore': self.weekly_score,
            'monthlyScore': self.monthly_score,
            'allTimeAverage': self.all_time_average,
            'currentStreak': self.current_streak,
            'longestStreak': self.longest_streak,
            'consistency': self.consistency,
            'todayCompletion': self.today_completion,
            'weeklyCompletion': self.weekly_completion,
            'monthlyCompletion': self.monthly_completion,
            'dailyTrend': self.daily_trend.value,
            'weeklyTrend': self.weekly_trend.value,
            'perfectDaysThisWeek': self.perfect_days_this_week,
            'perfectDaysThisMonth': self.perfect_days_this_month,
            'perfectDaysAllTime': self.perfect_days_all_time,
            'vsLastWeek': self.vs_last_week.to_dict() if self.vs_last_week else None,
            'vsAllTime': self.vs_all_time.to_dict() if self.vs_all_time else None,
            'goalProbabilities': {str(k): v for k, v in self.goal_probabilities.items()},
        }


def build_stats_snapshot(
    tasks: List[Task],
    completions: List[Completion],
    goals: List[Goal],
    today: DateLike,
    config: Optional[Dict[str, Any]] = None,
) -> StatsSnapshot:
    """Compute the dashboard snapshot for ``today``."""
    current = as_date(today)
    tasks = with_goal_priorities(tasks, goals)
    idx = build_completion_index(completions)

    streak_threshold = get_setting(config, 'scoring', 'streak_threshold')
    consistency_threshold = get_setting(config, 'scoring', 'consistency_threshold')
    improving = get_setting(config, 'trend', 'improving_threshold')
    declining = get_setting(config, 'trend', 'declining_threshold')
    all_time_days = get_setting(config, 'windows', 'all_time_days')

    week_start = get_week_start(current)
    month_start = get_month_start(current)

    today_score = calculate_daily_score(tasks, (), current, idx)
    yesterday_score = calculate_daily_score(tasks, (), add_days(current, -1), idx)

    week_scores = calculate_daily_scores_for_range(tasks, (), week_start, current, idx)
    month_scores = calculate_daily_scores_for_range(tasks, (), month_start, current, idx)
    all_time_scores = calculate_daily_scores_for_range(
        tasks, (), add_days(current, -(all_time_days - 1)), current, idx
    )
    last_week_scores = calculate_daily_scores_for_range(
        tasks, (), add_days(week_start, -7), add_days(week_start, -1), idx
    )

    weekly_score = calculate_period_score(week_scores)
    last_week_score = calculate_period_score(last_week_scores)
    all_time_average = calculate_all_time_average(all_time_scores)
    streak = calculate_streak(all_time_scores, streak_threshold)

    has_last_week = bool(active_days(last_week_scores))
    week_start_str = week_start.isoformat()
    has_history = any(d.date < week_start_str for d in active_days(all_time_scores))

    goal_probabilities = {
        goal.goal_id: calculate_goal_probability(goal, tasks, (), current, idx)
        for goal in goals
        if not goal.completed
    }

    snapshot = StatsSnapshot(
        date=today_score.date,
        today=today_score,
        weekly_score=weekly_score,
        monthly_score=calculate_period_score(month_scores),
        all_time_average=all_time_average,
        current_streak=streak.current_streak,
        longest_streak=streak.longest_streak,
        consistency=calculate_consistency(month_scores, consistency_threshold),
        today_completion=calculate_percentage(today_score.tasks_completed, today_score.tasks_scheduled),
        weekly_completion=calculate_completion(week_scores),
        monthly_completion=calculate_completion(month_scores),
        daily_trend=calculate_trend(today_score.score, yesterday_score.score, improving, declining),
        weekly_trend=calculate_trend(weekly_score, last_week_score, improving, declining),
        perfect_days_this_week=count_perfect_days(week_scores),
        perfect_days_this_month=count_perfect_days(month_scores),
        perfect_days_all_time=count_perfect_days(all_time_scores),
        vs_last_week=calculate_comparison(weekly_score, last_week_score, has_last_week),
        vs_all_time=calculate_comparison(
            weekly_score, all_time_average, has_history
        ),
        goal_probabilities=goal_probabilities,
    )

    logger.debug(
        "Stats snapshot for %s: score=%d streak=%d",
        snapshot.date, today_score.score, streak.current_streak,
    )
    return snapshot
