"""Range-level aggregation of daily scores."""

import logging
import statistics
from datetime import date
from typing import Iterable, List, Optional, Sequence

from ..models.scores import DailyScore
from ..models.task import Completion, Task
from ..utils.datetime_utils import DateLike, add_days, date_range, get_month_end
from ..utils.math_utils import calculate_percentage, mean, round_half_up
from .daily import calculate_daily_score
from .index import CompletionIndex, ensure_index

logger = logging.getLogger(__name__)

CONSISTENCY_THRESHOLD = 50

# Largest population standard deviation possible for scores in [0, 100]
MAX_SCORE_STDEV = 50.0

# Share of the consistency value that a maximally erratic history forfeits
VARIANCE_PENALTY = 0.5


def active_days(scores: Iterable[DailyScore]) -> List[DailyScore]:
    """Days with at least one scheduled task."""
    return [s for s in scores if s.tasks_scheduled > 0]


def calculate_daily_scores_for_range(
    tasks: List[Task],
    completions: Iterable[Completion],
    start: DateLike,
    end: DateLike,
    index: Optional[CompletionIndex] = None,
) -> List[DailyScore]:
    """One DailyScore per calendar day in [start, end], ascending."""
    idx = ensure_index(completions, index)
    scores = [calculate_daily_score(tasks, (), day, idx) for day in date_range(start, end)]

    logger.debug("Scored %d days from %s to %s", len(scores), start, end)
    return scores


def calculate_period_score(scores: Sequence[DailyScore]) -> int:
    """Mean score over active days; 0 when the range has none."""
    days = active_days(scores)
    if not days:
        return 0
    return round_half_up(mean(d.score for d in days))


def calculate_completion(scores: Sequence[DailyScore]) -> int:
    """Aggregate completed / scheduled across the whole range, as a percentage."""
    total_completed = sum(d.tasks_completed for d in scores)
    total_scheduled = sum(d.tasks_scheduled for d in scores)
    return calculate_percentage(total_completed, total_scheduled)


def calculate_consistency(
    scores: Sequence[DailyScore],
    threshold: int = CONSISTENCY_THRESHOLD,
) -> int:
    """How reliably active days clear the threshold, 0-100.

    The hit rate (share of active days scoring at or above ``threshold``) is
    damped by the spread of active-day scores: identical scores keep the
    full hit rate, a maximally erratic history keeps half of it.
    """
    days = active_days(scores)
    if not days:
        return 0

    hits = sum(1 for d in days if d.score >= threshold)
    hit_rate = hits / len(days)

    spread = statistics.pstdev(d.score for d in days) if len(days) > 1 else 0.0
    stability = 1.0 - VARIANCE_PENALTY * min(1.0, spread / MAX_SCORE_STDEV)

    return round_half_up(100 * hit_rate * stability)


def calculate_all_time_average(scores: Sequence[DailyScore]) -> int:
    """Mean score over active days of a caller-supplied trailing window."""
    days = active_days(scores)
    if not days:
        return 0
    return round_half_up(mean(d.score for d in days))


def calculate_weekly_score(
    tasks: List[Task],
    completions: Iterable[Completion],
    week_start: DateLike,
    index: Optional[CompletionIndex] = None,
) -> int:
    """Period score for the seven days starting at week_start."""
    week_end = add_days(week_start, 6)
    scores = calculate_daily_scores_for_range(tasks, completions, week_start, week_end, index)
    return calculate_period_score(scores)


def calculate_monthly_score(
    tasks: List[Task],
    completions: Iterable[Completion],
    year: int,
    month: int,
    index: Optional[CompletionIndex] = None,
) -> int:
    """Period score for a calendar month (month is 1-12)."""
    month_start = date(year, month, 1)
    month_end = get_month_end(month_start)
    scores = calculate_daily_scores_for_range(tasks, completions, month_start, month_end, index)
    return calculate_period_score(scores)
