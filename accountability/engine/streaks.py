"""Streak tracking and perfect-day counting.

A day qualifies for a streak when its score reaches ``STREAK_THRESHOLD``.
Inactive days (nothing scheduled) neither extend nor break a streak.
Perfect days are stricter: every scheduled task completed.
"""

import logging
from datetime import date, timedelta
from typing import Iterable, List, Optional, Sequence

from ..models.scores import DailyScore, StreakResult
from ..models.task import Completion, Task
from ..utils.datetime_utils import DateLike, as_date
from .daily import calculate_daily_score
from .index import CompletionIndex, ensure_index
from .period import active_days

logger = logging.getLogger(__name__)

STREAK_THRESHOLD = 50

# How far back the as-of walk may skip inactive days before giving up
STREAK_LOOKBACK_DAYS = 400


def calculate_streak(
    scores: Sequence[DailyScore],
    threshold: int = STREAK_THRESHOLD,
) -> StreakResult:
    """Current streak (ending at the latest active day) and longest streak."""
    ascending = sorted(active_days(scores), key=lambda d: d.date)

    if not ascending:
        return StreakResult(current_streak=0, longest_streak=0)

    current_streak = 0
    for day in reversed(ascending):
        if day.score < threshold:
            break
        current_streak += 1

    longest_streak = 0
    run = 0
    for day in ascending:
        if day.score >= threshold:
            run += 1
            longest_streak = max(longest_streak, run)
        else:
            run = 0

    return StreakResult(current_streak=current_streak, longest_streak=longest_streak)


def calculate_streak_as_of_date(
    tasks: List[Task],
    completions: Iterable[Completion],
    as_of: DateLike,
    index: Optional[CompletionIndex] = None,
    *,
    threshold: int = STREAK_THRESHOLD,
    lookback_days: int = STREAK_LOOKBACK_DAYS,
    today: Optional[DateLike] = None,
) -> int:
    """Streak computed as if "today" were ``as_of``.

    Only dates on or before ``as_of`` are ever scored, so completions logged
    later cannot change the result. When ``today`` is given and ``as_of`` lies
    after it, there is no streak yet.
    """
    check = as_date(as_of)

    if today is not None and check > as_date(today):
        return 0

    idx = ensure_index(completions, index)
    limit = check - timedelta(days=lookback_days)

    streak = 0
    day: date = check

    while True:
        score = calculate_daily_score(tasks, (), day, idx)

        if score.tasks_scheduled == 0:
            day -= timedelta(days=1)
            if day < limit:
                break
            continue

        if score.score < threshold:
            break

        streak += 1
        day -= timedelta(days=1)

    logger.debug("Streak as of %s: %d", check, streak)
    return streak


def is_perfect_day(score: DailyScore) -> bool:
    """Active day with every scheduled task completed."""
    return score.tasks_scheduled > 0 and score.tasks_completed == score.tasks_scheduled


def count_perfect_days(scores: Iterable[DailyScore]) -> int:
    return sum(1 for s in scores if is_perfect_day(s))
