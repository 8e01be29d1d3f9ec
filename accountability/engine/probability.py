"""Goal completion probability from task pace."""

import logging
from datetime import timedelta
from typing import Iterable, List, Optional, Tuple

from ..models.task import Completion, Goal, Task
from ..utils.datetime_utils import DateLike, as_date, format_date
from ..utils.math_utils import clamp
from .daily import is_task_completed
from .index import CompletionIndex, ensure_index
from .schedule import is_task_scheduled_for_date

logger = logging.getLogger(__name__)

MIN_PROBABILITY = 5
MAX_PROBABILITY = 99

# Returned when there is nothing to measure yet
NEUTRAL_PROBABILITY = 50

# (minimum pace ratio, probability), checked top-down
PACE_STEPS: Tuple[Tuple[float, int], ...] = (
    (1.2, 95),
    (1.0, 85),
    (0.85, 70),
    (0.7, 55),
    (0.5, 40),
    (0.3, 25),
    (0.15, 15),
)

# (elapsed fraction below which the cap applies, cap)
TIME_CAPS: Tuple[Tuple[float, int], ...] = (
    (0.25, 80),
    (0.50, 90),
    (0.75, 95),
)


def calculate_time_elapsed_fraction(goal: Goal, as_of: DateLike) -> float:
    """Share of the goal's duration that has passed, in (0, 1].

    Both durations are floored at one day so a goal on its first day (or
    one whose target precedes its start) never divides by zero.
    """
    check = as_date(as_of)
    total_days = max(1, (goal.target_date - goal.created_at).days)
    elapsed_days = max(1, (check - goal.created_at).days)
    return min(1.0, elapsed_days / total_days)


def probability_from_pace(completion_rate: float, time_elapsed_fraction: float) -> int:
    """Map observed completion rate and elapsed time to a probability."""
    fraction = max(time_elapsed_fraction, 1e-9)
    pace_ratio = completion_rate / fraction

    probability = MIN_PROBABILITY
    for min_ratio, step_probability in PACE_STEPS:
        if pace_ratio >= min_ratio:
            probability = step_probability
            break

    cap = MAX_PROBABILITY
    for below_fraction, time_cap in TIME_CAPS:
        if fraction < below_fraction:
            cap = time_cap
            break

    return int(clamp(min(probability, cap), MIN_PROBABILITY, MAX_PROBABILITY))


def calculate_goal_probability(
    goal: Goal,
    tasks: List[Task],
    completions: Iterable[Completion],
    as_of: DateLike,
    index: Optional[CompletionIndex] = None,
) -> int:
    """Likelihood (5-99) that a goal is met by its target date."""
    goal_tasks = [t for t in tasks if t.goal_id == goal.goal_id]

    if not goal_tasks:
        return NEUTRAL_PROBABILITY

    idx = ensure_index(completions, index)
    check = as_date(as_of)

    expected = 0
    actual = 0
    day = goal.created_at

    while day <= check:
        day_str = format_date(day)
        for task in goal_tasks:
            if is_task_scheduled_for_date(task, day):
                expected += 1
                if is_task_completed(task, idx.get(task.task_id, day_str)):
                    actual += 1
        day += timedelta(days=1)

    if expected == 0:
        return NEUTRAL_PROBABILITY

    completion_rate = actual / expected
    fraction = calculate_time_elapsed_fraction(goal, check)
    probability = probability_from_pace(completion_rate, fraction)

    logger.debug(
        "Goal %s: %d/%d completions, %.2f elapsed -> %d%%",
        goal.goal_id, actual, expected, fraction, probability,
    )
    return probability
