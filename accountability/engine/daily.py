"""Daily score calculation.

Each scheduled task is worth ``(importance * 2 + difficulty) * goal
multiplier`` points. A day's score is the share of possible points earned,
as a rounded percentage. Late-logged completions count like any other; the
flag is carried for callers to display.
"""

from typing import Iterable, List, Optional

from ..models.scores import DailyScore
from ..models.task import Completion, Task, TaskType
from ..utils.datetime_utils import DateLike, as_date, format_date
from ..utils.math_utils import calculate_percentage
from .index import CompletionIndex, ensure_index
from .schedule import get_tasks_for_date


# Goal priority rank -> multiplier; anything below rank 3 (or unlinked) is 1.0
GOAL_MULTIPLIERS = {
    1: 1.5,
    2: 1.3,
    3: 1.1,
}


def is_task_completed(task: Task, completion: Optional[Completion]) -> bool:
    """Completion status for checkbox and numeric tasks."""
    if completion is None:
        return False

    if task.task_type is TaskType.NUMBER:
        value = completion.value if completion.value is not None else 0
        target = task.target if task.target is not None else 1
        return value >= target
    if task.task_type is TaskType.CHECKBOX:
        return bool(completion.completed)

    raise AssertionError(f"unhandled task type: {task.task_type}")


def calculate_task_weight(task: Task) -> int:
    """(Importance x 2) + Difficulty, range 3 to 9."""
    return task.importance.points * 2 + task.difficulty.points


def get_goal_multiplier(goal_priority: Optional[int]) -> float:
    """Priority #1: 1.5x, #2: 1.3x, #3: 1.1x, #4+ and Foundations: 1.0x."""
    if goal_priority is None:
        return 1.0
    return GOAL_MULTIPLIERS.get(goal_priority, 1.0)


def calculate_task_points(task: Task) -> float:
    """Points possible for a task on a day it is scheduled."""
    return calculate_task_weight(task) * get_goal_multiplier(task.goal_priority)


def calculate_daily_score(
    tasks: List[Task],
    completions: Iterable[Completion],
    day: DateLike,
    index: Optional[CompletionIndex] = None,
) -> DailyScore:
    """Calculate the score for a single calendar day."""
    check = as_date(day)
    date_str = format_date(check)
    scheduled = get_tasks_for_date(tasks, check)

    if not scheduled:
        return DailyScore(
            date=date_str,
            score=0,
            points_earned=0.0,
            points_possible=0.0,
            tasks_completed=0,
            tasks_scheduled=0,
        )

    idx = ensure_index(completions, index)

    total_possible = 0.0
    total_earned = 0.0
    completed_count = 0

    for task in scheduled:
        points = calculate_task_points(task)
        total_possible += points

        if is_task_completed(task, idx.get(task.task_id, date_str)):
            total_earned += points
            completed_count += 1

    score = calculate_percentage(total_earned, total_possible)

    return DailyScore(
        date=date_str,
        score=score,
        points_earned=total_earned,
        points_possible=total_possible,
        tasks_completed=completed_count,
        tasks_scheduled=len(scheduled),
    )
