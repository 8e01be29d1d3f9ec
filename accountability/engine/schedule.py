"""Schedule resolution: does a task occur on a given date."""

from typing import Iterable, List

from ..models.task import Task
from ..utils.datetime_utils import DateLike, as_date


def is_task_scheduled_for_date(task: Task, day: DateLike) -> bool:
    """True iff the date is on/after task creation and on a selected weekday."""
    check = as_date(day)

    # Never scheduled before the task existed
    if task.created_at is not None and check < task.created_at:
        return False

    return check.weekday() in task.selected_days


def get_tasks_for_date(tasks: Iterable[Task], day: DateLike) -> List[Task]:
    """Get all tasks scheduled for a specific date."""
    check = as_date(day)
    return [task for task in tasks if is_task_scheduled_for_date(task, check)]
