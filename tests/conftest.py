"""Shared test fixtures for the accountability engine test suite."""

from datetime import date, timedelta

import pytest

from accountability.models import Completion, DailyScore, Goal, Task

# 2024-01-01 is a Monday
MONDAY = date(2024, 1, 1)

_FREQUENCY_BY_COUNT = {1: '1x', 2: '2x', 3: '3x', 4: '4x', 5: '5x', 6: '6x', 7: 'daily'}


@pytest.fixture
def monday():
    return MONDAY


@pytest.fixture
def make_task():
    """Factory for tasks; frequency follows the number of selected days."""

    def _make(task_id=1, days=range(7), created_at=MONDAY, **kwargs):
        days = list(days)
        kwargs.setdefault('frequency', _FREQUENCY_BY_COUNT[len(days)])
        kwargs.setdefault('name', f"Task {task_id}")
        return Task(task_id=task_id, selected_days=days, created_at=created_at, **kwargs)

    return _make


@pytest.fixture
def complete_days():
    """Factory for checkbox completions on consecutive days."""

    def _make(task_id, start, count, completed=True, **kwargs):
        return [
            Completion(task_id=task_id, date=start + timedelta(days=i), completed=completed, **kwargs)
            for i in range(count)
        ]

    return _make


@pytest.fixture
def make_score():
    """Factory for DailyScore values with consistent point totals."""

    def _make(day, score, scheduled=1, completed=None):
        if completed is None:
            completed = scheduled if score == 100 else 0
        return DailyScore(
            date=day if isinstance(day, str) else day.isoformat(),
            score=score,
            points_earned=float(score),
            points_possible=100.0 if scheduled else 0.0,
            tasks_completed=completed,
            tasks_scheduled=scheduled,
        )

    return _make


@pytest.fixture
def daily_goal_history(make_task, complete_days):
    """One priority-1 goal with a daily task completed every day Jan 1-24, 2024."""
    goal = Goal(
        goal_id=1,
        name="Run a marathon",
        priority=1,
        created_at=MONDAY,
        target_date=date(2024, 3, 31),
    )
    task = make_task(task_id=1, goal_id=1, name="Run")
    completions = complete_days(1, MONDAY, 24)
    return [task], completions, [goal]
