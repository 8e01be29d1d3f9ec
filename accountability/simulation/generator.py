"""Deterministic sample history generator."""

import random
from datetime import date, datetime, time, timedelta
from typing import List, Optional

from ..models.task import Completion, Frequency, Goal, Level, Task, TaskType
from ..utils.config import get_setting
from ..utils.dataset import Dataset


class HistoryGenerator:
    """Generates reproducible goals, tasks and completions for demos and tests."""

    def __init__(self, seed: int = 42, config: dict = None):
        """Initialize generator with seed for reproducibility."""
        self.seed = seed
        self.random = random.Random(seed)
        self.config = config or {}

    def _setting(self, key: str):
        return get_setting(self.config, 'generator', key)

    def generate_goals(self, count: int, start_date: date) -> List[Goal]:
        """Generate goals with distinct priorities starting on start_date."""
        goals = []

        for i in range(count):
            duration = self.random.randint(60, 180)
            goals.append(Goal(
                goal_id=i + 1,
                name=f"Goal {i + 1}",
                priority=i + 1,
                created_at=start_date,
                target_date=start_date + timedelta(days=duration),
            ))

        return goals

    def generate_task(
        self,
        task_id: int,
        created_at: date,
        goal: Optional[Goal] = None,
    ) -> Task:
        """Generate one task with a random schedule and weighting."""
        frequency = self.random.choice(list(Frequency))
        selected_days = self.random.sample(range(7), frequency.required_days)
        task_type = TaskType.NUMBER if self.random.random() < 0.25 else TaskType.CHECKBOX

        return Task(
            task_id=task_id,
            name=f"Task {task_id}",
            frequency=frequency,
            selected_days=frozenset(selected_days),
            importance=self.random.choice(list(Level)),
            difficulty=self.random.choice(list(Level)),
            task_type=task_type,
            target=float(self.random.randint(2, 10)) if task_type is TaskType.NUMBER else None,
            goal_id=goal.goal_id if goal else None,
            goal_priority=goal.priority if goal else None,
            created_at=created_at,
        )

    def generate_completions(
        self,
        tasks: List[Task],
        start_date: date,
        end_date: date,
        completion_rate: float,
        late_log_rate: float,
    ) -> List[Completion]:
        """Generate at most one completion per scheduled (task, date)."""
        completions = []
        current = start_date

        while current <= end_date:
            for task in tasks:
                if task.created_at and current < task.created_at:
                    continue
                if current.weekday() not in task.selected_days:
                    continue
                if self.random.random() >= completion_rate:
                    continue

                is_late = self.random.random() < late_log_rate
                logged_on = current + timedelta(days=1) if is_late else current

                if task.task_type is TaskType.NUMBER:
                    # Mostly on target, sometimes short
                    target = task.target or 1
                    value = target if self.random.random() < 0.8 else max(0.0, target - 1)
                    completed = value >= target
                else:
                    value = None
                    completed = True

                completions.append(Completion(
                    task_id=task.task_id,
                    date=current,
                    completed=completed,
                    value=value,
                    is_late_logged=is_late,
                    timestamp=datetime.combine(logged_on, time(hour=self.random.randint(7, 22))),
                ))
            current += timedelta(days=1)

        return completions

    def generate_history(
        self,
        end_date: date,
        history_days: int = None,
        completion_rate: float = None,
    ) -> Dataset:
        """Generate a complete dataset ending on end_date."""
        history_days = history_days or self._setting('history_days')
        completion_rate = completion_rate if completion_rate is not None else self._setting('completion_rate')
        late_log_rate = self._setting('late_log_rate')

        start_date = end_date - timedelta(days=history_days - 1)
        goals = self.generate_goals(self._setting('goal_count'), start_date)

        tasks: List[Task] = []
        task_id = 1
        for goal in goals:
            for _ in range(self._setting('tasks_per_goal')):
                offset = self.random.randint(0, 7)
                tasks.append(self.generate_task(task_id, start_date + timedelta(days=offset), goal))
                task_id += 1

        for _ in range(self._setting('foundation_tasks')):
            tasks.append(self.generate_task(task_id, start_date))
            task_id += 1

        completions = self.generate_completions(
            tasks, start_date, end_date, completion_rate, late_log_rate
        )

        return Dataset(tasks=tasks, completions=completions, goals=goals)
