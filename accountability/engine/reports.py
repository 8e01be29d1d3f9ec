"""Daily, weekly and monthly report builders."""

import logging
from collections import defaultdict
from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from ..models.scores import Comparison, DailyScore
from ..models.task import Completion, Goal, Task, with_goal_priorities
from ..utils.config import get_setting
from ..utils.datetime_utils import (
    DateLike,
    add_days,
    as_date,
    date_range,
    format_date,
    get_day_of_week,
    get_month_end,
    get_month_start,
    get_week_start,
)
from ..utils.math_utils import calculate_percentage, mean, round_half_up
from .daily import calculate_daily_score, is_task_completed
from .index import CompletionIndex, ensure_index
from .period import (
    active_days,
    calculate_all_time_average,
    calculate_completion,
    calculate_consistency,
    calculate_daily_scores_for_range,
    calculate_period_score,
)
from .schedule import get_tasks_for_date, is_task_scheduled_for_date
from .streaks import calculate_streak_as_of_date, count_perfect_days
from .trends import calculate_comparison

logger = logging.getLogger(__name__)

DAY_NAMES = ['Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday']

FOUNDATIONS_LABEL = "Foundations"

REPORT_KINDS = ('daily', 'weekly', 'monthly')

# How many periods, the current one included, a period report is ranked against
RANK_WEEKS = 52
RANK_MONTHS = 12


@dataclass
class TaskRow:
    """One scheduled task on the report day."""

    task_id: Any
    name: str
    importance: str
    difficulty: str
    goal: str
    completed: bool
    is_late_logged: bool = False


@dataclass
class TaskRate:
    """Completed vs scheduled occurrences of one task over a period."""

    task_id: Any
    name: str
    completed: int
    scheduled: int

    @property
    def rate(self) -> float:
        return self.completed / self.scheduled if self.scheduled else 0.0


@dataclass
class TaskChange:
    """Change in a task's completion rate against the previous period, in points."""

    task_id: Any
    name: str
    change: int


@dataclass
class Report:
    """Numbers behind a daily, weekly or monthly report."""

    kind: str
    start: str
    end: str
    score: int
    completion: int
    tasks_completed: int
    tasks_scheduled: int
    streak: int
    consistency: Optional[int] = None
    active_days: Optional[int] = None
    perfect_days: Optional[int] = None
    comparisons: Dict[str, Optional[Comparison]] = field(default_factory=dict)
    rank: Optional[Tuple[int, int]] = None
    best_day: Optional[DailyScore] = None
    lowest_day: Optional[DailyScore] = None
    weekday_averages: Dict[str, int] = field(default_factory=dict)
    tasks: List[TaskRow] = field(default_factory=list)
    breakdowns: Dict[str, Dict[str, Dict[str, int]]] = field(default_factory=dict)
    highlights: Dict[str, Optional[Any]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert report to dictionary for JSON export."""
        return {
            'kind': self.kind,
            'start': self.start,
            'end': self.end,
            'score': self.score,
            'completion': self.completion,
            'tasksCompleted': self.tasks_completed,
            'tasksScheduled': self.tasks_scheduled,
            'streak': self.streak,
            'consistency': self.consistency,
            'activeDays': self.active_days,
            'perfectDays': self.perfect_days,
            'comparisons': {
                name: comparison.to_dict() if comparison else None
                for name, comparison in self.comparisons.items()
            },
            'rank': {'rank': self.rank[0], 'total': self.rank[1]} if self.rank else None,
            'bestDay': self.best_day.to_dict() if self.best_day else None,
            'lowestDay': self.lowest_day.to_dict() if self.lowest_day else None,
            'weekdayAverages': self.weekday_averages,
            'tasks': [asdict(row) for row in self.tasks],
            'breakdowns': self.breakdowns,
            'highlights': {
                name: asdict(value) if value else None
                for name, value in self.highlights.items()
            },
        }

    def to_human_readable(self) -> str:
        """Generate human-readable report text."""
        title = f"{self.kind.capitalize()} Report"
        period = self.start if self.start == self.end else f"{self.start} to {self.end}"
        lines = [
            f"=== {title}: {period} ===",
            f"Score: {self.score}",
            f"Completion: {self.completion}% ({self.tasks_completed}/{self.tasks_scheduled} tasks)",
            f"Streak: {self.streak} days",
        ]

        if self.consistency is not None:
            lines.append(f"Consistency: {self.consistency}%")
        if self.active_days is not None:
            lines.append(f"Active days: {self.active_days}")
        if self.perfect_days is not None:
            lines.append(f"Perfect days: {self.perfect_days}")

        lines.extend(["", "Comparisons:"])
        for name, comparison in self.comparisons.items():
            if comparison is None:
                lines.append(f"  {name}: no data yet")
            else:
                sign = '+' if comparison.value >= 0 else ''
                lines.append(f"  {name}: {sign}{comparison.value} ({comparison.direction.value})")
        if self.rank:
            lines.append(f"  rank: #{self.rank[0]} of {self.rank[1]}")

        if self.best_day and self.lowest_day:
            lines.extend([
                "",
                f"Best day: {self.best_day.date} ({self.best_day.score})",
                f"Lowest day: {self.lowest_day.date} ({self.lowest_day.score})",
            ])

        if self.tasks:
            lines.extend(["", "Tasks:"])
            for row in self.tasks:
                mark = 'x' if row.completed else ' '
                late = " (late)" if row.is_late_logged else ""
                lines.append(f"  [{mark}] {row.name} - {row.goal}{late}")

        for dimension, groups in self.breakdowns.items():
            lines.extend(["", f"By {dimension}:"])
            for label, counts in groups.items():
                lines.append(
                    f"  {label}: {counts['completed']}/{counts['scheduled']} ({counts['rate']}%)"
                )

        if self.highlights:
            lines.extend(["", "Highlights:"])
            for name, value in self.highlights.items():
                label = name.replace('_', ' ')
                if value is None:
                    lines.append(f"  {label}: -")
                elif isinstance(value, TaskChange):
                    lines.append(f"  {label}: {value.name} ({abs(value.change)}%)")
                else:
                    lines.append(f"  {label}: {value.name} ({value.completed}/{value.scheduled})")

        lines.append("=" * 50)
        return "\n".join(lines)


def _goal_labels(goals: List[Goal]) -> Dict[Any, str]:
    return {goal.goal_id: goal.name for goal in goals}


def _goal_label(task: Task, labels: Dict[Any, str]) -> str:
    if task.goal_id is None:
        return FOUNDATIONS_LABEL
    return labels.get(task.goal_id, str(task.goal_id))


def _calculate_breakdowns(
    tasks: List[Task],
    goals: List[Goal],
    days: List[DailyScore],
    idx: CompletionIndex,
) -> Dict[str, Dict[str, Dict[str, int]]]:
    """Completed/scheduled task-days grouped by importance, difficulty and goal."""
    labels = _goal_labels(goals)
    counts: Dict[str, Dict[str, List[int]]] = {
        'importance': defaultdict(lambda: [0, 0]),
        'difficulty': defaultdict(lambda: [0, 0]),
        'goal': defaultdict(lambda: [0, 0]),
    }

    for day in days:
        if not day.is_active:
            continue
        for task in get_tasks_for_date(tasks, day.date):
            done = is_task_completed(task, idx.get(task.task_id, day.date))
            for dimension, label in (
                ('importance', task.importance.value),
                ('difficulty', task.difficulty.value),
                ('goal', _goal_label(task, labels)),
            ):
                counts[dimension][label][1] += 1
                if done:
                    counts[dimension][label][0] += 1

    return {
        dimension: {
            label: {
                'completed': completed,
                'scheduled': scheduled,
                'rate': calculate_percentage(completed, scheduled),
            }
            for label, (completed, scheduled) in sorted(groups.items())
        }
        for dimension, groups in counts.items()
    }


def _calculate_weekday_averages(scores: List[DailyScore]) -> Dict[str, int]:
    """Mean active-day score per weekday, for weekdays that have data."""
    by_weekday: Dict[int, List[int]] = defaultdict(list)
    for day in active_days(scores):
        by_weekday[get_day_of_week(day.date)].append(day.score)

    return {
        DAY_NAMES[weekday]: round_half_up(mean(values))
        for weekday, values in sorted(by_weekday.items())
    }


def _rank_day(score: DailyScore, history: List[DailyScore]) -> Optional[Tuple[int, int]]:
    """Rank among earlier active days (1 = best); None without history."""
    earlier = sorted(
        (d.score for d in active_days(history) if d.date < score.date),
        reverse=True,
    )
    if not earlier:
        return None

    rank = next((i + 1 for i, s in enumerate(earlier) if s <= score.score), len(earlier) + 1)
    return rank, len(earlier) + 1


def _rank_window_start(last: date, kind: str) -> date:
    """First day of the oldest week or month a period report is ranked against."""
    if kind == 'weekly':
        return add_days(get_week_start(last), -7 * (RANK_WEEKS - 1))

    start = get_month_start(last)
    for _ in range(RANK_MONTHS - 1):
        start = get_month_start(add_days(start, -1))
    return start


def _rank_period(score: int, scores: List[DailyScore], kind: str) -> Optional[Tuple[int, int]]:
    """Rank among weeks or months with active days (1 = best).

    ``scores`` runs up to the report's last day, so the period being reported
    on is one of the ranked windows. None until there are at least two.
    """
    period_key = get_week_start if kind == 'weekly' else get_month_start
    windows: Dict[date, List[DailyScore]] = defaultdict(list)
    for day in scores:
        windows[period_key(day.date)].append(day)

    ranked = sorted(
        (calculate_period_score(days) for days in windows.values() if active_days(days)),
        reverse=True,
    )
    if len(ranked) < 2:
        return None

    rank = next((i + 1 for i, s in enumerate(ranked) if s <= score), len(ranked))
    return rank, len(ranked)


def _calculate_task_rates(
    tasks: List[Task],
    days: List[date],
    idx: CompletionIndex,
) -> List[TaskRate]:
    """Per-task completion over the given days, best rate first."""
    rates = []
    for task in tasks:
        completed = 0
        scheduled = 0
        for day in days:
            if not is_task_scheduled_for_date(task, day):
                continue
            scheduled += 1
            if is_task_completed(task, idx.get(task.task_id, day)):
                completed += 1
        if scheduled:
            rates.append(TaskRate(task.task_id, task.name, completed, scheduled))

    return sorted(rates, key=lambda r: r.rate, reverse=True)


def _calculate_task_highlights(
    tasks: List[Task],
    days: List[date],
    previous_days: List[date],
    idx: CompletionIndex,
) -> Dict[str, Optional[Any]]:
    """Best and worst task by rate, plus the biggest moves against the previous period.

    Only previous days with at least one logged completion are compared, and
    changes are reported only when the previous period completed something.
    """
    rates = _calculate_task_rates(tasks, days, idx)

    tracked = [d for d in previous_days if any(idx.get(t.task_id, d) is not None for t in tasks)]
    previous_rates = _calculate_task_rates(tasks, tracked, idx)

    most_improved = None
    most_declined = None
    if any(r.completed for r in previous_rates):
        previous = {r.task_id: r.rate for r in previous_rates}
        changes = [
            TaskChange(r.task_id, r.name, round_half_up((r.rate - previous.get(r.task_id, r.rate)) * 100))
            for r in rates
        ]
        most_improved = max((c for c in changes if c.change > 0), key=lambda c: c.change, default=None)
        most_declined = min((c for c in changes if c.change < 0), key=lambda c: c.change, default=None)

    return {
        'highest': rates[0] if rates else None,
        'lowest': rates[-1] if rates else None,
        'most_improved': most_improved,
        'most_declined': most_declined,
    }


def build_daily_report(
    tasks: List[Task],
    completions: List[Completion],
    goals: List[Goal],
    day: DateLike,
    index: Optional[CompletionIndex] = None,
    config: Optional[Dict[str, Any]] = None,
) -> Report:
    """Report for a single day, with comparisons against prior data only."""
    current = as_date(day)
    tasks = with_goal_priorities(tasks, goals)
    idx = ensure_index(completions, index)
    threshold = get_setting(config, 'scoring', 'streak_threshold')
    all_time_days = get_setting(config, 'windows', 'all_time_days')
    lookback_days = get_setting(config, 'windows', 'streak_lookback_days')

    score = calculate_daily_score(tasks, (), current, idx)
    yesterday = calculate_daily_score(tasks, (), add_days(current, -1), idx)

    week_start = get_week_start(current)
    month_start = get_month_start(current)
    week_scores = calculate_daily_scores_for_range(tasks, (), week_start, current, idx)
    month_scores = calculate_daily_scores_for_range(tasks, (), month_start, current, idx)
    history = calculate_daily_scores_for_range(
        tasks, (), add_days(current, -all_time_days), add_days(current, -1), idx
    )

    def _has_prior(scores: List[DailyScore]) -> bool:
        return any(d.date < score.date for d in active_days(scores))

    labels = _goal_labels(goals)
    rows = []
    for task in get_tasks_for_date(tasks, current):
        completion = idx.get(task.task_id, score.date)
        rows.append(TaskRow(
            task_id=task.task_id,
            name=task.name,
            importance=task.importance.value,
            difficulty=task.difficulty.value,
            goal=_goal_label(task, labels),
            completed=is_task_completed(task, completion),
            is_late_logged=bool(completion and completion.is_late_logged),
        ))

    return Report(
        kind='daily',
        start=score.date,
        end=score.date,
        score=score.score,
        completion=calculate_percentage(score.tasks_completed, score.tasks_scheduled),
        tasks_completed=score.tasks_completed,
        tasks_scheduled=score.tasks_scheduled,
        streak=calculate_streak_as_of_date(
            tasks, (), current, idx, threshold=threshold, lookback_days=lookback_days
        ),
        comparisons={
            'vs_yesterday': calculate_comparison(score.score, yesterday.score, yesterday.is_active),
            'vs_week_average': calculate_comparison(
                score.score, calculate_period_score(week_scores), _has_prior(week_scores)
            ),
            'vs_month_average': calculate_comparison(
                score.score, calculate_period_score(month_scores), _has_prior(month_scores)
            ),
        },
        rank=_rank_day(score, history),
        tasks=rows,
        breakdowns=_calculate_breakdowns(tasks, goals, [score], idx),
    )


def build_period_report(
    tasks: List[Task],
    completions: List[Completion],
    goals: List[Goal],
    start: DateLike,
    end: DateLike,
    kind: str = 'weekly',
    index: Optional[CompletionIndex] = None,
    config: Optional[Dict[str, Any]] = None,
) -> Report:
    """Weekly or monthly report over [start, end]."""
    if kind not in ('weekly', 'monthly'):
        raise ValueError(f"Unknown period report kind: {kind}")

    first = as_date(start)
    last = as_date(end)
    tasks = with_goal_priorities(tasks, goals)
    idx = ensure_index(completions, index)
    streak_threshold = get_setting(config, 'scoring', 'streak_threshold')
    consistency_threshold = get_setting(config, 'scoring', 'consistency_threshold')
    all_time_days = get_setting(config, 'windows', 'all_time_days')
    lookback_days = get_setting(config, 'windows', 'streak_lookback_days')

    scores = calculate_daily_scores_for_range(tasks, (), first, last, idx)

    if kind == 'weekly':
        prev_start, prev_end = add_days(first, -7), add_days(first, -1)
    else:
        prev_end = add_days(get_month_start(first), -1)
        prev_start = get_month_start(prev_end)
    previous = calculate_daily_scores_for_range(tasks, (), prev_start, prev_end, idx)

    history = calculate_daily_scores_for_range(
        tasks, (), add_days(last, -(all_time_days - 1)), last, idx
    )
    rank_scores = calculate_daily_scores_for_range(
        tasks, (), _rank_window_start(last, kind), last, idx
    )

    score = calculate_period_score(scores)
    first_str = format_date(first)
    has_previous = bool(active_days(previous))
    has_history = any(d.date < first_str for d in active_days(history))
    all_time_average = calculate_all_time_average(history)

    comparisons = {
        f"vs_last_{'week' if kind == 'weekly' else 'month'}": calculate_comparison(
            score, calculate_period_score(previous), has_previous
        ),
    }
    if kind == 'weekly':
        # Month containing the week, compared only when it has days before the week
        month_start = get_month_start(first)
        month_scores = calculate_daily_scores_for_range(
            tasks, (), month_start, min(get_month_end(first), last), idx
        )
        comparisons['vs_last_month'] = calculate_comparison(
            score,
            calculate_period_score(month_scores),
            any(d.date < first_str for d in active_days(month_scores)),
        )
    comparisons['vs_all_time'] = calculate_comparison(score, all_time_average, has_history)

    active = active_days(scores)
    best = max(active, key=lambda d: d.score) if active else None
    lowest = min(active, key=lambda d: d.score) if active else None

    report = Report(
        kind=kind,
        start=format_date(first),
        end=format_date(last),
        score=score,
        completion=calculate_completion(scores),
        tasks_completed=sum(d.tasks_completed for d in scores),
        tasks_scheduled=sum(d.tasks_scheduled for d in scores),
        streak=calculate_streak_as_of_date(
            tasks, (), last, idx, threshold=streak_threshold, lookback_days=lookback_days
        ),
        consistency=calculate_consistency(scores, consistency_threshold),
        active_days=len(active),
        perfect_days=count_perfect_days(scores),
        comparisons=comparisons,
        rank=_rank_period(score, rank_scores, kind),
        best_day=best,
        lowest_day=lowest,
        weekday_averages=_calculate_weekday_averages(history),
        breakdowns=_calculate_breakdowns(tasks, goals, scores, idx),
        highlights=_calculate_task_highlights(
            tasks,
            list(date_range(first, last)),
            list(date_range(prev_start, prev_end)),
            idx,
        ),
    )

    logger.debug("Built %s report %s..%s: score=%d", kind, report.start, report.end, score)
    return report


def build_report(
    tasks: List[Task],
    completions: List[Completion],
    goals: List[Goal],
    day: DateLike,
    kind: str = 'daily',
    config: Optional[Dict[str, Any]] = None,
) -> Report:
    """Build the report of the given kind for the period containing ``day``.

    Period reports stop at ``day`` so days that have not happened yet are not
    counted as missed.
    """
    current = as_date(day)
    idx = ensure_index(completions)

    if kind == 'daily':
        return build_daily_report(tasks, completions, goals, current, idx, config)
    if kind == 'weekly':
        start = get_week_start(current)
    elif kind == 'monthly':
        start = get_month_start(current)
    else:
        raise ValueError(f"Unknown report kind: {kind}")

    return build_period_report(tasks, completions, goals, start, current, kind, idx, config)
