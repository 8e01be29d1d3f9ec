"""Task, completion and goal data models."""

from dataclasses import dataclass, replace
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Union

from ..errors import UnknownFrequencyError, UnknownLevelError, UnknownTaskTypeError
from ..utils.datetime_utils import as_date, format_date

TaskId = Union[int, str]
GoalId = Union[int, str]


class Frequency(Enum):
    """How many days per week a task recurs."""

    ONCE = "1x"
    TWICE = "2x"
    THREE_TIMES = "3x"
    FOUR_TIMES = "4x"
    FIVE_TIMES = "5x"
    SIX_TIMES = "6x"
    DAILY = "daily"

    @property
    def required_days(self) -> int:
        """Number of selected weekdays this frequency implies."""
        return _FREQUENCY_DAYS[self]

    @classmethod
    def parse(cls, value: Union["Frequency", str]) -> "Frequency":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownFrequencyError("frequency", value, [f.value for f in cls]) from None


_FREQUENCY_DAYS = {
    Frequency.ONCE: 1,
    Frequency.TWICE: 2,
    Frequency.THREE_TIMES: 3,
    Frequency.FOUR_TIMES: 4,
    Frequency.FIVE_TIMES: 5,
    Frequency.SIX_TIMES: 6,
    Frequency.DAILY: 7,
}


class Level(Enum):
    """Importance / difficulty rating."""

    MEDIUM = "medium"
    HIGH = "high"
    MAXIMUM = "maximum"

    @property
    def points(self) -> int:
        return _LEVEL_POINTS[self]

    @classmethod
    def parse(cls, value: Union["Level", str], field_name: str = "level") -> "Level":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownLevelError(field_name, value, [lv.value for lv in cls]) from None


_LEVEL_POINTS = {
    Level.MEDIUM: 1,
    Level.HIGH: 2,
    Level.MAXIMUM: 3,
}


class TaskType(Enum):
    CHECKBOX = "checkbox"
    NUMBER = "number"

    @classmethod
    def parse(cls, value: Union["TaskType", str]) -> "TaskType":
        if isinstance(value, cls):
            return value
        if value == "numeric":
            return cls.NUMBER
        try:
            return cls(value)
        except ValueError:
            raise UnknownTaskTypeError("type", value, [t.value for t in cls]) from None


@dataclass
class Task:
    """A recurring unit of behavior with a fixed weekly schedule.

    ``goal_id`` of ``None`` places the task in the implicit Foundations
    bucket. ``goal_priority`` is resolved by the adapter from the linked goal
    and only feeds the score multiplier.
    """

    task_id: TaskId
    name: str
    frequency: Frequency
    selected_days: FrozenSet[int]
    importance: Level = Level.MEDIUM
    difficulty: Level = Level.MEDIUM
    task_type: TaskType = TaskType.CHECKBOX
    target: Optional[float] = None
    goal_id: Optional[GoalId] = None
    goal_priority: Optional[int] = None
    created_at: Optional[date] = None

    def __post_init__(self):
        """Parse raw enum values and normalize dates at the model boundary."""
        self.frequency = Frequency.parse(self.frequency)
        self.importance = Level.parse(self.importance, "importance")
        self.difficulty = Level.parse(self.difficulty, "difficulty")
        self.task_type = TaskType.parse(self.task_type)
        self.selected_days = frozenset(int(d) for d in self.selected_days)
        if self.created_at is not None:
            self.created_at = as_date(self.created_at)

    @property
    def is_foundation(self) -> bool:
        return self.goal_id is None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        """Build a task from a camelCase or snake_case row."""
        return cls(
            task_id=_pick(data, 'id', 'task_id', 'taskId'),
            name=data.get('name', ''),
            frequency=data['frequency'],
            selected_days=_pick(data, 'selected_days', 'selectedDays', default=()),
            importance=data.get('importance', Level.MEDIUM),
            difficulty=data.get('difficulty', Level.MEDIUM),
            task_type=_pick(data, 'type', 'task_type', default=TaskType.CHECKBOX),
            target=data.get('target'),
            goal_id=_pick(data, 'goal_id', 'goalId'),
            goal_priority=_pick(data, 'goal_priority', 'goalPriority'),
            created_at=_pick(data, 'created_at', 'createdAt'),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.task_id,
            'name': self.name,
            'frequency': self.frequency.value,
            'selectedDays': sorted(self.selected_days),
            'importance': self.importance.value,
            'difficulty': self.difficulty.value,
            'type': self.task_type.value,
            'target': self.target,
            'goalId': self.goal_id,
            'goalPriority': self.goal_priority,
            'createdAt': format_date(self.created_at) if self.created_at else None,
        }


@dataclass
class Completion:
    """Whether/how a task was satisfied on a given date."""

    task_id: TaskId
    date: str
    completed: bool
    value: Optional[float] = None
    is_late_logged: bool = False
    timestamp: Optional[datetime] = None

    def __post_init__(self):
        """Store the date in canonical YYYY-MM-DD form."""
        self.date = format_date(as_date(self.date))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Completion":
        timestamp = _pick(data, 'timestamp', 'created_at', 'createdAt')
        if isinstance(timestamp, str):
            timestamp = datetime.fromisoformat(timestamp.replace('Z', '+00:00'))
        return cls(
            task_id=_pick(data, 'task_id', 'taskId'),
            date=data['date'],
            completed=bool(data.get('completed', False)),
            value=data.get('value'),
            is_late_logged=bool(_pick(data, 'is_late_logged', 'isLateLogged', default=False)),
            timestamp=timestamp,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'taskId': self.task_id,
            'date': self.date,
            'completed': self.completed,
            'value': self.value,
            'isLateLogged': self.is_late_logged,
            'timestamp': self.timestamp.isoformat() if self.timestamp else None,
        }


@dataclass
class Goal:
    """A goal that tasks roll up into."""

    goal_id: GoalId
    name: str
    priority: int
    created_at: date
    target_date: date
    completed: bool = False
    completed_date: Optional[date] = None

    def __post_init__(self):
        self.created_at = as_date(self.created_at)
        self.target_date = as_date(self.target_date)
        if self.completed_date is not None:
            self.completed_date = as_date(self.completed_date)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Goal":
        return cls(
            goal_id=_pick(data, 'id', 'goal_id', 'goalId'),
            name=data.get('name', ''),
            priority=int(data.get('priority', 99)),
            created_at=_pick(data, 'created_at', 'createdAt'),
            target_date=_pick(data, 'target_date', 'targetDate'),
            completed=bool(data.get('completed', False)),
            completed_date=_pick(data, 'completed_date', 'completedDate'),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.goal_id,
            'name': self.name,
            'priority': self.priority,
            'createdAt': format_date(self.created_at),
            'targetDate': format_date(self.target_date),
            'completed': self.completed,
            'completedDate': format_date(self.completed_date) if self.completed_date else None,
        }


def with_goal_priorities(tasks: Iterable[Task], goals: Iterable[Goal]) -> List[Task]:
    """Copy tasks, filling goal_priority from the linked goal."""
    priorities = {goal.goal_id: goal.priority for goal in goals}
    resolved = []

    for task in tasks:
        priority = priorities.get(task.goal_id, task.goal_priority)
        resolved.append(replace(task, goal_priority=priority))

    return resolved


def _pick(data: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default
