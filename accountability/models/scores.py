"""Derived score models produced by the engine."""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict


class Trend(str, Enum):
    IMPROVING = "improving"
    STABLE = "stable"
    DECLINING = "declining"


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"


@dataclass(frozen=True)
class DailyScore:
    """Score and completion tuple for one calendar day.

    A day with ``tasks_scheduled == 0`` is inactive: its score of 0 is a
    sentinel and must never be averaged in.
    """

    date: str
    score: int
    points_earned: float
    points_possible: float
    tasks_completed: int
    tasks_scheduled: int

    @property
    def is_active(self) -> bool:
        return self.tasks_scheduled > 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON export."""
        return asdict(self)


@dataclass(frozen=True)
class StreakResult:
    current_streak: int
    longest_streak: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Comparison:
    """Signed change against a baseline."""

    value: int
    direction: Direction

    def to_dict(self) -> Dict[str, Any]:
        return {'value': self.value, 'direction': self.direction.value}


@dataclass(frozen=True)
class EditEligibility:
    can_edit: bool
    is_late_log: bool

    def to_dict(self) -> Dict[str, Any]:
        return {'canEdit': self.can_edit, 'isLateLog': self.is_late_log}
