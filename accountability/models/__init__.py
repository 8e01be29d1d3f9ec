"""Input and result data models."""

from .scores import Comparison, DailyScore, Direction, EditEligibility, StreakResult, Trend
from .task import Completion, Frequency, Goal, Level, Task, TaskType, with_goal_priorities

__all__ = [
    'Comparison',
    'Completion',
    'DailyScore',
    'Direction',
    'EditEligibility',
    'Frequency',
    'Goal',
    'Level',
    'StreakResult',
    'Task',
    'TaskType',
    'Trend',
    'with_goal_priorities',
]
