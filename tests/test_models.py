from datetime import date, datetime

import pytest

from accountability.errors import (
    InvalidTaskDataError,
    UnknownFrequencyError,
    UnknownLevelError,
    UnknownTaskTypeError,
)
from accountability.models import Completion, Frequency, Goal, Level, Task, TaskType, with_goal_priorities


class TestEnums:
    @pytest.mark.parametrize("value,days", [("1x", 1), ("3x", 3), ("6x", 6), ("daily", 7)])
    def test_frequency_required_days(self, value, days):
        assert Frequency.parse(value).required_days == days

    def test_unknown_frequency(self):
        with pytest.raises(UnknownFrequencyError) as exc_info:
            Frequency.parse("weekly")
        assert exc_info.value.field_name == "frequency"
        assert exc_info.value.value == "weekly"

    def test_level_points(self):
        assert [lv.points for lv in Level] == [1, 2, 3]

    def test_numeric_alias(self):
        assert TaskType.parse("numeric") is TaskType.NUMBER


class TestTask:
    def test_raw_values_are_parsed(self):
        task = Task(
            task_id=1,
            name="Read",
            frequency="3x",
            selected_days=[0, 2, 4],
            importance="high",
            difficulty="maximum",
            task_type="number",
            target=20,
            created_at="2024-01-01",
        )
        assert task.frequency is Frequency.THREE_TIMES
        assert task.importance is Level.HIGH
        assert task.difficulty is Level.MAXIMUM
        assert task.task_type is TaskType.NUMBER
        assert task.selected_days == frozenset({0, 2, 4})
        assert task.created_at == date(2024, 1, 1)
        assert task.is_foundation

    @pytest.mark.parametrize("field_name,error", [
        ("importance", UnknownLevelError),
        ("difficulty", UnknownLevelError),
        ("task_type", UnknownTaskTypeError),
        ("frequency", UnknownFrequencyError),
    ])
    def test_unknown_values_raise(self, field_name, error):
        kwargs = dict(task_id=1, name="x", frequency="daily", selected_days=range(7))
        kwargs[field_name] = "extreme"
        with pytest.raises(error):
            Task(**kwargs)

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            Task(task_id=1, name="x", frequency="daily", selected_days=range(7), importance="low")

    def test_level_error_names_field(self):
        with pytest.raises(InvalidTaskDataError) as exc_info:
            Task(task_id=1, name="x", frequency="daily", selected_days=range(7), difficulty="low")
        assert exc_info.value.field_name == "difficulty"
        assert exc_info.value.code == "unknown_level"

    def test_from_dict_camel_case(self):
        task = Task.from_dict({
            'id': 'abc',
            'name': 'Meditate',
            'frequency': '2x',
            'selectedDays': [1, 3],
            'importance': 'maximum',
            'type': 'checkbox',
            'goalId': 7,
            'createdAt': '2024-02-01',
        })
        assert task.task_id == 'abc'
        assert task.goal_id == 7
        assert task.difficulty is Level.MEDIUM
        assert task.created_at == date(2024, 2, 1)
        assert not task.is_foundation

    def test_to_dict_round_trip(self, make_task):
        task = make_task(task_id=3, days=[0, 2, 4], importance='high', goal_id=1, goal_priority=2)
        assert Task.from_dict(task.to_dict()) == task


class TestCompletion:
    def test_date_normalized(self):
        completion = Completion(task_id=1, date=date(2024, 1, 5), completed=True)
        assert completion.date == "2024-01-05"

    def test_from_dict_parses_timestamp(self):
        completion = Completion.from_dict({
            'taskId': 1,
            'date': '2024-01-05',
            'completed': True,
            'isLateLogged': True,
            'timestamp': '2024-01-06T08:30:00',
        })
        assert completion.is_late_logged
        assert completion.timestamp == datetime(2024, 1, 6, 8, 30)


class TestGoal:
    def test_from_dict_defaults(self):
        goal = Goal.from_dict({'id': 1, 'name': 'G', 'createdAt': '2024-01-01', 'targetDate': '2024-06-01'})
        assert goal.priority == 99
        assert goal.target_date == date(2024, 6, 1)
        assert not goal.completed

    def test_with_goal_priorities(self, make_task):
        goals = [
            Goal(goal_id=1, name="A", priority=1, created_at="2024-01-01", target_date="2024-03-01"),
            Goal(goal_id=2, name="B", priority=3, created_at="2024-01-01", target_date="2024-03-01"),
        ]
        tasks = [make_task(task_id=1, goal_id=1), make_task(task_id=2, goal_id=2), make_task(task_id=3)]

        resolved = with_goal_priorities(tasks, goals)

        assert [t.goal_priority for t in resolved] == [1, 3, None]
        # inputs untouched
        assert all(t.goal_priority is None for t in tasks)
