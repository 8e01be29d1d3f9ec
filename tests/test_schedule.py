from datetime import date, datetime

from accountability.engine.schedule import get_tasks_for_date, is_task_scheduled_for_date


def test_not_scheduled_before_creation(make_task):
    task = make_task(created_at=date(2024, 1, 3))
    assert not is_task_scheduled_for_date(task, date(2024, 1, 2))
    assert is_task_scheduled_for_date(task, date(2024, 1, 3))
    assert is_task_scheduled_for_date(task, datetime(2024, 1, 3, 23, 30))


def test_selected_weekdays_only(make_task):
    task = make_task(days=[0, 2, 4])
    assert is_task_scheduled_for_date(task, "2024-01-01")      # Monday
    assert not is_task_scheduled_for_date(task, "2024-01-02")  # Tuesday
    assert is_task_scheduled_for_date(task, "2024-01-03")      # Wednesday
    assert not is_task_scheduled_for_date(task, "2024-01-07")  # Sunday


def test_no_created_at_means_always_eligible(make_task):
    task = make_task(created_at=None)
    assert is_task_scheduled_for_date(task, date(1990, 1, 1))


def test_get_tasks_for_date_filters(make_task):
    weekend = make_task(task_id=1, days=[5, 6])
    weekday = make_task(task_id=2, days=[0, 1, 2, 3, 4])

    assert get_tasks_for_date([weekend, weekday], date(2024, 1, 6)) == [weekend]
    assert get_tasks_for_date([weekend, weekday], date(2024, 1, 8)) == [weekday]
    assert get_tasks_for_date([], date(2024, 1, 8)) == []
