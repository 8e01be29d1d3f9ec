from datetime import date

from accountability.engine.period import calculate_daily_scores_for_range, calculate_period_score
from accountability.engine.streaks import (
    calculate_streak,
    calculate_streak_as_of_date,
    count_perfect_days,
    is_perfect_day,
)
from accountability.models import Completion

MONDAY = date(2024, 1, 1)


def test_ten_perfect_days(make_task, complete_days):
    task = make_task()
    completions = complete_days(1, MONDAY, 10)
    scores = calculate_daily_scores_for_range([task], completions, MONDAY, date(2024, 1, 10))

    streak = calculate_streak(scores)

    assert streak.current_streak == 10
    assert streak.longest_streak == 10
    assert count_perfect_days(scores) == 10
    assert calculate_period_score(scores) == 100


class TestCalculateStreak:
    def test_inactive_days_neither_extend_nor_break(self, make_score):
        scores = [
            make_score("2024-01-01", 100),
            make_score("2024-01-02", 0, scheduled=0),
            make_score("2024-01-03", 100),
        ]
        streak = calculate_streak(scores)
        assert streak.current_streak == 2
        assert streak.longest_streak == 2

    def test_failing_day_breaks(self, make_score):
        values = [100, 100, 100, 20, 100]
        scores = [make_score(f"2024-01-0{i + 1}", v) for i, v in enumerate(values)]

        streak = calculate_streak(scores)

        assert streak.current_streak == 1
        assert streak.longest_streak == 3

    def test_unsorted_input(self, make_score):
        scores = [make_score("2024-01-03", 20), make_score("2024-01-01", 100), make_score("2024-01-02", 100)]
        streak = calculate_streak(scores)
        assert streak.current_streak == 0
        assert streak.longest_streak == 2

    def test_no_active_days(self, make_score):
        streak = calculate_streak([make_score("2024-01-01", 0, scheduled=0)])
        assert (streak.current_streak, streak.longest_streak) == (0, 0)

    def test_threshold_is_softer_than_perfect(self, make_task):
        tasks = [make_task(task_id=1), make_task(task_id=2)]
        completions = [Completion(task_id=1, date=MONDAY, completed=True)]
        scores = calculate_daily_scores_for_range(tasks, completions, MONDAY, MONDAY)

        assert scores[0].score == 50
        assert calculate_streak(scores).current_streak == 1
        assert calculate_streak(scores, threshold=100).current_streak == 0
        assert not is_perfect_day(scores[0])

    def test_current_never_exceeds_longest(self, make_score):
        values = [100, 0, 100, 100, 0, 100]
        scores = [make_score(f"2024-01-0{i + 1}", v) for i, v in enumerate(values)]
        streak = calculate_streak(scores)
        assert streak.current_streak <= streak.longest_streak


class TestStreakAsOfDate:
    def test_counts_back_from_as_of(self, make_task, complete_days):
        tasks = [make_task()]
        completions = complete_days(1, MONDAY, 10)

        assert calculate_streak_as_of_date(tasks, completions, date(2024, 1, 5)) == 5
        assert calculate_streak_as_of_date(tasks, completions, date(2024, 1, 10)) == 10
        # Jan 11 is scheduled but not done
        assert calculate_streak_as_of_date(tasks, completions, date(2024, 1, 11)) == 0

    def test_later_completions_do_not_change_past_streak(self, make_task, complete_days):
        tasks = [make_task()]
        early = complete_days(1, MONDAY, 5)
        later = complete_days(1, date(2024, 1, 6), 15)
        missed = [Completion(task_id=1, date="2024-01-06", completed=False)]

        baseline = calculate_streak_as_of_date(tasks, early, date(2024, 1, 5))

        assert baseline == 5
        assert calculate_streak_as_of_date(tasks, early + later, date(2024, 1, 5)) == baseline
        assert calculate_streak_as_of_date(tasks, early + missed, date(2024, 1, 5)) == baseline

    def test_skips_unscheduled_days(self, make_task):
        task = make_task(days=[0, 2, 4])
        completions = [
            Completion(task_id=1, date=d, completed=True)
            for d in ("2024-01-01", "2024-01-03", "2024-01-05")
        ]

        assert calculate_streak_as_of_date([task], completions, date(2024, 1, 7)) == 3
        assert calculate_streak_as_of_date([task], completions, date(2024, 1, 8)) == 0

    def test_future_as_of(self, make_task, complete_days):
        tasks = [make_task()]
        completions = complete_days(1, MONDAY, 10)
        assert calculate_streak_as_of_date(tasks, completions, date(2024, 1, 9), today=date(2024, 1, 8)) == 0

    def test_no_tasks_terminates(self):
        assert calculate_streak_as_of_date([], [], date(2024, 1, 1)) == 0

    def test_lookback_bounds_gap(self, make_task):
        # Sundays only, created on Sunday 2023-01-01
        task = make_task(days=[6], created_at=date(2023, 1, 1))
        completions = [Completion(task_id=1, date="2023-01-01", completed=True)]

        assert calculate_streak_as_of_date([task], completions, date(2023, 1, 6)) == 1
        assert calculate_streak_as_of_date([task], completions, date(2023, 1, 6), lookback_days=3) == 0

    def test_threshold_configurable(self, make_task):
        tasks = [make_task(task_id=1), make_task(task_id=2)]
        completions = [Completion(task_id=1, date=MONDAY, completed=True)]

        assert calculate_streak_as_of_date(tasks, completions, MONDAY) == 1
        assert calculate_streak_as_of_date(tasks, completions, MONDAY, threshold=80) == 0


def test_perfect_days_never_exceed_active_days(make_task, complete_days):
    tasks = [make_task(task_id=1), make_task(task_id=2, days=[0, 1])]
    completions = complete_days(1, MONDAY, 14) + complete_days(2, MONDAY, 3)
    scores = calculate_daily_scores_for_range(tasks, completions, MONDAY, date(2024, 1, 14))

    perfect = count_perfect_days(scores)

    assert perfect <= sum(1 for s in scores if s.tasks_scheduled > 0)
    # second task scheduled Mon/Tue, done only in week one
    assert perfect == 12
