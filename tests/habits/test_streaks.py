"""Tests for streak and consistency statistics."""

from datetime import timedelta

from habits.dates import day_key
from habits.models import LogEntry
from habits.streaks import STREAK_WINDOW_DAYS, analyze, consistency, streaks


def _days(now, offsets):
    return {day_key(now - timedelta(days=n)) for n in offsets}


class TestStreaks:
    def test_three_days_ending_today(self, now, make_logs):
        stats = analyze(make_logs("a", now, [2, 1, 0]), now)
        assert stats.current == 3
        assert stats.longest == 3

    def test_three_days_ending_yesterday_has_no_current(self, now, make_logs):
        stats = analyze(make_logs("a", now, [3, 2, 1]), now)
        assert stats.current == 0
        assert stats.longest == 3

    def test_no_grace_day_after_long_run(self, now):
        current, longest = streaks(_days(now, range(1, 30)), now)
        assert current == 0
        assert longest == 29

    def test_longest_is_max_run(self, now):
        active = _days(now, [0, 1]) | _days(now, [10, 11, 12, 13])
        assert streaks(active, now) == (2, 4)

    def test_any_habit_counts(self, now, make_logs):
        logs = make_logs("a", now, [1]) + make_logs("b", now, [0])
        assert analyze(logs, now).current == 2

    def test_activity_outside_window_ignored(self, now):
        active = _days(now, range(STREAK_WINDOW_DAYS, STREAK_WINDOW_DAYS + 10))
        assert streaks(active, now) == (0, 0)

    def test_bounded_by_window(self, now):
        active = _days(now, range(400))
        current, longest = streaks(active, now)
        assert current == longest == STREAK_WINDOW_DAYS

    def test_current_never_exceeds_longest(self, now):
        for offsets in ([0], [0, 2, 3, 4], [5, 6], list(range(0, 60, 2))):
            current, longest = streaks(_days(now, offsets), now)
            assert current <= longest <= STREAK_WINDOW_DAYS

    def test_no_logs(self, now):
        stats = analyze([], now)
        assert (stats.current, stats.longest, stats.consistency) == (0, 0, 0)


class TestConsistency:
    def test_single_day_is_full(self):
        assert consistency({"2024-03-01"}) == 100

    def test_half_of_span(self):
        assert consistency({"2024-03-01", "2024-03-04"}) == 50

    def test_rounds_half_up(self):
        assert consistency({"2024-03-01", "2024-03-08"}) == 25
        # 3 of 8 days = 37.5%
        assert consistency({"2024-03-01", "2024-03-02", "2024-03-08"}) == 38

    def test_duplicate_habits_same_day_count_once(self):
        logs = [
            LogEntry(habit="a", day="2024-03-01"),
            LogEntry(habit="b", day="2024-03-01"),
            LogEntry(habit="a", day="2024-03-02"),
        ]
        assert analyze(logs).consistency == 100

    def test_range(self, now):
        for offsets in ([0], [0, 50], list(range(0, 90, 3))):
            assert 0 <= consistency(_days(now, offsets)) <= 100
