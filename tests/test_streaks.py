from datetime import date, datetime, timedelta, timezone

import pytest

from app.services.streaks import daily_index, day_of_year, next_streak

NOW = datetime(2026, 3, 10, 8, 30, tzinfo=timezone.utc)


def test_first_listen_starts_streak():
    assert next_streak(0, None, NOW) == 1
    assert next_streak(None, None, NOW) == 1


def test_listen_on_following_day_extends_streak():
    assert next_streak(4, NOW - timedelta(days=1), NOW) == 5


def test_previous_day_counts_even_when_less_than_24h_ago():
    late_last_night = datetime(2026, 3, 9, 23, 59, tzinfo=timezone.utc)
    early_today = datetime(2026, 3, 10, 0, 1, tzinfo=timezone.utc)
    assert next_streak(2, late_last_night, early_today) == 3


def test_gap_of_two_or_more_days_resets():
    assert next_streak(7, NOW - timedelta(days=2), NOW) == 1
    assert next_streak(7, NOW - timedelta(days=30), NOW) == 1


def test_same_day_repeat_leaves_streak_unchanged():
    assert next_streak(3, NOW - timedelta(hours=2), NOW) == 3


def test_naive_stored_value_is_treated_as_utc():
    naive_yesterday = datetime(2026, 3, 9, 12, 0)
    assert next_streak(1, naive_yesterday, NOW) == 2


def test_daily_index_is_deterministic_and_cycles():
    day = day_of_year(date(2026, 1, 5))
    assert day == 5
    assert daily_index(day, 3) == daily_index(day, 3) == 2
    assert daily_index(day, 4) == 1
    assert daily_index(day, 5) == 0


def test_daily_index_requires_sessions():
    with pytest.raises(ValueError):
        daily_index(10, 0)
