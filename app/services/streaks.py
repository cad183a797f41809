from __future__ import annotations

from datetime import date, datetime, timezone


def _as_day(value: datetime | date) -> date:
    if isinstance(value, datetime):
        # naive values are stored UTC (SQLite drops tzinfo)
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    return value


def next_streak(current: int | None, last_session_at: datetime | date | None, now: datetime | date) -> int:
    """
    Streak after a listen recorded at `now`.

    Both instants are truncated to their calendar day:
      - no previous listen   -> 1
      - previous day         -> current + 1
      - gap of 2+ days       -> 1
      - same day             -> unchanged
    """
    streak = current or 0
    if last_session_at is None:
        return 1

    diff_days = (_as_day(now) - _as_day(last_session_at)).days
    if diff_days == 1:
        return streak + 1
    if diff_days > 1:
        return 1
    return streak


def day_of_year(today: date) -> int:
    return today.timetuple().tm_yday


def daily_index(day: int, count: int) -> int:
    """Index of the "session of the day" in a catalog of `count` sessions ordered by id."""
    if count <= 0:
        raise ValueError("count must be positive")
    return day % count
