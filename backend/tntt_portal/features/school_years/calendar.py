"""
School years feature: calendar helpers for weekly Mass sessions.

Students attend two sessions a week: Thursday Mass ("thu5") and Sunday Mass
("cn").
"""

import math
from datetime import date, timedelta

# day_type -> date.weekday()
SESSION_WEEKDAYS: dict[str, int] = {
    "thu5": 3,  # Thứ năm
    "cn": 6,    # Chúa nhật
}


def calculate_total_weeks(start: date | None, end: date | None) -> int:
    """Number of (partial) weeks between two dates, 0 if either is missing."""
    if not start or not end:
        return 0
    days = abs((end - start).days)
    return math.ceil(days / 7)


def _weekdays_for(day_type: str | None) -> set[int]:
    if day_type is None:
        return set(SESSION_WEEKDAYS.values())
    if day_type not in SESSION_WEEKDAYS:
        raise ValueError(f"day_type phải là một trong: {', '.join(SESSION_WEEKDAYS)}")
    return {SESSION_WEEKDAYS[day_type]}


def session_dates_between(start: date, end: date, day_type: str | None = None) -> list[date]:
    """Session dates in `[start, end]`, ascending.

    Args:
        day_type: "thu5", "cn", or None for both.
    """
    weekdays = _weekdays_for(day_type)
    if end < start:
        start, end = end, start

    dates = []
    current = start
    while current <= end:
        if current.weekday() in weekdays:
            dates.append(current)
        current += timedelta(days=1)
    return dates


def last_session_dates(day_type: str, today: date, weeks: int = 3) -> list[date]:
    """The most recent `weeks` sessions of `day_type` (today included), oldest first."""
    (target,) = _weekdays_for(day_type)
    days_back = (today.weekday() - target) % 7
    latest = today - timedelta(days=days_back)
    return [latest - timedelta(weeks=i) for i in reversed(range(weeks))]
