"""
Unit tests for school-year calendar helpers.
"""

from datetime import date

import pytest

from tntt_portal.features.school_years.calendar import (
    calculate_total_weeks,
    last_session_dates,
    session_dates_between,
)


class TestTotalWeeks:
    def test_school_year(self):
        # 259 days -> 37 weeks
        assert calculate_total_weeks(date(2025, 9, 14), date(2026, 5, 31)) == 37

    def test_partial_week_rounds_up(self):
        assert calculate_total_weeks(date(2025, 9, 1), date(2025, 9, 9)) == 2

    def test_order_does_not_matter(self):
        assert calculate_total_weeks(date(2026, 5, 31), date(2025, 9, 14)) == 37

    @pytest.mark.parametrize("start,end", [(None, date(2026, 1, 1)), (date(2026, 1, 1), None), (None, None)])
    def test_missing_date(self, start, end):
        assert calculate_total_weeks(start, end) == 0


class TestSessionDates:
    def test_both_sessions(self):
        dates = session_dates_between(date(2025, 11, 10), date(2025, 11, 23))
        assert dates == [date(2025, 11, 13), date(2025, 11, 16), date(2025, 11, 20), date(2025, 11, 23)]

    def test_sunday_only(self):
        dates = session_dates_between(date(2025, 11, 10), date(2025, 11, 23), "cn")
        assert all(d.weekday() == 6 for d in dates)
        assert len(dates) == 2

    def test_reversed_range(self):
        assert session_dates_between(date(2025, 11, 23), date(2025, 11, 10), "thu5") == [
            date(2025, 11, 13), date(2025, 11, 20),
        ]

    def test_unknown_day_type(self):
        with pytest.raises(ValueError):
            session_dates_between(date(2025, 11, 1), date(2025, 11, 30), "t7")


class TestLastSessionDates:
    def test_last_three_sundays_oldest_first(self):
        # 2025-11-19 is a Wednesday
        assert last_session_dates("cn", date(2025, 11, 19)) == [
            date(2025, 11, 2), date(2025, 11, 9), date(2025, 11, 16),
        ]

    def test_today_included(self):
        assert last_session_dates("thu5", date(2025, 11, 20), weeks=2) == [date(2025, 11, 13), date(2025, 11, 20)]
