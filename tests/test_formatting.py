"""
Tests for display formatting.
"""

from datetime import date

from barberslots.domain.formatting import (
    calendar_days,
    format_date_time,
    format_long_date,
    format_time,
)


class TestFormatTime:
    """Tests for 12-hour clock formatting."""

    def test_morning_and_afternoon(self):
        assert format_time("09:00") == "9:00 AM"
        assert format_time("14:30") == "2:30 PM"

    def test_midnight_and_noon(self):
        assert format_time("00:15") == "12:15 AM"
        assert format_time("12:00") == "12:00 PM"


class TestFormatDates:
    """Tests for date formatting."""

    def test_format_date_time(self):
        assert format_date_time("2024-06-10T10:00:00") == "Jun 10 at 10:00 AM"
        assert format_date_time("2024-12-03T18:45:00") == "Dec 3 at 6:45 PM"

    def test_format_long_date(self):
        assert format_long_date(date(2024, 6, 10)) == "Monday, June 10"


class TestCalendarDays:
    """Tests for the month grid."""

    def test_leading_padding(self):
        days = calendar_days(2024, 6)  # June 1st 2024 is a Saturday

        assert days[:6] == [None] * 6
        assert days[6] == date(2024, 6, 1)
        assert days[-1] == date(2024, 6, 30)
        assert len(days) == 36

    def test_month_starting_on_sunday(self):
        days = calendar_days(2024, 9)

        assert days[0] == date(2024, 9, 1)
        assert len(days) == 30

    def test_leap_february(self):
        assert calendar_days(2024, 2)[-1] == date(2024, 2, 29)
