"""
Display helpers for times, dates and month calendars.
"""

import calendar
from datetime import date
from typing import List, Optional

import pendulum

from .models import Weekday

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]
SHORT_MONTHS = [name[:3] for name in MONTH_NAMES]


def _twelve_hour(hour: int, minute: int) -> str:
    period = "PM" if hour >= 12 else "AM"
    return f"{hour % 12 or 12}:{minute:02d} {period}"


def format_time(value: str) -> str:
    """Format an ``HH:MM`` string as a 12-hour clock time, e.g. ``2:30 PM``."""
    hours, minutes = value.split(":")
    return _twelve_hour(int(hours), int(minutes))


def format_date_time(timestamp: str) -> str:
    """
    Format an appointment timestamp, e.g. ``Jun 10 at 10:00 AM``.

    The wall-clock values of the stored timestamp are shown as written.
    """
    dt = pendulum.parse(timestamp)
    return f"{SHORT_MONTHS[dt.month - 1]} {dt.day} at {_twelve_hour(dt.hour, dt.minute)}"


def format_long_date(day: date) -> str:
    """Format a date as ``Monday, June 10``."""
    weekday = Weekday.for_date(day).day_name.capitalize()
    return f"{weekday}, {MONTH_NAMES[day.month - 1]} {day.day}"


def calendar_days(year: int, month: int) -> List[Optional[date]]:
    """
    List the days of a month for a Sunday-first calendar grid.

    Leading None entries pad the first week up to the first day.

    Args:
        year: Four-digit year
        month: Month number, 1-12
    """
    first = date(year, month, 1)
    _, days_in_month = calendar.monthrange(year, month)

    days: List[Optional[date]] = [None] * Weekday.for_date(first)
    days.extend(date(year, month, d) for d in range(1, days_in_month + 1))

    return days
