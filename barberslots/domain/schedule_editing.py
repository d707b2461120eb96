"""
Editing helpers for a barber's weekly hours and date overrides.

All functions return a new Barber; the record passed in is left untouched.
Times entered by an operator are validated here, before they can reach the
availability engine.
"""

import re
from dataclasses import replace
from datetime import date
from typing import Literal

import pendulum

from .availability import resolve_day_slots
from .models import Barber, DaySlot, Weekday, time_to_minutes, to_date_key

DateStatus = Literal["available", "off", "override"]

DEFAULT_DAY = DaySlot(start="09:00", end="17:00")

_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")
_DATE_KEY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def is_valid_time(value: str) -> bool:
    """Check that a string is a 24-hour ``HH:MM`` time."""
    return bool(_TIME_PATTERN.match(value))


def is_valid_date_key(value: str) -> bool:
    """Check that a string is a real calendar date in ``YYYY-MM-DD`` form."""
    if not _DATE_KEY_PATTERN.match(value):
        return False
    try:
        pendulum.from_format(value, "YYYY-MM-DD")
    except ValueError:
        return False
    return True


def make_day_slot(start: str, end: str) -> DaySlot:
    """
    Build a validated working interval.

    Raises:
        ValueError: If a time is malformed or start is not before end
    """
    for value in (start, end):
        if not is_valid_time(value):
            raise ValueError(f"Invalid time '{value}', expected HH:MM")

    if time_to_minutes(start) >= time_to_minutes(end):
        raise ValueError(f"Start time {start} must be before end time {end}")

    return DaySlot(start=start, end=end)


def date_status(day: date, barber: Barber) -> DateStatus:
    """
    Classify a date for the barber's availability calendar.

    Returns "override" for custom hours, "off" for a day off (by override
    or because the weekday is unset) and "available" otherwise.
    """
    date_key = to_date_key(day)

    if date_key in barber.date_overrides:
        return "override" if barber.date_overrides[date_key] else "off"

    if barber.availability.get(Weekday.for_date(day)):
        return "available"
    return "off"


def override_window(day: date, barber: Barber) -> DaySlot:
    """
    Suggest the hours to prefill when editing the override for a date.

    Uses the first interval already in effect, falling back to 09:00-17:00.
    """
    slots = resolve_day_slots(day, barber)
    return slots[0] if slots else DEFAULT_DAY


def set_date_override(barber: Barber, date_key: str, start: str, end: str) -> Barber:
    """Replace the barber's hours on one date with a single interval."""
    _check_date_key(date_key)
    overrides = dict(barber.date_overrides)
    overrides[date_key] = (make_day_slot(start, end),)
    return replace(barber, date_overrides=overrides)


def mark_day_off(barber: Barber, date_key: str) -> Barber:
    """Mark one date as a day off, whatever the weekly default says."""
    _check_date_key(date_key)
    overrides = dict(barber.date_overrides)
    overrides[date_key] = ()
    return replace(barber, date_overrides=overrides)


def clear_date_override(barber: Barber, date_key: str) -> Barber:
    """Drop the override for a date so the weekly default applies again."""
    overrides = {
        key: slots for key, slots in barber.date_overrides.items()
        if key != date_key
    }
    return replace(barber, date_overrides=overrides)


def set_weekly_hours(barber: Barber, weekday: Weekday, start: str, end: str) -> Barber:
    """Set the recurring hours for a weekday to a single interval."""
    availability = dict(barber.availability)
    availability[weekday] = (make_day_slot(start, end),)
    return replace(barber, availability=availability)


def toggle_weekday(barber: Barber, weekday: Weekday) -> Barber:
    """
    Switch a weekday off if the barber works it, on (09:00-17:00) if not.
    """
    availability = dict(barber.availability)
    if availability.get(weekday):
        availability[weekday] = ()
    else:
        availability[weekday] = (DEFAULT_DAY,)
    return replace(barber, availability=availability)


def _check_date_key(date_key: str) -> None:
    if not is_valid_date_key(date_key):
        raise ValueError(f"Invalid date '{date_key}', expected YYYY-MM-DD")
