"""
Core business logic for calculating bookable appointment slots.

This is the heart of the application - pure domain logic without any
external dependencies (no database, no I/O). Every call is re-derived from
the records passed in; nothing is cached between calls.
"""

import logging
from datetime import date, datetime
from typing import Iterable, List, Optional

import pendulum

from .models import (
    Appointment,
    Barber,
    DaySlot,
    ShopHours,
    Weekday,
    minutes_to_time,
    to_date_key,
)

logger = logging.getLogger(__name__)

# Candidate start times are offered on this grid, whatever the service length.
SLOT_GRANULARITY_MINUTES = 30

# Minimum gap between "now" and the earliest slot bookable today.
BOOKING_LEAD_MINUTES = 30


def resolve_day_slots(day: date, barber: Barber) -> List[DaySlot]:
    """
    Determine the working intervals that apply to a barber on a date.

    A date override, when present, replaces the weekly default entirely;
    an empty override marks the day off.

    Args:
        day: Calendar date to resolve
        barber: Barber record with weekly availability and overrides

    Returns:
        List of DaySlot objects, empty if the barber does not work that day
    """
    date_key = to_date_key(day)

    if date_key in barber.date_overrides:
        return list(barber.date_overrides[date_key])

    return list(barber.availability.get(Weekday.for_date(day), ()))


def compute_available_slots(
    day: date,
    barber: Barber,
    shop_hours: ShopHours,
    appointments: Iterable[Appointment],
    service_duration_minutes: int,
    now: Optional[datetime] = None,
) -> List[str]:
    """
    Compute the bookable start times for a service with a barber on a date.

    Algorithm:
    1. Shop closed that weekday -> nothing is bookable
    2. Resolve the barber's working intervals (override or weekly default)
    3. Clip each interval to the shop's opening hours
    4. Walk a 30-minute grid while the service still fits in the interval
    5. Drop candidates too close to one of the barber's booked appointments
    6. For today, drop candidates inside the booking lead time
    7. Return start times in ascending order

    The conflict test in step 5 is ``|candidate - booked| < duration`` using
    the duration of the service being requested, not that of the existing
    booking. A long existing appointment followed by a short request is
    therefore only partially blocked.

    Args:
        day: Calendar date to compute slots for
        barber: Barber record
        shop_hours: Opening hours per weekday, None/absent meaning closed
        appointments: Appointments to check for conflicts (any barber, any status)
        service_duration_minutes: Duration of the requested service
        now: Current wall-clock time, defaults to pendulum.now()

    Returns:
        List of ``HH:MM`` strings
    """
    opening = shop_hours.get(Weekday.for_date(day))
    if opening is None:
        return []

    working_slots = resolve_day_slots(day, barber)
    if not working_slots:
        return []

    date_key = to_date_key(day)
    booked_minutes = _booked_minutes(barber.id, date_key, appointments)

    candidates = set()

    for slot in working_slots:
        bounds = opening.clip(slot)
        if bounds is None:
            continue

        start, end = bounds
        t = start
        while t + service_duration_minutes <= end:
            conflict = any(
                abs(booked - t) < service_duration_minutes
                for booked in booked_minutes
            )
            if not conflict:
                candidates.add(t)
            t += SLOT_GRANULARITY_MINUTES

    if now is None:
        now = pendulum.now()

    if _is_same_day(day, now):
        threshold = now.hour * 60 + now.minute + BOOKING_LEAD_MINUTES
        candidates = {t for t in candidates if t >= threshold}

    logger.debug(
        "Barber %s on %s: %d slot(s) for %d-minute service",
        barber.id, date_key, len(candidates), service_duration_minutes,
    )

    return [minutes_to_time(t) for t in sorted(candidates)]


def _booked_minutes(
    barber_id: str,
    date_key: str,
    appointments: Iterable[Appointment],
) -> List[int]:
    """
    Minutes since midnight of the barber's booked appointments on a date.

    The hour and minute are read from the stored timestamp as written,
    without normalising its offset.
    """
    booked: List[int] = []

    for appointment in appointments:
        if appointment.barber_id != barber_id:
            continue
        if not appointment.status.blocks_time:
            continue
        if not appointment.falls_on(date_key):
            continue

        start = pendulum.parse(appointment.date_time)
        booked.append(start.hour * 60 + start.minute)

    return booked


def _is_same_day(day: date, now: datetime) -> bool:
    return (day.year, day.month, day.day) == (now.year, now.month, now.day)
