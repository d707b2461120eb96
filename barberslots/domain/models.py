"""
Domain models for barber schedules, shop hours and bookings.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum, IntEnum
from typing import Dict, Mapping, Optional, Tuple


def time_to_minutes(value: str) -> int:
    """Convert an ``HH:MM`` string to minutes since midnight."""
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def minutes_to_time(minutes: int) -> str:
    """Convert minutes since midnight to an ``HH:MM`` string."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def to_date_key(day: date) -> str:
    """
    Build the ``YYYY-MM-DD`` key for a calendar date.

    Uses the local year/month/day components as they are; no timezone
    conversion takes place.
    """
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


class Weekday(IntEnum):
    """Day of the week, numbered Sunday-first."""
    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    @property
    def day_name(self) -> str:
        """Lowercase English name, as used in data files."""
        return self.name.lower()

    @classmethod
    def for_date(cls, day: date) -> "Weekday":
        """Get the weekday a calendar date falls on."""
        # isoweekday: Monday=1 .. Sunday=7
        return cls(day.isoweekday() % 7)

    @classmethod
    def from_name(cls, name: str) -> "Weekday":
        """
        Look up a weekday by its English name (case-insensitive).

        Raises:
            ValueError: If the name is not one of the seven day names
        """
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown weekday name: '{name}'") from None


@dataclass(frozen=True)
class DaySlot:
    """
    A working interval within one day.

    Precondition: start is before end. Not validated here; the shop data
    store checks it before records reach the engine.
    """
    start: str
    end: str

    @property
    def start_minutes(self) -> int:
        return time_to_minutes(self.start)

    @property
    def end_minutes(self) -> int:
        return time_to_minutes(self.end)

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


@dataclass(frozen=True)
class OpeningHours:
    """The shop's open/close window for one weekday."""
    open: str
    close: str

    def clip(self, slot: DaySlot) -> Optional[Tuple[int, int]]:
        """
        Clip a working interval to the opening hours.

        Returns (start, end) in minutes, or None if nothing of the
        interval lies within the opening hours.
        """
        start = max(slot.start_minutes, time_to_minutes(self.open))
        end = min(slot.end_minutes, time_to_minutes(self.close))

        if start >= end:
            return None

        return start, end


WeeklyAvailability = Mapping[Weekday, Tuple[DaySlot, ...]]
DateOverrides = Mapping[str, Tuple[DaySlot, ...]]
ShopHours = Mapping[Weekday, Optional[OpeningHours]]


class AppointmentStatus(str, Enum):
    """Lifecycle state of an appointment."""
    BOOKED = "Booked"
    COMPLETED = "Completed"
    CANCELED = "Canceled"
    NO_SHOW = "NoShow"

    @property
    def blocks_time(self) -> bool:
        """Only booked appointments occupy the barber's chair."""
        return self is AppointmentStatus.BOOKED


@dataclass(frozen=True)
class Appointment:
    """
    An appointment as stored by the surrounding application.

    ``date_time`` is an ISO 8601 timestamp read with wall-clock semantics.
    """
    id: str
    barber_id: str
    date_time: str
    status: AppointmentStatus = AppointmentStatus.BOOKED
    customer_id: str = ""
    service_id: str = ""

    def falls_on(self, date_key: str) -> bool:
        """Check whether the appointment's date portion matches a date key."""
        return self.date_time.startswith(date_key)


@dataclass(frozen=True)
class Service:
    """A service offered by the shop."""
    id: str
    name: str
    duration: int  # minutes
    price: float = 0.0
    description: str = ""


@dataclass(frozen=True)
class Barber:
    """A barber with recurring weekly hours and per-date overrides."""
    id: str
    name: str
    availability: Dict[Weekday, Tuple[DaySlot, ...]] = field(default_factory=dict)
    date_overrides: Dict[str, Tuple[DaySlot, ...]] = field(default_factory=dict)
    specialty: str = ""
