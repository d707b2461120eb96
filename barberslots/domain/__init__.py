"""
Domain layer - Pure scheduling logic without external dependencies.
"""

from .availability import compute_available_slots, resolve_day_slots
from .models import (
    Appointment,
    AppointmentStatus,
    Barber,
    DaySlot,
    OpeningHours,
    Service,
    Weekday,
)

__all__ = [
    "Appointment",
    "AppointmentStatus",
    "Barber",
    "DaySlot",
    "OpeningHours",
    "Service",
    "Weekday",
    "compute_available_slots",
    "resolve_day_slots",
]
