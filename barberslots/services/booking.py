"""
Application services for looking up bookable slots.

The service fetches records through a shop data adapter and delegates the
slot calculation to the domain-level availability engine. Keeping the store
behind a small protocol lets tests plug in an in-memory stub.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable, Dict, List, Optional, Protocol

import pendulum
from pendulum import DateTime

from ..domain.availability import compute_available_slots
from ..domain.formatting import format_long_date
from ..domain.models import Appointment, Barber, Service, ShopHours
from ..domain.schedule_editing import DateStatus, date_status

logger = logging.getLogger(__name__)


class ShopDataProtocol(Protocol):
    """Protocol describing the shop data access needed by the service."""

    def shop_hours(self) -> ShopHours:
        """Return opening hours per weekday."""

    def barbers(self) -> List[Barber]:
        """Return all barbers of the shop."""

    def get_barber(self, barber_id: str) -> Barber:
        """Return one barber, raising RecordNotFoundError if unknown."""

    def get_service(self, service_id: str) -> Service:
        """Return one service, raising RecordNotFoundError if unknown."""

    def appointments(self) -> List[Appointment]:
        """Return every appointment of the shop."""


@dataclass(frozen=True)
class DayAvailability:
    """Bookable slots for one barber on one date."""
    day: date
    status: DateStatus
    slots: List[str]

    def format_display(self) -> str:
        """
        Format the day for display.
        Format: Weekday, Month D | N slot(s)
        """
        if not self.slots:
            return f"{format_long_date(self.day)} | no slots"
        return f"{format_long_date(self.day)} | {len(self.slots)} slot(s)"


class BookingService:
    """
    Orchestrates shop data retrieval and slot calculation.

    ``clock`` supplies the current wall-clock time; it defaults to
    ``pendulum.now`` in the configured timezone, or the local one.
    """

    def __init__(
        self,
        store: ShopDataProtocol,
        timezone: Optional[str] = None,
        clock: Optional[Callable[[], DateTime]] = None,
    ) -> None:
        self._store = store
        self._clock = clock or (lambda: pendulum.now(timezone))

    def now(self) -> DateTime:
        return self._clock()

    def today(self) -> date:
        return self.now().date()

    def available_slots(self, *, barber_id: str, service_id: str, day: date) -> List[str]:
        """
        Compute bookable start times for a barber and service on a date.

        Raises:
            RecordNotFoundError: If the barber or service id is unknown
        """
        barber = self._store.get_barber(barber_id)
        service = self._store.get_service(service_id)

        return self._slots_for(barber, service, day)

    def upcoming_availability(
        self,
        *,
        barber_id: str,
        service_id: str,
        start: Optional[date] = None,
        days: int = 7,
    ) -> List[DayAvailability]:
        """
        Compute slots for consecutive days, starting today by default.
        """
        barber = self._store.get_barber(barber_id)
        service = self._store.get_service(service_id)
        origin = start or self.today()
        first = pendulum.date(origin.year, origin.month, origin.day)

        result: List[DayAvailability] = []
        for offset in range(days):
            day = first.add(days=offset)
            result.append(
                DayAvailability(
                    day=day,
                    status=date_status(day, barber),
                    slots=self._slots_for(barber, service, day),
                )
            )

        return result

    def slots_by_barber(self, *, service_id: str, day: date) -> Dict[str, List[str]]:
        """Compute slots on a date for every barber of the shop, keyed by barber id."""
        service = self._store.get_service(service_id)

        return {
            barber.id: self._slots_for(barber, service, day)
            for barber in self._store.barbers()
        }

    def _slots_for(self, barber: Barber, service: Service, day: date) -> List[str]:
        slots = compute_available_slots(
            day,
            barber,
            self._store.shop_hours(),
            self._store.appointments(),
            service.duration,
            now=self.now(),
        )
        logger.debug("%s / %s on %s: %s", barber.name, service.name, day, slots)
        return slots
