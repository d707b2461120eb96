"""
Shop data store backed by a YAML seed file.

Raw records are validated with pydantic at load time so that only
well-formed schedules (weekday keys, ``YYYY-MM-DD`` override keys, ``HH:MM``
times) reach the availability engine.
"""

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import pendulum
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from ..domain.exceptions import RecordNotFoundError, ShopDataError
from ..domain.models import (
    Appointment,
    AppointmentStatus,
    Barber,
    DaySlot,
    OpeningHours,
    Service,
    ShopHours,
    Weekday,
    minutes_to_time,
    time_to_minutes,
    to_date_key,
)
from ..domain.schedule_editing import is_valid_date_key, is_valid_time

logger = logging.getLogger(__name__)


def _coerce_time(value: Any) -> Any:
    # YAML 1.1 reads an unquoted 10:00 as the sexagesimal integer 600
    if isinstance(value, int) and not isinstance(value, bool):
        return minutes_to_time(value)
    return value


def _check_time(value: str) -> str:
    if not is_valid_time(value):
        raise ValueError(f"Invalid time '{value}', expected HH:MM")
    return value


class DaySlotRecord(BaseModel):
    """A working interval as written in the data file."""
    start: str
    end: str

    @field_validator("start", "end", mode="before")
    @classmethod
    def coerce_time(cls, value: Any) -> Any:
        return _coerce_time(value)

    @field_validator("start", "end")
    @classmethod
    def validate_time(cls, value: str) -> str:
        return _check_time(value)

    @model_validator(mode="after")
    def validate_order(self) -> "DaySlotRecord":
        """Ensure the interval starts before it ends."""
        if time_to_minutes(self.start) >= time_to_minutes(self.end):
            raise ValueError(f"Start time {self.start} must be before end time {self.end}")
        return self

    def to_domain(self) -> DaySlot:
        return DaySlot(start=self.start, end=self.end)


class OpeningHoursRecord(BaseModel):
    """Opening hours for one weekday."""
    open: str
    close: str

    @field_validator("open", "close", mode="before")
    @classmethod
    def coerce_time(cls, value: Any) -> Any:
        return _coerce_time(value)

    @field_validator("open", "close")
    @classmethod
    def validate_time(cls, value: str) -> str:
        return _check_time(value)

    @model_validator(mode="after")
    def validate_order(self) -> "OpeningHoursRecord":
        """Ensure the shop opens before it closes."""
        if time_to_minutes(self.open) >= time_to_minutes(self.close):
            raise ValueError(f"Shop must open before it closes, got {self.open}-{self.close}")
        return self


def _check_weekday_keys(value: Dict[str, Any]) -> Dict[str, Any]:
    normalized: Dict[str, Any] = {}
    for name, entry in value.items():
        day_name = Weekday.from_name(name).day_name
        if day_name in normalized:
            raise ValueError(f"Weekday '{day_name}' is listed more than once")
        normalized[day_name] = entry
    return normalized


class ShopRecord(BaseModel):
    """Shop details and weekly opening hours."""
    name: str = ""
    address: str = ""
    hours: Dict[str, Optional[OpeningHoursRecord]] = Field(default_factory=dict)

    @field_validator("hours")
    @classmethod
    def validate_weekdays(cls, value: Dict[str, Any]) -> Dict[str, Any]:
        return _check_weekday_keys(value)


class BarberRecord(BaseModel):
    """A barber as written in the data file."""
    id: str
    name: str
    specialty: str = ""
    availability: Dict[str, List[DaySlotRecord]] = Field(default_factory=dict)
    date_overrides: Dict[str, List[DaySlotRecord]] = Field(default_factory=dict)

    @field_validator("availability")
    @classmethod
    def validate_weekdays(cls, value: Dict[str, Any]) -> Dict[str, Any]:
        return _check_weekday_keys(value)

    @field_validator("date_overrides", mode="before")
    @classmethod
    def coerce_date_keys(cls, value: Any) -> Any:
        # Unquoted YAML dates arrive as date objects
        if isinstance(value, dict):
            return {
                to_date_key(key) if isinstance(key, date) else key: slots
                for key, slots in value.items()
            }
        return value

    @field_validator("date_overrides")
    @classmethod
    def validate_date_keys(cls, value: Dict[str, Any]) -> Dict[str, Any]:
        invalid = [key for key in value if not is_valid_date_key(key)]
        if invalid:
            raise ValueError(f"date_overrides keys must be YYYY-MM-DD, got {invalid}")
        return value

    def to_domain(self) -> Barber:
        return Barber(
            id=self.id,
            name=self.name,
            specialty=self.specialty,
            availability={
                Weekday.from_name(day): tuple(slot.to_domain() for slot in slots)
                for day, slots in self.availability.items()
            },
            date_overrides={
                key: tuple(slot.to_domain() for slot in slots)
                for key, slots in self.date_overrides.items()
            },
        )


class ServiceRecord(BaseModel):
    """A service as written in the data file."""
    id: str
    name: str
    duration: int
    price: float = 0.0
    description: str = ""

    @field_validator("duration")
    @classmethod
    def validate_duration(cls, value: int) -> int:
        """Ensure service duration is positive."""
        if value <= 0:
            raise ValueError("duration must be greater than zero")
        return value

    def to_domain(self) -> Service:
        return Service(
            id=self.id,
            name=self.name,
            duration=self.duration,
            price=self.price,
            description=self.description,
        )


class AppointmentRecord(BaseModel):
    """An appointment as written in the data file."""
    id: str
    barber_id: str
    date_time: str
    status: AppointmentStatus = AppointmentStatus.BOOKED
    customer_id: str = ""
    service_id: str = ""

    @field_validator("date_time", mode="before")
    @classmethod
    def coerce_timestamp(cls, value: Any) -> Any:
        # Unquoted YAML timestamps arrive as datetime objects
        if isinstance(value, datetime):
            return value.isoformat()
        return value

    @field_validator("date_time")
    @classmethod
    def validate_timestamp(cls, value: str) -> str:
        """Ensure the timestamp parses and starts with a YYYY-MM-DD date."""
        if not is_valid_date_key(value[:10]):
            raise ValueError(f"Invalid timestamp '{value}', expected YYYY-MM-DDTHH:MM")
        try:
            pendulum.parse(value)
        except ValueError as exc:
            raise ValueError(f"Invalid timestamp '{value}': {exc}") from exc
        return value

    def to_domain(self) -> Appointment:
        return Appointment(
            id=self.id,
            barber_id=self.barber_id,
            date_time=self.date_time,
            status=self.status,
            customer_id=self.customer_id,
            service_id=self.service_id,
        )


class ShopDataFile(BaseModel):
    """Root of the shop data file."""
    shop: ShopRecord = Field(default_factory=ShopRecord)
    barbers: List[BarberRecord] = Field(default_factory=list)
    services: List[ServiceRecord] = Field(default_factory=list)
    appointments: List[AppointmentRecord] = Field(default_factory=list)

    @field_validator("barbers", "services")
    @classmethod
    def validate_unique_ids(cls, value: List[Any]) -> List[Any]:
        """Ensure record ids are unique."""
        seen: set[str] = set()
        for record in value:
            if record.id in seen:
                raise ValueError(f"Duplicate id detected: {record.id}")
            seen.add(record.id)
        return value


class YamlShopStore:
    """
    Read-only store for one shop's barbers, services, hours and appointments.

    Records are converted to immutable domain objects once at load time;
    every accessor hands out those snapshots.
    """

    def __init__(self, data: ShopDataFile):
        self.shop_name = data.shop.name
        self._shop_hours: Dict[Weekday, Optional[OpeningHours]] = {
            Weekday.from_name(day): (
                OpeningHours(open=hours.open, close=hours.close) if hours else None
            )
            for day, hours in data.shop.hours.items()
        }
        self._barbers = {record.id: record.to_domain() for record in data.barbers}
        self._services = {record.id: record.to_domain() for record in data.services}
        self._appointments = [record.to_domain() for record in data.appointments]

        unknown = sorted({
            a.barber_id for a in self._appointments if a.barber_id not in self._barbers
        })
        if unknown:
            logger.warning("Appointments reference unknown barber id(s): %s", ", ".join(unknown))

    @classmethod
    def from_path(cls, data_path: Path) -> "YamlShopStore":
        """
        Load shop data from a YAML file.

        Args:
            data_path: Path to the YAML data file

        Returns:
            YamlShopStore instance

        Raises:
            ShopDataError: If the file is missing, not valid YAML, or
                contains invalid records
        """
        if not data_path.exists():
            raise ShopDataError(f"Shop data file not found: {data_path}")

        try:
            with open(data_path, "r", encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ShopDataError(f"Invalid YAML in {data_path}: {exc}") from exc

        if not isinstance(raw, dict):
            raise ShopDataError("Shop data file must contain a mapping at the root level.")

        try:
            data = ShopDataFile(**raw)
        except ValidationError as exc:
            raise ShopDataError(f"Invalid shop data in {data_path}:\n{exc}") from exc

        store = cls(data)
        logger.info(
            "Loaded %d barber(s), %d service(s), %d appointment(s) from %s",
            len(store._barbers), len(store._services), len(store._appointments), data_path,
        )
        return store

    def shop_hours(self) -> ShopHours:
        return dict(self._shop_hours)

    def barbers(self) -> List[Barber]:
        return list(self._barbers.values())

    def get_barber(self, barber_id: str) -> Barber:
        """
        Raises:
            RecordNotFoundError: If no barber has this id
        """
        try:
            return self._barbers[barber_id]
        except KeyError:
            raise RecordNotFoundError(f"Unknown barber id: '{barber_id}'") from None

    def find_barber_by_name(self, name: str) -> Barber | None:
        """Find a barber by display name (case-insensitive)."""
        for barber in self._barbers.values():
            if barber.name.lower() == name.lower():
                return barber
        return None

    def services(self) -> List[Service]:
        return list(self._services.values())

    def get_service(self, service_id: str) -> Service:
        """
        Raises:
            RecordNotFoundError: If no service has this id
        """
        try:
            return self._services[service_id]
        except KeyError:
            raise RecordNotFoundError(f"Unknown service id: '{service_id}'") from None

    def appointments(self) -> List[Appointment]:
        return list(self._appointments)
