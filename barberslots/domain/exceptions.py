"""
Domain-specific exception hierarchy for the barberslots application.
"""


class BarberSlotsError(Exception):
    """Base class for all application-level errors."""


class ShopDataError(BarberSlotsError):
    """Raised when shop data cannot be read or does not validate."""


class RecordNotFoundError(BarberSlotsError):
    """Raised when a barber or service id is not present in the shop data."""
