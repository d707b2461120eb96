"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .booking import BookingService, DayAvailability, ShopDataProtocol

__all__ = ["BookingService", "DayAvailability", "ShopDataProtocol"]
