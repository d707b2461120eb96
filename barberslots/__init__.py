"""
barberslots - bookable time slots for barbershop appointments.
"""

__version__ = "0.1.0"
