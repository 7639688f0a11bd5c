"""
Domain layer - Pure business logic without external dependencies.
"""

from .exceptions import BookingError, DoctorNotFound, InvalidIndex, InvalidPolicy, InvalidSlot
from .models import AvailabilityWindow, DaySlots, Slot, WorkingHoursPolicy
from .selection import SelectionState
from .slot_generator import SlotGenerator, generate

__all__ = [
    "AvailabilityWindow",
    "BookingError",
    "DaySlots",
    "DoctorNotFound",
    "InvalidIndex",
    "InvalidPolicy",
    "InvalidSlot",
    "SelectionState",
    "Slot",
    "SlotGenerator",
    "WorkingHoursPolicy",
    "generate",
]
