"""
Domain-specific exception hierarchy for the clinic booking application.
"""


class BookingError(Exception):
    """Base class for all application-level errors."""


class InvalidPolicy(BookingError, ValueError):
    """Raised when a working-hours policy is malformed."""


class InvalidIndex(BookingError, IndexError):
    """Raised when a day index is outside the availability window."""


class InvalidSlot(BookingError, ValueError):
    """Raised when a slot does not belong to the selected day."""


class DoctorNotFound(BookingError, LookupError):
    """Raised when the doctor directory has no record for an id."""
