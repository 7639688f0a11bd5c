"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .booking import BookingService, BookingSession, DoctorDirectoryProtocol

__all__ = ["BookingService", "BookingSession", "DoctorDirectoryProtocol"]
