"""
Application services for the appointment booking view.

The service coordinates looking up a doctor via a directory adapter and
delegates slot generation to the domain-level ``SlotGenerator``. The
directory is described by a simple protocol so tests can plug in a stub.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Protocol

from ..config import DoctorConfig, WorkingHoursConfig
from ..domain.models import AvailabilityWindow, WorkingHoursPolicy
from ..domain.selection import SelectionState
from ..domain.slot_generator import DEFAULT_LABEL_FORMAT, DEFAULT_WINDOW_DAYS, SlotGenerator

logger = logging.getLogger(__name__)


class DoctorDirectoryProtocol(Protocol):
    """Protocol describing the doctor directory behaviour needed by the service."""

    async def get_doctor(self, doctor_id: str) -> DoctorConfig:
        """Return the doctor record for an id."""

    def list_doctors(self) -> List[DoctorConfig]:
        """Return all known doctors."""


@dataclass(frozen=True)
class BookingSession:
    """
    Everything the booking view shows for one doctor.

    The window is never patched; a new session replaces the old one.
    """
    doctor: DoctorConfig
    window: AvailabilityWindow
    selection: SelectionState


class BookingService:
    """
    Orchestrates doctor lookup, slot generation and selection state.
    """

    def __init__(
        self,
        directory: DoctorDirectoryProtocol,
        *,
        default_working_hours: WorkingHoursConfig | None = None,
        label_format: str = DEFAULT_LABEL_FORMAT,
        window_days: int = DEFAULT_WINDOW_DAYS,
    ) -> None:
        self._directory = directory
        self._default_working_hours = default_working_hours or WorkingHoursConfig()
        self._label_format = label_format
        self._window_days = window_days

    async def get_doctor(self, doctor_id: str) -> DoctorConfig:
        """Fetch a doctor record from the directory."""
        return await self._directory.get_doctor(doctor_id)

    def list_doctors(self) -> List[DoctorConfig]:
        return self._directory.list_doctors()

    def policy_for(self, doctor: DoctorConfig) -> WorkingHoursPolicy:
        """Get the working-hours policy that applies to a doctor."""
        return doctor.working_hours_or(self._default_working_hours).to_policy()

    def build_window(
        self,
        policy: WorkingHoursPolicy,
        reference_instant: datetime,
    ) -> AvailabilityWindow:
        """Generate the availability window for a policy."""
        generator = SlotGenerator(
            policy,
            label_format=self._label_format,
            window_days=self._window_days,
        )
        return generator.generate(reference_instant)

    async def open_booking(
        self,
        doctor_id: str,
        reference_instant: datetime,
    ) -> BookingSession:
        """
        Resolve the doctor, then generate their slots and a fresh selection.
        """
        doctor = await self.get_doctor(doctor_id)
        return self._start_session(doctor, reference_instant)

    def refresh(
        self,
        session: BookingSession,
        reference_instant: datetime,
    ) -> BookingSession:
        """Regenerate a session's window for a new reference instant."""
        return self._start_session(session.doctor, reference_instant)

    def _start_session(
        self,
        doctor: DoctorConfig,
        reference_instant: datetime,
    ) -> BookingSession:
        window = self.build_window(self.policy_for(doctor), reference_instant)

        if window.is_empty:
            logger.info("No bookable slots for doctor %s", doctor.id)

        return BookingSession(
            doctor=doctor,
            window=window,
            selection=SelectionState(window=window),
        )
