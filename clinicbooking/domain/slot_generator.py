"""
Core business logic for generating bookable appointment slots.

This is the heart of the application - pure domain logic without any
external dependencies (no clock reads, no I/O). "Now" is always passed in.
"""

import logging
from datetime import datetime
from typing import List

import pendulum
from pendulum import DateTime

from .models import AvailabilityWindow, DaySlots, Slot, WorkingHoursPolicy

logger = logging.getLogger(__name__)


DEFAULT_WINDOW_DAYS = 7
DEFAULT_LABEL_FORMAT = "hh:mm A"


class SlotGenerator:
    """
    Generates the rolling window of bookable slots for one working-hours policy.

    Algorithm, for each day of the window:
    1. Determine the opening and closing instants of the day
    2. Pick the first candidate start: opening time, or for the reference
       day the reference instant rounded up onto the slot grid
    3. Step through the grid until closing time
    4. Drop days that end up without any slot
    """

    def __init__(
        self,
        policy: WorkingHoursPolicy,
        label_format: str = DEFAULT_LABEL_FORMAT,
        window_days: int = DEFAULT_WINDOW_DAYS
    ):
        if window_days < 1:
            raise ValueError(f"window_days must be at least 1, got {window_days}")

        self.policy = policy
        self.label_format = label_format
        self.window_days = window_days

    def generate(self, reference_instant: datetime) -> AvailabilityWindow:
        """
        Generate the availability window starting at a reference instant.

        Args:
            reference_instant: The point in time before which no slot is offered

        Returns:
            AvailabilityWindow covering the reference day and the following days

        Raises:
            TypeError: If reference_instant is not a datetime
        """
        reference = self._to_datetime(reference_instant)
        first_day = reference.start_of("day")

        days: List[DaySlots] = []

        for offset in range(self.window_days):
            day_start = first_day.add(days=offset)

            if offset == 0:
                slots = self._slots_for_reference_day(reference)
            else:
                slots = self._slots_between(
                    self.policy.opening_on(day_start),
                    self.policy.closing_on(day_start)
                )

            if slots:
                days.append(DaySlots(date=day_start.date(), slots=tuple(slots)))

        window = AvailabilityWindow(reference_instant=reference, days=tuple(days))

        logger.debug(
            "Generated %d slot(s) over %d day(s) from %s with policy %s",
            window.slot_count,
            len(window),
            reference.to_iso8601_string(),
            self.policy,
        )

        return window

    def _slots_for_reference_day(self, reference: DateTime) -> List[Slot]:
        """
        Generate the slots still ahead of the reference instant on its own day.
        """
        day_open = self.policy.opening_on(reference)
        day_close = self.policy.closing_on(reference)

        # Already closed for today
        if reference >= day_close:
            return []

        return self._slots_between(self._first_start(reference, day_open), day_close)

    def _first_start(self, reference: DateTime, day_open: DateTime) -> DateTime:
        """
        Round the reference instant up onto the slot grid anchored at opening time.

        The grid is measured in elapsed time since opening, so on days when
        the clocks change no slot starts before the reference instant.

        Example (30 minute slots, opening 10:00):
        09:15 -> 10:00, 14:00 -> 14:00, 14:05 -> 14:30, 14:40 -> 15:00
        """
        if reference <= day_open:
            return day_open

        step_seconds = self._step_seconds()
        elapsed_seconds = reference.int_timestamp - day_open.int_timestamp
        steps, remainder = divmod(elapsed_seconds, step_seconds)

        if remainder:
            steps += 1

        cursor = day_open.add(seconds=steps * step_seconds)

        # A boundary instant is offered only if nothing of it has passed yet
        if cursor < reference:
            cursor = cursor.add(seconds=step_seconds)

        return cursor

    def _slots_between(self, cursor: DateTime, day_close: DateTime) -> List[Slot]:
        """
        Step through the slot grid from cursor up to (excluding) closing time.
        """
        step_seconds = self._step_seconds()
        slots: List[Slot] = []

        while cursor < day_close:
            slots.append(Slot(start=cursor, label=self.format_label(cursor)))
            cursor = cursor.add(seconds=step_seconds)

        return slots

    def _step_seconds(self) -> int:
        return int(self.policy.slot_duration.total_seconds())

    def format_label(self, start: DateTime) -> str:
        """Render the time of day of a slot start."""
        return start.format(self.label_format, locale="en")

    @staticmethod
    def _to_datetime(value: datetime) -> DateTime:
        if not isinstance(value, datetime):
            raise TypeError(
                f"reference_instant must be a datetime, got {type(value).__name__}"
            )

        if isinstance(value, DateTime):
            return value

        # Naive datetimes keep their wall-clock time (interpreted as UTC)
        return pendulum.instance(value)


def generate(
    reference_instant: datetime,
    policy: WorkingHoursPolicy,
    label_format: str = DEFAULT_LABEL_FORMAT,
    window_days: int = DEFAULT_WINDOW_DAYS
) -> AvailabilityWindow:
    """
    Generate the availability window for a policy as seen from a reference instant.
    """
    generator = SlotGenerator(policy, label_format=label_format, window_days=window_days)
    return generator.generate(reference_instant)
