"""
Domain models for working hours and bookable slots.
"""

from dataclasses import dataclass
from typing import Iterator, Tuple

import pendulum
from pendulum import Date, DateTime, Duration

from .exceptions import InvalidPolicy


@dataclass(frozen=True)
class WorkingHoursPolicy:
    """
    Represents a doctor's opening hour, closing hour and slot granularity.

    Invariant: open_hour must be before close_hour and the slot duration
    must be positive.
    """
    open_hour: int
    close_hour: int
    slot_duration_minutes: int = 30

    def __post_init__(self):
        for name in ("open_hour", "close_hour"):
            value = getattr(self, name)
            if not 0 <= value <= 23:
                raise InvalidPolicy(f"{name} must be between 0 and 23, got {value}")
        if self.open_hour >= self.close_hour:
            raise InvalidPolicy(
                f"Opening hour {self.open_hour} must be before closing hour {self.close_hour}"
            )
        if self.slot_duration_minutes <= 0:
            raise InvalidPolicy(
                f"Slot duration must be greater than zero, got {self.slot_duration_minutes}"
            )

    @property
    def slot_duration(self) -> Duration:
        return pendulum.duration(minutes=self.slot_duration_minutes)

    def opening_on(self, day: DateTime) -> DateTime:
        """Get the opening instant on the calendar day of ``day``."""
        return day.set(hour=self.open_hour, minute=0, second=0, microsecond=0)

    def closing_on(self, day: DateTime) -> DateTime:
        """Get the closing instant on the calendar day of ``day``."""
        return day.set(hour=self.close_hour, minute=0, second=0, microsecond=0)

    def __str__(self) -> str:
        return (
            f"{self.open_hour:02d}:00 - {self.close_hour:02d}:00 "
            f"({self.slot_duration_minutes} Min.)"
        )


@dataclass(frozen=True)
class Slot:
    """
    A single bookable appointment start time.
    """
    start: DateTime
    label: str

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True)
class DaySlots:
    """
    The ordered slots offered on one calendar day.
    """
    date: Date
    slots: Tuple[Slot, ...]

    @property
    def weekday_abbreviation(self) -> str:
        """Short upper-case weekday name used in day headers, e.g. ``MON``."""
        return self.date.format("ddd", locale="en").upper()

    @property
    def day_of_month(self) -> int:
        return self.date.day

    @property
    def first_slot(self) -> Slot:
        return self.slots[0]

    def header(self) -> str:
        """
        Format the day for display.
        Format: WEEKDAY DD
        """
        return f"{self.weekday_abbreviation} {self.day_of_month}"

    def __contains__(self, slot: object) -> bool:
        return slot in self.slots

    def __iter__(self) -> Iterator[Slot]:
        return iter(self.slots)

    def __len__(self) -> int:
        return len(self.slots)


@dataclass(frozen=True)
class AvailabilityWindow:
    """
    The generated days of bookable slots, in chronological order.

    Days without any slot are never part of the window.
    """
    reference_instant: DateTime
    days: Tuple[DaySlots, ...]

    @property
    def is_empty(self) -> bool:
        return not self.days

    @property
    def slot_count(self) -> int:
        return sum(len(day) for day in self.days)

    def slots(self) -> Iterator[Slot]:
        """Iterate over every slot of every day."""
        for day in self.days:
            yield from day.slots

    def day_index_of(self, slot: Slot) -> int | None:
        """
        Find the index of the day offering a slot.
        Returns None if no day contains it.
        """
        for index, day in enumerate(self.days):
            if slot in day:
                return index
        return None

    def __getitem__(self, index: int) -> DaySlots:
        return self.days[index]

    def __iter__(self) -> Iterator[DaySlots]:
        return iter(self.days)

    def __len__(self) -> int:
        return len(self.days)
