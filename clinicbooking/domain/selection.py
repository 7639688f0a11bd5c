"""
Selection state of the booking view: which day is shown and which slot is picked.
"""

from dataclasses import dataclass, field
from typing import Optional

from .exceptions import InvalidIndex, InvalidSlot
from .models import AvailabilityWindow, DaySlots, Slot


@dataclass
class SelectionState:
    """
    The patient's current day and slot choice within one availability window.

    Only ever mutated through select_day and select_slot. A new state is
    created whenever the window is regenerated.
    """
    window: AvailabilityWindow
    selected_day_index: int = 0
    selected_slot: Optional[Slot] = field(default=None)

    def __post_init__(self):
        # An empty window only has the initial day index
        if not (self.window.is_empty and self.selected_day_index == 0):
            self._check_day_index(self.selected_day_index)

        if self.selected_slot is not None:
            self._check_slot(self.selected_slot)

    @property
    def selected_day(self) -> DaySlots | None:
        """The currently shown day, or None for an empty window."""
        if self.window.is_empty:
            return None
        return self.window[self.selected_day_index]

    @property
    def has_selection(self) -> bool:
        return self.selected_slot is not None

    def select_day(self, index: int) -> DaySlots:
        """
        Show another day of the window.

        The selected slot is kept only if the newly shown day still offers it.

        Raises:
            InvalidIndex: If index is outside the window
        """
        self._check_day_index(index)

        day = self.window[index]
        self.selected_day_index = index

        if self.selected_slot is not None and self.selected_slot not in day:
            self.selected_slot = None

        return day

    def select_slot(self, slot: Slot) -> Slot:
        """
        Pick a slot of the currently shown day.

        Raises:
            InvalidSlot: If the slot is not offered on the selected day
        """
        self._check_slot(slot)

        self.selected_slot = slot
        return slot

    def clear(self) -> None:
        self.selected_slot = None

    def _check_day_index(self, index: int) -> None:
        if not 0 <= index < len(self.window):
            raise InvalidIndex(
                f"Day index {index} is out of range for a window of {len(self.window)} day(s)"
            )

    def _check_slot(self, slot: Slot) -> None:
        day = self.selected_day
        if day is None or slot not in day:
            raise InvalidSlot(f"Slot {slot} is not offered on the selected day")
