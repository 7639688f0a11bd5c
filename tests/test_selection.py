"""
Tests for the booking view selection state.
"""

import pendulum
import pytest

from clinicbooking.domain.exceptions import InvalidIndex, InvalidSlot
from clinicbooking.domain.models import WorkingHoursPolicy
from clinicbooking.domain.selection import SelectionState
from clinicbooking.domain.slot_generator import generate


@pytest.fixture
def window():
    policy = WorkingHoursPolicy(open_hour=10, close_hour=21, slot_duration_minutes=30)
    return generate(pendulum.parse("2024-11-25 14:05", tz="Europe/Berlin"), policy)


@pytest.fixture
def empty_window():
    policy = WorkingHoursPolicy(open_hour=10, close_hour=21)
    return generate(pendulum.parse("2024-11-25 22:00", tz="Europe/Berlin"), policy, window_days=1)


class TestSelectionState:
    """Tests for SelectionState."""

    def test_initial_state(self, window):
        """A new selection shows the first day with nothing picked."""
        selection = SelectionState(window=window)

        assert selection.selected_day_index == 0
        assert selection.selected_slot is None
        assert not selection.has_selection
        assert selection.selected_day == window[0]

    def test_select_slot_on_selected_day(self, window):
        selection = SelectionState(window=window)
        slot = window[0].slots[2]

        selection.select_slot(slot)

        assert selection.selected_slot == slot
        assert selection.has_selection

    def test_select_slot_of_other_day_raises_error(self, window):
        """Slots can only be picked from the day being shown."""
        selection = SelectionState(window=window)

        with pytest.raises(InvalidSlot):
            selection.select_slot(window[1].first_slot)

        assert selection.selected_slot is None

    def test_select_day_clears_slot_not_offered(self, window):
        """Switching to a day without the picked slot clears it."""
        selection = SelectionState(window=window)
        selection.select_slot(window[0].first_slot)

        day = selection.select_day(3)

        assert day == window[3]
        assert selection.selected_day_index == 3
        assert selection.selected_slot is None

    def test_select_same_day_keeps_slot(self, window):
        selection = SelectionState(window=window)
        slot = window[0].first_slot
        selection.select_slot(slot)

        selection.select_day(0)

        assert selection.selected_slot == slot

    def test_select_slot_after_day_change(self, window):
        selection = SelectionState(window=window)
        selection.select_day(2)
        slot = window[2].slots[-1]

        selection.select_slot(slot)

        assert selection.selected_slot == slot
        assert window.day_index_of(slot) == 2

    @pytest.mark.parametrize("index", [-1, 7, 100])
    def test_out_of_range_day_raises_error(self, window, index):
        selection = SelectionState(window=window)

        with pytest.raises(InvalidIndex, match="out of range"):
            selection.select_day(index)

        assert selection.selected_day_index == 0

    def test_empty_window(self, empty_window):
        """Nothing can be selected in a window without days."""
        selection = SelectionState(window=empty_window)

        assert selection.selected_day is None

        with pytest.raises(InvalidIndex):
            selection.select_day(0)

    @pytest.mark.parametrize("index", [-1, 7, 9])
    def test_constructor_rejects_out_of_range_day(self, window, index):
        """A state cannot start on a day outside the window."""
        with pytest.raises(InvalidIndex, match="out of range"):
            SelectionState(window=window, selected_day_index=index)

    def test_constructor_rejects_slot_of_other_day(self, window):
        with pytest.raises(InvalidSlot):
            SelectionState(window=window, selected_day_index=0, selected_slot=window[1].first_slot)

    def test_constructor_accepts_consistent_selection(self, window):
        slot = window[2].slots[1]

        selection = SelectionState(window=window, selected_day_index=2, selected_slot=slot)

        assert selection.selected_day == window[2]
        assert selection.selected_slot == slot

    def test_constructor_on_empty_window(self, empty_window, window):
        """Only the initial day index is allowed for an empty window."""
        SelectionState(window=empty_window)

        with pytest.raises(InvalidIndex):
            SelectionState(window=empty_window, selected_day_index=1)

        with pytest.raises(InvalidSlot):
            SelectionState(window=empty_window, selected_slot=window[0].first_slot)

    def test_clear(self, window):
        selection = SelectionState(window=window)
        selection.select_slot(window[0].first_slot)

        selection.clear()

        assert selection.selected_slot is None
        assert selection.selected_day_index == 0
