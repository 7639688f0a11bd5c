"""
Tests for domain models.
"""

import pendulum
import pytest

from clinicbooking.domain.exceptions import InvalidPolicy
from clinicbooking.domain.models import AvailabilityWindow, DaySlots, Slot, WorkingHoursPolicy


def _slot(value: str) -> Slot:
    start = pendulum.parse(value, tz="Europe/Berlin")
    return Slot(start=start, label=start.format("hh:mm A"))


class TestWorkingHoursPolicy:
    """Tests for WorkingHoursPolicy model."""

    def test_create_valid_policy(self):
        """Test creating a valid policy."""
        policy = WorkingHoursPolicy(open_hour=10, close_hour=21, slot_duration_minutes=30)

        assert policy.open_hour == 10
        assert policy.close_hour == 21
        assert policy.slot_duration.in_minutes() == 30

    def test_default_slot_duration(self):
        """Slots default to half an hour."""
        assert WorkingHoursPolicy(open_hour=9, close_hour=17).slot_duration_minutes == 30

    def test_open_after_close_raises_error(self):
        """Test that opening after closing raises InvalidPolicy."""
        with pytest.raises(InvalidPolicy, match="Opening hour 21 must be before closing hour 10"):
            WorkingHoursPolicy(open_hour=21, close_hour=10)

    def test_open_equal_close_raises_error(self):
        with pytest.raises(InvalidPolicy):
            WorkingHoursPolicy(open_hour=10, close_hour=10)

    @pytest.mark.parametrize("duration", [0, -30])
    def test_non_positive_duration_raises_error(self, duration):
        """Test that a zero or negative slot duration raises InvalidPolicy."""
        with pytest.raises(InvalidPolicy, match="Slot duration must be greater than zero"):
            WorkingHoursPolicy(open_hour=10, close_hour=21, slot_duration_minutes=duration)

    def test_hour_out_of_range_raises_error(self):
        with pytest.raises(InvalidPolicy, match="close_hour must be between 0 and 23"):
            WorkingHoursPolicy(open_hour=10, close_hour=24)

    def test_invalid_policy_is_a_value_error(self):
        """Callers catching ValueError also see policy errors."""
        with pytest.raises(ValueError):
            WorkingHoursPolicy(open_hour=10, close_hour=21, slot_duration_minutes=0)

    def test_opening_and_closing_on_day(self):
        """Test getting the opening and closing instants for a day."""
        policy = WorkingHoursPolicy(open_hour=10, close_hour=21)
        day = pendulum.parse("2024-11-25 14:37:12", tz="Europe/Berlin")

        assert policy.opening_on(day) == pendulum.parse("2024-11-25 10:00", tz="Europe/Berlin")
        assert policy.closing_on(day) == pendulum.parse("2024-11-25 21:00", tz="Europe/Berlin")

    def test_str(self):
        policy = WorkingHoursPolicy(open_hour=9, close_hour=17, slot_duration_minutes=20)

        assert str(policy) == "09:00 - 17:00 (20 Min.)"


class TestSlot:
    """Tests for Slot model."""

    def test_slots_compare_by_value(self):
        """Two slots with the same start and label are equal and hash alike."""
        first = _slot("2024-11-25 10:00")
        second = _slot("2024-11-25 10:00")

        assert first == second
        assert len({first, second}) == 1

    def test_slot_is_immutable(self):
        slot = _slot("2024-11-25 10:00")

        with pytest.raises(AttributeError):
            slot.label = "11:00 AM"


class TestDaySlots:
    """Tests for DaySlots model."""

    def test_day_header(self):
        """Test the weekday abbreviation and day of month."""
        day = DaySlots(
            date=pendulum.date(2024, 11, 25),  # Monday
            slots=(_slot("2024-11-25 10:00"),)
        )

        assert day.weekday_abbreviation == "MON"
        assert day.day_of_month == 25
        assert day.header() == "MON 25"

    def test_weekday_abbreviation_sunday(self):
        day = DaySlots(date=pendulum.date(2024, 12, 1), slots=(_slot("2024-12-01 10:00"),))

        assert day.weekday_abbreviation == "SUN"

    def test_contains_and_len(self):
        first = _slot("2024-11-25 10:00")
        second = _slot("2024-11-25 10:30")
        day = DaySlots(date=pendulum.date(2024, 11, 25), slots=(first, second))

        assert first in day
        assert _slot("2024-11-25 11:00") not in day
        assert len(day) == 2
        assert day.first_slot == first
        assert list(day) == [first, second]


class TestAvailabilityWindow:
    """Tests for AvailabilityWindow model."""

    def test_window_helpers(self):
        """Test counting, indexing and locating slots."""
        monday = DaySlots(
            date=pendulum.date(2024, 11, 25),
            slots=(_slot("2024-11-25 20:00"), _slot("2024-11-25 20:30"))
        )
        tuesday = DaySlots(
            date=pendulum.date(2024, 11, 26),
            slots=(_slot("2024-11-26 10:00"),)
        )
        window = AvailabilityWindow(
            reference_instant=pendulum.parse("2024-11-25 19:45", tz="Europe/Berlin"),
            days=(monday, tuesday)
        )

        assert len(window) == 2
        assert not window.is_empty
        assert window.slot_count == 3
        assert window[1] == tuesday
        assert window.day_index_of(_slot("2024-11-26 10:00")) == 1
        assert window.day_index_of(_slot("2024-11-27 10:00")) is None
        assert [slot.label for slot in window.slots()] == ["08:00 PM", "08:30 PM", "10:00 AM"]

    def test_empty_window(self):
        window = AvailabilityWindow(
            reference_instant=pendulum.parse("2024-11-25 22:00", tz="Europe/Berlin"),
            days=()
        )

        assert window.is_empty
        assert window.slot_count == 0
        assert list(window) == []
