"""Unit tests for the half-hour slot universe."""

import pytest

from studiobook.core.exceptions import InvalidTimeSlotError
from studiobook.domain.time_slots import (
    ALL_TIME_SLOTS,
    TimeSlot,
    bits_to_slots,
    is_time_slot,
    slots_to_bits,
    sort_slots,
)


class TestTimeSlot:
    def test_universe_has_48_ordered_slots(self):
        assert len(ALL_TIME_SLOTS) == 48
        assert ALL_TIME_SLOTS[0] == "00:00"
        assert ALL_TIME_SLOTS[-1] == "23:30"
        assert list(ALL_TIME_SLOTS) == sorted(ALL_TIME_SLOTS)

    def test_slot_compares_equal_to_plain_string(self):
        assert TimeSlot("09:00") == "09:00"
        assert TimeSlot("09:00") is ALL_TIME_SLOTS[18]

    def test_seconds_suffix_is_normalized(self):
        assert TimeSlot("09:30:00") == "09:30"

    @pytest.mark.parametrize("value", ["9:00", "09:15", "24:00", "ab:cd", "", "09:30:15"])
    def test_invalid_values_raise(self, value):
        with pytest.raises(InvalidTimeSlotError):
            TimeSlot(value)

    def test_non_string_is_rejected(self):
        assert not is_time_slot(900)

    def test_index_round_trip(self):
        assert TimeSlot("13:30").index == 27
        assert TimeSlot.from_index(27) == "13:30"

    def test_from_index_out_of_range(self):
        with pytest.raises(InvalidTimeSlotError):
            TimeSlot.from_index(48)


class TestSlotCollections:
    def test_sort_slots_dedupes_and_orders(self):
        assert sort_slots(["10:00", "08:30", "10:00", "08:30:00"]) == ["08:30", "10:00"]

    def test_bits_conversion_keeps_canonical_order(self):
        bits = slots_to_bits(["23:30", "00:00", "12:00"])

        assert len(bits) == 6
        assert bits_to_slots(bits) == ["00:00", "12:00", "23:30"]
