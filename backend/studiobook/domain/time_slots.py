"""
Slot universe for the photographer calendar.

A day is divided into 48 half-hour slots, ``00:00`` through ``23:30``.
``TimeSlot`` is a validated ``str`` so zero-padded values sort in
canonical order and compare equal to their plain-string form.
"""

from __future__ import annotations

from typing import Iterable, List, Tuple

from ..core.constants import SLOT_MINUTES
from ..core.exceptions import InvalidTimeSlotError
from ..utils.bitset import SLOTS_PER_DAY, pack_indexes, unpack_indexes


class TimeSlot(str):
    """One of the 48 half-hour starting points of a day."""

    __slots__ = ()

    def __new__(cls, value: str) -> "TimeSlot":
        if isinstance(value, TimeSlot):
            return value
        normalized = _normalize(value)
        if normalized is None:
            raise InvalidTimeSlotError(value)
        return _INTERNED.get(normalized) or super().__new__(cls, normalized)

    @property
    def index(self) -> int:
        hh, mm = self.split(":")
        return int(hh) * 2 + int(mm) // SLOT_MINUTES

    @classmethod
    def from_index(cls, idx: int) -> "TimeSlot":
        if not (0 <= idx < SLOTS_PER_DAY):
            raise InvalidTimeSlotError(idx)
        return ALL_TIME_SLOTS[idx]

    def __repr__(self) -> str:
        return f"TimeSlot({str.__repr__(self)})"


def _normalize(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    parts = value.strip().split(":")
    if len(parts) == 3:
        if parts[2] != "00":
            return None
        parts = parts[:2]
    if len(parts) != 2 or not all(p.isdigit() and len(p) == 2 for p in parts):
        return None
    hh, mm = int(parts[0]), int(parts[1])
    if not (0 <= hh < 24) or mm not in (0, SLOT_MINUTES):
        return None
    return f"{hh:02d}:{mm:02d}"


_INTERNED: dict[str, TimeSlot] = {}
for _i in range(SLOTS_PER_DAY):
    _label = f"{_i // 2:02d}:{(_i % 2) * SLOT_MINUTES:02d}"
    _INTERNED[_label] = str.__new__(TimeSlot, _label)

ALL_TIME_SLOTS: Tuple[TimeSlot, ...] = tuple(_INTERNED.values())


def is_time_slot(value: object) -> bool:
    return _normalize(value) is not None


def sort_slots(values: Iterable[str]) -> List[TimeSlot]:
    """Validate, de-duplicate and return slots in canonical order."""
    return [ALL_TIME_SLOTS[i] for i in sorted({TimeSlot(v).index for v in values})]


def slots_to_bits(values: Iterable[str]) -> bytes:
    return pack_indexes(TimeSlot(v).index for v in values)


def bits_to_slots(bits: bytes) -> List[TimeSlot]:
    return [ALL_TIME_SLOTS[i] for i in unpack_indexes(bits)]
