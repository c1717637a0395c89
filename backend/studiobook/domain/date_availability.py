"""
Date availability store and the blocked-slot deriver.

``DateAvailability`` is the single source of truth for which slots a
photographer can be booked on. Each configured date keeps a 6-byte day
bitmap; a date with an empty bitmap is configured but fully blocked,
which is different from a date that has no entry at all.
"""

from __future__ import annotations

from datetime import date
import logging
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

from ..utils.bitset import complement_bits, has_index, new_empty_bits, toggle_index
from ..utils.time_helpers import date_key, try_parse_date_key
from .time_slots import TimeSlot, bits_to_slots, is_time_slot, slots_to_bits

logger = logging.getLogger(__name__)

AvailabilityPayload = Dict[str, List[str]]
BlockedAvailability = Dict[date, List[TimeSlot]]


class DateAvailability:
    """Mutable mapping of date -> ordered set of available slots."""

    def __init__(self, bits_by_day: Optional[Mapping[date, bytes]] = None) -> None:
        self._bits: Dict[date, bytes] = dict(bits_by_day or {})
        self.skipped_keys: List[str] = []

    @classmethod
    def from_payload(cls, payload: Optional[Mapping[str, Sequence[str]]]) -> "DateAvailability":
        """
        Build the store from the persisted ``{"YYYY-MM-DD": ["HH:MM", ...]}`` map.

        Unparseable date keys are skipped and remembered in ``skipped_keys``;
        values outside the slot universe are dropped with a warning.
        """
        store = cls()
        for raw_key, raw_slots in (payload or {}).items():
            day = try_parse_date_key(raw_key)
            if day is None:
                logger.warning("Skipping malformed availability date key %r", raw_key)
                store.skipped_keys.append(str(raw_key))
                continue
            valid = [value for value in raw_slots or [] if is_time_slot(value)]
            if len(valid) != len(raw_slots or []):
                logger.warning(
                    "Dropping %d invalid time values for %s",
                    len(raw_slots or []) - len(valid),
                    raw_key,
                )
            store._bits[day] = slots_to_bits(valid)
        return store

    def to_payload(self) -> AvailabilityPayload:
        """Whole-map representation handed to the persistence collaborator."""
        return {date_key(day): [str(s) for s in self.slots(day)] for day in sorted(self._bits)}

    def copy(self) -> "DateAvailability":
        clone = DateAvailability(self._bits)
        clone.skipped_keys = list(self.skipped_keys)
        return clone

    # Read access

    def __contains__(self, day: object) -> bool:
        return day in self._bits

    def __len__(self) -> int:
        return len(self._bits)

    def __iter__(self) -> Iterator[date]:
        return iter(sorted(self._bits))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DateAvailability):
            return NotImplemented
        return self._bits == other._bits

    def dates(self) -> List[date]:
        return sorted(self._bits)

    def items(self) -> Iterator[Tuple[date, List[TimeSlot]]]:
        for day in sorted(self._bits):
            yield day, bits_to_slots(self._bits[day])

    def bits(self, day: date) -> Optional[bytes]:
        return self._bits.get(day)

    def slots(self, day: date) -> List[TimeSlot]:
        """Available slots for ``day``; empty when the date is absent or fully blocked."""
        bits = self._bits.get(day)
        return bits_to_slots(bits) if bits is not None else []

    def is_available(self, day: date, time: str) -> bool:
        bits = self._bits.get(day)
        return bits is not None and has_index(bits, TimeSlot(time).index)

    # Mutation

    def set_slots(self, day: date, slots: Iterable[str]) -> None:
        """Overwrite the date's entry outright."""
        self._bits[day] = slots_to_bits(slots)

    def remove_date(self, day: date) -> bool:
        return self._bits.pop(day, None) is not None

    def add_slot(self, day: date, time: str) -> bool:
        """Make ``time`` available; returns False when it already was."""
        current = self._bits.get(day, new_empty_bits())
        updated = toggle_index(current, TimeSlot(time).index, True)
        changed = day not in self._bits or updated != current
        self._bits[day] = updated
        return changed

    def remove_slot(self, day: date, time: str) -> bool:
        """
        Block ``time``; the date entry stays even when it becomes empty.

        Blocking a slot on an unconfigured date records the date as
        configured with nothing available.
        """
        index = TimeSlot(time).index
        current = self._bits.get(day)
        if current is None:
            self._bits[day] = new_empty_bits()
            return True
        updated = toggle_index(current, index, False)
        self._bits[day] = updated
        return updated != current


def derive_blocked(availability: DateAvailability) -> BlockedAvailability:
    """Complement of every configured date against the full slot universe."""
    blocked: BlockedAvailability = {}
    for day in availability.dates():
        bits = availability.bits(day)
        if bits is None:
            continue
        blocked[day] = bits_to_slots(complement_bits(bits))
    return blocked


def toggle_slot(
    availability: DateAvailability,
    day: date,
    time: str,
    currently_blocked: bool,
) -> bool:
    """
    Flip one slot between blocked and available.

    ``currently_blocked`` comes from the caller's derived blocked view; a
    blocked slot is made available, an available slot is blocked. Returns
    whether the store changed.
    """
    if currently_blocked:
        return availability.add_slot(day, time)
    return availability.remove_slot(day, time)
