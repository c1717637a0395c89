"""
Weekly availability template: pattern mining and the in-memory editor.

The template has one entry per weekday (0 = Sunday … 6 = Saturday). It is
mined once from whatever dated availability exists and is then edited by
the photographer; edits only reach dated availability when the template
is projected forward.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
import logging
from typing import Dict, Iterable, List, Mapping, Sequence, Union

from ..core.constants import WEEKDAYS
from ..core.exceptions import ValidationException
from ..utils.bitset import new_empty_bits, union_bits
from ..utils.time_helpers import sunday_based_weekday, try_parse_date_key
from .date_availability import DateAvailability
from .time_slots import TimeSlot, bits_to_slots, is_time_slot, slots_to_bits, sort_slots

logger = logging.getLogger(__name__)


def _half_hours(start: str, end: str) -> List[str]:
    """Slots from start to end, both inclusive."""
    first, last = TimeSlot(start).index, TimeSlot(end).index
    return [str(TimeSlot.from_index(i)) for i in range(first, last + 1)]


# Static business-hours presets offered in the basic editor.
PRESETS: Dict[str, List[str]] = {
    "morning": _half_hours("08:00", "11:30"),
    "afternoon": _half_hours("13:00", "17:30"),
    "evening": _half_hours("18:00", "20:00"),
}
PRESETS["all"] = PRESETS["morning"] + PRESETS["afternoon"] + PRESETS["evening"]

PRESET_NAMES = ("morning", "afternoon", "evening", "all")


@dataclass
class WeekdayAvailability:
    """Template entry for one weekday."""

    day: int
    enabled: bool = False
    slots: List[TimeSlot] = field(default_factory=list)

    @property
    def label(self) -> str:
        return WEEKDAYS[self.day]


class WeekdayTemplate:
    """Seven weekday entries the photographer edits before projecting."""

    def __init__(self, entries: Iterable[WeekdayAvailability] | None = None) -> None:
        self._days: List[WeekdayAvailability] = [WeekdayAvailability(day=i) for i in range(7)]
        for entry in entries or []:
            self._check_day(entry.day)
            self._days[entry.day] = WeekdayAvailability(
                day=entry.day, enabled=entry.enabled, slots=sort_slots(entry.slots)
            )

    @staticmethod
    def _check_day(day: int) -> None:
        if not isinstance(day, int) or not (0 <= day <= 6):
            raise ValidationException(
                f"Weekday must be between 0 (Sunday) and 6 (Saturday), got {day!r}",
                code="INVALID_WEEKDAY",
                details={"day": day},
            )

    def __getitem__(self, day: int) -> WeekdayAvailability:
        self._check_day(day)
        return self._days[day]

    def __iter__(self):
        return iter(self._days)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WeekdayTemplate):
            return NotImplemented
        return self._days == other._days

    def __repr__(self) -> str:
        enabled = [d.label for d in self._days if d.enabled]
        return f"WeekdayTemplate(enabled={enabled})"

    def enabled_days(self) -> List[int]:
        return [d.day for d in self._days if d.enabled]

    def slots_for(self, day_date: date) -> List[TimeSlot] | None:
        """Template slots for a calendar date, or None when its weekday is disabled."""
        entry = self._days[sunday_based_weekday(day_date)]
        return list(entry.slots) if entry.enabled else None

    # Editing

    def set_enabled(self, day: int, enabled: bool) -> None:
        """Disabling keeps the slots so re-enabling restores them."""
        self[day].enabled = bool(enabled)

    def set_slots(self, day: int, slots: Iterable[str]) -> None:
        self[day].slots = sort_slots(slots)

    def apply_preset(self, day: int, preset_name: str) -> None:
        preset = PRESETS.get(preset_name)
        if preset is None:
            raise ValidationException(
                f"Unknown preset: {preset_name}",
                code="UNKNOWN_PRESET",
                details={"preset": preset_name, "available": list(PRESET_NAMES)},
            )
        self.set_slots(day, preset)

    def toggle_slot(self, day: int, time: str) -> None:
        """Flip one slot in a weekday entry (advanced editor)."""
        slot = TimeSlot(time)
        current = self[day].slots
        if slot in current:
            self.set_slots(day, [s for s in current if s != slot])
        else:
            self.set_slots(day, [*current, slot])

    def copy_to_enabled_days(self, source_day: int) -> List[int]:
        """
        Copy the source day's slots onto every other enabled day.

        Disabled days are left alone and a source without slots copies
        nothing. Returns the days that were overwritten.
        """
        source = self[source_day]
        if not source.slots:
            return []
        targets = [d for d in self._days if d.enabled and d.day != source_day]
        for target in targets:
            target.slots = list(source.slots)
        return [t.day for t in targets]

    def to_payload(self) -> List[Dict[str, object]]:
        return [
            {"day": d.day, "enabled": d.enabled, "slots": [str(s) for s in d.slots]}
            for d in self._days
        ]


AvailabilitySource = Union[DateAvailability, Mapping[str, Sequence[str]]]


def mine_weekday_patterns(source: AvailabilitySource) -> WeekdayTemplate:
    """
    Reconstruct a weekly template from dated availability.

    Each weekday's slots are the union of every slot ever available on a
    date falling on that weekday; a weekday is enabled when that union is
    non-empty. Accepts the store or a raw persisted payload; unparseable
    dates in a raw payload are skipped.
    """
    unions = [new_empty_bits() for _ in range(7)]

    if isinstance(source, DateAvailability):
        for day in source.dates():
            bits = source.bits(day)
            if bits is not None:
                weekday = sunday_based_weekday(day)
                unions[weekday] = union_bits(unions[weekday], bits)
    else:
        for raw_key, raw_slots in source.items():
            day = try_parse_date_key(raw_key)
            if day is None:
                logger.debug("Pattern mining skipped malformed date %r", raw_key)
                continue
            weekday = sunday_based_weekday(day)
            bits = slots_to_bits(value for value in raw_slots or [] if is_time_slot(value))
            unions[weekday] = union_bits(unions[weekday], bits)

    entries = []
    for weekday, bits in enumerate(unions):
        slots = bits_to_slots(bits)
        entries.append(WeekdayAvailability(day=weekday, enabled=bool(slots), slots=slots))
    return WeekdayTemplate(entries)
