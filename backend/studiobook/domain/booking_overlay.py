"""
Booking overlay: read-only session entries merged with availability for display.

Bookings and availability are independent. A booking may sit on an
available slot, a blocked slot or an unconfigured one; the display shows
the booking and leaves the disagreement visible.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
import logging
from typing import Any, Collection, Dict, Iterable, List, Mapping, Optional, Sequence

from ..core.constants import EXCLUDED_SESSION_STATUSES
from .date_availability import BlockedAvailability, DateAvailability
from .time_slots import ALL_TIME_SLOTS, TimeSlot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Booking:
    day: date
    time: str  # HH:MM of the session start, not necessarily on the slot grid
    title: str
    duration_minutes: int


class SlotStatus(str, Enum):
    BOOKED = "booked"
    BLOCKED = "blocked"
    AVAILABLE = "available"
    UNCONFIGURED = "unconfigured"


class DayStatus(str, Enum):
    BOOKED = "booked"
    AVAILABLE = "available"
    BLOCKED = "blocked"
    UNCONFIGURED = "unconfigured"


@dataclass(frozen=True)
class SlotView:
    time: TimeSlot
    status: SlotStatus
    booking: Optional[Booking] = None


def _field(record: Any, *names: str) -> Any:
    for name in names:
        if isinstance(record, Mapping):
            if name in record:
                return record[name]
        elif hasattr(record, name):
            return getattr(record, name)
    return None


def _coerce_start(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    return None


def bookings_from_sessions(sessions: Iterable[Any]) -> List[Booking]:
    """
    Project session records into bookings, dropping canceled ones.

    Records may be mappings or objects exposing ``date``/``starts_at``,
    ``title``, ``duration_minutes`` and ``status``.
    """
    bookings: List[Booking] = []
    for record in sessions:
        status = str(_field(record, "status") or "").lower()
        if status in EXCLUDED_SESSION_STATUSES:
            continue
        starts_at = _coerce_start(_field(record, "starts_at", "date"))
        if starts_at is None:
            logger.warning("Skipping session without a usable start: %r", record)
            continue
        duration = _field(record, "duration_minutes", "durationMinutes", "duration") or 0
        bookings.append(
            Booking(
                day=starts_at.date(),
                time=starts_at.strftime("%H:%M"),
                title=str(_field(record, "title") or ""),
                duration_minutes=int(duration),
            )
        )
    return bookings


def bookings_on(bookings: Iterable[Booking], day: date) -> List[Booking]:
    return sorted((b for b in bookings if b.day == day), key=lambda b: b.time)


def slot_status(
    time: str,
    available: Collection[str],
    blocked: Collection[str],
    booking: Optional[Booking],
) -> SlotStatus:
    if booking is not None:
        return SlotStatus.BOOKED
    if time in blocked:
        return SlotStatus.BLOCKED
    if time in available:
        return SlotStatus.AVAILABLE
    return SlotStatus.UNCONFIGURED


def merge_for_display(
    day: date,
    available: Sequence[str],
    blocked: Sequence[str],
    bookings: Iterable[Booking],
) -> List[SlotView]:
    """One row per slot of the day, resolved booked > blocked > available > unconfigured."""
    by_time: Dict[str, Booking] = {}
    for booking in bookings_on(bookings, day):
        by_time.setdefault(booking.time, booking)
    available_set = set(available)
    blocked_set = set(blocked)
    rows = []
    for slot in ALL_TIME_SLOTS:
        booking = by_time.get(slot)
        rows.append(
            SlotView(
                time=slot,
                status=slot_status(slot, available_set, blocked_set, booking),
                booking=booking,
            )
        )
    return rows


def summarize_day(
    day: date,
    availability: DateAvailability,
    blocked: BlockedAvailability,
    bookings: Iterable[Booking],
) -> DayStatus:
    """Month-view badge for a date."""
    if any(b.day == day for b in bookings):
        return DayStatus.BOOKED
    if availability.slots(day):
        return DayStatus.AVAILABLE
    if len(blocked.get(day, [])) == len(ALL_TIME_SLOTS):
        return DayStatus.BLOCKED
    return DayStatus.UNCONFIGURED
