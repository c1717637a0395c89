"""Availability scheduling engine: pure in-memory calendar logic."""

from .booking_overlay import Booking, DayStatus, SlotStatus, SlotView, bookings_from_sessions, merge_for_display
from .calendar import AvailabilityCalendar, AvailabilityWriter
from .date_availability import DateAvailability, derive_blocked, toggle_slot
from .projection import ProjectionResult, project_template
from .time_slots import ALL_TIME_SLOTS, TimeSlot
from .weekday_template import PRESETS, WeekdayAvailability, WeekdayTemplate, mine_weekday_patterns

__all__ = [
    "ALL_TIME_SLOTS",
    "AvailabilityCalendar",
    "AvailabilityWriter",
    "Booking",
    "DateAvailability",
    "DayStatus",
    "PRESETS",
    "ProjectionResult",
    "SlotStatus",
    "SlotView",
    "TimeSlot",
    "WeekdayAvailability",
    "WeekdayTemplate",
    "bookings_from_sessions",
    "derive_blocked",
    "merge_for_display",
    "mine_weekday_patterns",
    "project_template",
    "toggle_slot",
]
