"""
In-memory calendar for one photographer.

Holds the dated availability, its derived blocked view, the weekly
template mined at load, and the booking overlay. Every mutation builds a
full next-state map, swaps it in, recomputes the blocked view and hands
the whole map to the writer. A failed write is reported but the new state
stays in place until the next reload.
"""

from __future__ import annotations

from datetime import date
import logging
from typing import Any, Iterable, List, Mapping, Optional, Protocol, Sequence

from ..core.exceptions import AvailabilityPersistenceError, DomainException
from ..utils.time_helpers import month_dates, week_dates_sunday
from .booking_overlay import (
    Booking,
    DayStatus,
    SlotView,
    bookings_from_sessions,
    bookings_on,
    merge_for_display,
    summarize_day,
)
from .date_availability import (
    AvailabilityPayload,
    BlockedAvailability,
    DateAvailability,
    derive_blocked,
    toggle_slot,
)
from .projection import ProjectionResult, project_template
from .time_slots import TimeSlot
from .weekday_template import WeekdayTemplate, mine_weekday_patterns

logger = logging.getLogger(__name__)


class AvailabilityWriter(Protocol):
    """Whole-map "update availability" collaborator; raises when the write is rejected."""

    def replace_availability(self, photographer_id: str, payload: AvailabilityPayload) -> None:
        ...


class AvailabilityCalendar:
    def __init__(
        self,
        photographer_id: str,
        availability: DateAvailability,
        *,
        writer: AvailabilityWriter,
        bookings: Optional[Sequence[Booking]] = None,
    ) -> None:
        self.photographer_id = photographer_id
        self.writer = writer
        self.bookings: List[Booking] = list(bookings or [])
        self._availability = availability
        self._blocked = derive_blocked(availability)
        self.template = mine_weekday_patterns(availability)

    @classmethod
    def load(
        cls,
        photographer_id: str,
        payload: Optional[Mapping[str, Sequence[str]]],
        sessions: Iterable[Any] = (),
        *,
        writer: AvailabilityWriter,
    ) -> "AvailabilityCalendar":
        return cls(
            photographer_id,
            DateAvailability.from_payload(payload),
            writer=writer,
            bookings=bookings_from_sessions(sessions),
        )

    @property
    def availability(self) -> DateAvailability:
        return self._availability

    @property
    def blocked(self) -> BlockedAvailability:
        return self._blocked

    def is_blocked(self, day: date, time: str) -> bool:
        return TimeSlot(time) in self._blocked.get(day, [])

    # Mutations

    def toggle(self, day: date, time: str, currently_blocked: bool) -> bool:
        """
        Single-slot toggle; only ``day`` changes and the template is untouched.

        Returns whether anything changed. A no-op skips the write.
        """
        next_state = self._availability.copy()
        changed = toggle_slot(next_state, day, time, currently_blocked)
        if not changed:
            return False
        self._commit(next_state, operation="toggle_slot")
        return True

    def apply_template(
        self,
        horizon_months: int,
        *,
        today: date,
        template: Optional[WeekdayTemplate] = None,
    ) -> ProjectionResult:
        """Project the template onto [today, today + horizon] and persist the whole map."""
        if template is not None:
            self.template = template
        result = project_template(self._availability, self.template, horizon_months, today=today)
        self._commit(result.availability, operation="apply_template")
        return result

    def _commit(self, next_state: DateAvailability, *, operation: str) -> None:
        self._availability = next_state
        self._blocked = derive_blocked(next_state)
        payload = next_state.to_payload()
        try:
            self.writer.replace_availability(self.photographer_id, payload)
        except AvailabilityPersistenceError:
            raise
        except (DomainException, RuntimeError, OSError) as exc:
            logger.error(
                "Availability write failed after %s for %s: %s",
                operation,
                self.photographer_id,
                exc,
            )
            raise AvailabilityPersistenceError(self.photographer_id, reason=str(exc)) from exc
        logger.info(
            "Availability persisted after %s",
            operation,
            extra={"photographer_id": self.photographer_id, "dates": len(payload)},
        )

    # Display

    def day_view(self, day: date) -> List[SlotView]:
        return merge_for_display(
            day,
            self._availability.slots(day),
            self._blocked.get(day, []),
            self.bookings,
        )

    def day_status(self, day: date) -> DayStatus:
        return summarize_day(day, self._availability, self._blocked, self.bookings)

    def month_summary(self, year: int, month: int) -> List[tuple[date, DayStatus]]:
        return [(day, self.day_status(day)) for day in month_dates(year, month)]

    def week(self, anchor: date) -> List[dict[str, Any]]:
        """Sunday-start week containing ``anchor`` with each day's lists."""
        rows = []
        for day in week_dates_sunday(anchor):
            rows.append(
                {
                    "date": day,
                    "available": self._availability.slots(day),
                    "blocked": self._blocked.get(day, []),
                    "bookings": bookings_on(self.bookings, day),
                }
            )
        return rows
