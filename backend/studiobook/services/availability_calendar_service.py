# backend/studiobook/services/availability_calendar_service.py
"""
Availability Calendar Service for Studiobook.

Loads a photographer's dated availability and sessions into an
``AvailabilityCalendar``, runs the calendar operations (weekly template
projection, single-slot toggle) and exposes the display views.

Persistence is whole-map: every mutation hands the complete
``{"YYYY-MM-DD": ["HH:MM", ...]}`` map to the writer. The service is its
own default writer and mirrors the map into ``availability_days``; when a
profile API is configured the map is sent there first.
"""

from datetime import date
import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.exceptions import AvailabilityPersistenceError, ValidationException
from ..domain.booking_overlay import DayStatus, SlotView, bookings_from_sessions
from ..domain.calendar import AvailabilityCalendar, AvailabilityWriter
from ..domain.date_availability import AvailabilityPayload, DateAvailability
from ..domain.projection import ProjectionResult
from ..domain.time_slots import TimeSlot
from ..domain.weekday_template import WeekdayTemplate
from ..integrations.profile_api_client import ProfileApiClient
from ..monitoring.prometheus_metrics import prometheus_metrics
from ..repositories.availability_day_repository import AvailabilityDayRepository
from ..repositories.photo_session_repository import PhotoSessionRepository
from ..utils.bitset import windows_from_bits
from .base import BaseService


def _build_profile_client() -> Optional[ProfileApiClient]:
    if not settings.uses_profile_api:
        return None
    return ProfileApiClient(
        base_url=settings.profile_api_base_url or "",
        token=settings.profile_api_token,
        timeout=settings.profile_api_timeout_seconds,
    )


class AvailabilityCalendarService(BaseService):
    """
    Service for the photographer availability calendar.

    Each call loads a fresh calendar; the in-memory state of a failed
    write is returned to the caller through the raised error only.
    """

    def __init__(
        self,
        db: Session,
        availability_repository: Optional[AvailabilityDayRepository] = None,
        session_repository: Optional[PhotoSessionRepository] = None,
        writer: Optional[AvailabilityWriter] = None,
        profile_client: Optional[ProfileApiClient] = None,
        clock: Optional[Callable[[], date]] = None,
    ):
        """Initialize availability calendar service."""
        super().__init__(db)
        self.logger = logging.getLogger(__name__)
        self.availability_repository = availability_repository or AvailabilityDayRepository(db)
        self.session_repository = session_repository or PhotoSessionRepository(db)
        self.profile_client = profile_client if profile_client is not None else _build_profile_client()
        self.writer: AvailabilityWriter = writer or self
        self.clock: Callable[[], date] = clock or date.today

    # Writer

    def replace_availability(self, photographer_id: str, payload: AvailabilityPayload) -> None:
        """Persist the whole map: profile API first (when configured), then the local store."""
        if self.profile_client is not None:
            self.profile_client.replace_availability(photographer_id, payload)

        store = DateAvailability.from_payload(payload)
        bits_by_day = {
            day: bits for day in store.dates() if (bits := store.bits(day)) is not None
        }
        with self.transaction():
            written = self.availability_repository.replace_all(photographer_id, bits_by_day)
        self.logger.debug(
            "Stored %d availability dates for %s", written, photographer_id
        )

    # Loading

    @BaseService.measure_operation("load_calendar")
    def load_calendar(self, photographer_id: str) -> AvailabilityCalendar:
        """Build the calendar from stored availability and non-canceled sessions."""
        bits_by_day = self.availability_repository.get_all_bits(photographer_id)
        sessions = self.session_repository.list_for_photographer(photographer_id)
        calendar = AvailabilityCalendar(
            photographer_id,
            DateAvailability(bits_by_day),
            writer=self.writer,
            bookings=bookings_from_sessions(sessions),
        )
        self.logger.debug(
            "Loaded calendar for %s: %d dates, %d bookings",
            photographer_id,
            len(calendar.availability),
            len(calendar.bookings),
        )
        return calendar

    @BaseService.measure_operation("get_weekday_template")
    def get_weekday_template(self, photographer_id: str) -> WeekdayTemplate:
        return self.load_calendar(photographer_id).template

    # Mutations

    def resolve_horizon(self, horizon_months: Optional[int]) -> int:
        if horizon_months is None:
            return settings.availability_default_horizon_months
        if horizon_months not in settings.availability_horizon_choices:
            raise ValidationException(
                f"Horizon must be one of {settings.availability_horizon_choices} months",
                code="INVALID_HORIZON",
                details={
                    "horizon_months": horizon_months,
                    "choices": settings.availability_horizon_choices,
                },
            )
        return horizon_months

    @BaseService.measure_operation("apply_weekday_template")
    def apply_weekday_template(
        self,
        photographer_id: str,
        template: WeekdayTemplate,
        horizon_months: Optional[int] = None,
    ) -> ProjectionResult:
        """
        Project ``template`` from today over the horizon and persist the whole map.

        Dates inside the window are overwritten (enabled weekdays) or
        removed (disabled weekdays); dates outside are kept as stored.
        """
        horizon = self.resolve_horizon(horizon_months)
        calendar = self.load_calendar(photographer_id)
        today = self.clock()
        try:
            result = calendar.apply_template(horizon, today=today, template=template)
        except AvailabilityPersistenceError:
            prometheus_metrics.record_availability_write("apply_template", success=False)
            raise
        prometheus_metrics.record_availability_write("apply_template", success=True)
        self.log_operation(
            "apply_weekday_template",
            photographer_id=photographer_id,
            horizon_months=horizon,
            start_date=result.start_date.isoformat(),
            end_date=result.end_date.isoformat(),
            dates_written=len(result.written_dates),
            dates_cleared=len(result.cleared_dates),
        )
        return result

    @BaseService.measure_operation("toggle_slot")
    def toggle_slot(
        self,
        photographer_id: str,
        day: date,
        time: str,
        currently_blocked: bool,
    ) -> Tuple[bool, AvailabilityCalendar]:
        """
        Flip one slot of one date.

        Returns whether anything changed together with the updated
        calendar; an unchanged slot is not written.
        """
        slot = TimeSlot(time)
        calendar = self.load_calendar(photographer_id)
        try:
            changed = calendar.toggle(day, slot, currently_blocked)
        except AvailabilityPersistenceError:
            prometheus_metrics.record_availability_write("toggle_slot", success=False)
            raise
        if changed:
            prometheus_metrics.record_availability_write("toggle_slot", success=True)
        self.log_operation(
            "toggle_slot",
            photographer_id=photographer_id,
            date=day.isoformat(),
            time=str(slot),
            currently_blocked=currently_blocked,
            changed=changed,
        )
        return changed, calendar

    # Views

    @BaseService.measure_operation("get_day_view")
    def get_day_view(self, photographer_id: str, day: date) -> Dict[str, Any]:
        calendar = self.load_calendar(photographer_id)
        slots: List[SlotView] = calendar.day_view(day)
        bits = calendar.availability.bits(day)
        return {
            "date": day,
            "status": calendar.day_status(day),
            "configured": day in calendar.availability,
            "windows": windows_from_bits(bits) if bits is not None else [],
            "slots": slots,
        }

    @BaseService.measure_operation("get_month_summary")
    def get_month_summary(
        self, photographer_id: str, year: int, month: int
    ) -> List[Tuple[date, DayStatus]]:
        if not 1 <= month <= 12:
            raise ValidationException(
                f"Month must be between 1 and 12, got {month}",
                code="INVALID_MONTH",
                details={"month": month},
            )
        return self.load_calendar(photographer_id).month_summary(year, month)

    @BaseService.measure_operation("get_week_view")
    def get_week_view(self, photographer_id: str, anchor: date) -> List[Dict[str, Any]]:
        return self.load_calendar(photographer_id).week(anchor)
