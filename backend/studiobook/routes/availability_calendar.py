# backend/studiobook/routes/availability_calendar.py
"""
Availability calendar routes for photographers.

Thin HTTP layer over ``AvailabilityCalendarService``:

- GET  /weekday-template        Weekly template mined from stored availability
- PUT  /weekday-template/apply  Project a template forward and persist
- POST /slots/toggle            Flip one slot of one date and persist
- GET  /days/{day}              Per-slot merged display for a date
- GET  /months/{year}/{month}   Day status for every date of a month
- GET  /weeks/{anchor}          Sunday-start week containing a date
- GET  /presets                 Static preset slot lists
- GET  /horizons                Offered projection horizons
"""

from datetime import date, timedelta
import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.constants import AVAILABILITY_UPDATED_NOTICE, WEEKDAYS
from ..core.exceptions import DomainException
from ..database import get_db
from ..domain.booking_overlay import Booking
from ..domain.weekday_template import PRESET_NAMES, PRESETS, WeekdayAvailability, WeekdayTemplate
from ..schemas.availability_calendar import (
    ApplyTemplateRequest,
    ApplyTemplateResponse,
    BookingOut,
    DayViewResponse,
    HorizonsResponse,
    MonthDayStatus,
    MonthSummaryResponse,
    PresetOut,
    PresetsResponse,
    SlotViewOut,
    TimeWindow,
    ToggleSlotRequest,
    ToggleSlotResponse,
    WeekDayOut,
    WeekdayEntry,
    WeekdayTemplateResponse,
    WeekViewResponse,
)
from ..services.availability_calendar_service import AvailabilityCalendarService
from ..utils.time_helpers import sunday_based_weekday

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/photographers/{photographer_id}/calendar",
    tags=["availability-calendar"],
)


def get_availability_calendar_service(
    db: Session = Depends(get_db),
) -> AvailabilityCalendarService:
    return AvailabilityCalendarService(db)


def _booking_out(booking: Booking) -> BookingOut:
    return BookingOut(
        date=booking.day,
        time=booking.time,
        title=booking.title,
        duration_minutes=booking.duration_minutes,
    )


def _unexpected(operation: str, exc: Exception) -> HTTPException:
    logger.error(f"Unexpected error in {operation}: {str(exc)}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="An unexpected error occurred",
    )


@router.get("/weekday-template", response_model=WeekdayTemplateResponse)
def get_weekday_template(
    photographer_id: str,
    service: AvailabilityCalendarService = Depends(get_availability_calendar_service),
) -> WeekdayTemplateResponse:
    """Weekly template reconstructed from every stored date."""
    try:
        template = service.get_weekday_template(photographer_id)
        return WeekdayTemplateResponse(
            photographer_id=photographer_id,
            days=[
                WeekdayEntry(
                    day=entry.day,
                    label=entry.label,
                    enabled=entry.enabled,
                    slots=[str(s) for s in entry.slots],
                )
                for entry in template
            ],
        )
    except DomainException as e:
        raise e.to_http_exception()
    except Exception as e:
        raise _unexpected("get_weekday_template", e)


@router.put("/weekday-template/apply", response_model=ApplyTemplateResponse)
def apply_weekday_template(
    photographer_id: str,
    payload: ApplyTemplateRequest,
    service: AvailabilityCalendarService = Depends(get_availability_calendar_service),
) -> ApplyTemplateResponse:
    """
    Overwrite every date from today through the horizon with the template.

    Enabled weekdays replace the date's slots, disabled weekdays remove the
    date. Per-date edits inside the window are discarded.
    """
    try:
        template = WeekdayTemplate(
            WeekdayAvailability(day=entry.day, enabled=entry.enabled, slots=list(entry.slots))
            for entry in payload.template
        )
        result = service.apply_weekday_template(
            photographer_id, template, horizon_months=payload.horizon_months
        )
        return ApplyTemplateResponse(
            message=AVAILABILITY_UPDATED_NOTICE,
            horizon_months=service.resolve_horizon(payload.horizon_months),
            start_date=result.start_date,
            end_date=result.end_date,
            dates_processed=result.dates_processed,
            dates_written=len(result.written_dates),
            dates_cleared=len(result.cleared_dates),
        )
    except DomainException as e:
        raise e.to_http_exception()
    except Exception as e:
        raise _unexpected("apply_weekday_template", e)


@router.post("/slots/toggle", response_model=ToggleSlotResponse)
def toggle_slot(
    photographer_id: str,
    payload: ToggleSlotRequest,
    service: AvailabilityCalendarService = Depends(get_availability_calendar_service),
) -> ToggleSlotResponse:
    """Make a blocked slot available or block an available one."""
    try:
        changed, calendar = service.toggle_slot(
            photographer_id, payload.date, payload.time, payload.currently_blocked
        )
        return ToggleSlotResponse(
            message=AVAILABILITY_UPDATED_NOTICE,
            date=payload.date,
            changed=changed,
            available=[str(s) for s in calendar.availability.slots(payload.date)],
            blocked=[str(s) for s in calendar.blocked.get(payload.date, [])],
        )
    except DomainException as e:
        raise e.to_http_exception()
    except Exception as e:
        raise _unexpected("toggle_slot", e)


@router.get("/days/{day}", response_model=DayViewResponse)
def get_day(
    photographer_id: str,
    day: date,
    service: AvailabilityCalendarService = Depends(get_availability_calendar_service),
) -> DayViewResponse:
    try:
        view = service.get_day_view(photographer_id, day)
        return DayViewResponse(
            date=view["date"],
            status=view["status"],
            configured=view["configured"],
            windows=[TimeWindow(start_time=s, end_time=e) for s, e in view["windows"]],
            slots=[
                SlotViewOut(
                    time=str(row.time),
                    status=row.status,
                    booking=_booking_out(row.booking) if row.booking else None,
                )
                for row in view["slots"]
            ],
        )
    except DomainException as e:
        raise e.to_http_exception()
    except Exception as e:
        raise _unexpected("get_day", e)


@router.get("/months/{year}/{month}", response_model=MonthSummaryResponse)
def get_month(
    photographer_id: str,
    year: int,
    month: int,
    service: AvailabilityCalendarService = Depends(get_availability_calendar_service),
) -> MonthSummaryResponse:
    try:
        summary = service.get_month_summary(photographer_id, year, month)
        return MonthSummaryResponse(
            year=year,
            month=month,
            days=[MonthDayStatus(date=d, status=s) for d, s in summary],
        )
    except DomainException as e:
        raise e.to_http_exception()
    except Exception as e:
        raise _unexpected("get_month", e)


@router.get("/weeks/{anchor}", response_model=WeekViewResponse)
def get_week(
    photographer_id: str,
    anchor: date,
    service: AvailabilityCalendarService = Depends(get_availability_calendar_service),
) -> WeekViewResponse:
    """Week from the Sunday on or before ``anchor`` through Saturday."""
    try:
        rows: List[Dict[str, Any]] = service.get_week_view(photographer_id, anchor)
        week_start = rows[0]["date"]
        return WeekViewResponse(
            week_start=week_start,
            week_end=rows[-1]["date"],
            previous_week_start=week_start - timedelta(days=7),
            next_week_start=week_start + timedelta(days=7),
            days=[
                WeekDayOut(
                    date=row["date"],
                    label=WEEKDAYS[sunday_based_weekday(row["date"])],
                    available=[str(s) for s in row["available"]],
                    blocked=[str(s) for s in row["blocked"]],
                    bookings=[_booking_out(b) for b in row["bookings"]],
                )
                for row in rows
            ],
        )
    except DomainException as e:
        raise e.to_http_exception()
    except Exception as e:
        raise _unexpected("get_week", e)


@router.get("/presets", response_model=PresetsResponse)
def get_presets(photographer_id: str) -> PresetsResponse:
    return PresetsResponse(
        presets=[PresetOut(name=name, slots=list(PRESETS[name])) for name in PRESET_NAMES]
    )


@router.get("/horizons", response_model=HorizonsResponse)
def get_horizons(photographer_id: str) -> HorizonsResponse:
    return HorizonsResponse(
        choices=list(settings.availability_horizon_choices),
        default=settings.availability_default_horizon_months,
    )
