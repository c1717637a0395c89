"""Request and response models for the availability calendar endpoints."""

import datetime as dt
from typing import Annotated, List, Optional

from pydantic import AfterValidator, Field, field_validator

from ..domain.booking_overlay import DayStatus, SlotStatus
from ..domain.time_slots import TimeSlot, is_time_slot
from ._strict_base import StrictModel, StrictRequestModel


def _validate_slot(value: str) -> str:
    if not is_time_slot(value):
        raise ValueError(f"{value!r} is not a half-hour slot between 00:00 and 23:30")
    return str(TimeSlot(value))


SlotValue = Annotated[str, AfterValidator(_validate_slot)]


# Weekly template


class WeekdayEntryIn(StrictRequestModel):
    """One weekday of an edited template (0 = Sunday … 6 = Saturday)."""

    day: int = Field(ge=0, le=6)
    enabled: bool = False
    slots: List[SlotValue] = Field(default_factory=list)


class WeekdayEntry(StrictModel):
    day: int
    label: str
    enabled: bool
    slots: List[str]


class WeekdayTemplateResponse(StrictModel):
    photographer_id: str
    days: List[WeekdayEntry]


class ApplyTemplateRequest(StrictRequestModel):
    """
    Project a weekly template forward.

    Weekdays missing from ``template`` are treated as disabled; when
    ``horizon_months`` is omitted the configured default is used.
    """

    template: List[WeekdayEntryIn] = Field(max_length=7)
    horizon_months: Optional[int] = None

    @field_validator("template")
    @classmethod
    def _unique_days(cls, v: List[WeekdayEntryIn]) -> List[WeekdayEntryIn]:
        days = [entry.day for entry in v]
        if len(days) != len(set(days)):
            raise ValueError("Each weekday may appear only once")
        return v


class ApplyTemplateResponse(StrictModel):
    """Response for projecting a weekly template."""

    message: str
    horizon_months: int
    start_date: dt.date
    end_date: dt.date
    dates_processed: int
    dates_written: int
    dates_cleared: int


# Single-slot toggle


class ToggleSlotRequest(StrictRequestModel):
    date: dt.date
    time: SlotValue
    currently_blocked: bool = Field(
        description="True makes the slot available, False blocks it"
    )


class ToggleSlotResponse(StrictModel):
    message: str
    date: dt.date
    changed: bool
    available: List[str]
    blocked: List[str]


# Display


class BookingOut(StrictModel):
    date: dt.date
    time: str
    title: str
    duration_minutes: int


class SlotViewOut(StrictModel):
    time: str
    status: SlotStatus
    booking: Optional[BookingOut] = None


class TimeWindow(StrictModel):
    start_time: str
    end_time: str


class DayViewResponse(StrictModel):
    date: dt.date
    status: DayStatus
    configured: bool
    windows: List[TimeWindow] = Field(
        default_factory=list, description="Merged available ranges, end exclusive"
    )
    slots: List[SlotViewOut]


class MonthDayStatus(StrictModel):
    date: dt.date
    status: DayStatus


class MonthSummaryResponse(StrictModel):
    year: int
    month: int
    days: List[MonthDayStatus]


class WeekDayOut(StrictModel):
    date: dt.date
    label: str
    available: List[str]
    blocked: List[str]
    bookings: List[BookingOut]


class WeekViewResponse(StrictModel):
    week_start: dt.date
    week_end: dt.date
    previous_week_start: dt.date
    next_week_start: dt.date
    days: List[WeekDayOut]


# Static configuration


class PresetOut(StrictModel):
    name: str
    slots: List[str]


class PresetsResponse(StrictModel):
    presets: List[PresetOut]


class HorizonsResponse(StrictModel):
    choices: List[int]
    default: int


class HealthCheckResponse(StrictModel):
    status: str
    service: str
    version: str
    timestamp: dt.datetime
    checks: dict[str, bool] = Field(default_factory=dict)
