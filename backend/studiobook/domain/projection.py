"""Forward projection of a weekly template onto dated availability."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import List

from ..core.exceptions import ValidationException
from ..utils.time_helpers import add_months, iter_dates
from .date_availability import DateAvailability
from .weekday_template import WeekdayTemplate


@dataclass
class ProjectionResult:
    availability: DateAvailability
    start_date: date
    end_date: date
    written_dates: List[date] = field(default_factory=list)
    cleared_dates: List[date] = field(default_factory=list)

    @property
    def dates_processed(self) -> int:
        return (self.end_date - self.start_date).days + 1


def projection_window(today: date, horizon_months: int) -> tuple[date, date]:
    if horizon_months < 0:
        raise ValidationException(
            "Projection horizon cannot be negative",
            code="INVALID_HORIZON",
            details={"horizon_months": horizon_months},
        )
    return today, add_months(today, horizon_months)


def project_template(
    availability: DateAvailability,
    template: WeekdayTemplate,
    horizon_months: int,
    *,
    today: date,
) -> ProjectionResult:
    """
    Rewrite every date in [today, today + horizon] from the template.

    Enabled weekdays overwrite the date's slots outright, discarding any
    per-date edits; disabled weekdays remove the date's entry. Dates
    outside the window are untouched. The input store is not modified.
    """
    start, end = projection_window(today, horizon_months)
    projected = availability.copy()
    result = ProjectionResult(availability=projected, start_date=start, end_date=end)

    for day in iter_dates(start, end):
        slots = template.slots_for(day)
        if slots is None:
            if projected.remove_date(day):
                result.cleared_dates.append(day)
            continue
        projected.set_slots(day, slots)
        result.written_dates.append(day)

    return result
