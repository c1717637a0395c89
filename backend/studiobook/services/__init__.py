"""Service layer for the Studiobook calendar."""

from .availability_calendar_service import AvailabilityCalendarService
from .base import BaseService

__all__ = ["AvailabilityCalendarService", "BaseService"]
