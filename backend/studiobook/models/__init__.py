"""
Database models for the Studiobook calendar.

- AvailabilityDay: per-date availability bitmaps
- PhotoSession: booked sessions overlaid on the calendar (read-only here)
"""

from .availability_day import AvailabilityDay
from .photo_session import PhotoSession, SessionStatus

__all__ = ["AvailabilityDay", "PhotoSession", "SessionStatus"]
