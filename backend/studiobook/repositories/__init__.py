from .availability_day_repository import AvailabilityDayRepository
from .photo_session_repository import PhotoSessionRepository

__all__ = ["AvailabilityDayRepository", "PhotoSessionRepository"]
