# backend/studiobook/models/photo_session.py
"""
Photo session model.

Sessions are owned by the booking flow; the availability calendar only
reads them to overlay bookings. A session never reserves or blocks
availability on its own.
"""

from enum import Enum

from sqlalchemy import CheckConstraint, Column, DateTime, Index, Integer, String
from sqlalchemy.sql import func
import ulid

from ..database import Base


class SessionStatus(str, Enum):
    """Photo session lifecycle statuses."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELED = "canceled"


class PhotoSession(Base):
    __tablename__ = "photo_sessions"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    photographer_id = Column(String(26), nullable=False)
    title = Column(String(200), nullable=False)
    starts_at = Column(DateTime, nullable=False)
    duration_minutes = Column(Integer, nullable=False)
    status = Column(String(20), nullable=False, default=SessionStatus.PENDING.value)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        Index("ix_photo_sessions_photographer_start", "photographer_id", "starts_at"),
        CheckConstraint("duration_minutes >= 1", name="ck_photo_sessions_duration_positive"),
        CheckConstraint(
            "status IN ('pending', 'confirmed', 'completed', 'canceled')",
            name="ck_photo_sessions_status",
        ),
    )

    def __repr__(self) -> str:
        return f"<PhotoSession {self.id} {self.starts_at} {self.status}>"
