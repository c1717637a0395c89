from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import List, Optional, cast

from sqlalchemy.orm import Session

from studiobook.models import PhotoSession


class PhotoSessionRepository:
    """Read-only access to the sessions overlaid on a photographer's calendar."""

    def __init__(self, db: Session):
        self.db = db

    def list_for_photographer(
        self,
        photographer_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[PhotoSession]:
        query = self.db.query(PhotoSession).filter(PhotoSession.photographer_id == photographer_id)
        if start_date is not None:
            query = query.filter(PhotoSession.starts_at >= datetime.combine(start_date, time.min))
        if end_date is not None:
            query = query.filter(
                PhotoSession.starts_at < datetime.combine(end_date + timedelta(days=1), time.min)
            )
        return cast(List[PhotoSession], query.order_by(PhotoSession.starts_at).all())
