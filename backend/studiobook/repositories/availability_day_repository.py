from __future__ import annotations

from datetime import date
from typing import Dict, Mapping

from sqlalchemy.orm import Session

from studiobook.models import AvailabilityDay


class AvailabilityDayRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_all_bits(self, photographer_id: str) -> Dict[date, bytes]:
        # Plain columns keep rows out of the identity map.
        rows = (
            self.db.query(AvailabilityDay.day_date, AvailabilityDay.bits)
            .filter(AvailabilityDay.photographer_id == photographer_id)
            .order_by(AvailabilityDay.day_date)
            .all()
        )
        return {day_date: bytes(bits) for day_date, bits in rows}

    def replace_all(self, photographer_id: str, bits_by_day: Mapping[date, bytes]) -> int:
        """
        Whole-map replace: every stored date not in ``bits_by_day`` is removed.

        Returns the number of rows written.
        """
        self.db.query(AvailabilityDay).filter(
            AvailabilityDay.photographer_id == photographer_id
        ).delete(synchronize_session="evaluate")
        for day_date, bits in sorted(bits_by_day.items()):
            self.db.add(AvailabilityDay(photographer_id=photographer_id, day_date=day_date, bits=bits))
        self.db.flush()
        return len(bits_by_day)
