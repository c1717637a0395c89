from datetime import date

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from studiobook.database import Base
from studiobook.domain.date_availability import AvailabilityPayload

# Import models so Base.metadata is populated for create_all.
import studiobook.models  # noqa: F401


@pytest.fixture(scope="function")
def _unit_engine():
    # One database per test; services commit.
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        future=True,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(scope="function")
def unit_db(_unit_engine) -> Session:
    """
    Provide a session on a fresh in-memory database for one test.
    """
    SessionLocal = sessionmaker(bind=_unit_engine, expire_on_commit=False, future=True)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


class RecordingWriter:
    """Availability writer that keeps every whole-map payload it receives."""

    def __init__(self, fail_with: Exception | None = None):
        self.calls: list[tuple[str, AvailabilityPayload]] = []
        self.fail_with = fail_with

    def replace_availability(self, photographer_id: str, payload: AvailabilityPayload) -> None:
        self.calls.append((photographer_id, payload))
        if self.fail_with is not None:
            raise self.fail_with


@pytest.fixture
def recording_writer() -> RecordingWriter:
    return RecordingWriter()


@pytest.fixture
def today() -> date:
    # A Monday
    return date(2024, 6, 10)


MORNING = ["08:00", "08:30", "09:00", "09:30", "10:00", "10:30", "11:00", "11:30"]


@pytest.fixture
def morning_slots() -> list[str]:
    return list(MORNING)
