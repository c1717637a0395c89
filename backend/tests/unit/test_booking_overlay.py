"""Unit tests for the booking overlay and display merge."""

from datetime import date, datetime
from types import SimpleNamespace

from studiobook.domain.booking_overlay import (
    Booking,
    DayStatus,
    SlotStatus,
    bookings_from_sessions,
    merge_for_display,
    summarize_day,
)
from studiobook.domain.date_availability import DateAvailability, derive_blocked

JUNE_10 = date(2024, 6, 10)


class TestBookingsFromSessions:
    def test_canceled_sessions_are_excluded(self):
        sessions = [
            {"date": "2024-06-10T09:00:00", "title": "Headshots", "durationMinutes": 60, "status": "confirmed"},
            {"date": "2024-06-10T11:00:00", "title": "Wedding", "durationMinutes": 240, "status": "canceled"},
        ]

        bookings = bookings_from_sessions(sessions)

        assert bookings == [Booking(day=JUNE_10, time="09:00", title="Headshots", duration_minutes=60)]

    def test_reads_model_like_objects(self):
        session = SimpleNamespace(
            starts_at=datetime(2024, 6, 10, 14, 30),
            title="Family",
            duration_minutes=90,
            status="pending",
        )

        assert bookings_from_sessions([session]) == [
            Booking(day=JUNE_10, time="14:30", title="Family", duration_minutes=90)
        ]

    def test_unusable_start_is_skipped(self):
        assert bookings_from_sessions([{"date": "soon", "title": "x", "status": "pending"}]) == []


class TestMergeForDisplay:
    def test_priority_booked_blocked_available_unconfigured(self):
        store = DateAvailability.from_payload({"2024-06-10": ["09:00", "10:00"]})
        blocked = derive_blocked(store)
        bookings = [
            Booking(day=JUNE_10, time="10:00", title="On available", duration_minutes=30),
            Booking(day=JUNE_10, time="11:00", title="On blocked", duration_minutes=30),
        ]

        rows = merge_for_display(JUNE_10, store.slots(JUNE_10), blocked[JUNE_10], bookings)
        by_time = {row.time: row for row in rows}

        assert len(rows) == 48
        assert by_time["09:00"].status is SlotStatus.AVAILABLE
        assert by_time["10:00"].status is SlotStatus.BOOKED
        assert by_time["11:00"].status is SlotStatus.BOOKED
        assert by_time["11:00"].booking.title == "On blocked"
        assert by_time["12:00"].status is SlotStatus.BLOCKED

    def test_unconfigured_date(self):
        rows = merge_for_display(JUNE_10, [], [], [])

        assert {row.status for row in rows} == {SlotStatus.UNCONFIGURED}

    def test_off_grid_booking_matches_no_slot(self):
        bookings = [Booking(day=JUNE_10, time="09:15", title="Odd", duration_minutes=30)]

        rows = merge_for_display(JUNE_10, [], [], bookings)

        assert all(row.booking is None for row in rows)

    def test_bookings_on_other_dates_are_ignored(self):
        bookings = [Booking(day=date(2024, 6, 11), time="09:00", title="Tomorrow", duration_minutes=30)]

        rows = merge_for_display(JUNE_10, ["09:00"], [], bookings)

        assert rows[18].status is SlotStatus.AVAILABLE


class TestSummarizeDay:
    def test_statuses(self):
        store = DateAvailability.from_payload(
            {"2024-06-10": ["09:00"], "2024-06-11": [], "2024-06-12": ["09:00"]}
        )
        blocked = derive_blocked(store)
        bookings = [Booking(day=date(2024, 6, 12), time="09:00", title="x", duration_minutes=30)]

        assert summarize_day(date(2024, 6, 10), store, blocked, bookings) is DayStatus.AVAILABLE
        assert summarize_day(date(2024, 6, 11), store, blocked, bookings) is DayStatus.BLOCKED
        assert summarize_day(date(2024, 6, 12), store, blocked, bookings) is DayStatus.BOOKED
        assert summarize_day(date(2024, 6, 13), store, blocked, bookings) is DayStatus.UNCONFIGURED
