"""Unit tests for the date availability store and the blocked-slot deriver."""

from datetime import date

from studiobook.domain.date_availability import DateAvailability, derive_blocked, toggle_slot
from studiobook.domain.time_slots import ALL_TIME_SLOTS

JUNE_10 = date(2024, 6, 10)
JUNE_11 = date(2024, 6, 11)


class TestFromPayload:
    def test_loads_valid_payload(self):
        store = DateAvailability.from_payload({"2024-06-10": ["10:00", "09:00"]})

        assert store.dates() == [JUNE_10]
        assert store.slots(JUNE_10) == ["09:00", "10:00"]

    def test_malformed_keys_are_skipped_and_remembered(self):
        store = DateAvailability.from_payload(
            {"2024-06-10": ["09:00"], "garbage": ["09:00"], "2024-02-30": ["10:00"]}
        )

        assert store.dates() == [JUNE_10]
        assert sorted(store.skipped_keys) == ["2024-02-30", "garbage"]

    def test_non_canonical_key_does_not_overwrite_canonical_date(self):
        store = DateAvailability.from_payload({"2024-06-10": ["09:00"], "2024-6-10": ["10:00"]})

        assert store.slots(JUNE_10) == ["09:00"]
        assert store.skipped_keys == ["2024-6-10"]
        assert store.to_payload() == {"2024-06-10": ["09:00"]}

    def test_invalid_times_are_dropped(self):
        store = DateAvailability.from_payload({"2024-06-10": ["09:00", "09:15", "25:00"]})

        assert store.slots(JUNE_10) == ["09:00"]

    def test_empty_list_is_a_configured_date(self):
        store = DateAvailability.from_payload({"2024-06-10": []})

        assert JUNE_10 in store
        assert store.slots(JUNE_10) == []

    def test_none_payload(self):
        assert len(DateAvailability.from_payload(None)) == 0

    def test_to_payload_is_sorted_and_whole(self):
        store = DateAvailability.from_payload(
            {"2024-06-11": ["12:00"], "2024-06-10": ["09:30", "09:00"], "2024-06-12": []}
        )

        assert store.to_payload() == {
            "2024-06-10": ["09:00", "09:30"],
            "2024-06-11": ["12:00"],
            "2024-06-12": [],
        }
        assert list(store.to_payload()) == ["2024-06-10", "2024-06-11", "2024-06-12"]


class TestDeriveBlocked:
    def test_complement_invariant(self):
        store = DateAvailability.from_payload(
            {"2024-06-10": ["09:00", "09:30"], "2024-06-11": [], "2024-06-12": list(ALL_TIME_SLOTS)}
        )

        blocked = derive_blocked(store)

        for day in store.dates():
            available = set(store.slots(day))
            assert available.isdisjoint(blocked[day])
            assert available | set(blocked[day]) == set(ALL_TIME_SLOTS)
        assert blocked[date(2024, 6, 12)] == []
        assert len(blocked[JUNE_11]) == 48

    def test_absent_dates_have_no_entry(self):
        store = DateAvailability.from_payload({"2024-06-10": ["09:00"]})

        assert set(derive_blocked(store)) == {JUNE_10}

    def test_blocked_lists_are_ordered(self):
        store = DateAvailability.from_payload({"2024-06-10": ["09:00"]})

        blocked = derive_blocked(store)[JUNE_10]
        assert blocked == sorted(blocked)
        assert "09:00" not in blocked


class TestToggle:
    def test_blocked_slot_becomes_available(self):
        store = DateAvailability.from_payload({"2024-06-10": ["10:00"]})

        assert toggle_slot(store, JUNE_10, "09:00", currently_blocked=True) is True
        assert store.slots(JUNE_10) == ["09:00", "10:00"]
        assert store.is_available(JUNE_10, "09:00")

    def test_making_available_twice_is_idempotent(self):
        store = DateAvailability.from_payload({"2024-06-10": ["09:00"]})

        assert toggle_slot(store, JUNE_10, "09:00", currently_blocked=True) is False
        assert store.slots(JUNE_10) == ["09:00"]

    def test_removing_last_slot_keeps_empty_entry(self):
        store = DateAvailability.from_payload({"2024-06-10": ["09:00"]})

        assert toggle_slot(store, JUNE_10, "09:00", currently_blocked=False) is True

        assert JUNE_10 in store
        assert store.to_payload() == {"2024-06-10": []}
        assert len(derive_blocked(store)[JUNE_10]) == 48

    def test_blocking_an_unconfigured_date_records_it(self):
        store = DateAvailability()

        assert toggle_slot(store, JUNE_10, "09:00", currently_blocked=False) is True
        assert store.to_payload() == {"2024-06-10": []}

    def test_blocking_already_blocked_slot_is_a_no_op(self):
        store = DateAvailability.from_payload({"2024-06-10": ["10:00"]})

        assert toggle_slot(store, JUNE_10, "09:00", currently_blocked=False) is False

    def test_toggle_touches_only_its_date(self):
        store = DateAvailability.from_payload({"2024-06-10": ["09:00"], "2024-06-11": ["09:00"]})

        toggle_slot(store, JUNE_10, "09:00", currently_blocked=False)

        assert store.slots(JUNE_11) == ["09:00"]

    def test_available_on_unconfigured_date_creates_entry(self):
        store = DateAvailability()

        assert toggle_slot(store, JUNE_11, "14:30", currently_blocked=True) is True
        assert store.to_payload() == {"2024-06-11": ["14:30"]}


def test_copy_is_independent():
    store = DateAvailability.from_payload({"2024-06-10": ["09:00"]})
    clone = store.copy()

    clone.remove_slot(JUNE_10, "09:00")

    assert store.slots(JUNE_10) == ["09:00"]
    assert clone != store
