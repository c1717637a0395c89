"""Unit tests for weekday pattern mining and the template editor."""

from datetime import date

import pytest

from studiobook.core.exceptions import ValidationException
from studiobook.domain.date_availability import DateAvailability
from studiobook.domain.weekday_template import (
    PRESETS,
    WeekdayAvailability,
    WeekdayTemplate,
    mine_weekday_patterns,
)

SUNDAY, MONDAY, TUESDAY, WEDNESDAY, SATURDAY = 0, 1, 2, 3, 6


class TestMining:
    def test_empty_input_gives_all_disabled(self):
        template = mine_weekday_patterns(DateAvailability())

        assert template.enabled_days() == []
        assert all(entry.slots == [] for entry in template)

    def test_union_per_weekday(self):
        # 2024-06-10 and 2024-06-17 are Mondays, 2024-06-12 a Wednesday
        store = DateAvailability.from_payload(
            {
                "2024-06-10": ["09:00", "10:00"],
                "2024-06-17": ["10:00", "14:00"],
                "2024-06-12": ["08:00"],
            }
        )

        template = mine_weekday_patterns(store)

        assert template[MONDAY].enabled
        assert template[MONDAY].slots == ["09:00", "10:00", "14:00"]
        assert template[WEDNESDAY].slots == ["08:00"]
        assert template.enabled_days() == [MONDAY, WEDNESDAY]

    def test_fully_blocked_dates_do_not_enable_weekday(self):
        template = mine_weekday_patterns(DateAvailability.from_payload({"2024-06-15": []}))

        assert not template[SATURDAY].enabled

    def test_raw_payload_skips_malformed_dates(self):
        template = mine_weekday_patterns(
            {"2024-06-09": ["18:00"], "06/10/2024": ["09:00"], "2024-06-11": ["07:00", "nope"]}
        )

        assert template[SUNDAY].slots == ["18:00"]
        assert not template[MONDAY].enabled
        assert template[TUESDAY].slots == ["07:00"]

    def test_raw_payload_skips_non_canonical_dates(self):
        template = mine_weekday_patterns({"2024-06-10": ["09:00"], "2024-6-11": ["07:00"]})

        assert template[MONDAY].slots == ["09:00"]
        assert not template[TUESDAY].enabled


class TestEditor:
    def test_disabling_keeps_slots(self):
        template = WeekdayTemplate()
        template.set_slots(MONDAY, ["09:00"])
        template.set_enabled(MONDAY, True)

        template.set_enabled(MONDAY, False)

        assert template[MONDAY].slots == ["09:00"]
        assert template.slots_for(date(2024, 6, 10)) is None

        template.set_enabled(MONDAY, True)
        assert template.slots_for(date(2024, 6, 10)) == ["09:00"]

    def test_set_slots_sorts_and_validates(self):
        template = WeekdayTemplate()
        template.set_slots(TUESDAY, ["10:00", "09:30", "10:00"])

        assert template[TUESDAY].slots == ["09:30", "10:00"]

    def test_presets(self):
        assert len(PRESETS["morning"]) == 8
        assert PRESETS["morning"][0] == "08:00" and PRESETS["morning"][-1] == "11:30"
        assert len(PRESETS["afternoon"]) == 10
        assert PRESETS["afternoon"][-1] == "17:30"
        assert PRESETS["evening"] == ["18:00", "18:30", "19:00", "19:30", "20:00"]
        assert len(PRESETS["all"]) == 23
        assert "12:00" not in PRESETS["all"]

    def test_apply_preset(self):
        template = WeekdayTemplate()
        template.apply_preset(WEDNESDAY, "evening")

        assert template[WEDNESDAY].slots == PRESETS["evening"]

    def test_unknown_preset_raises(self):
        with pytest.raises(ValidationException) as exc_info:
            WeekdayTemplate().apply_preset(MONDAY, "night")

        assert exc_info.value.code == "UNKNOWN_PRESET"

    def test_invalid_weekday_raises(self):
        with pytest.raises(ValidationException):
            WeekdayTemplate().set_enabled(7, True)

    def test_toggle_slot_flips_one_slot(self):
        template = WeekdayTemplate()
        template.set_slots(MONDAY, ["09:00", "10:00"])

        template.toggle_slot(MONDAY, "09:30")
        assert template[MONDAY].slots == ["09:00", "09:30", "10:00"]

        template.toggle_slot(MONDAY, "09:00")
        assert template[MONDAY].slots == ["09:30", "10:00"]

    def test_copy_to_enabled_days(self):
        template = WeekdayTemplate(
            [
                WeekdayAvailability(day=MONDAY, enabled=True, slots=["09:00"]),
                WeekdayAvailability(day=TUESDAY, enabled=True, slots=["15:00"]),
                WeekdayAvailability(day=WEDNESDAY, enabled=False, slots=["16:00"]),
            ]
        )

        copied = template.copy_to_enabled_days(MONDAY)

        assert copied == [TUESDAY]
        assert template[TUESDAY].slots == ["09:00"]
        assert template[WEDNESDAY].slots == ["16:00"]

    def test_copy_from_empty_source_is_a_no_op(self):
        template = WeekdayTemplate(
            [
                WeekdayAvailability(day=MONDAY, enabled=True, slots=[]),
                WeekdayAvailability(day=TUESDAY, enabled=True, slots=["15:00"]),
            ]
        )

        assert template.copy_to_enabled_days(MONDAY) == []
        assert template[TUESDAY].slots == ["15:00"]

    def test_editing_does_not_touch_dated_availability(self):
        store = DateAvailability.from_payload({"2024-06-10": ["09:00"]})
        template = mine_weekday_patterns(store)

        template.apply_preset(MONDAY, "all")

        assert store.slots(date(2024, 6, 10)) == ["09:00"]

    def test_to_payload(self):
        template = WeekdayTemplate([WeekdayAvailability(day=SUNDAY, enabled=True, slots=["08:00"])])

        payload = template.to_payload()

        assert len(payload) == 7
        assert payload[0] == {"day": 0, "enabled": True, "slots": ["08:00"]}
        assert template[SUNDAY].label == "Sunday"
