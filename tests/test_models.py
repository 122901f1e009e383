"""
Tests for profile/placement document conversion and validation.
"""

import pytest

from timeline.engine import Placement, Profile
from timeline.errors import InvalidProfile, InvalidTimeFormat, NegativeDuration


class TestProfileDocument:
    def test_from_document(self, reference_doc):
        profile = Profile.from_document(reference_doc)

        assert profile.sleep_start == 1320
        assert profile.sleep_end == 360
        assert profile.work_start == 540
        assert profile.work_end == 1020
        assert profile.commute_minutes == 60
        assert profile.scheduled_habits == []

    def test_document_round_trip(self, reference_doc):
        reference_doc["scheduledHabits"] = [
            {
                "placementId": "plc_000000000001",
                "habitId": "h1",
                "habitName": "Meditate",
                "startTime": "14:00",
                "duration": 30,
            }
        ]
        assert Profile.from_document(reference_doc).to_document() == reference_doc

    def test_missing_fields(self, reference_doc):
        del reference_doc["workEnd"]
        del reference_doc["miscMinutes"]
        with pytest.raises(InvalidProfile, match="workEnd, miscMinutes"):
            Profile.from_document(reference_doc)

    def test_missing_scheduled_habits_is_empty(self, reference_doc):
        del reference_doc["scheduledHabits"]
        assert Profile.from_document(reference_doc).scheduled_habits == []

    def test_bad_clock_field(self, reference_doc):
        reference_doc["sleepStart"] = "10pm"
        with pytest.raises(InvalidTimeFormat):
            Profile.from_document(reference_doc)

    @pytest.mark.parametrize("value", ["60", 12.5, None, True])
    def test_bad_minutes_field(self, reference_doc, value):
        reference_doc["commuteMinutes"] = value
        with pytest.raises(InvalidProfile):
            Profile.from_document(reference_doc)

    def test_whole_float_minutes_accepted(self, reference_doc):
        reference_doc["miscMinutes"] = 120.0
        assert Profile.from_document(reference_doc).misc_minutes == 120

    def test_negative_buffer(self, reference_doc):
        reference_doc["morningRoutineMinutes"] = -5
        with pytest.raises(NegativeDuration):
            Profile.from_document(reference_doc)

    def test_clock_fields_must_be_minute_of_day(self):
        with pytest.raises(InvalidTimeFormat):
            Profile(sleep_start=1440, sleep_end=360, work_start=540, work_end=1020)

    def test_duplicate_placement_ids_rejected(self, reference_doc):
        placement = {"placementId": "plc_same", "habitId": "h1", "startTime": "14:00", "duration": 30}
        reference_doc["scheduledHabits"] = [placement, dict(placement, habitId="h2")]
        with pytest.raises(InvalidProfile, match="plc_same"):
            Profile.from_document(reference_doc)

    def test_extra_keys_ignored(self, reference_doc):
        reference_doc["userId"] = "u1"
        assert Profile.from_document(reference_doc).to_document().get("userId") is None


class TestPlacementDocument:
    def test_legacy_document_gets_an_id(self):
        placement = Placement.from_document(
            {"habitId": "h1", "habitName": "Meditate", "startTime": "14:00", "duration": 30}
        )
        assert placement.placement_id.startswith("plc_")
        assert placement.end_time == 870

    def test_keeps_existing_id(self):
        placement = Placement.from_document(
            {"placementId": "plc_abc", "habitId": "h1", "startTime": "14:00", "duration": 30}
        )
        assert placement.placement_id == "plc_abc"
        assert placement.habit_name == ""

    def test_missing_fields(self):
        with pytest.raises(InvalidProfile, match="startTime"):
            Placement.from_document({"habitId": "h1", "duration": 30})

    def test_negative_duration(self):
        with pytest.raises(NegativeDuration):
            Placement.from_document({"habitId": "h1", "startTime": "14:00", "duration": -1})

    def test_non_integer_duration(self):
        with pytest.raises(InvalidProfile):
            Placement.from_document({"habitId": "h1", "startTime": "14:00", "duration": "30"})
