"""
Tests for mood/energy storage and summaries.
"""

import datetime

import pytest

from echo.core.errors import EntityNotFoundError
from echo.core.types import utcnow
from echo.mood import db as mood_db
from echo.mood.schemas import EnergyLevel, MoodEnergyEntryBase, MoodEnergyEntryCreate, MoodLevel
from echo.mood.service import most_common_energy, most_common_mood, most_recent_entries


def _entry(entry_id, mood, energy=EnergyLevel.MEDIUM, minutes_ago=0):
    return MoodEnergyEntryBase(
        id=entry_id,
        mood_level=mood,
        energy_level=energy,
        date=datetime.date(2025, 3, 3),
        time=datetime.time(9, 0),
        created_at=utcnow() - datetime.timedelta(minutes=minutes_ago),
    )


class TestMostCommon:

    def test_majority_mood_wins(self):
        entries = [
            _entry("1", MoodLevel.GOOD),
            _entry("2", MoodLevel.GOOD),
            _entry("3", MoodLevel.BAD),
        ]
        assert most_common_mood(entries) == MoodLevel.GOOD

    def test_tie_goes_to_first_declared_level(self):
        entries = [
            _entry("1", MoodLevel.GOOD, EnergyLevel.HIGH),
            _entry("2", MoodLevel.BAD, EnergyLevel.LOW),
        ]
        assert most_common_mood(entries) == MoodLevel.BAD
        assert most_common_energy(entries) == EnergyLevel.LOW

    def test_empty_input(self):
        assert most_common_mood([]) is None
        assert most_common_energy([]) is None

    def test_most_recent_entries_by_creation_time(self):
        entries = [_entry(str(i), MoodLevel.NEUTRAL, minutes_ago=i) for i in range(7)]

        recent = most_recent_entries(entries, limit=5)

        assert [e.id for e in recent] == ["0", "1", "2", "3", "4"]


def test_display_labels():
    assert MoodLevel.VERY_GOOD.label == "Very Good"
    assert EnergyLevel.VERY_LOW.label == "Very Low"
    assert EnergyLevel.HIGH.icon == "\U0001F50B" * 4


class TestMoodDb:

    def test_insert_then_load(self, session):
        mood_db.create_mood_energy_entry(
            session,
            MoodEnergyEntryCreate(
                id="m1",
                mood_level=MoodLevel.GOOD,
                energy_level=EnergyLevel.HIGH,
                note="Slept well",
                date=datetime.date(2025, 3, 3),
                time=datetime.time(8, 30),
            ),
        )

        loaded = MoodEnergyEntryBase.model_validate(mood_db.get_all_mood_energy_entries(session)[0])

        assert loaded.id == "m1"
        assert loaded.mood_level == MoodLevel.GOOD
        assert loaded.energy_level == EnergyLevel.HIGH
        assert loaded.note == "Slept well"
        assert loaded.time == datetime.time(8, 30)

    def test_by_date_ordered_by_time(self, session):
        for entry_id, hour in (("late", 18), ("early", 7)):
            mood_db.create_mood_energy_entry(
                session,
                MoodEnergyEntryCreate(
                    id=entry_id,
                    mood_level=MoodLevel.NEUTRAL,
                    energy_level=EnergyLevel.MEDIUM,
                    date=datetime.date(2025, 3, 3),
                    time=datetime.time(hour, 0),
                ),
            )

        entries = mood_db.get_mood_energy_entries_by_date(session, datetime.date(2025, 3, 3))

        assert [e.id for e in entries] == ["early", "late"]
        assert mood_db.get_mood_energy_entries_by_date(session, datetime.date(2025, 3, 4)) == []

    def test_delete_unknown_raises(self, session):
        with pytest.raises(EntityNotFoundError):
            mood_db.delete_mood_energy_entry(session, "missing")
