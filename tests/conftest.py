"""Shared fixtures: a complete weekly record the validator accepts."""

from __future__ import annotations

import pytest

from worship_aid.models import (
    MusicPiece,
    MusicSelection,
    Readings,
    Season,
    WeeklyRecord,
)


def _same_music(**pieces: MusicPiece) -> MusicSelection:
    return MusicSelection(**pieces)


@pytest.fixture
def make_record():
    """Factory for valid records; keyword arguments override any field."""

    def _make(**overrides) -> WeeklyRecord:
        readings = Readings(
            first_reading_citation="Exodus 17:3-7",
            first_reading_text="In those days, in their thirst for water,\n"
                               "the people grumbled against Moses.",
            psalm_citation="Psalm 95:1-2, 6-7, 8-9",
            psalm_refrain="If today you hear his voice, harden not your hearts.",
            psalm_verses="Come, let us sing joyfully to the LORD;\n"
                         "let us acclaim the Rock of our salvation.",
            second_reading_citation="Romans 5:1-2, 5-8",
            second_reading_text="Brothers and sisters:\n"
                                "Since we have been justified by faith,\n"
                                "we have peace with God through our Lord Jesus Christ.",
            gospel_acclamation_citation="Cf. John 4:42, 15",
            gospel_acclamation_verse="Lord, you are truly the Savior of the world;\n"
                                     "give me living water, that I may never thirst again.",
            gospel_citation="John 4:5-42",
            gospel_text="Jesus came to a town of Samaria called Sychar.",
        )
        hymn = MusicPiece("Praise to the Lord", "Stralsund")
        record = WeeklyRecord(
            service_date="2026-03-08",
            occasion_name="Third Sunday of Lent",
            season=Season.LENT,
            readings=readings,
            music_sat_5pm=_same_music(entrance=hymn),
            music_sun_9am=_same_music(entrance=hymn),
            music_sun_11am=_same_music(entrance=hymn),
        )
        for name, value in overrides.items():
            setattr(record, name, value)
        return record

    return _make


@pytest.fixture
def record(make_record) -> WeeklyRecord:
    return make_record()
