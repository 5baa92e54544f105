"""Tests for the season rule table and seasonal default resolution."""

from __future__ import annotations

from dataclasses import fields

import pytest

from worship_aid.models import ChildrensLiturgy, Season, SeasonalSettings
from worship_aid.renderer.season import (
    SEASONAL_DEFAULT_FIELDS,
    VATICAN_XVIII,
    apply_season_defaults,
    change_season,
    detect_season,
    get_season_defaults,
    get_season_options,
)


class TestGetSeasonDefaults:
    """get_season_defaults() is total over seasons and tags."""

    @pytest.mark.parametrize("season", list(Season))
    def test_every_season_has_defaults(self, season):
        defaults = get_season_defaults(season)
        assert defaults.creed_type in ("nicene", "apostles")
        assert defaults.entrance_type in ("processional", "antiphon")
        assert defaults.gospel_acclamation_type in ("alleluia", "lenten")

    @pytest.mark.parametrize("tag", ["", None, "pentecost", "LENTEN", 42])
    def test_unknown_tag_falls_back_to_ordinary(self, tag):
        assert get_season_defaults(tag) == get_season_defaults(Season.ORDINARY)

    def test_string_tag_accepted(self):
        assert get_season_defaults("lent") == get_season_defaults(Season.LENT)

    def test_lent(self):
        lent = get_season_defaults(Season.LENT)
        assert lent.gloria is False
        assert lent.creed_type == "apostles"
        assert lent.entrance_type == "antiphon"
        assert lent.include_postlude is False
        assert lent.gospel_acclamation_type == "lenten"
        assert lent.childrens_liturgy_policy == "yes"
        assert lent.childrens_liturgy_service_time == "Sun 9:00 AM"
        assert lent.holy_holy_setting == VATICAN_XVIII

    def test_advent_has_wreath_and_no_gloria(self):
        advent = get_season_defaults(Season.ADVENT)
        assert advent.advent_wreath is True
        assert advent.gloria is False

    @pytest.mark.parametrize("season", [Season.ORDINARY, Season.CHRISTMAS, Season.EASTER])
    def test_festive_seasons_sing_gloria(self, season):
        assert get_season_defaults(season).gloria is True

    def test_only_advent_lights_the_wreath(self):
        wreath = [s for s in Season if get_season_defaults(s).advent_wreath]
        assert wreath == [Season.ADVENT]


class TestSeasonOptions:
    def test_one_option_per_season(self):
        options = get_season_options()
        assert [o["key"] for o in options] == [s.value for s in Season]
        assert {"key": "ordinary", "label": "Ordinary Time"} in options


class TestDetectSeason:
    @pytest.mark.parametrize("name,expected", [
        ("First Sunday of Advent", Season.ADVENT),
        ("Third Sunday of Lent", Season.LENT),
        ("Ash Wednesday", Season.LENT),
        ("Palm Sunday of the Passion of the Lord", Season.LENT),
        ("Easter Sunday of the Resurrection of the Lord", Season.EASTER),
        ("Pentecost Sunday", Season.EASTER),
        ("The Nativity of the Lord (Christmas)", Season.CHRISTMAS),
        ("The Epiphany of the Lord", Season.CHRISTMAS),
        ("The Baptism of the Lord", Season.CHRISTMAS),
        ("Twenty-Fifth Sunday in Ordinary Time", Season.ORDINARY),
    ])
    def test_known_names(self, name, expected):
        assert detect_season(name) == expected

    def test_empty_is_ordinary(self):
        assert detect_season("") == Season.ORDINARY


class TestApplySeasonDefaults:
    """apply_season_defaults() only fills gaps."""

    def test_fills_every_unset_field(self, record):
        resolved = apply_season_defaults(record)
        for name in SEASONAL_DEFAULT_FIELDS:
            assert getattr(resolved.seasonal, name) is not None, name

    def test_does_not_mutate_input(self, record):
        apply_season_defaults(record)
        assert record.seasonal == SeasonalSettings()

    def test_idempotent(self, record):
        once = apply_season_defaults(record)
        assert apply_season_defaults(once) == once

    def test_explicit_false_is_kept(self, make_record):
        record = make_record(season=Season.ORDINARY,
                             seasonal=SeasonalSettings(gloria=False))
        assert apply_season_defaults(record).seasonal.gloria is False

    def test_explicit_empty_string_is_kept(self, make_record):
        record = make_record(seasonal=SeasonalSettings(holy_holy_setting=""))
        assert apply_season_defaults(record).seasonal.holy_holy_setting == ""

    @pytest.mark.parametrize("season", list(Season))
    def test_manual_values_survive_every_season(self, make_record, season):
        manual = SeasonalSettings(
            gloria=True, creed_type="nicene", entrance_type="processional",
            include_postlude=True, advent_wreath=False,
        )
        resolved = apply_season_defaults(make_record(season=season, seasonal=manual))
        for f in fields(SeasonalSettings):
            value = getattr(manual, f.name)
            if value is not None:
                assert getattr(resolved.seasonal, f.name) == value

    def test_unknown_season_resolves_as_ordinary(self, make_record):
        resolved = apply_season_defaults(make_record(season="pentecost"))
        assert resolved.season == Season.ORDINARY
        assert resolved.seasonal.gloria is True

    def test_lent_end_to_end(self, record):
        resolved = apply_season_defaults(record)
        s = resolved.seasonal
        assert s.gloria is False
        assert s.creed_type == "apostles"
        assert s.entrance_type == "antiphon"
        assert s.include_postlude is False
        assert s.advent_wreath is False
        assert s.gospel_acclamation_type == "lenten"
        assert resolved.childrens_liturgy.service_time == "Sun 9:00 AM"

    def test_never_enables_childrens_liturgy(self, record):
        assert apply_season_defaults(record).childrens_liturgy.enabled is False

    def test_keeps_chosen_childrens_service_time(self, make_record):
        record = make_record(
            childrens_liturgy=ChildrensLiturgy(enabled=True, service_time="Sun 11:00 AM"),
        )
        assert apply_season_defaults(record).childrens_liturgy.service_time == "Sun 11:00 AM"


class TestChangeSeason:
    """change_season() re-derives defaults but keeps manual overrides."""

    def test_derived_fields_follow_new_season(self, make_record):
        lent = apply_season_defaults(make_record(season=Season.LENT))
        easter = change_season(lent, Season.EASTER)
        assert easter.season == Season.EASTER
        assert easter.seasonal.gloria is True
        assert easter.seasonal.include_postlude is True
        assert easter.seasonal.entrance_type == "processional"
        assert easter.seasonal.gospel_acclamation_type == "alleluia"

    def test_manual_override_is_kept(self, make_record):
        lent = apply_season_defaults(make_record(season=Season.LENT))
        lent.seasonal.creed_type = "nicene"     # differs from the Lent default
        easter = change_season(lent, "easter")
        assert easter.seasonal.creed_type == "nicene"

    def test_unresolved_record(self, make_record):
        changed = change_season(make_record(season=Season.ORDINARY), Season.ADVENT)
        assert changed.seasonal.advent_wreath is True
        assert changed.seasonal.gloria is False

    def test_childrens_default_time_is_rederived(self, make_record):
        lent = apply_season_defaults(make_record(season=Season.LENT))
        ordinary = change_season(lent, Season.ORDINARY)
        assert ordinary.childrens_liturgy.service_time is None

    def test_does_not_mutate_input(self, record):
        change_season(record, Season.EASTER)
        assert record.season == Season.LENT
