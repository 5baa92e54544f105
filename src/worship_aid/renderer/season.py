"""Liturgical season rules and seasonal default resolution.

Provides the season -> default-choices table (which liturgical elements
appear, which forms are used) and the gap-filling resolver that applies it
to a WeeklyRecord without overwriting anything the user chose.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, fields
from typing import Optional

from worship_aid.models import Season, SeasonalSettings, WeeklyRecord

ST_THERESA = "Mass of St. Theresa"
VATICAN_XVIII = "Vatican Edition XVIII"

# Key -> phrasing; the first entry is the fallback
LENTEN_ACCLAMATION_OPTIONS: dict[str, str] = {
    "praise_to_you": "Praise to you, Lord Jesus Christ, King of endless glory!",
    "glory_and_praise": "Glory and praise to you, Lord Jesus Christ!",
}


@dataclass(frozen=True)
class SeasonDefaults:
    """What liturgical elements are present/which forms are used for a season."""
    gloria: bool
    creed_type: str                 # "nicene" or "apostles"
    entrance_type: str              # "processional" or "antiphon"
    holy_holy_setting: str
    mystery_of_faith_setting: str
    lamb_of_god_setting: str
    penitential_act: str            # "confiteor" or "kyrie_only"
    childrens_liturgy_policy: str   # "no", "optional", or "yes"
    gospel_acclamation_type: str    # "alleluia" or "lenten"
    include_postlude: bool
    advent_wreath: bool
    childrens_liturgy_service_time: Optional[str] = None


# Season -> defaults (from the parish music worksheet)
_SEASON_RULES = {
    Season.ORDINARY: SeasonDefaults(
        gloria=True,
        creed_type="nicene",
        entrance_type="processional",
        holy_holy_setting=ST_THERESA,
        mystery_of_faith_setting=ST_THERESA,
        lamb_of_god_setting=ST_THERESA,
        penitential_act="confiteor",
        childrens_liturgy_policy="optional",
        gospel_acclamation_type="alleluia",
        include_postlude=True,
        advent_wreath=False,
    ),
    Season.ADVENT: SeasonDefaults(
        gloria=False,
        creed_type="apostles",
        entrance_type="antiphon",
        holy_holy_setting=ST_THERESA,
        mystery_of_faith_setting=ST_THERESA,
        lamb_of_god_setting=ST_THERESA,
        penitential_act="confiteor",
        childrens_liturgy_policy="no",
        gospel_acclamation_type="alleluia",
        include_postlude=True,
        advent_wreath=True,
    ),
    Season.CHRISTMAS: SeasonDefaults(
        gloria=True,
        creed_type="nicene",
        entrance_type="processional",
        holy_holy_setting=ST_THERESA,
        mystery_of_faith_setting=ST_THERESA,
        lamb_of_god_setting=ST_THERESA,
        penitential_act="confiteor",
        childrens_liturgy_policy="no",
        gospel_acclamation_type="alleluia",
        include_postlude=True,
        advent_wreath=False,
    ),
    Season.LENT: SeasonDefaults(
        gloria=False,
        creed_type="apostles",
        entrance_type="antiphon",
        holy_holy_setting=VATICAN_XVIII,
        mystery_of_faith_setting=VATICAN_XVIII,
        lamb_of_god_setting=f"Agnus Dei, {VATICAN_XVIII}",
        penitential_act="confiteor",
        childrens_liturgy_policy="yes",
        childrens_liturgy_service_time="Sun 9:00 AM",
        gospel_acclamation_type="lenten",
        include_postlude=False,
        advent_wreath=False,
    ),
    Season.EASTER: SeasonDefaults(
        gloria=True,
        creed_type="apostles",
        entrance_type="processional",
        holy_holy_setting=ST_THERESA,
        mystery_of_faith_setting=ST_THERESA,
        lamb_of_god_setting=ST_THERESA,
        penitential_act="confiteor",
        childrens_liturgy_policy="optional",
        gospel_acclamation_type="alleluia",
        include_postlude=True,
        advent_wreath=False,
    ),
}

# SeasonalSettings fields that the rule table covers
SEASONAL_DEFAULT_FIELDS: tuple[str, ...] = tuple(
    f.name for f in fields(SeasonalSettings)
    if f.name in SeasonDefaults.__dataclass_fields__
)


def get_season_defaults(season: Season | str | None) -> SeasonDefaults:
    """Get the default liturgical choices for a season.

    Unknown or missing seasons fall back to Ordinary Time.
    """
    return _SEASON_RULES[Season.coerce(season)]


def get_season_options() -> list[dict[str, str]]:
    """Return season choices for the editor dropdown."""
    return [{"key": s.value, "label": s.label} for s in Season]


def detect_season(occasion_name: str) -> Season:
    """Guess the season from an occasion name.

    Examples:
        "Third Sunday of Lent" -> LENT
        "Second Sunday of Advent" -> ADVENT
        "Twenty-Fifth Sunday in Ordinary Time" -> ORDINARY
        "The Epiphany of the Lord" -> CHRISTMAS
    """
    t = (occasion_name or "").lower()

    if "advent" in t:
        return Season.ADVENT
    if "ash wednesday" in t or "lent" in t or "palm sunday" in t:
        return Season.LENT
    if "easter" in t or "pentecost" in t or "ascension" in t:
        return Season.EASTER
    if ("christmas" in t or "nativity" in t or "epiphany" in t
            or "holy family" in t or "baptism of the lord" in t):
        return Season.CHRISTMAS

    return Season.ORDINARY


def _fill(settings: SeasonalSettings, defaults: SeasonDefaults) -> None:
    for name in SEASONAL_DEFAULT_FIELDS:
        if getattr(settings, name) is None:
            setattr(settings, name, getattr(defaults, name))


def apply_season_defaults(record: WeeklyRecord) -> WeeklyRecord:
    """Return a resolved copy of ``record`` with seasonal gaps filled.

    Only fields that are None are touched; explicit values (including
    False and "") are kept.  The input is not mutated, and resolving an
    already-resolved record returns an equal record.
    """
    resolved = copy.deepcopy(record)
    resolved.season = Season.coerce(resolved.season)
    defaults = _SEASON_RULES[resolved.season]

    _fill(resolved.seasonal, defaults)

    children = resolved.childrens_liturgy
    if children.service_time is None and defaults.childrens_liturgy_service_time:
        children.service_time = defaults.childrens_liturgy_service_time

    return resolved


def change_season(record: WeeklyRecord, new_season: Season | str) -> WeeklyRecord:
    """Switch a record to ``new_season`` from the editor.

    Fields still holding the old season's default are re-derived from the
    new season; fields that differ from it are manual overrides and are
    kept.  Returns a resolved copy.
    """
    changed = copy.deepcopy(record)
    old_defaults = _SEASON_RULES[Season.coerce(changed.season)]
    changed.season = Season.coerce(new_season)

    for name in SEASONAL_DEFAULT_FIELDS:
        if getattr(changed.seasonal, name) == getattr(old_defaults, name):
            setattr(changed.seasonal, name, None)

    children = changed.childrens_liturgy
    if children.service_time == old_defaults.childrens_liturgy_service_time:
        children.service_time = None

    return apply_season_defaults(changed)
