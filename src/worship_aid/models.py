"""Data models for one week's worship aid."""

from __future__ import annotations

import logging
import uuid
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class Season(Enum):
    ORDINARY = "ordinary"
    ADVENT = "advent"
    CHRISTMAS = "christmas"
    LENT = "lent"
    EASTER = "easter"

    @property
    def label(self) -> str:
        return _SEASON_LABELS[self]

    @classmethod
    def coerce(cls, value: object) -> Season:
        """Map a tag to a Season, degrading anything unrecognized to ORDINARY."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value or "").strip().lower())
        except ValueError:
            logger.warning("Unknown season %r, treating as ordinary", value)
            return cls.ORDINARY


_SEASON_LABELS: dict[Season, str] = {
    Season.ORDINARY: "Ordinary Time",
    Season.ADVENT: "Advent",
    Season.CHRISTMAS: "Christmas",
    Season.LENT: "Lent",
    Season.EASTER: "Easter",
}


class WorkflowStatus(Enum):
    DRAFT = "draft"
    REVIEW = "review"
    APPROVED = "approved"
    EXPORTED = "exported"

    @classmethod
    def coerce(cls, value: object) -> WorkflowStatus:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value or "").strip().lower())
        except ValueError:
            logger.warning("Unknown status %r, treating as draft", value)
            return cls.DRAFT


@dataclass(frozen=True)
class ServiceTime:
    attr: str       # WeeklyRecord attribute holding this Mass's MusicSelection
    label: str      # e.g. "Sat 5:00 PM"


# Chronological; also the tie-break order for music consolidation
SERVICE_TIMES: tuple[ServiceTime, ...] = (
    ServiceTime("music_sat_5pm", "Sat 5:00 PM"),
    ServiceTime("music_sun_9am", "Sun 9:00 AM"),
    ServiceTime("music_sun_11am", "Sun 11:00 AM"),
)


@dataclass
class Readings:
    first_reading_citation: str = ""
    first_reading_text: str = ""
    psalm_citation: str = ""
    psalm_refrain: str = ""
    psalm_verses: str = ""
    no_second_reading: bool = False
    second_reading_citation: str = ""
    second_reading_text: str = ""
    gospel_acclamation_citation: str = ""
    gospel_acclamation_verse: str = ""
    gospel_citation: str = ""
    gospel_text: str = ""


@dataclass
class SeasonalSettings:
    """Season-driven liturgical choices.

    Every field defaults to None meaning "use the seasonal default".
    Explicit False / "" values are user choices and are never replaced
    by ``apply_season_defaults()``.
    """
    gloria: Optional[bool] = None
    creed_type: Optional[str] = None             # "nicene" or "apostles"
    entrance_type: Optional[str] = None          # "processional" or "antiphon"
    holy_holy_setting: Optional[str] = None
    mystery_of_faith_setting: Optional[str] = None
    lamb_of_god_setting: Optional[str] = None
    penitential_act: Optional[str] = None        # "confiteor" or "kyrie_only"
    include_postlude: Optional[bool] = None
    advent_wreath: Optional[bool] = None
    gospel_acclamation_type: Optional[str] = None  # "alleluia" or "lenten"
    lenten_acclamation: Optional[str] = None     # key into LENTEN_ACCLAMATION_OPTIONS


_SEASONAL_BOOL_FIELDS = ("gloria", "include_postlude", "advent_wreath")
_SEASONAL_STR_FIELDS = (
    "creed_type", "entrance_type", "holy_holy_setting",
    "mystery_of_faith_setting", "lamb_of_god_setting", "penitential_act",
    "gospel_acclamation_type", "lenten_acclamation",
)


@dataclass
class MusicPiece:
    title: str = ""
    composer: str = ""


@dataclass
class MusicSelection:
    """One Mass's music, one piece per slot."""
    organ_prelude: MusicPiece = field(default_factory=MusicPiece)
    entrance: MusicPiece = field(default_factory=MusicPiece)       # processional hymn / antiphon
    kyrie: MusicPiece = field(default_factory=MusicPiece)          # penitential chant
    offertory: MusicPiece = field(default_factory=MusicPiece)
    communion: MusicPiece = field(default_factory=MusicPiece)
    thanksgiving: MusicPiece = field(default_factory=MusicPiece)
    organ_postlude: MusicPiece = field(default_factory=MusicPiece)
    choral_anthem: MusicPiece = field(default_factory=MusicPiece)


MUSIC_SLOT_NAMES: tuple[str, ...] = (
    "organ_prelude", "entrance", "kyrie", "offertory",
    "communion", "thanksgiving", "organ_postlude", "choral_anthem",
)


@dataclass
class ChildrensLiturgy:
    enabled: bool = False
    service_time: Optional[str] = None   # e.g. "Sun 9:00 AM"; None = seasonal default
    music_title: str = ""
    music_composer: str = ""


@dataclass
class WeeklyRecord:
    """Everything needed to produce one week's booklet.

    ``seasonal`` carries raw user choices; call ``apply_season_defaults()``
    before overflow detection or rendering to resolve the gaps.
    """
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    service_date: str = ""               # "2026-03-08"
    occasion_name: str = ""              # "Third Sunday of Lent"
    season: Season = Season.ORDINARY

    readings: Readings = field(default_factory=Readings)
    seasonal: SeasonalSettings = field(default_factory=SeasonalSettings)

    music_sat_5pm: MusicSelection = field(default_factory=MusicSelection)
    music_sun_9am: MusicSelection = field(default_factory=MusicSelection)
    music_sun_11am: MusicSelection = field(default_factory=MusicSelection)

    # Optional propers; each is printed only when filled in
    entrance_antiphon_citation: str = ""
    entrance_antiphon_credit: str = ""   # composer / setting credit
    collect: str = ""
    prayer_of_the_faithful: str = ""     # intentions; empty prints the rubric only
    prayer_after_communion: str = ""

    childrens_liturgy: ChildrensLiturgy = field(default_factory=ChildrensLiturgy)
    announcements: str = ""
    special_notes: str = ""

    # ── Workflow metadata ──
    status: WorkflowStatus = WorkflowStatus.DRAFT
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    created_by: str = ""
    last_edited_by: str = ""
    submitted_by: str = ""
    submitted_at: Optional[str] = None
    approved_by: str = ""
    approved_at: Optional[str] = None
    exported_at: Optional[str] = None


# ── Form data conversion ─────────────────────────────────────────────

def _str(value: object) -> str:
    return "" if value is None else str(value)


def _optional_bool(data: dict, key: str) -> Optional[bool]:
    value = data.get(key)
    return None if value is None else bool(value)


def _optional_str(data: dict, key: str) -> Optional[str]:
    value = data.get(key)
    return None if value is None else str(value)


def _readings_from_dict(data: dict | None) -> Readings:
    data = data or {}
    kwargs = {}
    for name in Readings.__dataclass_fields__:
        if name == "no_second_reading":
            kwargs[name] = bool(data.get(name, False))
        else:
            kwargs[name] = _str(data.get(name))
    return Readings(**kwargs)


def _seasonal_from_dict(data: dict | None) -> SeasonalSettings:
    data = data or {}
    kwargs = {name: _optional_bool(data, name) for name in _SEASONAL_BOOL_FIELDS}
    kwargs.update({name: _optional_str(data, name) for name in _SEASONAL_STR_FIELDS})
    return SeasonalSettings(**kwargs)


def _music_from_dict(data: dict | None) -> MusicSelection:
    data = data or {}
    pieces = {}
    for slot in MUSIC_SLOT_NAMES:
        piece = data.get(slot) or {}
        pieces[slot] = MusicPiece(
            title=_str(piece.get("title")),
            composer=_str(piece.get("composer")),
        )
    return MusicSelection(**pieces)


def _childrens_from_dict(data: dict | None) -> ChildrensLiturgy:
    data = data or {}
    return ChildrensLiturgy(
        enabled=bool(data.get("enabled", False)),
        service_time=_optional_str(data, "service_time"),
        music_title=_str(data.get("music_title")),
        music_composer=_str(data.get("music_composer")),
    )


def record_from_dict(data: dict) -> WeeklyRecord:
    """Build a WeeklyRecord from editor form data or a stored JSON document.

    Missing seasonal keys stay None (unset) so a later season resolution
    can still fill them.
    """
    kwargs = dict(
        service_date=_str(data.get("service_date")),
        occasion_name=_str(data.get("occasion_name")),
        season=Season.coerce(data.get("season")),
        readings=_readings_from_dict(data.get("readings")),
        seasonal=_seasonal_from_dict(data.get("seasonal")),
        childrens_liturgy=_childrens_from_dict(data.get("childrens_liturgy")),
        entrance_antiphon_citation=_str(data.get("entrance_antiphon_citation")),
        entrance_antiphon_credit=_str(data.get("entrance_antiphon_credit")),
        collect=_str(data.get("collect")),
        prayer_of_the_faithful=_str(data.get("prayer_of_the_faithful")),
        prayer_after_communion=_str(data.get("prayer_after_communion")),
        announcements=_str(data.get("announcements")),
        special_notes=_str(data.get("special_notes")),
        status=WorkflowStatus.coerce(data.get("status") or "draft"),
        created_at=data.get("created_at"),
        updated_at=data.get("updated_at"),
        created_by=_str(data.get("created_by")),
        last_edited_by=_str(data.get("last_edited_by")),
        submitted_by=_str(data.get("submitted_by")),
        submitted_at=data.get("submitted_at"),
        approved_by=_str(data.get("approved_by")),
        approved_at=data.get("approved_at"),
        exported_at=data.get("exported_at"),
    )
    for service_time in SERVICE_TIMES:
        kwargs[service_time.attr] = _music_from_dict(data.get(service_time.attr))
    if data.get("id"):
        kwargs["id"] = str(data["id"])
    return WeeklyRecord(**kwargs)


def record_to_dict(record: WeeklyRecord) -> dict:
    """Serialize a WeeklyRecord to JSON-ready primitives."""
    data = asdict(record)
    data["season"] = record.season.value
    data["status"] = record.status.value
    return data
