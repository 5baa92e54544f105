"""Shared page plan for the print and preview engines.

Every business rule about what appears in the booklet (seasonal
suppression of the Gloria, entrance variant, postlude, wreath, music
consolidation, ...) is decided here, once.  The two renderers only turn
the resulting blocks into their own markup, so they cannot disagree about
which sections exist.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date

from worship_aid.models import SERVICE_TIMES, WeeklyRecord
from worship_aid.renderer.assets import LoadedImage, StaticAssets
from worship_aid.renderer.capacity import CapacityConfig, OverflowFinding, detect_overflows
from worship_aid.renderer.music import MUSIC_SLOT_LABELS, DisplayEntry, consolidate
from worship_aid.renderer.season import LENTEN_ACCLAMATION_OPTIONS, apply_season_defaults
from worship_aid.renderer.static_text import (
    GOSPEL_ACCLAMATION_STANDARD,
    PRAYER_OF_THE_FAITHFUL_RUBRIC,
)
from worship_aid.settings import ParishSettings

logger = logging.getLogger(__name__)

PAGE_COUNT = 8

# (key, title) in booklet order
PAGE_SEQUENCE = (
    ("cover", ""),
    ("introductory_rites", "The Introductory Rites"),
    ("liturgy_of_the_word", "The Liturgy of the Word"),
    ("gospel_creed", ""),
    ("liturgy_of_the_eucharist", "The Liturgy of the Eucharist"),
    ("communion_rite", "The Communion Rite"),
    ("concluding_rites", "The Concluding Rites"),
    ("back_cover", ""),
)

# Conditional sections, in the order they can appear
CONDITIONAL_SECTIONS = (
    "advent_wreath",
    "processional_hymn",
    "entrance_antiphon",
    "penitential_act",
    "gloria",
    "childrens_liturgy",
    "acclamation_alleluia",
    "acclamation_lenten",
    "organ_postlude",
)


@dataclass
class Block:
    kind: str                 # heading, rubric, text, citation, response, music,
                              # notation, dialogue, banner, callout, creed, prayer,
                              # credit, blurb, ...
    text: str = ""
    section: str = ""         # conditional section key; "" = always present
    entries: list[DisplayEntry] = field(default_factory=list)
    image: LoadedImage | None = None
    lines: tuple = ()         # (speaker, text) pairs for dialogue blocks


@dataclass
class Page:
    number: int
    key: str
    title: str
    blocks: list[Block] = field(default_factory=list)
    findings: list[OverflowFinding] = field(default_factory=list)

    def add(self, kind: str, text: str = "", **kwargs) -> Block:
        block = Block(kind=kind, text=text, **kwargs)
        self.blocks.append(block)
        return block


@dataclass
class PagePlan:
    record: WeeklyRecord                  # season-resolved
    pages: list[Page]
    findings: list[OverflowFinding]
    warnings: list[str]

    @property
    def sections(self) -> tuple[str, ...]:
        """Conditional sections present, in CONDITIONAL_SECTIONS order."""
        present = {b.section for p in self.pages for b in p.blocks if b.section}
        return tuple(s for s in CONDITIONAL_SECTIONS if s in present)


def format_date(date_str: str) -> str:
    """"2026-03-08" -> "Sunday, March 8, 2026"; unparseable input is returned as-is."""
    try:
        d = date.fromisoformat(date_str)
    except (TypeError, ValueError):
        return date_str or ""
    return f"{d:%A}, {d:%B} {d.day}, {d.year}"


def acclamation_text(record: WeeklyRecord) -> tuple[str, str]:
    """Return (section key, text) for the Gospel Acclamation response."""
    seasonal = record.seasonal
    if seasonal.gospel_acclamation_type != "lenten":
        return "acclamation_alleluia", GOSPEL_ACCLAMATION_STANDARD
    text = LENTEN_ACCLAMATION_OPTIONS.get(
        seasonal.lenten_acclamation or "",
        next(iter(LENTEN_ACCLAMATION_OPTIONS.values())),
    )
    return "acclamation_lenten", text


class _PlanBuilder:
    """Collects image warnings while laying out one record."""

    def __init__(self, record: WeeklyRecord, assets: StaticAssets,
                 settings: ParishSettings) -> None:
        self.record = record
        self.assets = assets
        self.settings = settings
        self.warnings: list[str] = []
        self._logo: LoadedImage | None = None

    def _image(self, loaded: LoadedImage) -> LoadedImage:
        if loaded.warning:
            self.warnings.append(loaded.warning)
        return loaded

    def _parish_logo(self) -> LoadedImage:
        """The logo appears on both covers but is loaded and reported once."""
        if self._logo is None:
            self._logo = self._image(self.assets.logo())
        return self._logo

    def _notation(self, page: Page, piece: str, label: str, setting: str = "") -> None:
        page.add("notation", image=self._image(
            self.assets.notation_image(piece, label, setting)
        ))

    def _music(self, page: Page, slot: str, heading: str | None = None,
               section: str = "") -> bool:
        """Add a music slot; an empty slot adds nothing at all."""
        entries = consolidate(self.record, slot)
        if not entries:
            return False
        page.add("heading", heading or MUSIC_SLOT_LABELS[slot], section=section)
        page.add("music", entries=entries, section=section)
        return True

    # ── Pages ─────────────────────────────────────────────────────────

    def cover(self, page: Page) -> None:
        r = self.record
        page.add("logo", image=self._parish_logo())
        page.add("occasion", r.occasion_name)
        page.add("date", format_date(r.service_date))
        page.add("mass_times", " • ".join(t.label for t in SERVICE_TIMES))
        if r.special_notes:
            page.add("note", r.special_notes)
        page.add("welcome", self.assets.welcome_message)
        page.add("parish", self.settings.parish_name)

    def introductory_rites(self, page: Page) -> None:
        r, s, a = self.record, self.record.seasonal, self.assets

        self._music(page, "organ_prelude")
        page.add("rubric", a.rubrics["stand"])

        if s.advent_wreath:
            page.add("banner", a.advent_wreath, section="advent_wreath")

        if s.entrance_type == "antiphon":
            section, heading = "entrance_antiphon", "Entrance Antiphon"
        else:
            section, heading = "processional_hymn", "Processional Hymn"
        page.add("heading", heading, section=section)
        if section == "entrance_antiphon" and r.entrance_antiphon_citation:
            page.add("citation", r.entrance_antiphon_citation, section=section)
        entries = consolidate(r, "entrance")
        if entries:
            page.add("music", entries=entries, section=section)
        if section == "entrance_antiphon" and r.entrance_antiphon_credit:
            page.add("credit", r.entrance_antiphon_credit, section=section)

        page.add("heading", "Penitential Act")
        if s.penitential_act != "kyrie_only":
            page.add("text", a.confiteor, section="penitential_act")

        page.add("heading", "Kyrie")
        entries = consolidate(r, "kyrie")
        if entries:
            page.add("music", entries=entries)
        self._notation(page, "kyrie", "Kyrie")

        if s.gloria:
            page.add("heading", "Gloria", section="gloria")
            page.add("text", a.gloria, section="gloria")
            self._notation(page, "gloria", "Gloria")

        if r.collect:
            page.add("heading", "Collect")
            page.add("prayer", r.collect)

        children = r.childrens_liturgy
        if children.enabled:
            detail = f"At the {children.service_time} Mass" if children.service_time else ""
            music = []
            if children.music_title:
                music = [DisplayEntry(children.music_title, children.music_composer)]
            page.add("heading", "Children's Liturgy of the Word", section="childrens_liturgy")
            page.add("callout", a.childrens_liturgy, section="childrens_liturgy",
                     entries=music, lines=(detail,) if detail else ())

    def liturgy_of_the_word(self, page: Page) -> None:
        rd, a = self.record.readings, self.assets

        page.add("rubric", a.rubrics["sit"])

        page.add("heading", "First Reading")
        page.add("citation", rd.first_reading_citation)
        page.add("reading", rd.first_reading_text)

        page.add("heading", "Responsorial Psalm")
        page.add("citation", rd.psalm_citation)
        if rd.psalm_refrain:
            page.add("response", f"R. {rd.psalm_refrain}")
        if rd.psalm_verses:
            page.add("verses", rd.psalm_verses)

        if not rd.no_second_reading and (rd.second_reading_text or rd.second_reading_citation):
            page.add("heading", "Second Reading")
            page.add("citation", rd.second_reading_citation)
            page.add("reading", rd.second_reading_text)

        page.add("rubric", a.rubrics["stand"])

        section, response = acclamation_text(self.record)
        page.add("heading", "Gospel Acclamation")
        if rd.gospel_acclamation_citation:
            page.add("citation", rd.gospel_acclamation_citation)
        page.add("response", response, section=section)
        if rd.gospel_acclamation_verse:
            page.add("text", rd.gospel_acclamation_verse)
        piece = ("gospel_acclamation_lenten" if section == "acclamation_lenten"
                 else "gospel_acclamation_alleluia")
        self._notation(page, piece, "Gospel Acclamation")

    def gospel_creed(self, page: Page) -> None:
        r, s, a = self.record, self.record.seasonal, self.assets
        rd = r.readings

        page.add("heading", "Gospel")
        page.add("citation", rd.gospel_citation)
        page.add("reading", rd.gospel_text)

        page.add("heading", "Homily")
        page.add("rubric", a.rubrics["sit"])
        page.add("rubric", a.rubrics["stand"])

        creed_title = "Apostles' Creed" if s.creed_type == "apostles" else "Nicene Creed"
        page.add("heading", creed_title)
        page.add("creed", a.creed_text(s.creed_type))

        page.add("heading", "Prayer of the Faithful")
        if r.prayer_of_the_faithful:
            page.add("prayer", r.prayer_of_the_faithful)
        else:
            page.add("rubric", PRAYER_OF_THE_FAITHFUL_RUBRIC)

    def liturgy_of_the_eucharist(self, page: Page) -> None:
        s, a = self.record.seasonal, self.assets

        page.add("rubric", a.rubrics["sit"])
        self._music(page, "offertory")
        page.add("rubric", a.rubrics["stand"])

        page.add("heading", "Invitation to Prayer")
        page.add("dialogue", lines=a.invitation_to_prayer)

        page.add("heading", "Holy, Holy, Holy")
        if s.holy_holy_setting:
            page.add("setting", s.holy_holy_setting)
        page.add("text", a.holy_holy_holy)
        self._notation(page, "holy_holy", "Holy, Holy, Holy", s.holy_holy_setting or "")

        page.add("rubric", a.rubrics["kneel"])

        page.add("heading", "Mystery of Faith")
        if s.mystery_of_faith_setting:
            page.add("setting", s.mystery_of_faith_setting)
        page.add("text", a.mystery_of_faith)
        self._notation(page, "mystery_of_faith", "Mystery of Faith",
                       s.mystery_of_faith_setting or "")

    def communion_rite(self, page: Page) -> None:
        s, a = self.record.seasonal, self.assets

        page.add("heading", "The Lord's Prayer")
        page.add("rubric", a.rubrics["stand"])
        page.add("text", a.lords_prayer)

        page.add("heading", "Lamb of God")
        if s.lamb_of_god_setting:
            page.add("setting", s.lamb_of_god_setting)
        page.add("text", a.agnus_dei)
        self._notation(page, "lamb_of_god", "Lamb of God", s.lamb_of_god_setting or "")

        page.add("rubric", a.rubrics["kneel"])
        self._music(page, "communion")

    def concluding_rites(self, page: Page) -> None:
        r, a = self.record, self.assets

        self._music(page, "thanksgiving")
        self._music(page, "choral_anthem")
        page.add("rubric", a.rubrics["stand"])

        if r.prayer_after_communion:
            page.add("heading", "Prayer after Communion")
            page.add("prayer", r.prayer_after_communion)

        page.add("heading", "Blessing & Dismissal")
        page.add("dialogue", lines=a.blessing_and_dismissal)

        if r.seasonal.include_postlude:
            self._music(page, "organ_postlude", section="organ_postlude")

        if r.announcements:
            page.add("heading", "Announcements")
            page.add("announcements", r.announcements)

    def back_cover(self, page: Page) -> None:
        st = self.settings
        page.add("logo", image=self._parish_logo())
        page.add("parish", st.parish_name)
        contact = [x for x in (st.parish_address, st.parish_phone, st.parish_url) if x]
        if contact:
            page.add("contact", lines=tuple(contact))
        for blurb in (st.nursery_blurb, st.connect_blurb, st.restrooms_blurb):
            if blurb:
                page.add("blurb", blurb)
        if st.prayer_blurb:
            prayer = st.prayer_blurb
            if st.parish_prayer_url:
                prayer += f" {st.parish_prayer_url}"
            page.add("blurb", prayer)
        page.add("copyright", self.assets.copyright_block)


def build_page_plan(
    record: WeeklyRecord,
    assets: StaticAssets | None = None,
    settings: ParishSettings | None = None,
    capacity: CapacityConfig | None = None,
) -> PagePlan:
    """Resolve ``record`` and lay out the eight booklet pages.

    Season resolution always runs first; overflow findings are computed
    from the resolved record and attached to the pages they concern.
    """
    settings = settings or ParishSettings()
    assets = assets or StaticAssets.from_settings(settings)
    capacity = capacity or settings.capacity_config()

    resolved = apply_season_defaults(record)
    findings = detect_overflows(resolved, capacity)

    builder = _PlanBuilder(resolved, assets, settings)
    pages = []
    for number, (key, title) in enumerate(PAGE_SEQUENCE, start=1):
        page = Page(number=number, key=key, title=title)
        getattr(builder, key)(page)
        page.findings = [f for f in findings if f.page == number]
        pages.append(page)

    logger.debug("Planned %d pages for %s (%d findings, %d warnings)",
                 len(pages), resolved.occasion_name, len(findings), len(builder.warnings))
    return PagePlan(record=resolved, pages=pages, findings=findings,
                    warnings=builder.warnings)
