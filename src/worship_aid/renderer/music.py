"""Music display: collapse per-Mass selections into display entries.

When every Mass sings the same piece in a slot, the booklet prints one
line with no time qualifier.  When they differ, each distinct piece is
printed once with the Masses that use it, e.g.
"Ubi Caritas, Duruflé (Sat, 5 PM & Sun, 9 AM)".
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from worship_aid.exceptions import UnknownSlotError
from worship_aid.models import MUSIC_SLOT_NAMES, SERVICE_TIMES, WeeklyRecord

# Slot -> heading used in the booklet
MUSIC_SLOT_LABELS: dict[str, str] = {
    "organ_prelude": "Organ Prelude",
    "entrance": "Processional Hymn",
    "kyrie": "Kyrie",
    "offertory": "Offertory Anthem",
    "communion": "Communion Hymn",
    "thanksgiving": "Hymn of Thanksgiving",
    "organ_postlude": "Organ Postlude",
    "choral_anthem": "Choral Anthem",
}


@dataclass(frozen=True)
class DisplayEntry:
    title: str
    composer: str = ""
    time_label: str = ""    # "" when every Mass shares this piece


def short_time_label(label: str) -> str:
    """"Sat 5:00 PM" -> "Sat, 5 PM"."""
    return re.sub(r"(\w+)\s(\d+):00\s(AM|PM)", r"\1, \2 \3", label)


def format_time_label(times: list[str]) -> str:
    """Join service times in the order given: "Sat, 5 PM & Sun, 9 AM"."""
    return " & ".join(short_time_label(t) for t in times)


def consolidate(record: WeeklyRecord, slot: str) -> list[DisplayEntry]:
    """Return the minimal set of entries to print for one music slot.

    Masses with an empty title are skipped.  Entries are grouped by the
    exact (title, composer) pair in chronological Mass order.

    Raises:
        UnknownSlotError: If ``slot`` is not one of MUSIC_SLOT_NAMES.
    """
    if slot not in MUSIC_SLOT_NAMES:
        raise UnknownSlotError(
            f"Unknown music slot: {slot!r}. "
            f"Valid slots: {', '.join(MUSIC_SLOT_NAMES)}"
        )

    groups: dict[tuple[str, str], list[str]] = {}
    for service_time in SERVICE_TIMES:
        piece = getattr(getattr(record, service_time.attr), slot)
        if not piece.title:
            continue
        key = (piece.title, piece.composer or "")
        groups.setdefault(key, []).append(service_time.label)

    if not groups:
        return []

    if len(groups) == 1:
        title, composer = next(iter(groups))
        return [DisplayEntry(title=title, composer=composer)]

    return [
        DisplayEntry(title=title, composer=composer, time_label=format_time_label(times))
        for (title, composer), times in groups.items()
    ]


def consolidate_all(record: WeeklyRecord) -> dict[str, list[DisplayEntry]]:
    """Consolidate every music slot at once."""
    return {slot: consolidate(record, slot) for slot in MUSIC_SLOT_NAMES}


def music_line_text(entry: DisplayEntry) -> str:
    """Plain-text line: "Title, Composer (Sat, 5 PM)"."""
    text = entry.title
    if entry.composer:
        text += f", {entry.composer}"
    if entry.time_label:
        text += f" ({entry.time_label})"
    return text
