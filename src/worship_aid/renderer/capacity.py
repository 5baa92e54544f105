"""Per-page capacity model and overflow detection.

Only pages 3 (Liturgy of the Word) and 4 (Gospel & Creed) carry
operator-supplied text of unbounded length, so only they are checked.
Line counts are a character-count estimate, not a font measurement, so the
check is cheap enough to run on every preview.  Findings are advisory:
nothing here shrinks, reflows, or blocks anything.
"""

from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass

from worship_aid.models import WeeklyRecord
from worship_aid.renderer.season import apply_season_defaults

logger = logging.getLogger(__name__)

PAGE_NAMES = {
    3: "Liturgy of the Word",
    4: "Gospel & Creed",
}


@dataclass
class CapacityConfig:
    """Line budgets, tuned against the parish's printed template."""
    page3_max_lines: int = 85
    page4_max_lines: int = 75
    chars_per_line: int = 65
    acclamation_lines: int = 3
    apostles_creed_lines: int = 18
    nicene_creed_lines: int = 32

    @classmethod
    def from_dict(cls, data: dict | None) -> CapacityConfig:
        """Build from a settings mapping, ignoring unknown or non-numeric keys."""
        config = cls()
        for name, value in (data or {}).items():
            if name not in cls.__dataclass_fields__:
                continue
            try:
                number = int(value)
            except (TypeError, ValueError):
                number = 0
            if number <= 0:
                logger.warning("Ignoring capacity setting %s=%r", name, value)
                continue
            setattr(config, name, number)
        return config

    def budget(self, page: int) -> int:
        return self.page3_max_lines if page == 3 else self.page4_max_lines

    def creed_lines(self, creed_type: str | None) -> int:
        if creed_type == "apostles":
            return self.apostles_creed_lines
        return self.nicene_creed_lines


@dataclass(frozen=True)
class ContentBlock:
    name: str
    lines: int


@dataclass(frozen=True)
class OverflowFinding:
    page: int
    severity: str
    message: str
    block: str          # largest contributing block
    lines_over: int

    def to_dict(self) -> dict:
        return asdict(self)


def estimate_lines(text: str | None, chars_per_line: int = 65) -> int:
    """Estimate printed lines for ``text``.

    Each newline-separated segment wraps to ceil(len / chars_per_line)
    lines, at least one even when blank.  Empty text is zero lines.
    """
    if not text:
        return 0
    return sum(
        max(1, math.ceil(len(line) / chars_per_line))
        for line in text.split("\n")
    )


def page_blocks(record: WeeklyRecord, config: CapacityConfig) -> dict[int, list[ContentBlock]]:
    """Estimated blocks for each monitored page, in declaration order.

    ``record`` must already be season-resolved (creed length depends on it).
    """
    r = record.readings
    cpl = config.chars_per_line

    second = 0 if r.no_second_reading else estimate_lines(r.second_reading_text, cpl)
    creed_type = record.seasonal.creed_type
    creed_name = "Apostles' Creed" if creed_type == "apostles" else "Nicene Creed"

    return {
        3: [
            ContentBlock("First Reading", estimate_lines(r.first_reading_text, cpl)),
            ContentBlock(
                "Responsorial Psalm",
                estimate_lines(r.psalm_verses, cpl) + estimate_lines(r.psalm_refrain, cpl),
            ),
            ContentBlock("Second Reading", second),
            ContentBlock("Gospel Acclamation", config.acclamation_lines),
        ],
        4: [
            ContentBlock("Gospel", estimate_lines(r.gospel_text, cpl)),
            ContentBlock(creed_name, config.creed_lines(creed_type)),
        ],
    }


def _largest(blocks: list[ContentBlock]) -> ContentBlock:
    biggest = blocks[0]
    for block in blocks[1:]:
        if block.lines > biggest.lines:
            biggest = block
    return biggest


def _advice(page: int, block: ContentBlock) -> str:
    if page == 3:
        return "Consider shortening it or using the shorter form of the reading."
    if block.name == "Nicene Creed":
        return "Consider the Apostles' Creed or a shorter form of the Gospel."
    return "Consider using the shorter form of the Gospel."


def detect_overflows(
    record: WeeklyRecord, config: CapacityConfig | None = None,
) -> list[OverflowFinding]:
    """Compare estimated content against each monitored page's budget.

    Emits at most one finding per page, naming the largest block.  Never
    raises; absent text counts as zero lines.
    """
    config = config or CapacityConfig()
    resolved = apply_season_defaults(record)

    findings = []
    for page, blocks in page_blocks(resolved, config).items():
        total = sum(b.lines for b in blocks)
        budget = config.budget(page)
        if total <= budget:
            continue
        over = total - budget
        biggest = _largest(blocks)
        findings.append(OverflowFinding(
            page=page,
            severity="error",
            message=(
                f"Page {page} ({PAGE_NAMES[page]}) overflow: {biggest.name} is the "
                f"largest block ({biggest.lines} lines). The page is approximately "
                f"{over} lines over capacity. {_advice(page, biggest)}"
            ),
            block=biggest.name,
            lines_over=over,
        ))
        logger.debug("Page %d estimated at %d/%d lines", page, total, budget)

    return findings
