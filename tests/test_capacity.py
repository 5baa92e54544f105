"""Tests for the line-estimate capacity model and overflow detection."""

from __future__ import annotations

import pytest

from worship_aid.models import Readings, Season, SeasonalSettings
from worship_aid.renderer.capacity import (
    CapacityConfig,
    detect_overflows,
    estimate_lines,
    page_blocks,
)
from worship_aid.renderer.season import apply_season_defaults


def _lines(n: int, width: int = 10) -> str:
    """Text that estimates to exactly ``n`` lines at 65 chars per line."""
    return "\n".join("x" * width for _ in range(n))


class TestEstimateLines:
    @pytest.mark.parametrize("text,expected", [
        ("", 0),
        (None, 0),
        ("short", 1),
        ("x" * 65, 1),
        ("x" * 66, 2),
        ("x" * 130, 2),
        ("a" * 200, 4),
        ("a\nb\nc", 3),
        ("a\n\nb", 3),          # blank segment still takes a line
    ])
    def test_estimates(self, text, expected):
        assert estimate_lines(text) == expected

    def test_custom_width(self):
        assert estimate_lines("x" * 40, chars_per_line=20) == 2


class TestCapacityConfig:
    def test_defaults(self):
        config = CapacityConfig()
        assert config.budget(3) == 85
        assert config.budget(4) == 75
        assert config.creed_lines("apostles") == 18
        assert config.creed_lines("nicene") == 32

    def test_from_dict_overrides(self):
        config = CapacityConfig.from_dict({"page3_max_lines": 90, "chars_per_line": "70"})
        assert config.page3_max_lines == 90
        assert config.chars_per_line == 70

    def test_from_dict_ignores_bad_values(self):
        config = CapacityConfig.from_dict({
            "page4_max_lines": "lots", "acclamation_lines": -1, "unknown": 5,
        })
        assert config == CapacityConfig()


class TestPageBlocks:
    def test_second_reading_suppressed(self, make_record):
        record = make_record(readings=Readings(
            second_reading_text=_lines(30), no_second_reading=True,
        ))
        blocks = page_blocks(apply_season_defaults(record), CapacityConfig())
        second = [b for b in blocks[3] if b.name == "Second Reading"][0]
        assert second.lines == 0

    def test_creed_follows_season(self, make_record):
        blocks = page_blocks(apply_season_defaults(make_record(season=Season.ORDINARY)),
                             CapacityConfig())
        assert blocks[4][1].name == "Nicene Creed"
        assert blocks[4][1].lines == 32


class TestDetectOverflows:
    def test_no_findings_for_normal_week(self, record):
        assert detect_overflows(record) == []

    def test_empty_record_never_raises(self, make_record):
        assert detect_overflows(make_record(readings=Readings())) == []

    def test_page3_overflow_names_largest_block(self, make_record):
        record = make_record(readings=Readings(
            first_reading_text=_lines(60),
            psalm_verses=_lines(20),
            second_reading_text=_lines(10),
        ))
        findings = detect_overflows(record)
        assert len(findings) == 1
        finding = findings[0]
        assert finding.page == 3
        assert finding.severity == "error"
        assert finding.block == "First Reading"
        # 60 + 20 + 10 + 3 acclamation = 93 > 85
        assert finding.lines_over == 8
        assert "First Reading" in finding.message
        assert "8 lines over" in finding.message

    def test_first_reading_alone_overflows_page3(self, make_record):
        record = make_record(readings=Readings(first_reading_text=_lines(90)))
        findings = detect_overflows(record)
        assert len(findings) == 1
        assert findings[0].page == 3
        assert findings[0].block == "First Reading"
        # 90 + 3 acclamation = 93 > 85
        assert findings[0].lines_over == 8

    def test_one_finding_per_page(self, make_record):
        record = make_record(readings=Readings(
            first_reading_text=_lines(90),
            second_reading_text=_lines(90),
            gospel_text=_lines(80),
        ))
        findings = detect_overflows(record)
        assert [f.page for f in findings] == [3, 4]

    def test_tie_goes_to_first_declared_block(self, make_record):
        record = make_record(readings=Readings(
            first_reading_text=_lines(45), second_reading_text=_lines(45),
        ))
        findings = detect_overflows(record)
        assert findings[0].block == "First Reading"

    def test_creed_choice_changes_page4(self, make_record):
        # Gospel of 50 lines: Apostles' (18) fits, Nicene (32) does not
        gospel = Readings(gospel_text=_lines(50))
        lent = make_record(readings=gospel)
        assert detect_overflows(lent) == []

        nicene = make_record(readings=gospel,
                             seasonal=SeasonalSettings(creed_type="nicene"))
        findings = detect_overflows(nicene)
        assert len(findings) == 1
        assert findings[0].page == 4
        assert findings[0].lines_over == 7
        assert findings[0].block == "Gospel"

    def test_second_reading_suppression_clears_overflow(self, make_record):
        readings = Readings(first_reading_text=_lines(50), second_reading_text=_lines(40))
        assert detect_overflows(make_record(readings=readings))

        readings.no_second_reading = True
        assert detect_overflows(make_record(readings=readings)) == []

    def test_custom_budget(self, record):
        tight = CapacityConfig(page3_max_lines=5)
        findings = detect_overflows(record, tight)
        assert [f.page for f in findings] == [3]

    def test_to_dict(self, make_record):
        record = make_record(readings=Readings(gospel_text=_lines(80)))
        data = detect_overflows(record)[0].to_dict()
        assert set(data) == {"page", "severity", "message", "block", "lines_over"}
