"""Tests for the print and preview engines.

Playwright is patched out: the print engine's HTML is checked directly and
the PDF step returns a blank PDF built with pypdf.
"""

from __future__ import annotations

import io
import re
from unittest.mock import patch

import pytest
from pypdf import PdfWriter

from worship_aid.exceptions import RecordValidationError
from worship_aid.models import (
    ChildrensLiturgy,
    MusicPiece,
    Readings,
    Season,
    SeasonalSettings,
)
from worship_aid.renderer import (
    export_filename,
    render_document,
    render_preview,
    render_print,
)
from worship_aid.renderer.assets import StaticAssets
from worship_aid.renderer.page_plan import CONDITIONAL_SECTIONS
from worship_aid.renderer.preview_renderer import web_font_url
from worship_aid.settings import ParishSettings

PDF_PATCH = "worship_aid.renderer.print_renderer.render_to_pdf"


def _blank_pdf(pages: int) -> bytes:
    writer = PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=396, height=612)
    buf = io.BytesIO()
    writer.write(buf)
    return buf.getvalue()


def _sections(html: str) -> set[str]:
    return set(re.findall(r'data-section="([a-z_]+)"', html))


@pytest.fixture
def pdf8():
    with patch(PDF_PATCH, return_value=_blank_pdf(8)) as mock:
        yield mock


class TestRenderDocument:
    def test_unknown_kind(self, record):
        with pytest.raises(ValueError, match="Unknown document kind"):
            render_document("epub", record)

    def test_validation_runs_before_render(self, make_record):
        with patch(PDF_PATCH) as mock_pdf:
            with pytest.raises(RecordValidationError) as exc:
                render_print(make_record(readings=Readings()))
        mock_pdf.assert_not_called()
        paths = [i.path for i in exc.value.issues]
        assert "readings.gospel_text" in paths

    def test_preview_validates_too(self, make_record):
        with pytest.raises(RecordValidationError):
            render_preview(make_record(occasion_name=""))


class TestPrintEngine:
    def test_pdf_and_page_count(self, record, pdf8):
        doc = render_print(record)
        assert doc.kind == "print"
        assert doc.pdf_bytes.startswith(b"%PDF")
        assert doc.page_count == 8
        assert not any("pages" in w for w in doc.warnings)
        pdf8.assert_called_once()

    def test_page_count_mismatch_is_a_warning(self, record):
        with patch(PDF_PATCH, return_value=_blank_pdf(9)):
            doc = render_print(record)
        assert doc.page_count == 9
        assert any("9 pages" in w for w in doc.warnings)

    def test_eight_page_boxes(self, record, pdf8):
        html = render_print(record).html
        assert len(re.findall(r'<section class="page ', html)) == 8
        assert "size: 5.5in 8.5in" in html

    def test_builtin_fonts_only(self, record, pdf8):
        html = render_print(record).html
        assert "Times" in html
        assert "fonts.googleapis.com" not in html

    def test_min_font_size(self, record, pdf8):
        html = render_print(record, settings=ParishSettings(min_font_size_pt=11)).html
        assert "font-size: 11pt" in html or "font-size: 11.0pt" in html

    def test_operator_text_is_escaped(self, make_record, pdf8):
        record = make_record(announcements="<script>alert(1)</script>")
        html = render_print(record).html
        assert "<script>" not in html
        assert "&lt;script&gt;" in html

    def test_missing_logo_placeholder(self, record, pdf8, tmp_path):
        doc = render_print(record, StaticAssets(logo_path=tmp_path / "logo.png"))
        assert doc.html.count("[LOGO: Parish logo]") == 2

    def test_missing_notation_placeholder(self, record, pdf8, tmp_path):
        doc = render_print(record, StaticAssets(notation_dir=tmp_path))
        assert "[NOTATION: Kyrie]" in doc.html
        assert any("kyrie" in w for w in doc.warnings)


class TestPreviewEngine:
    def test_preview_has_no_pdf(self, record):
        doc = render_preview(record)
        assert doc.kind == "preview"
        assert doc.pdf_bytes is None
        assert doc.page_count == 8

    def test_web_fonts(self, record):
        html = render_preview(record).html
        assert "fonts.googleapis.com" in html
        assert "EB Garamond" in html

    def test_findings_inline(self, make_record):
        record = make_record()
        record.readings.gospel_text = "x\n" * 80
        doc = render_preview(record)
        assert [f.page for f in doc.findings] == [4]
        assert 'class="overflow-finding severity-error"' in doc.html
        assert "Page 4 (Gospel &amp; Creed) overflow" in doc.html

    def test_warnings_listed(self, record, tmp_path):
        doc = render_preview(record, StaticAssets(notation_dir=tmp_path))
        assert doc.warnings
        assert 'class="preview-warnings"' in doc.html

    def test_missing_logo_placeholder(self, record, tmp_path):
        doc = render_preview(record, StaticAssets(logo_path=tmp_path / "logo.png"))
        assert doc.html.count("[LOGO: Parish logo]") == 2
        assert len([w for w in doc.warnings if "Parish logo" in w]) == 1

    def test_propers_shown(self, make_record):
        doc = render_preview(make_record(entrance_antiphon_credit="Chant: Adam Bartlett",
                                         collect="Almighty ever-living God"))
        assert 'class="credit" data-section="entrance_antiphon"' in doc.html
        assert "Almighty ever-living God" in doc.html

    def test_no_findings_for_normal_week(self, record):
        doc = render_preview(record)
        assert doc.findings == []
        assert "overflow-finding" not in doc.html


def _scenarios():
    lent = dict()
    ordinary = dict(season=Season.ORDINARY)
    advent = dict(season=Season.ADVENT)
    lent_with_gloria = dict(seasonal=SeasonalSettings(gloria=True, include_postlude=True))
    kyrie_only = dict(season=Season.EASTER,
                      seasonal=SeasonalSettings(penitential_act="kyrie_only"))
    children = dict(childrens_liturgy=ChildrensLiturgy(enabled=True))
    lent_with_wreath = dict(seasonal=SeasonalSettings(advent_wreath=True))
    propers = dict(entrance_antiphon_citation="Cf. Psalm 25:1-3",
                   entrance_antiphon_credit="Chant: Adam Bartlett")
    return [lent, ordinary, advent, lent_with_gloria, kyrie_only, children,
            lent_with_wreath, propers]


class TestEngineParity:
    """Both engines show exactly the same conditional sections."""

    @pytest.mark.parametrize("overrides", _scenarios())
    def test_same_sections(self, make_record, pdf8, overrides):
        record = make_record(**overrides)
        for selection in (record.music_sat_5pm, record.music_sun_9am, record.music_sun_11am):
            selection.organ_postlude = MusicPiece("Toccata", "Widor")

        printed = render_print(record)
        preview = render_preview(record)

        assert printed.sections == preview.sections
        assert _sections(printed.html) == set(printed.sections)
        assert _sections(preview.html) == set(preview.sections)
        assert set(printed.sections) <= set(CONDITIONAL_SECTIONS)

    def test_lent_with_wreath_sections(self, record, pdf8):
        record.seasonal.advent_wreath = True
        record.music_sun_9am.organ_postlude = MusicPiece("Toccata", "Widor")
        for doc in (render_print(record), render_preview(record)):
            assert "gloria" not in _sections(doc.html)
            assert "organ_postlude" not in _sections(doc.html)
            assert "entrance_antiphon" in _sections(doc.html)
            assert "acclamation_lenten" in _sections(doc.html)
            assert "advent_wreath" in _sections(doc.html)
            assert "processional_hymn" not in _sections(doc.html)
            assert "acclamation_alleluia" not in _sections(doc.html)

    def test_same_findings(self, make_record, pdf8):
        record = make_record()
        record.readings.first_reading_text = "x\n" * 90
        assert render_print(record).findings == render_preview(record).findings


class TestExportFilename:
    @pytest.mark.parametrize("date,name,expected", [
        ("2026-03-08", "Third Sunday of Lent", "2026_03_08__Third_Sunday_of_Lent.pdf"),
        ("2026-12-25", "The Nativity of the Lord (Christmas)",
         "2026_12_25__The_Nativity_of_the_Lord_Christmas.pdf"),
        ("2026-08-15", "Assumption: Mass during the Day",
         "2026_08_15__Assumption_Mass_during_the_Day.pdf"),
        ("2026-09-20", "Twenty-Fifth Sunday in Ordinary Time",
         "2026_09_20__TwentyFifth_Sunday_in_Ordinary_Time.pdf"),
        ("2026-11-22", "Christ the King: Solemnity / Year B",
         "2026_11_22__Christ_the_King_Solemnity_Year_B.pdf"),
        ("someday", "Feast", "undated__Feast.pdf"),
    ])
    def test_filename(self, make_record, date, name, expected):
        record = make_record(service_date=date, occasion_name=name)
        assert export_filename(record) == expected


def test_web_font_url():
    url = web_font_url("EB Garamond", "Cinzel", "Cinzel")
    assert url.count("family=") == 2
    assert "family=EB+Garamond" in url
    assert web_font_url("", "") == ""
