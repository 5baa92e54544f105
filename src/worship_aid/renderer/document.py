"""Shared entry point for both layout engines.

Both engines consume the same PagePlan, so a section present in the
preview is present in the print output and vice versa.  Findings and
asset warnings travel with the result; neither blocks a render.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import date

from worship_aid.exceptions import RecordValidationError
from worship_aid.models import WeeklyRecord
from worship_aid.renderer.assets import StaticAssets
from worship_aid.renderer.capacity import CapacityConfig, OverflowFinding
from worship_aid.renderer.page_plan import build_page_plan
from worship_aid.renderer.preview_renderer import render_preview_html
from worship_aid.renderer.print_renderer import render_print_html, render_print_pdf
from worship_aid.settings import ParishSettings
from worship_aid.validator import validate_record

logger = logging.getLogger(__name__)

DOCUMENT_KINDS = ("print", "preview")


@dataclass
class RenderedDocument:
    kind: str                               # "print" or "preview"
    html: str
    pdf_bytes: bytes | None = None          # print only
    warnings: list[str] = field(default_factory=list)
    sections: tuple[str, ...] = ()          # conditional sections present
    findings: list[OverflowFinding] = field(default_factory=list)
    page_count: int | None = None

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "warnings": list(self.warnings),
            "sections": list(self.sections),
            "findings": [f.to_dict() for f in self.findings],
            "page_count": self.page_count,
        }


def render_document(
    kind: str,
    record: WeeklyRecord,
    assets: StaticAssets | None = None,
    *,
    settings: ParishSettings | None = None,
    capacity: CapacityConfig | None = None,
) -> RenderedDocument:
    """Validate ``record``, then render it with the ``kind`` engine.

    Raises:
        ValueError: If ``kind`` is not "print" or "preview".
        RecordValidationError: If required fields are missing; nothing
            is rendered.
        RenderError: If the print engine fails to produce a PDF.
    """
    if kind not in DOCUMENT_KINDS:
        raise ValueError(
            f"Unknown document kind: {kind!r}. Valid kinds: {', '.join(DOCUMENT_KINDS)}"
        )

    issues = validate_record(record)
    if issues:
        raise RecordValidationError(issues)

    settings = settings or ParishSettings()
    plan = build_page_plan(record, assets, settings, capacity)

    if kind == "preview":
        html = render_preview_html(plan, settings)
        return RenderedDocument(
            kind=kind,
            html=html,
            warnings=list(plan.warnings),
            sections=plan.sections,
            findings=list(plan.findings),
            page_count=len(plan.pages),
        )

    html = render_print_html(plan, settings)
    pdf, page_count, pdf_warnings = render_print_pdf(html)
    logger.info("Rendered print booklet for %s (%d pages)",
                plan.record.occasion_name, page_count or 0)
    return RenderedDocument(
        kind=kind,
        html=html,
        pdf_bytes=pdf,
        warnings=list(plan.warnings) + pdf_warnings,
        sections=plan.sections,
        findings=list(plan.findings),
        page_count=page_count,
    )


def render_print(record: WeeklyRecord, assets: StaticAssets | None = None,
                 **kwargs) -> RenderedDocument:
    return render_document("print", record, assets, **kwargs)


def render_preview(record: WeeklyRecord, assets: StaticAssets | None = None,
                   **kwargs) -> RenderedDocument:
    return render_document("preview", record, assets, **kwargs)


def export_filename(record: WeeklyRecord) -> str:
    """``2026_03_08__Third_Sunday_of_Lent.pdf``.

    Everything but letters, digits and spaces is dropped from the occasion
    name, then each run of spaces becomes one underscore; an unparseable
    date becomes "undated".
    """
    try:
        stamp = date.fromisoformat(record.service_date.strip()).strftime("%Y_%m_%d")
    except (AttributeError, ValueError):
        stamp = "undated"
    name = re.sub(r"[^A-Za-z0-9\s]", "", record.occasion_name or "")
    name = re.sub(r"\s+", "_", name.strip()) or "Worship_Aid"
    return f"{stamp}__{name}.pdf"
