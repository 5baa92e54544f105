"""Print engine: fixed half-letter pages rendered to PDF.

One ``<section class="page">`` per booklet page, each exactly
5.5 x 8.5 in, so the PDF has one printed page per logical page.  Only
built-in PDF font families are used; the result must not depend on fonts
installed on the rendering machine.
"""

from __future__ import annotations

import logging

from worship_aid.renderer.filters import setup_jinja_env
from worship_aid.renderer.page_plan import PAGE_COUNT, PagePlan
from worship_aid.renderer.pdf_engine import count_pages, render_to_pdf
from worship_aid.settings import ParishSettings

logger = logging.getLogger(__name__)

BODY_FONT_PT = 10


def render_print_html(plan: PagePlan, settings: ParishSettings) -> str:
    """Render the print HTML document for ``plan``."""
    env = setup_jinja_env()
    min_pt = settings.min_font_size_pt
    css = env.get_template("print.css").render(
        body_pt=max(BODY_FONT_PT, min_pt),
        min_pt=min_pt,
    )
    return env.get_template("print.html").render(
        record=plan.record,
        pages=plan.pages,
        css=css,
    )


def render_print_pdf(html: str) -> tuple[bytes, int | None, list[str]]:
    """Render print HTML to PDF and verify its page count.

    Returns:
        (pdf bytes, page count or None, warnings)
    """
    pdf = render_to_pdf(html)
    warnings = []
    page_count = count_pages(pdf)
    if page_count is None:
        warnings.append("Could not verify the page count of the rendered PDF")
    elif page_count != PAGE_COUNT:
        logger.warning("Print PDF has %d pages, expected %d", page_count, PAGE_COUNT)
        warnings.append(
            f"Rendered PDF has {page_count} pages; the booklet should have {PAGE_COUNT}"
        )
    return pdf, page_count, warnings
