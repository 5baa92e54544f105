"""Playwright-based PDF rendering engine."""

from __future__ import annotations

import io
import logging
from pathlib import Path

from worship_aid.exceptions import RenderError

logger = logging.getLogger(__name__)

# Half-letter booklet page
PAGE_SIZE = {"width": "5.5in", "height": "8.5in"}

# Page boxes in the print template carry their own padding
MARGINS_NONE = {
    "top": "0in",
    "bottom": "0in",
    "left": "0in",
    "right": "0in",
}


def render_to_pdf(
    html_string: str,
    *,
    margins: dict | None = None,
    page_size: str | dict = PAGE_SIZE,
) -> bytes:
    """Render an HTML string to PDF bytes via headless Chromium (Playwright).

    Args:
        html_string: Complete HTML document string.
        margins: Dict with top/bottom/left/right as CSS length strings.
        page_size: Page format string (e.g. "Letter") or dict with
            "width" and "height" CSS lengths.

    Returns:
        The PDF document as bytes.

    Raises:
        RenderError: If Chromium could not be launched or printing failed.
    """
    from playwright.sync_api import Error as PlaywrightError
    from playwright.sync_api import sync_playwright

    margins = margins or MARGINS_NONE

    pdf_opts = {
        "print_background": True,
        "margin": margins,
        "prefer_css_page_size": True,
    }
    if isinstance(page_size, dict):
        pdf_opts["width"] = page_size["width"]
        pdf_opts["height"] = page_size["height"]
    else:
        pdf_opts["format"] = page_size

    try:
        with sync_playwright() as p:
            browser = p.chromium.launch()
            try:
                page = browser.new_page()
                page.set_content(html_string, wait_until="load")
                pdf = page.pdf(**pdf_opts)
            finally:
                browser.close()
    except PlaywrightError as e:
        raise RenderError(f"PDF rendering failed: {e}") from e

    logger.debug("Rendered PDF (%d bytes)", len(pdf))
    return pdf


def count_pages(pdf: bytes | Path) -> int | None:
    """Count pages in a PDF (bytes or file path). Returns None on failure."""
    from pypdf import PdfReader
    from pypdf.errors import PdfReadError

    try:
        source = io.BytesIO(pdf) if isinstance(pdf, (bytes, bytearray)) else str(pdf)
        return len(PdfReader(source).pages)
    except (OSError, ValueError, PdfReadError):
        logger.warning("Could not count pages in rendered PDF")
        return None


def write_pdf(pdf: bytes, output_path: Path) -> Path:
    """Write PDF bytes to ``output_path`` (suffix forced to .pdf)."""
    output_path = Path(output_path).with_suffix(".pdf")
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(pdf)
    logger.info("Saved %s", output_path)
    return output_path
