"""Preview engine: styled HTML for on-screen review."""

from __future__ import annotations

from urllib.parse import quote_plus

from worship_aid.renderer.filters import setup_jinja_env
from worship_aid.renderer.page_plan import PagePlan
from worship_aid.settings import ParishSettings

GOOGLE_FONTS_URL = "https://fonts.googleapis.com/css2?{families}&display=swap"


def web_font_url(*fonts: str) -> str:
    """Stylesheet URL loading the given web font families, or ""."""
    families = "&".join(
        f"family={quote_plus(font)}" for font in dict.fromkeys(f for f in fonts if f)
    )
    return GOOGLE_FONTS_URL.format(families=families) if families else ""


def render_preview_html(plan: PagePlan, settings: ParishSettings) -> str:
    """Render the preview HTML, with overflow findings shown on their pages."""
    env = setup_jinja_env()
    min_pt = settings.min_font_size_pt
    css = env.get_template("preview.css").render(
        body_font=settings.body_font,
        header_font=settings.header_font,
        body_pt=max(10, min_pt),
        min_pt=min_pt,
    )
    return env.get_template("preview.html").render(
        record=plan.record,
        pages=plan.pages,
        warnings=plan.warnings,
        css=css,
        font_url=web_font_url(settings.body_font, settings.header_font),
    )
