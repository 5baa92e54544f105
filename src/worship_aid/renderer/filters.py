"""Jinja2 template filters and environment setup."""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup, escape

from worship_aid.renderer.music import music_line_text

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates" / "html"


def nl2br(text: str) -> Markup:
    """Escape operator text, then convert newlines to <br> tags."""
    if not text:
        return Markup("")
    return Markup("<br>\n").join(escape(line) for line in str(text).split("\n"))


def stanzas(text: str) -> list[str]:
    """Split text on blank lines into non-empty stanzas."""
    if not text:
        return []
    return [s.strip() for s in str(text).split("\n\n") if s.strip()]


def music_line(entry) -> str:
    """``Title, Composer (Sat, 5 PM & Sun, 9 AM)`` for one display entry."""
    return music_line_text(entry)


def setup_jinja_env() -> Environment:
    """Create and configure the Jinja2 template environment.

    Autoescaping is on: readings, music titles and announcements are
    operator-typed text and must never be interpreted as markup.
    """
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=select_autoescape(["html"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["nl2br"] = nl2br
    env.filters["stanzas"] = stanzas
    env.filters["music_line"] = music_line
    return env
