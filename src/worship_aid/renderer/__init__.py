"""Booklet layout: season resolution, music display, capacity, and the two engines."""

from __future__ import annotations

from worship_aid.renderer.document import (
    RenderedDocument,
    export_filename,
    render_document,
    render_preview,
    render_print,
)

__all__ = [
    "RenderedDocument",
    "export_filename",
    "render_document",
    "render_preview",
    "render_print",
]
