"""Static assets: fixed texts, notation images, and the parish logo.

Notation images are licensed chant settings stored in the parish's
notation directory, one file per piece, optionally specialised by setting:

    notation/
        vatican_edition_xviii__holy_holy.png
        holy_holy.png                  # used when no setting-specific file
        gospel_acclamation_lenten.tif

Every image read is isolated: a missing or unreadable file degrades to a
visible placeholder plus a warning string and never aborts a render.
"""

from __future__ import annotations

import base64
import io
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

from worship_aid.renderer import static_text

logger = logging.getLogger(__name__)

NOTATION_PIECES = (
    "kyrie",
    "gloria",
    "gospel_acclamation_alleluia",
    "gospel_acclamation_lenten",
    "holy_holy",
    "mystery_of_faith",
    "lamb_of_god",
)

_IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".tif", ".tiff", ".svg")


@dataclass
class LoadedImage:
    label: str
    data_uri: str = ""
    warning: str = ""

    @property
    def missing(self) -> bool:
        return not self.data_uri


@dataclass
class StaticAssets:
    """Fixed texts and image locations handed to the layout engines."""
    nicene_creed: str = static_text.NICENE_CREED
    apostles_creed: str = static_text.APOSTLES_CREED
    confiteor: str = static_text.CONFITEOR
    gloria: str = static_text.GLORIA
    holy_holy_holy: str = static_text.HOLY_HOLY_HOLY
    mystery_of_faith: str = static_text.MYSTERY_OF_FAITH
    lords_prayer: str = static_text.LORDS_PRAYER
    agnus_dei: str = static_text.AGNUS_DEI
    advent_wreath: str = static_text.ADVENT_WREATH_LIGHTING
    childrens_liturgy: str = static_text.CHILDRENS_LITURGY_INVITATION
    welcome_message: str = static_text.WELCOME_MESSAGE
    copyright_block: str = static_text.DEFAULT_COPYRIGHT
    rubrics: dict = field(default_factory=lambda: dict(static_text.RUBRICS))
    invitation_to_prayer: tuple = static_text.INVITATION_TO_PRAYER
    blessing_and_dismissal: tuple = static_text.BLESSING_AND_DISMISSAL
    notation_dir: Path | None = None
    logo_path: Path | None = None

    @classmethod
    def from_settings(cls, settings) -> StaticAssets:
        """Build assets from ParishSettings (logo, notation dir, copyright)."""
        assets = cls(
            notation_dir=Path(settings.notation_dir).expanduser() if settings.notation_dir else None,
            logo_path=Path(settings.logo_path).expanduser() if settings.logo_path else None,
        )
        if settings.copyright_full:
            assets.copyright_block = settings.copyright_full
        return assets

    def creed_text(self, creed_type: str | None) -> str:
        return self.apostles_creed if creed_type == "apostles" else self.nicene_creed

    def notation_image(self, piece: str, label: str, setting: str = "") -> LoadedImage:
        """Load the notation image for ``piece``, preferring ``setting``'s file.

        Raises:
            ValueError: If ``piece`` is not one of NOTATION_PIECES.
        """
        if piece not in NOTATION_PIECES:
            raise ValueError(
                f"Unknown notation piece: {piece!r}. "
                f"Valid pieces: {', '.join(NOTATION_PIECES)}"
            )
        if self.notation_dir is None:
            return LoadedImage(label, warning=f"No notation directory configured (for {label})")
        found = find_notation(self.notation_dir, piece, setting)
        if found is None:
            logger.warning("Notation image not found for %s (%s)", piece, setting or "any setting")
            return LoadedImage(
                label, warning=f"Notation image not found: {piece} (for {label})",
            )
        return load_image(found, label)

    def logo(self) -> LoadedImage:
        """Load the parish logo; an unconfigured logo is a silent placeholder."""
        if self.logo_path is None:
            return LoadedImage("Parish logo")
        return load_image(self.logo_path, "Parish logo")


def setting_slug(name: str) -> str:
    """"Agnus Dei, Vatican Edition XVIII" -> "agnus_dei_vatican_edition_xviii"."""
    return re.sub(r"[^a-z0-9]+", "_", (name or "").lower()).strip("_")


def _find_image(directory: Path, stem: str) -> Path | None:
    """Find an image file with the given stem in directory, any extension."""
    for ext in _IMAGE_EXTENSIONS:
        path = directory / f"{stem}{ext}"
        if path.exists():
            return path
    return None


def find_notation(directory: Path, piece: str, setting: str = "") -> Path | None:
    """Locate ``{setting}__{piece}`` first, then the generic ``{piece}``."""
    if setting:
        found = _find_image(directory, f"{setting_slug(setting)}__{piece}")
        if found:
            return found
    return _find_image(directory, piece)


def _image_to_data_uri(path: Path) -> str:
    """Convert an image file to a base64 data URI.

    TIFFs are converted to PNG; raster files are verified with Pillow so a
    corrupt file fails here rather than in the browser.
    """
    suffix = path.suffix.lower()

    if suffix == ".svg":
        text = path.read_text(encoding="utf-8")
        if "<svg" not in text:
            raise ValueError(f"Not an SVG document: {path}")
        data = base64.b64encode(text.encode("utf-8")).decode()
        return f"data:image/svg+xml;base64,{data}"

    from PIL import Image

    raw = path.read_bytes()
    with Image.open(io.BytesIO(raw)) as img:
        img.verify()

    if suffix in (".tif", ".tiff"):
        with Image.open(io.BytesIO(raw)) as img:
            buf = io.BytesIO()
            img.save(buf, format="PNG")
        data = base64.b64encode(buf.getvalue()).decode()
        return f"data:image/png;base64,{data}"

    mime = "image/png" if suffix == ".png" else "image/jpeg"
    data = base64.b64encode(raw).decode()
    return f"data:{mime};base64,{data}"


def load_image(path: Path | str, label: str) -> LoadedImage:
    """Read an image as a data URI, or return a placeholder with a warning."""
    path = Path(path)
    if not path.exists():
        logger.warning("Image file not found: %s (for %s)", path, label)
        return LoadedImage(label, warning=f"Image file not found: {path} (for {label})")
    try:
        return LoadedImage(label, data_uri=_image_to_data_uri(path))
    except (OSError, ValueError, SyntaxError):
        logger.warning("Failed to load image: %s (for %s)", path, label, exc_info=True)
        return LoadedImage(label, warning=f"Failed to load image: {path} (for {label})")
