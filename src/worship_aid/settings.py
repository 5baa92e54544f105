"""Parish settings and process-level configuration.

Settings live in a JSON file (default ``~/.worship-aid/settings.json``)
merged over the defaults below.  ``WORSHIP_AID_SETTINGS`` overrides the
path and ``WORSHIP_AID_DEBUG`` turns on debug logging; both may come from a
``.env`` file.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = Path.home() / ".worship-aid" / "settings.json"


@dataclass
class ParishSettings:
    parish_name: str = "[Parish Name]"
    parish_address: str = ""
    parish_phone: str = ""
    parish_url: str = ""
    parish_prayer_url: str = ""
    nursery_blurb: str = (
        "A nursery is available for children ages 0–3 during the "
        "9:00 AM and 11:00 AM Masses."
    )
    connect_blurb: str = (
        "New to the parish? We would love to meet you! Visit the Welcome "
        "Desk in the narthex after Mass."
    )
    restrooms_blurb: str = (
        "Restrooms are located in the narthex and in the lower level of "
        "the parish hall."
    )
    prayer_blurb: str = (
        "For prayer requests, please visit our prayer ministry page or "
        "contact the parish office."
    )
    onelicense_number: str = "A-702171"
    copyright_short: str = "Music reprinted under OneLicense #A-702171. All rights reserved."
    copyright_full: str = ""        # "" = standard Lectionary/Missal/OneLicense block
    min_font_size_pt: float = 9
    body_font: str = "EB Garamond"
    header_font: str = "Cinzel"
    logo_path: str = ""
    notation_dir: str = ""
    capacity: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict | None) -> ParishSettings:
        """Merge saved values over the defaults, dropping unknown keys."""
        known = {k: v for k, v in (data or {}).items()
                 if k in cls.__dataclass_fields__ and v is not None}
        return cls(**known)

    def to_dict(self) -> dict:
        return asdict(self)

    def capacity_config(self):
        from worship_aid.renderer.capacity import CapacityConfig

        return CapacityConfig.from_dict(self.capacity)


def is_debug() -> bool:
    """Check if debug logging is enabled via environment / .env."""
    from dotenv import load_dotenv

    load_dotenv()
    return os.environ.get("WORSHIP_AID_DEBUG", "").lower() in ("1", "true")


def settings_path() -> Path:
    """Settings file location; ``WORSHIP_AID_SETTINGS`` may be set in .env."""
    from dotenv import load_dotenv

    load_dotenv()
    override = os.environ.get("WORSHIP_AID_SETTINGS", "")
    return Path(override).expanduser() if override else DEFAULT_SETTINGS_PATH


def load_settings(path: Path | None = None) -> ParishSettings:
    """Load parish settings, falling back to defaults on a missing/bad file."""
    path = Path(path) if path else settings_path()
    if not path.exists():
        return ParishSettings()
    try:
        return ParishSettings.from_dict(json.loads(path.read_text(encoding="utf-8")))
    except (OSError, ValueError, TypeError):
        logger.warning("Could not read settings from %s, using defaults", path,
                       exc_info=True)
        return ParishSettings()


def save_settings(settings: ParishSettings, path: Path | None = None) -> Path:
    """Write parish settings as JSON."""
    path = Path(path) if path else settings_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(settings.to_dict(), indent=2), encoding="utf-8")
    return path


def configure_logging(debug: bool | None = None) -> None:
    """Set up root logging for a host process (CLI, web app, tests)."""
    from dotenv import load_dotenv

    load_dotenv()

    if debug is None:
        debug = is_debug()

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )
