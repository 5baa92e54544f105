"""Service facade for editors and hosts (CLI, web app, tests).

Drafts and parish settings are reached through injected repositories, so
the core never touches global state.  Every public method returns a dict
with at least {"success": bool}; failures carry "error" and an
"error_type" of "validation", "workflow", "not_found" or "internal".
"""

from __future__ import annotations

import copy
import json
import logging
import re
import uuid
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional, Protocol

from worship_aid.exceptions import (
    DraftNotFoundError,
    RecordValidationError,
    WorkflowError,
)
from worship_aid.models import (
    Season,
    WeeklyRecord,
    WorkflowStatus,
    record_from_dict,
    record_to_dict,
)
from worship_aid.renderer import export_filename, render_preview, render_print
from worship_aid.renderer.assets import StaticAssets
from worship_aid.renderer.capacity import detect_overflows
from worship_aid.renderer.pdf_engine import write_pdf
from worship_aid.renderer.season import (
    change_season,
    detect_season,
    get_season_defaults,
    get_season_options,
)
from worship_aid.settings import ParishSettings, load_settings, save_settings
from worship_aid.validator import validate_record

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = Path.home() / ".worship-aid"

# Keys an editor may not set through update_draft()
_WORKFLOW_FIELDS = frozenset((
    "id", "status", "created_at", "updated_at", "created_by",
    "last_edited_by", "submitted_by", "submitted_at",
    "approved_by", "approved_at", "exported_at",
))
_NESTED_FIELDS = frozenset((
    "readings", "seasonal", "childrens_liturgy",
    "music_sat_5pm", "music_sun_9am", "music_sun_11am",
))

_DRAFT_ID_RE = re.compile(r"[A-Za-z0-9_-]+")


# ── Repositories ──────────────────────────────────────────────────────

class DraftRepo(Protocol):
    def get(self, draft_id: str) -> WeeklyRecord: ...
    def save(self, record: WeeklyRecord) -> None: ...
    def delete(self, draft_id: str) -> None: ...
    def list(self) -> list[WeeklyRecord]: ...


class SettingsRepo(Protocol):
    def load(self) -> ParishSettings: ...
    def save(self, settings: ParishSettings) -> None: ...


class MemoryDraftRepo:
    """In-process draft storage."""

    def __init__(self) -> None:
        self._records: dict[str, dict] = {}

    def get(self, draft_id: str) -> WeeklyRecord:
        if draft_id not in self._records:
            raise DraftNotFoundError(f"No draft with id {draft_id!r}")
        return record_from_dict(self._records[draft_id])

    def save(self, record: WeeklyRecord) -> None:
        self._records[record.id] = record_to_dict(record)

    def delete(self, draft_id: str) -> None:
        if self._records.pop(draft_id, None) is None:
            raise DraftNotFoundError(f"No draft with id {draft_id!r}")

    def list(self) -> list[WeeklyRecord]:
        return [record_from_dict(data) for data in self._records.values()]


class JsonDraftRepo:
    """One JSON file per draft: ``<directory>/<id>.json``."""

    def __init__(self, directory: Path | str | None = None) -> None:
        self.directory = Path(directory) if directory else DEFAULT_DATA_DIR / "drafts"

    def _path(self, draft_id: str) -> Path:
        if not _DRAFT_ID_RE.fullmatch(draft_id or ""):
            raise DraftNotFoundError(f"Invalid draft id {draft_id!r}")
        return self.directory / f"{draft_id}.json"

    def get(self, draft_id: str) -> WeeklyRecord:
        path = self._path(draft_id)
        if not path.exists():
            raise DraftNotFoundError(f"No draft with id {draft_id!r}")
        return record_from_dict(json.loads(path.read_text(encoding="utf-8")))

    def save(self, record: WeeklyRecord) -> None:
        path = self._path(record.id)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(record_to_dict(record), indent=2), encoding="utf-8")

    def delete(self, draft_id: str) -> None:
        path = self._path(draft_id)
        if not path.exists():
            raise DraftNotFoundError(f"No draft with id {draft_id!r}")
        path.unlink()

    def list(self) -> list[WeeklyRecord]:
        if not self.directory.is_dir():
            return []
        records = []
        for path in sorted(self.directory.glob("*.json")):
            try:
                records.append(record_from_dict(json.loads(path.read_text(encoding="utf-8"))))
            except (OSError, ValueError):
                logger.warning("Skipping unreadable draft %s", path, exc_info=True)
        return records


class JsonSettingsRepo:
    """Parish settings in a single JSON file (see ``worship_aid.settings``)."""

    def __init__(self, path: Path | str | None = None) -> None:
        self.path = Path(path) if path else None

    def load(self) -> ParishSettings:
        return load_settings(self.path)

    def save(self, settings: ParishSettings) -> None:
        save_settings(settings, self.path)


# ── Service ───────────────────────────────────────────────────────────

def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def _merge_form_data(record: WeeklyRecord, data: dict) -> WeeklyRecord:
    """Overlay editor form data on a record, section by section."""
    merged = record_to_dict(record)
    for key, value in (data or {}).items():
        if key in _WORKFLOW_FIELDS or key == "season":
            continue
        if key in _NESTED_FIELDS and isinstance(value, dict):
            merged[key] = {**(merged.get(key) or {}), **value}
        else:
            merged[key] = value
    return record_from_dict(merged)


class WorshipAidService:
    """Draft lifecycle: create, edit, review, approve, export."""

    def __init__(
        self,
        drafts: DraftRepo,
        settings_repo: SettingsRepo,
        assets: Optional[StaticAssets] = None,
        *,
        output_dir: Path | str | None = None,
        require_approval: bool = False,
        clock: Callable[[], str] = _utc_now,
    ) -> None:
        self._drafts = drafts
        self._settings_repo = settings_repo
        self._assets = assets
        self._output_dir = Path(output_dir) if output_dir else DEFAULT_DATA_DIR / "exports"
        self._require_approval = require_approval
        self._clock = clock

    @staticmethod
    def _classify_error(error: Exception) -> str:
        """Classify an exception for the error_type field."""
        if isinstance(error, DraftNotFoundError):
            return "not_found"
        if isinstance(error, WorkflowError):
            return "workflow"
        if isinstance(error, (RecordValidationError, ValueError, TypeError)):
            return "validation"
        return "internal"

    def _failure(self, action: str, error: Exception) -> dict:
        error_type = self._classify_error(error)
        if error_type == "internal":
            logger.exception("%s failed", action)
        else:
            logger.warning("%s failed: %s", action, error)
        result = {"success": False, "error": str(error), "error_type": error_type}
        if isinstance(error, RecordValidationError):
            result["issues"] = [issue.to_dict() for issue in error.issues]
        return result

    def _settings(self) -> ParishSettings:
        return self._settings_repo.load()

    def _assets_for(self, settings: ParishSettings) -> StaticAssets:
        return self._assets or StaticAssets.from_settings(settings)

    def _touch(self, record: WeeklyRecord, user: str) -> None:
        record.updated_at = self._clock()
        if user:
            record.last_edited_by = user

    def _render_kwargs(self) -> dict:
        settings = self._settings()
        return {
            "assets": self._assets_for(settings),
            "settings": settings,
            "capacity": settings.capacity_config(),
        }

    # ── Drafts ────────────────────────────────────────────────────────

    def create_draft(self, data: dict | None = None, user: str = "") -> dict:
        """Create a draft from form data.

        Without an explicit season the season is guessed from the
        occasion name.
        """
        try:
            data = dict(data or {})
            for key in _WORKFLOW_FIELDS:
                data.pop(key, None)
            if not data.get("season") and data.get("occasion_name"):
                data["season"] = detect_season(data["occasion_name"]).value
            record = record_from_dict(data)
            now = self._clock()
            record.created_at = record.updated_at = now
            record.created_by = record.last_edited_by = user
            self._drafts.save(record)
            logger.info("Created draft %s (%s)", record.id, record.occasion_name)
            return {"success": True, "draft": record_to_dict(record)}
        except Exception as e:
            return self._failure("create_draft", e)

    def get_draft(self, draft_id: str) -> dict:
        try:
            return {"success": True, "draft": record_to_dict(self._drafts.get(draft_id))}
        except Exception as e:
            return self._failure("get_draft", e)

    def duplicate_draft(self, draft_id: str, user: str = "") -> dict:
        """Copy a draft as a fresh draft named "<occasion> (copy)"."""
        try:
            original = self._drafts.get(draft_id)
            record = copy.deepcopy(original)
            record.id = uuid.uuid4().hex
            record.occasion_name = f"{original.occasion_name} (copy)"
            record.status = WorkflowStatus.DRAFT
            record.created_at = record.updated_at = self._clock()
            record.created_by = record.last_edited_by = user
            record.submitted_by = record.approved_by = ""
            record.submitted_at = record.approved_at = record.exported_at = None
            self._drafts.save(record)
            return {"success": True, "draft": record_to_dict(record)}
        except Exception as e:
            return self._failure("duplicate_draft", e)

    def update_draft(self, draft_id: str, data: dict, user: str = "") -> dict:
        """Apply form edits.

        A "season" key goes through change_season().  Editing an approved
        or exported booklet returns it to draft.
        """
        try:
            existing = self._drafts.get(draft_id)
            record = existing
            new_season = (data or {}).get("season")
            if new_season and Season.coerce(new_season) != existing.season:
                record = change_season(existing, new_season)
            # Values sent alongside a season change are explicit choices
            record = _merge_form_data(record, data)

            if existing.status in (WorkflowStatus.APPROVED, WorkflowStatus.EXPORTED):
                logger.info("Draft %s edited after approval, returning to draft", draft_id)
                record.status = WorkflowStatus.DRAFT
                record.approved_by = ""
                record.approved_at = None

            self._touch(record, user)
            self._drafts.save(record)
            return {"success": True, "draft": record_to_dict(record)}
        except Exception as e:
            return self._failure("update_draft", e)

    def change_season(self, draft_id: str, season: str, user: str = "") -> dict:
        """Switch season, re-deriving fields that still hold the old defaults."""
        try:
            record = change_season(self._drafts.get(draft_id), season)
            self._touch(record, user)
            self._drafts.save(record)
            return {"success": True, "draft": record_to_dict(record)}
        except Exception as e:
            return self._failure("change_season", e)

    def list_drafts(self) -> dict:
        """Draft summaries, most recently updated first."""
        try:
            records = sorted(self._drafts.list(),
                             key=lambda r: r.updated_at or "", reverse=True)
            return {"success": True, "drafts": [
                {
                    "id": r.id,
                    "occasion_name": r.occasion_name,
                    "service_date": r.service_date,
                    "season": r.season.value,
                    "status": r.status.value,
                    "last_edited_by": r.last_edited_by,
                    "submitted_by": r.submitted_by,
                    "approved_by": r.approved_by,
                    "approved_at": r.approved_at,
                    "updated_at": r.updated_at,
                    "created_at": r.created_at,
                }
                for r in records
            ]}
        except Exception as e:
            return self._failure("list_drafts", e)

    def delete_draft(self, draft_id: str) -> dict:
        try:
            self._drafts.delete(draft_id)
            logger.info("Deleted draft %s", draft_id)
            return {"success": True}
        except Exception as e:
            return self._failure("delete_draft", e)

    # ── Checks and preview ────────────────────────────────────────────

    def validate(self, draft_id: str) -> dict:
        """Required-field issues plus advisory overflow findings."""
        try:
            record = self._drafts.get(draft_id)
            issues = validate_record(record)
            findings = detect_overflows(record, self._settings().capacity_config())
            return {
                "success": True,
                "valid": not issues,
                "issues": [i.to_dict() for i in issues],
                "findings": [f.to_dict() for f in findings],
            }
        except Exception as e:
            return self._failure("validate", e)

    def preview(self, draft_id: str) -> dict:
        try:
            doc = render_preview(self._drafts.get(draft_id), **self._render_kwargs())
            return {"success": True, "html": doc.html, **doc.to_dict()}
        except Exception as e:
            return self._failure("preview", e)

    # ── Workflow ──────────────────────────────────────────────────────

    def submit_for_review(self, draft_id: str, user: str) -> dict:
        """draft -> review.  The record must pass validation."""
        try:
            record = self._drafts.get(draft_id)
            if record.status != WorkflowStatus.DRAFT:
                raise WorkflowError(
                    f"Only drafts can be submitted for review (status: {record.status.value})"
                )
            issues = validate_record(record)
            if issues:
                raise RecordValidationError(issues)
            record.status = WorkflowStatus.REVIEW
            record.submitted_by = user
            record.submitted_at = self._clock()
            self._touch(record, user)
            self._drafts.save(record)
            return {"success": True, "draft": record_to_dict(record)}
        except Exception as e:
            return self._failure("submit_for_review", e)

    def approve(self, draft_id: str, user: str) -> dict:
        """review -> approved.  The approver must not be the submitter."""
        try:
            record = self._drafts.get(draft_id)
            if record.status != WorkflowStatus.REVIEW:
                raise WorkflowError(
                    f"Only booklets in review can be approved (status: {record.status.value})"
                )
            if not user:
                raise WorkflowError("An approver name is required")
            if user == record.submitted_by:
                raise WorkflowError("A booklet cannot be approved by its submitter")
            record.status = WorkflowStatus.APPROVED
            record.approved_by = user
            record.approved_at = self._clock()
            record.updated_at = record.approved_at
            self._drafts.save(record)
            return {"success": True, "draft": record_to_dict(record)}
        except Exception as e:
            return self._failure("approve", e)

    def export(
        self,
        draft_id: str,
        user: str = "",
        output_dir: Path | str | None = None,
        require_approval: bool | None = None,
    ) -> dict:
        """Render the print PDF and write ``YYYY_MM_DD__Feast_Name.pdf``.

        With the approval gate on, only approved (or already exported)
        booklets can be exported.
        """
        try:
            record = self._drafts.get(draft_id)
            gate = self._require_approval if require_approval is None else require_approval
            allowed = {WorkflowStatus.APPROVED, WorkflowStatus.EXPORTED}
            if not gate:
                allowed |= {WorkflowStatus.DRAFT, WorkflowStatus.REVIEW}
            if record.status not in allowed:
                raise WorkflowError(
                    f"Booklet must be approved before export (status: {record.status.value})"
                )

            doc = render_print(record, **self._render_kwargs())
            directory = Path(output_dir) if output_dir else self._output_dir
            path = write_pdf(doc.pdf_bytes, directory / export_filename(record))

            record.status = WorkflowStatus.EXPORTED
            record.exported_at = self._clock()
            self._touch(record, user)
            self._drafts.save(record)
            return {"success": True, "path": str(path), **doc.to_dict()}
        except Exception as e:
            return self._failure("export", e)

    # ── Seasons and settings ──────────────────────────────────────────

    def get_season_defaults(self, season: str) -> dict:
        try:
            coerced = Season.coerce(season)
            return {
                "success": True,
                "season": coerced.value,
                "label": coerced.label,
                "defaults": asdict(get_season_defaults(coerced)),
            }
        except Exception as e:
            return self._failure("get_season_defaults", e)

    def get_season_options(self) -> dict:
        return {"success": True, "seasons": get_season_options()}

    def get_settings(self) -> dict:
        try:
            return {"success": True, "settings": self._settings().to_dict()}
        except Exception as e:
            return self._failure("get_settings", e)

    def save_settings(self, data: dict) -> dict:
        """Merge ``data`` over the current settings and persist them."""
        try:
            merged = {**self._settings().to_dict(), **(data or {})}
            settings = ParishSettings.from_dict(merged)
            self._settings_repo.save(settings)
            return {"success": True, "settings": settings.to_dict()}
        except Exception as e:
            return self._failure("save_settings", e)
