"""Custom exception hierarchy for worship_aid."""

from __future__ import annotations


class WorshipAidError(Exception):
    """Base exception for all worship_aid errors."""


class RecordValidationError(WorshipAidError):
    """A weekly record is missing required fields; nothing was rendered."""

    def __init__(self, issues: list) -> None:
        self.issues = list(issues)
        summary = "; ".join(f"{i.path}: {i.message}" for i in self.issues)
        super().__init__(f"Validation failed: {summary}")


class UnknownSlotError(WorshipAidError, ValueError):
    """consolidate() was called with a music slot name that does not exist."""


class RenderError(WorshipAidError):
    """The print engine could not produce a PDF."""


class WorkflowError(WorshipAidError):
    """An invalid draft -> review -> approved -> exported transition."""


class DraftNotFoundError(WorshipAidError):
    """No stored weekly record has the requested id."""
