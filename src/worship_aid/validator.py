"""Required-field checks run before any document is rendered."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from worship_aid.models import WeeklyRecord


@dataclass(frozen=True)
class ValidationIssue:
    path: str       # dotted field path, e.g. "readings.gospel_text"
    message: str

    def to_dict(self) -> dict:
        return {"path": self.path, "message": self.message}


_REQUIRED_READINGS = (
    ("first_reading_citation", "First reading citation is required"),
    ("first_reading_text", "First reading text is required"),
    ("psalm_citation", "Psalm citation is required"),
    ("gospel_citation", "Gospel citation is required"),
    ("gospel_text", "Gospel text is required"),
)


def _blank(value: str | None) -> bool:
    return not (value or "").strip()


def validate_record(record: WeeklyRecord) -> list[ValidationIssue]:
    """Return every missing or malformed required field, in form order.

    Enumerated choices (season, creed, entrance, ...) are never reported:
    unknown values degrade to defaults during rendering.
    """
    issues = []

    if _blank(record.occasion_name):
        issues.append(ValidationIssue("occasion_name", "Occasion name is required"))

    if _blank(record.service_date):
        issues.append(ValidationIssue("service_date", "Service date is required"))
    else:
        try:
            date.fromisoformat(record.service_date.strip())
        except ValueError:
            issues.append(ValidationIssue(
                "service_date",
                f"Service date must be YYYY-MM-DD, got {record.service_date!r}",
            ))

    readings = record.readings
    for name, message in _REQUIRED_READINGS:
        if _blank(getattr(readings, name)):
            issues.append(ValidationIssue(f"readings.{name}", message))

    if (not readings.no_second_reading
            and not _blank(readings.second_reading_text)
            and _blank(readings.second_reading_citation)):
        issues.append(ValidationIssue(
            "readings.second_reading_citation",
            "Second reading citation is required when its text is given",
        ))

    return issues
