"""Headline facts shown next to the completeness indicator."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from .content import has_real_text
from .record import RecordValue, ValueKind, as_record


@dataclass(frozen=True, slots=True)
class ProjectSummary:
    """Headline facts about a project record.

    Attributes:
        project_title: Trimmed project title, or an empty string.
        project_acronym: Trimmed project acronym, or an empty string.
        duration_months: Planned duration when a positive number is recorded.
        start_date: Recorded start date text, or an empty string.
        work_package_count: Work packages with a real title.
        risk_count: Risks with a real title.
        objective_count: General plus specific objective entries.
    """

    project_title: str
    project_acronym: str
    duration_months: int | None
    start_date: str
    work_package_count: int
    risk_count: int
    objective_count: int


def _text(node: RecordValue) -> str:
    return node.text.strip() if node.kind is ValueKind.text else ""


def _titled_entries(node: RecordValue) -> int:
    if node.kind is not ValueKind.sequence:
        return 0
    return sum(1 for entry in node.items if has_real_text(entry.get("title")))


def _entry_count(node: RecordValue) -> int:
    return len(node.items) if node.kind is ValueKind.sequence else 0


def summarize_project(record: Any) -> ProjectSummary:
    """Build the dashboard summary for a project record.

    Args:
        record: Raw project record or RecordValue.

    Returns:
        ProjectSummary with zero/empty values for anything not recorded.
    """

    root = as_record(record)
    idea = root.get("projectIdea")

    duration = idea.get("durationMonths")
    duration_months: int | None = None
    if duration.kind is ValueKind.number and math.isfinite(duration.number) and duration.number > 0:
        duration_months = int(duration.number)

    return ProjectSummary(
        project_title=_text(idea.get("projectTitle")),
        project_acronym=_text(idea.get("projectAcronym")),
        duration_months=duration_months,
        start_date=_text(idea.get("startDate")),
        work_package_count=_titled_entries(root.get("activities")),
        risk_count=_titled_entries(root.get("risks")),
        objective_count=_entry_count(root.get("generalObjectives")) + _entry_count(root.get("specificObjectives")),
    )
