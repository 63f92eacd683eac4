"""Section completeness scoring for project records.

Two scoring policies are in use for the same dashboard metric:

- `binary`: each present section is either filled or empty, decided by a
  section-specific predicate built on `analysis.content`.
- `fractional`: each present section contributes a fill ratio computed per
  entry (sequences) or per field (mappings).

The policies disagree on some inputs (notably empty sequences and numeric
fields). Both are kept as named strategies and callers pick one explicitly.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Final, Literal

from .content import has_content, has_real_text
from .record import RecordValue, ValueKind, as_record

CompletenessPolicy = Literal["binary", "fractional"]
CompletenessBand = Literal["success", "warning", "error"]

SECTION_KEYS: Final[tuple[str, ...]] = (
    "problemAnalysis",
    "projectIdea",
    "generalObjectives",
    "specificObjectives",
    "projectManagement",
    "activities",
    "outputs",
    "outcomes",
    "impacts",
    "risks",
    "kers",
)

FIELD_SKIP_KEYS: Final[frozenset[str]] = frozenset(
    {
        "startDate",
        "durationMonths",
        "_calculatedEndDate",
        "_projectTimeframe",
        "id",
        "project_id",
        "created_at",
        "updated_at",
    }
)

READINESS_LEVEL_KEYS: Final[tuple[str, ...]] = ("TRL", "SRL", "ORL", "LRL")

BAND_SUCCESS_MIN: Final[int] = 80
BAND_WARNING_MIN: Final[int] = 40


@dataclass(frozen=True, slots=True)
class SectionScore:
    """Score contributed by a single top-level section.

    Attributes:
        key: Section key in the project record.
        present: Whether the section exists and is not null.
        counted: Whether the section contributes to the denominator.
        ratio: Fill ratio in [0, 1]; 0 for absent or uncounted sections.
    """

    key: str
    present: bool
    counted: bool
    ratio: float


@dataclass(frozen=True, slots=True)
class CompletenessReport:
    """Overall completeness for a project record under one policy."""

    policy: CompletenessPolicy
    percentage: int
    sections: tuple[SectionScore, ...]

    @property
    def counted_sections(self) -> int:
        return sum(1 for section in self.sections if section.counted)

    @property
    def band(self) -> CompletenessBand:
        return completeness_band(self.percentage)


SectionScorer = Callable[[str, RecordValue], float | None]


@dataclass(frozen=True, slots=True)
class ScoringStrategy:
    """A named completeness policy.

    Args:
        name: Stable policy identifier used by settings and the API.
        score_section: Callable returning a fill ratio for a present section,
            or None when the section must be left out of the denominator.
    """

    name: CompletenessPolicy
    score_section: SectionScorer


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up, as dashboards display it."""

    return int(math.floor(value + 0.5))


def completeness_band(percentage: int) -> CompletenessBand:
    """Map a completeness percentage to the progress indicator color band."""

    if percentage >= BAND_SUCCESS_MIN:
        return "success"
    if percentage >= BAND_WARNING_MIN:
        return "warning"
    return "error"


# Binary policy


def _sequence_has_content(node: RecordValue) -> bool:
    return node.kind is ValueKind.sequence and has_content(node)


def _problem_analysis_filled(node: RecordValue) -> bool:
    return (
        has_real_text(node.path("coreProblem", "title"))
        or has_real_text(node.path("coreProblem", "description"))
        or _sequence_has_content(node.get("causes"))
        or _sequence_has_content(node.get("consequences"))
    )


def _readiness_level_set(node: RecordValue) -> bool:
    levels = node.get("readinessLevels")
    for key in READINESS_LEVEL_KEYS:
        level = levels.path(key, "level")
        if level.kind is ValueKind.number and level.number > 0:
            return True
    return False


def _project_idea_filled(node: RecordValue) -> bool:
    text_fields = ("projectTitle", "projectAcronym", "mainAim", "stateOfTheArt", "proposedSolution")
    return (
        any(has_real_text(node.get(key)) for key in text_fields)
        or _sequence_has_content(node.get("policies"))
        or _readiness_level_set(node)
    )


def _project_management_filled(node: RecordValue) -> bool:
    return has_real_text(node.get("description")) or has_content(node.get("structure"))


def _activities_filled(node: RecordValue) -> bool:
    if node.kind is not ValueKind.sequence:
        return False
    return any(
        has_real_text(work_package.get("title"))
        or _sequence_has_content(work_package.get("tasks"))
        or _sequence_has_content(work_package.get("milestones"))
        or _sequence_has_content(work_package.get("deliverables"))
        for work_package in node.items
    )


def _risks_filled(node: RecordValue) -> bool:
    if node.kind is not ValueKind.sequence:
        return False
    return any(
        has_real_text(risk.get("title")) or has_real_text(risk.get("description")) or has_real_text(risk.get("mitigation"))
        for risk in node.items
    )


SECTION_CHECKS: Final[dict[str, Callable[[RecordValue], bool]]] = {
    "problemAnalysis": _problem_analysis_filled,
    "projectIdea": _project_idea_filled,
    "generalObjectives": _sequence_has_content,
    "specificObjectives": _sequence_has_content,
    "projectManagement": _project_management_filled,
    "activities": _activities_filled,
    "outputs": _sequence_has_content,
    "outcomes": _sequence_has_content,
    "impacts": _sequence_has_content,
    "risks": _risks_filled,
    "kers": _sequence_has_content,
}


def _score_binary(key: str, node: RecordValue) -> float | None:
    return 1.0 if SECTION_CHECKS[key](node) else 0.0


# Fractional policy


def _entry_has_title_or_description(entry: RecordValue) -> bool:
    return has_real_text(entry.get("title")) or has_real_text(entry.get("description"))


def _field_is_filled(value: RecordValue) -> bool:
    kind = value.kind
    if kind is ValueKind.text:
        return len(value.text.strip()) > 0
    if kind is ValueKind.sequence:
        return len(value.items) > 0
    if kind is ValueKind.number:
        return True
    if kind is ValueKind.mapping:
        return any(child.kind is not ValueKind.null for _, child in value.fields)
    if kind in (ValueKind.boolean, ValueKind.null):
        return False
    raise AssertionError(f"Unhandled record value kind: {kind!r}")


def _score_fractional(key: str, node: RecordValue) -> float | None:
    if node.kind is ValueKind.sequence:
        if not node.items:
            return None
        filled = sum(1 for entry in node.items if _entry_has_title_or_description(entry))
        return filled / len(node.items)
    if node.kind is ValueKind.mapping:
        eligible = [value for field_key, value in node.fields if field_key not in FIELD_SKIP_KEYS]
        if not eligible:
            return 1.0
        filled = sum(1 for value in eligible if _field_is_filled(value))
        return filled / len(eligible)
    return 0.0


STRATEGIES: Final[dict[str, ScoringStrategy]] = {
    "binary": ScoringStrategy(name="binary", score_section=_score_binary),
    "fractional": ScoringStrategy(name="fractional", score_section=_score_fractional),
}

DEFAULT_POLICY: Final[CompletenessPolicy] = "binary"


def get_strategy(policy: str) -> ScoringStrategy:
    """Return the scoring strategy registered under `policy`.

    Raises:
        ValueError: When `policy` is not a known policy name.
    """

    strategy = STRATEGIES.get(policy)
    if strategy is None:
        known = ", ".join(sorted(STRATEGIES))
        raise ValueError(f"Unknown completeness policy {policy!r}; expected one of: {known}.")
    return strategy


def score_completeness(record: Any, *, policy: str = DEFAULT_POLICY) -> CompletenessReport:
    """Score a project record under the selected policy.

    Args:
        record: Raw project record (mapping of section key to data) or a
            RecordValue. Anything that is not a mapping scores 0.
        policy: Policy name, `binary` or `fractional`.

    Returns:
        CompletenessReport with the rounded percentage and per-section scores.

    Raises:
        ValueError: When `policy` is unknown.
    """

    strategy = get_strategy(policy)
    root = as_record(record)

    sections: list[SectionScore] = []
    filled = 0.0
    total = 0
    for key in SECTION_KEYS:
        node = root.get(key)
        if node.kind is ValueKind.null:
            sections.append(SectionScore(key=key, present=False, counted=False, ratio=0.0))
            continue
        ratio = strategy.score_section(key, node)
        if ratio is None:
            sections.append(SectionScore(key=key, present=True, counted=False, ratio=0.0))
            continue
        total += 1
        filled += ratio
        sections.append(SectionScore(key=key, present=True, counted=True, ratio=ratio))

    percentage = 0 if total == 0 else round_half_up((filled / total) * 100)
    return CompletenessReport(policy=strategy.name, percentage=percentage, sections=tuple(sections))


def completeness_percentage(record: Any, *, policy: str = DEFAULT_POLICY) -> int:
    """Return only the overall completeness percentage for `record`."""

    return score_completeness(record, policy=policy).percentage


def score_all_policies(record: Any) -> dict[str, CompletenessReport]:
    """Score `record` under every registered policy, keyed by policy name."""

    root = as_record(record)
    return {name: score_completeness(root, policy=name) for name in STRATEGIES}
