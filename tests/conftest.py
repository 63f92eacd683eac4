"""Pytest fixtures shared across the planboard test suite."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import pytest


@pytest.fixture
def skeleton_project() -> dict[str, Any]:
    """Return a freshly created project record with no user-entered content."""

    return {
        "problemAnalysis": {
            "coreProblem": {"title": "", "description": ""},
            "causes": [{"id": "c1", "title": "", "description": ""}],
            "consequences": [],
        },
        "projectIdea": {
            "projectTitle": "",
            "projectAcronym": "  ",
            "mainAim": "",
            "stateOfTheArt": "",
            "proposedSolution": "",
            "policies": [],
            "readinessLevels": {
                "TRL": {"level": None, "justification": ""},
                "SRL": {"level": None, "justification": ""},
                "ORL": {"level": None, "justification": ""},
                "LRL": {"level": None, "justification": ""},
            },
            "startDate": "2026-01-01",
            "durationMonths": 24,
        },
        "generalObjectives": [{"id": "g1", "title": "", "description": "", "indicator": ""}],
        "specificObjectives": [{"id": "s1", "title": "", "description": "", "indicator": ""}],
        "projectManagement": {"description": "", "structure": {"coordinator": "", "wpLeaders": []}},
        "activities": [{"id": "wp1", "title": "", "tasks": [], "milestones": [], "deliverables": []}],
        "outputs": [{"id": "o1", "title": "", "description": ""}],
        "outcomes": [{"id": "oc1", "title": "", "description": ""}],
        "impacts": [{"id": "i1", "title": "", "description": ""}],
        "risks": [
            {
                "id": "r1",
                "category": "technical",
                "likelihood": "low",
                "impact": "low",
                "title": "",
                "description": "",
                "mitigation": "",
            }
        ],
        "kers": [{"id": "k1", "title": "", "description": "", "type": "product"}],
    }


@pytest.fixture
def filled_project() -> dict[str, Any]:
    """Return a project record where every section has real content."""

    return {
        "problemAnalysis": {
            "coreProblem": {"title": "Low uptake of heat pumps", "description": "Rural homes lag behind."},
            "causes": [{"id": "c1", "title": "High upfront cost", "description": ""}],
            "consequences": [{"id": "q1", "title": "Higher emissions", "description": ""}],
        },
        "projectIdea": {
            "projectTitle": "Warm Villages",
            "projectAcronym": "WARM",
            "mainAim": "Accelerate rural heat pump adoption.",
            "readinessLevels": {"TRL": {"level": 6, "justification": "Pilot installed."}},
            "startDate": "2026-01-01",
            "durationMonths": 36,
        },
        "generalObjectives": [{"id": "g1", "title": "Cut emissions", "description": ""}],
        "specificObjectives": [
            {"id": "s1", "title": "Install 500 pumps", "description": ""},
            {"id": "s2", "title": "Train 40 installers", "description": ""},
        ],
        "projectManagement": {"description": "Coordinator-led steering board.", "structure": {}},
        "activities": [
            {"id": "wp1", "title": "Management", "tasks": [], "milestones": [], "deliverables": []},
            {"id": "wp2", "title": "Pilots", "tasks": [{"id": "t1", "title": "Select sites"}]},
        ],
        "outputs": [{"id": "o1", "title": "Installer curriculum", "description": ""}],
        "outcomes": [{"id": "oc1", "title": "", "description": "Regional supply chain in place."}],
        "impacts": [{"id": "i1", "title": "Lower energy poverty", "description": ""}],
        "risks": [{"id": "r1", "title": "Supply delays", "description": "", "mitigation": "Dual sourcing."}],
        "kers": [{"id": "k1", "title": "Retrofit toolkit", "description": "", "type": "method"}],
    }


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    The suite is runnable by intent:
    - `unit`: pure, fast tests against the analysis package and helpers.
    - `integration`: tests touching Django views, settings, commands, or IO.

    Each test must have exactly one of these markers.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )
