"""Integration tests for the score_project management command."""

from __future__ import annotations

import json
from io import StringIO
from pathlib import Path
from typing import Any

import pytest
import yaml
from django.core.management import call_command
from django.core.management.base import CommandError

pytestmark = pytest.mark.integration


def _write_json(path: Path, payload: Any) -> str:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return str(path)


def _run(*args: str) -> str:
    out = StringIO()
    call_command("score_project", *args, stdout=out)
    return out.getvalue()


def test_scores_json_project(tmp_path: Path, filled_project: dict[str, Any]) -> None:
    """Without charts the command prints the completeness report."""

    project = _write_json(tmp_path / "project.json", filled_project)
    report = json.loads(_run(project, "--policy", "binary"))
    assert report["percentage"] == 100
    assert report["band"] == "success"


def test_scores_yaml_project_with_configured_policy(
    tmp_path: Path, settings, skeleton_project: dict[str, Any]
) -> None:
    """YAML files work and the default policy comes from settings."""

    settings.PLANBOARD_COMPLETENESS_POLICY = "fractional"
    path = tmp_path / "project.yaml"
    path.write_text(yaml.safe_dump(skeleton_project), encoding="utf-8")

    report = json.loads(_run(str(path)))
    assert report["policy"] == "fractional"
    assert report["percentage"] == 12


def test_both_policies_report_disagreement(tmp_path: Path, skeleton_project: dict[str, Any]) -> None:
    """`--policy both` prints one line per policy and flags disagreement."""

    project = _write_json(tmp_path / "project.json", skeleton_project)
    output = _run(project, "--policy", "both")
    assert "[binary] 0% (11 sections counted)" in output
    assert "[fractional] 12% (11 sections counted)" in output
    assert "Policies disagree for this record." in output


def test_both_policies_agree(tmp_path: Path) -> None:
    """No disagreement line when both policies match."""

    project = _write_json(tmp_path / "project.json", {"outputs": [{"title": "Toolkit"}]})
    output = _run(project, "--policy", "both")
    assert "[binary] 100%" in output
    assert "[fractional] 100%" in output
    assert "disagree" not in output


def test_charts_are_laid_out(tmp_path: Path, filled_project: dict[str, Any]) -> None:
    """With a charts file the full dashboard payload is printed."""

    project = _write_json(tmp_path / "project.json", filled_project)
    charts = _write_json(
        tmp_path / "charts.json",
        [{"chartType": "gauge", "title": "Done", "dataPoints": [{"label": "Done", "value": 75, "unit": "%"}]}],
    )
    payload = json.loads(_run(project, "--policy", "binary", "--charts", charts, "--height", "200"))
    assert set(payload) == {"completeness", "summary", "charts"}
    gauge = payload["charts"][0]["layout"]
    assert gauge["kind"] == "gauge"
    assert gauge["percentage"] == 75
    assert gauge["outerRadius"] == 90


def test_both_with_charts_is_rejected(tmp_path: Path) -> None:
    """Chart layout needs a single policy."""

    project = _write_json(tmp_path / "project.json", {})
    charts = _write_json(tmp_path / "charts.json", [])
    with pytest.raises(CommandError):
        _run(project, "--policy", "both", "--charts", charts)


def test_missing_and_malformed_files(tmp_path: Path) -> None:
    """Unreadable or unparsable inputs surface as CommandError."""

    with pytest.raises(CommandError):
        _run(str(tmp_path / "missing.json"))

    broken = tmp_path / "broken.yaml"
    broken.write_text("outputs: [unclosed", encoding="utf-8")
    with pytest.raises(CommandError):
        _run(str(broken))


def test_invalid_charts_file(tmp_path: Path) -> None:
    """A charts file that is not a list is rejected."""

    project = _write_json(tmp_path / "project.json", {})
    charts = _write_json(tmp_path / "charts.json", {"chartType": "donut"})
    with pytest.raises(CommandError):
        _run(project, "--policy", "binary", "--charts", charts)


def test_yaml_dates_score_like_json_strings(tmp_path: Path) -> None:
    """Unquoted YAML dates are read as text, matching the JSON form."""

    yaml_path = tmp_path / "project.yaml"
    yaml_path.write_text(
        "projectIdea:\n  projectTitle: X\n  mainAim: ''\n  submittedOn: 2026-02-15\n  startDate: 2026-03-01\n",
        encoding="utf-8",
    )
    json_path = _write_json(
        tmp_path / "project.json",
        {"projectIdea": {"projectTitle": "X", "mainAim": "", "submittedOn": "2026-02-15", "startDate": "2026-03-01"}},
    )
    charts = _write_json(tmp_path / "charts.json", [])

    from_yaml = json.loads(_run(str(yaml_path), "--policy", "fractional", "--charts", charts))
    from_json = json.loads(_run(json_path, "--policy", "fractional", "--charts", charts))
    assert from_yaml["summary"]["startDate"] == "2026-03-01"
    # projectTitle and submittedOn filled, mainAim empty.
    assert from_yaml["completeness"]["percentage"] == 67
    assert from_yaml["completeness"] == from_json["completeness"]


def test_both_with_height_is_rejected(tmp_path: Path) -> None:
    """A chart height has no meaning without a single policy."""

    project = _write_json(tmp_path / "project.json", {})
    with pytest.raises(CommandError):
        _run(project, "--policy", "both", "--height", "200")
