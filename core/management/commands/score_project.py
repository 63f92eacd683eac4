"""Score a project record file and optionally lay out its charts.

Project and chart files may be JSON or YAML; both are read with PyYAML's
safe loader since JSON documents are valid YAML.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from django.core.management.base import BaseCommand, CommandError

from analysis.completeness import STRATEGIES, score_all_policies, score_completeness
from core.charting.codec import encode_completeness
from core.dashboard_config import load_dashboard_settings
from core.services import DashboardRequestError, build_dashboard_payload, decode_chart_descriptors, resolve_height


def _load_document(path: str) -> Any:
    """Load a JSON or YAML document from `path`.

    Raises:
        CommandError: When the file cannot be read or parsed.
    """

    try:
        raw = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise CommandError(f"Could not read {path}: {exc}") from exc
    try:
        return yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise CommandError(f"Could not parse {path}: {exc}") from exc


class Command(BaseCommand):
    """Print completeness scores (and chart layouts) for a project record."""

    help = "Score a JSON/YAML project record under one or both completeness policies."

    def add_arguments(self, parser) -> None:
        """Add command arguments."""

        parser.add_argument("project", help="Path to a JSON or YAML project record.")
        parser.add_argument(
            "--policy",
            choices=[*sorted(STRATEGIES), "both"],
            default=None,
            help="Completeness policy (defaults to PLANBOARD_COMPLETENESS_POLICY).",
        )
        parser.add_argument(
            "--charts",
            default=None,
            help="Optional path to a JSON/YAML list of chart descriptors to lay out.",
        )
        parser.add_argument(
            "--height",
            type=int,
            default=None,
            help="Chart height in pixels (defaults to PLANBOARD_CHART_HEIGHT).",
        )

    def handle(self, *args, **options) -> str | None:
        """Run the command."""

        config = load_dashboard_settings()
        policy: str = options["policy"] or config.policy
        charts_path: str | None = options["charts"]

        if policy == "both" and charts_path:
            raise CommandError("--charts requires a single --policy, not 'both'.")
        if policy == "both" and options["height"] is not None:
            raise CommandError("--height requires a single --policy, not 'both'.")

        project = _load_document(options["project"])

        if policy == "both":
            reports = score_all_policies(project)
            for name, report in reports.items():
                self.stdout.write(f"[{name}] {report.percentage}% ({report.counted_sections} sections counted)")
            percentages = {report.percentage for report in reports.values()}
            if len(percentages) > 1:
                self.stdout.write("Policies disagree for this record.")
            return None

        if not charts_path:
            report = score_completeness(project, policy=policy)
            self.stdout.write(json.dumps(encode_completeness(report), indent=2))
            return None

        try:
            height = resolve_height(options["height"], config=config)
            charts = decode_chart_descriptors(_load_document(charts_path))
        except DashboardRequestError as exc:
            raise CommandError(str(exc)) from exc

        payload = build_dashboard_payload(project, charts=charts, config=config, policy=policy, height=height)
        self.stdout.write(json.dumps(payload, indent=2))
        return None
