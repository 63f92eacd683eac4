"""Service-layer functions for the core app.

Services in `core` validate request-level inputs and coordinate the pure
analysis modules that score project records and lay out charts.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from analysis.chart_descriptor import ChartDescriptor, ChartDescriptorError, decode_chart_descriptor
from analysis.completeness import STRATEGIES, score_completeness
from analysis.summary import summarize_project
from core.charting.codec import encode_completeness, encode_rendered_chart, encode_summary
from core.charting.render import MAX_CHARTS_PER_REQUEST, render_charts
from core.dashboard_config import DashboardSettings

logger = logging.getLogger(__name__)

MAX_CHART_HEIGHT = 2000


class DashboardRequestError(ValueError):
    """Raised when a dashboard request payload cannot be processed."""


def resolve_policy(raw: Any, *, config: DashboardSettings) -> str:
    """Return the requested policy name, falling back to the configured default.

    Raises:
        DashboardRequestError: When a policy is given but unknown.
    """

    if raw is None or raw == "":
        return config.policy
    policy = str(raw).strip().lower()
    if policy not in STRATEGIES:
        known = ", ".join(sorted(STRATEGIES))
        raise DashboardRequestError(f"Unknown policy {raw!r}; expected one of: {known}.")
    return policy


def resolve_height(raw: Any, *, config: DashboardSettings) -> int:
    """Return the requested chart height, falling back to the configured default.

    Raises:
        DashboardRequestError: When the height is not an integer in (0, MAX_CHART_HEIGHT].
    """

    if raw is None:
        return config.chart_height
    if isinstance(raw, bool) or not isinstance(raw, (int, float)) or not float(raw).is_integer():
        raise DashboardRequestError(f"height must be an integer, got {raw!r}.")
    height = int(raw)
    if height <= 0 or height > MAX_CHART_HEIGHT:
        raise DashboardRequestError(f"height must be between 1 and {MAX_CHART_HEIGHT}.")
    return height


def decode_chart_descriptors(raw: Any) -> tuple[ChartDescriptor, ...]:
    """Decode the `charts` list of a dashboard request.

    Raises:
        DashboardRequestError: When `raw` is not a list, holds a non-object,
            or exceeds MAX_CHARTS_PER_REQUEST entries.
    """

    if raw is None:
        return ()
    if not isinstance(raw, Sequence) or isinstance(raw, (str, bytes)):
        raise DashboardRequestError("charts must be a list of chart descriptors.")
    if len(raw) > MAX_CHARTS_PER_REQUEST:
        raise DashboardRequestError(f"Too many charts in one request (>{MAX_CHARTS_PER_REQUEST}).")
    try:
        return tuple(decode_chart_descriptor(item) for item in raw)
    except ChartDescriptorError as exc:
        raise DashboardRequestError(str(exc)) from exc


def build_completeness_payload(project: Any, *, policy: str) -> dict[str, Any]:
    """Score a project record and return the encoded report."""

    return encode_completeness(score_completeness(project, policy=policy))


def build_dashboard_payload(
    project: Any,
    *,
    charts: Sequence[ChartDescriptor],
    config: DashboardSettings,
    policy: str,
    height: int,
) -> dict[str, Any]:
    """Build the full dashboard payload for a project record.

    Args:
        project: Raw project record; non-mapping values score 0.
        charts: Decoded chart descriptors in display order.
        config: Resolved dashboard settings (palette).
        policy: Completeness policy name.
        height: Chart height in pixels.

    Returns:
        JSON-ready dict with `completeness`, `summary` and `charts` entries.
    """

    if project is not None and not isinstance(project, Mapping):
        logger.warning("Project record is a %s, not an object; scoring as empty", type(project).__name__)

    rendered = render_charts(descriptors=charts, height=height, palette=config.palette)
    return {
        "completeness": build_completeness_payload(project, policy=policy),
        "summary": encode_summary(summarize_project(project)),
        "charts": [encode_rendered_chart(chart) for chart in rendered],
    }
