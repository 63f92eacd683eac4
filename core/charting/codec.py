"""JSON encoding helpers for dashboard API payloads.

Dataclass field names are emitted in camelCase to match the drawing layer.
Plain dict keys (e.g. stacked bar categories) are emitted unchanged.
"""

from __future__ import annotations

from dataclasses import fields, is_dataclass
from typing import Any

from analysis.completeness import CompletenessReport
from analysis.summary import ProjectSummary

from .render import RenderedChart


def camel_case(name: str) -> str:
    """Convert a snake_case identifier to camelCase."""

    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def to_json(value: Any) -> Any:
    """Recursively convert dataclasses, tuples and dicts into JSON-ready values."""

    if is_dataclass(value) and not isinstance(value, type):
        return {camel_case(field.name): to_json(getattr(value, field.name)) for field in fields(value)}
    if isinstance(value, dict):
        return {str(key): to_json(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json(item) for item in value]
    return value


def encode_completeness(report: CompletenessReport) -> dict[str, Any]:
    """Encode a completeness report, including its color band."""

    return {
        "policy": report.policy,
        "percentage": report.percentage,
        "band": report.band,
        "sections": [to_json(section) for section in report.sections],
    }


def encode_summary(summary: ProjectSummary) -> dict[str, Any]:
    return to_json(summary)


def encode_rendered_chart(chart: RenderedChart) -> dict[str, Any]:
    """Encode a rendered chart for the drawing layer."""

    descriptor = chart.descriptor
    return {
        "chartType": descriptor.chart_type,
        "title": descriptor.title,
        "subtitle": descriptor.subtitle,
        "source": descriptor.source,
        "supported": chart.supported,
        "error": chart.error,
        "layout": to_json(chart.layout),
    }
