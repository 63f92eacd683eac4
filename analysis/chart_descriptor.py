"""DTO schema for chart descriptors consumed by the geometry engine.

Descriptors are produced upstream by an extraction step that reads a project
record and picks a chart type plus data points. This module only models and
decodes them; it never validates that a chart type is supported.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Final, Literal

ChartType = Literal[
    "comparison_bar",
    "donut",
    "line",
    "radar",
    "gauge",
    "stacked_bar",
    "progress",
    "other",
]

DEFAULT_CATEGORY: Final[str] = "default"


class ChartDescriptorError(ValueError):
    """Raised when a chart descriptor payload is not a mapping at all."""


@dataclass(frozen=True, slots=True)
class DataPoint:
    """A single labelled value in a chart descriptor.

    Args:
        label: Display label.
        value: Numeric value; malformed inputs decode to 0.
        unit: Optional unit suffix (e.g. `%`).
        category: Optional series category used by stacked bars.
        year: Optional year used to order line charts.
    """

    label: str
    value: float
    unit: str | None = None
    category: str | None = None
    year: int | None = None

    @property
    def category_or_default(self) -> str:
        return self.category or DEFAULT_CATEGORY


@dataclass(frozen=True, slots=True)
class ChartDescriptor:
    """Normalized description of one chart to render.

    Args:
        chart_type: Chart type tag; unknown tags are kept verbatim.
        title: Chart title.
        data_points: Ordered data points.
        subtitle: Optional subtitle.
        source: Optional attribution line.
    """

    chart_type: str
    title: str
    data_points: tuple[DataPoint, ...]
    subtitle: str | None = None
    source: str | None = None


def coerce_number(raw: Any) -> float:
    """Return `raw` as a finite float, or 0.0 when it is not numeric."""

    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        return 0.0
    value = float(raw)
    if not math.isfinite(value):
        return 0.0
    return value


def _optional_text(raw: Any) -> str | None:
    if isinstance(raw, str) and raw:
        return raw
    return None


def _parse_year(raw: Any) -> int | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    return None


def decode_data_point(payload: Mapping[str, Any]) -> DataPoint:
    """Decode a single data point mapping."""

    label = payload.get("label")
    return DataPoint(
        label=label if isinstance(label, str) else ("" if label is None else str(label)),
        value=coerce_number(payload.get("value")),
        unit=_optional_text(payload.get("unit")),
        category=_optional_text(payload.get("category")),
        year=_parse_year(payload.get("year")),
    )


def decode_chart_descriptor(payload: Any) -> ChartDescriptor:
    """Decode a chart descriptor from a JSON-like mapping.

    Both camelCase (`chartType`, `dataPoints`) and snake_case keys are
    accepted. Malformed data points are dropped rather than rejected.

    Args:
        payload: Decoded JSON object describing one chart.

    Returns:
        ChartDescriptor instance.

    Raises:
        ChartDescriptorError: When `payload` is not a mapping.
    """

    if not isinstance(payload, Mapping):
        raise ChartDescriptorError(f"Chart descriptor must be an object, got {type(payload).__name__}.")

    chart_type = payload.get("chartType", payload.get("chart_type"))
    raw_points = payload.get("dataPoints", payload.get("data_points"))
    points: list[DataPoint] = []
    if isinstance(raw_points, Sequence) and not isinstance(raw_points, (str, bytes)):
        points = [decode_data_point(item) for item in raw_points if isinstance(item, Mapping)]

    title = payload.get("title")
    return ChartDescriptor(
        chart_type="" if chart_type is None else str(chart_type),
        title=title if isinstance(title, str) else "",
        data_points=tuple(points),
        subtitle=_optional_text(payload.get("subtitle")),
        source=_optional_text(payload.get("source")),
    )
