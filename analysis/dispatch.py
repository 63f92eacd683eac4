"""Chart type dispatch.

Maps chart type tags to their layout function. Resolution is total: any tag
without a layout, including `other`, resolves to the unsupported placeholder.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Final

from .chart_descriptor import ChartDescriptor, DataPoint
from .geometry import (
    DEFAULT_CHART_HEIGHT,
    ChartLayout,
    layout_comparison_bar,
    layout_donut,
    layout_gauge,
    layout_line,
    layout_progress,
    layout_radar,
    layout_stacked_bar,
    layout_unsupported,
)
from .palette import DEFAULT_PALETTE, ChartPalette

LayoutFunction = Callable[[Sequence[DataPoint], float, ChartPalette], ChartLayout]

LAYOUTS: Final[dict[str, LayoutFunction]] = {
    "comparison_bar": layout_comparison_bar,
    "donut": layout_donut,
    "line": layout_line,
    "radar": layout_radar,
    "gauge": layout_gauge,
    "stacked_bar": layout_stacked_bar,
    "progress": layout_progress,
}

SUPPORTED_CHART_TYPES: Final[tuple[str, ...]] = tuple(LAYOUTS)


@dataclass(frozen=True, slots=True)
class ChartRenderer:
    """Resolved layout entry point for one chart type.

    Args:
        chart_type: Tag this renderer was resolved for.
        supported: False for the unsupported placeholder.
        layout_function: Layout function, or None for the placeholder.
    """

    chart_type: str
    supported: bool
    layout_function: LayoutFunction | None = None

    def layout(
        self,
        points: Sequence[DataPoint],
        height: float = DEFAULT_CHART_HEIGHT,
        palette: ChartPalette = DEFAULT_PALETTE,
    ) -> ChartLayout:
        if self.layout_function is None:
            return layout_unsupported(self.chart_type)
        return self.layout_function(points, height, palette)


def is_supported(chart_type: Any) -> bool:
    return isinstance(chart_type, str) and chart_type in LAYOUTS


def resolve(chart_type: Any) -> ChartRenderer:
    """Return the renderer for `chart_type`.

    Args:
        chart_type: Chart type tag. Non-string values are stringified.

    Returns:
        ChartRenderer for a known tag, otherwise the unsupported placeholder.
    """

    tag = chart_type if isinstance(chart_type, str) else str(chart_type)
    layout_function = LAYOUTS.get(tag)
    if layout_function is None:
        return ChartRenderer(chart_type=tag, supported=False)
    return ChartRenderer(chart_type=tag, supported=True, layout_function=layout_function)


def layout_chart(
    descriptor: ChartDescriptor,
    *,
    height: float = DEFAULT_CHART_HEIGHT,
    palette: ChartPalette = DEFAULT_PALETTE,
) -> ChartLayout:
    """Resolve a descriptor's chart type and compute its layout."""

    return resolve(descriptor.chart_type).layout(descriptor.data_points, height, palette)
