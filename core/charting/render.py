"""Render chart descriptors into layout payloads for the dashboard."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from dataclasses import asdict, dataclass
from hashlib import sha256

from analysis.chart_descriptor import ChartDescriptor
from analysis.dispatch import resolve
from analysis.geometry import ChartLayout, UnsupportedLayout
from analysis.palette import ChartPalette

logger = logging.getLogger(__name__)

MAX_CHARTS_PER_REQUEST = 50


@dataclass(frozen=True, slots=True)
class RenderedChart:
    """A chart descriptor paired with its computed layout.

    Args:
        descriptor: Source descriptor.
        layout: Layout computed by the resolved renderer.
        supported: False when the chart type resolved to the placeholder.
        error: Message for the drawing layer when nothing can be drawn.
    """

    descriptor: ChartDescriptor
    layout: ChartLayout
    supported: bool
    error: str | None = None


def render_charts(
    *,
    descriptors: Iterable[ChartDescriptor],
    height: float,
    palette: ChartPalette,
) -> tuple[RenderedChart, ...]:
    """Render a set of chart descriptors, reusing layouts for duplicates.

    Args:
        descriptors: Descriptors in display order.
        height: Target chart height in pixels.
        palette: Series color palette.

    Returns:
        RenderedChart entries in the same order as `descriptors`.
    """

    rendered: list[RenderedChart] = []
    cache: dict[str, RenderedChart] = {}
    for descriptor in descriptors:
        cache_key = _chart_cache_key(descriptor=descriptor, height=height, palette=palette)
        if cache_key in cache:
            logger.debug("Reusing layout for duplicate %s chart %r", descriptor.chart_type, descriptor.title)
        else:
            cache[cache_key] = render_chart(descriptor=descriptor, height=height, palette=palette)
        rendered.append(cache[cache_key])
    return tuple(rendered)


def render_chart(*, descriptor: ChartDescriptor, height: float, palette: ChartPalette) -> RenderedChart:
    """Render a single chart descriptor."""

    renderer = resolve(descriptor.chart_type)
    layout = renderer.layout(descriptor.data_points, height, palette)
    if isinstance(layout, UnsupportedLayout):
        logger.warning("Unsupported chart type %r for chart %r", descriptor.chart_type, descriptor.title)
        return RenderedChart(descriptor=descriptor, layout=layout, supported=False, error=layout.message)
    return RenderedChart(descriptor=descriptor, layout=layout, supported=True)


def _chart_cache_key(*, descriptor: ChartDescriptor, height: float, palette: ChartPalette) -> str:
    payload = {
        "descriptor": asdict(descriptor),
        "height": height,
        "palette": list(palette.colors),
    }
    encoded = json.dumps(payload, sort_keys=True, default=str).encode("utf-8")
    return sha256(encoded).hexdigest()
