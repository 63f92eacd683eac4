"""Unit tests for chart type dispatch."""

from __future__ import annotations

import pytest

from analysis.chart_descriptor import ChartDescriptor, DataPoint
from analysis.dispatch import SUPPORTED_CHART_TYPES, is_supported, layout_chart, resolve
from analysis.geometry import DonutLayout, GaugeLayout, UnsupportedLayout

pytestmark = pytest.mark.unit


def test_supported_chart_types() -> None:
    """Exactly seven chart types have a layout."""

    assert set(SUPPORTED_CHART_TYPES) == {
        "comparison_bar",
        "donut",
        "line",
        "radar",
        "gauge",
        "stacked_bar",
        "progress",
    }
    assert "other" not in SUPPORTED_CHART_TYPES


@pytest.mark.parametrize("chart_type", SUPPORTED_CHART_TYPES)
def test_known_types_resolve_to_their_layout(chart_type: str) -> None:
    """Each supported tag resolves to a renderer producing its own layout kind."""

    renderer = resolve(chart_type)
    assert renderer.supported is True
    layout = renderer.layout((DataPoint(label="A", value=1),))
    assert layout.kind == chart_type


@pytest.mark.parametrize("chart_type", ["other", "unknown_type", "", "DONUT"])
def test_unknown_types_resolve_to_placeholder(chart_type: str) -> None:
    """Unknown tags never raise; they produce the unsupported placeholder."""

    renderer = resolve(chart_type)
    assert renderer.supported is False
    layout = renderer.layout((DataPoint(label="A", value=1),))
    assert isinstance(layout, UnsupportedLayout)
    assert layout.chart_type == chart_type
    assert chart_type in layout.message
    assert is_supported(chart_type) is False


def test_non_string_tags_are_stringified() -> None:
    """Resolution is total over any input value."""

    renderer = resolve(42)
    assert renderer.supported is False
    assert renderer.chart_type == "42"
    assert resolve(None).chart_type == "None"
    assert is_supported(None) is False


def test_layout_chart_uses_descriptor_type_and_height() -> None:
    """The descriptor's chart type picks the layout; height flows through."""

    descriptor = ChartDescriptor(
        chart_type="donut",
        title="Budget split",
        data_points=(DataPoint(label="WP1", value=60), DataPoint(label="WP2", value=40)),
    )
    layout = layout_chart(descriptor, height=50)
    assert isinstance(layout, DonutLayout)
    assert (layout.inner_radius, layout.outer_radius) == (24, 40)

    gauge = layout_chart(
        ChartDescriptor(chart_type="gauge", title="Done", data_points=(DataPoint(label="Done", value=75, unit="%"),))
    )
    assert isinstance(gauge, GaugeLayout)
    assert gauge.remaining == pytest.approx(25)


def test_layout_chart_for_unsupported_descriptor() -> None:
    """Unsupported descriptors lay out as the placeholder."""

    descriptor = ChartDescriptor(chart_type="sankey", title="Flows", data_points=())
    layout = layout_chart(descriptor)
    assert isinstance(layout, UnsupportedLayout)
    assert layout.message == 'Chart type "sankey" is not supported yet.'
