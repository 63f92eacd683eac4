"""Per-chart-type layout geometry for dashboard charts.

Every function here is pure: it takes a chart's data points, a target pixel
height and a color palette, and returns a frozen layout object that a drawing
layer can consume directly. Nothing in this module draws.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Final

from .chart_descriptor import DataPoint
from .palette import DEFAULT_PALETTE, ChartPalette

# Readiness and maturity levels are recorded on a fixed 0-9 scale.
MATURITY_SCALE_MAX: Final[int] = 9

DEFAULT_CHART_HEIGHT: Final[int] = 250
SMALL_CHART_HEIGHT: Final[int] = 180

DONUT_INNER_RATIO: Final[float] = 0.19
DONUT_INNER_MIN: Final[int] = 24
DONUT_INNER_MAX: Final[int] = 70
DONUT_OUTER_RATIO: Final[float] = 0.30
DONUT_OUTER_MIN: Final[int] = 40
DONUT_OUTER_MAX: Final[int] = 110
DONUT_PADDING_ANGLE: Final[float] = 2.0

GAUGE_INNER_RATIO: Final[float] = 0.30
GAUGE_OUTER_RATIO: Final[float] = 0.45
GAUGE_MIN_MAX_VALUE: Final[float] = 10.0
GAUGE_HEADROOM: Final[float] = 1.5

PERCENT_UNIT: Final[str] = "%"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _clamp(value: float, lower: float, upper: float) -> float:
    return min(max(value, lower), upper)


def format_value(value: float) -> str:
    """Format a numeric value without a trailing `.0` for whole numbers."""

    if float(value).is_integer():
        return str(int(value))
    return str(value)


@dataclass(frozen=True, slots=True)
class BarRow:
    """A single bar in a comparison bar chart."""

    name: str
    value: float
    unit: str
    color: str


@dataclass(frozen=True, slots=True)
class ComparisonBarLayout:
    rows: tuple[BarRow, ...]
    kind: str = "comparison_bar"


@dataclass(frozen=True, slots=True)
class StackedSeries:
    """One stacked series (category) and its color.

    Attributes:
        category: Category key used as the row field name.
        color: Fill color.
        rounded_top: True for the last series, whose bars get rounded corners.
    """

    category: str
    color: str
    rounded_top: bool


@dataclass(frozen=True, slots=True)
class StackedBarLayout:
    """Pivoted rows for a stacked bar chart.

    Attributes:
        categories: Distinct categories in first-seen order.
        labels: Distinct labels in first-seen order.
        rows: One dict per label: `name` plus one numeric field per category.
        series: Series styling aligned to `categories`.
    """

    categories: tuple[str, ...]
    labels: tuple[str, ...]
    rows: tuple[dict[str, str | float], ...]
    series: tuple[StackedSeries, ...]
    kind: str = "stacked_bar"


@dataclass(frozen=True, slots=True)
class DonutSlice:
    """Geometry for one donut slice and its percentage label.

    Angles are in degrees, counter-clockwise from the 3 o'clock position.
    Label offsets are relative to the pie center in screen coordinates.
    """

    name: str
    value: float
    unit: str
    color: str
    percent: float
    start_angle: float
    end_angle: float
    mid_angle: float
    label_text: str
    label_dx: float
    label_dy: float
    label_anchor: str


@dataclass(frozen=True, slots=True)
class DonutLayout:
    inner_radius: int
    outer_radius: int
    is_small: bool
    label_font_size: int
    legend_font_size: int
    legend_line_height: int
    legend_icon_size: int
    label_offset: int
    center_x_percent: int
    center_y_percent: int
    center_y: float
    padding_angle: float
    slices: tuple[DonutSlice, ...]
    kind: str = "donut"


@dataclass(frozen=True, slots=True)
class GaugeLayout:
    """Half-circle gauge split into a filled arc and an empty track."""

    value: float
    max_value: float
    percentage: float
    remaining: float
    unit: str
    label: str
    display_text: str
    start_angle: int
    end_angle: int
    inner_radius: float
    outer_radius: float
    center_x_percent: int
    center_y_percent: int
    fill_color: str
    kind: str = "gauge"


@dataclass(frozen=True, slots=True)
class ProgressBar:
    label: str
    value: float
    unit: str
    percentage: float
    color: str
    gradient_end: str
    display_text: str


@dataclass(frozen=True, slots=True)
class ProgressLayout:
    bars: tuple[ProgressBar, ...]
    scale_max: int = MATURITY_SCALE_MAX
    kind: str = "progress"


@dataclass(frozen=True, slots=True)
class LinePoint:
    name: str
    value: float
    unit: str
    year: int | None


@dataclass(frozen=True, slots=True)
class LineLayout:
    """Line chart points, already ordered by year."""

    points: tuple[LinePoint, ...]
    sorted_data_points: tuple[DataPoint, ...]
    stroke_color: str
    kind: str = "line"


@dataclass(frozen=True, slots=True)
class RadarPoint:
    subject: str
    value: float
    full_mark: int


@dataclass(frozen=True, slots=True)
class RadarLayout:
    points: tuple[RadarPoint, ...]
    domain: tuple[int, int]
    stroke_color: str
    kind: str = "radar"


@dataclass(frozen=True, slots=True)
class UnsupportedLayout:
    """Placeholder for chart types with no geometry."""

    chart_type: str
    message: str
    kind: str = "unsupported"


ChartLayout = (
    ComparisonBarLayout
    | StackedBarLayout
    | DonutLayout
    | GaugeLayout
    | ProgressLayout
    | LineLayout
    | RadarLayout
    | UnsupportedLayout
)


def layout_comparison_bar(
    points: Sequence[DataPoint],
    height: float = DEFAULT_CHART_HEIGHT,
    palette: ChartPalette = DEFAULT_PALETTE,
) -> ComparisonBarLayout:
    """Return one colored bar per data point, in input order."""

    rows = tuple(
        BarRow(name=point.label, value=point.value, unit=point.unit or "", color=palette.color_at(index))
        for index, point in enumerate(points)
    )
    return ComparisonBarLayout(rows=rows)


def pivot_stacked_rows(
    points: Sequence[DataPoint],
) -> tuple[tuple[str, ...], tuple[str, ...], tuple[dict[str, str | float], ...]]:
    """Pivot (label, category, value) points into one row per label.

    Args:
        points: Data points; a missing category falls back to `default`.

    Returns:
        Tuple of (categories, labels, rows). Categories and labels keep their
        first-seen order; a missing (label, category) pair is filled with 0.
    """

    categories = tuple(dict.fromkeys(point.category_or_default for point in points))
    labels = tuple(dict.fromkeys(point.label for point in points))

    first_value: dict[tuple[str, str], float] = {}
    for point in points:
        first_value.setdefault((point.label, point.category_or_default), point.value)

    rows: list[dict[str, str | float]] = []
    for label in labels:
        row: dict[str, str | float] = {"name": label}
        for category in categories:
            row[category] = first_value.get((label, category), 0.0)
        rows.append(row)
    return categories, labels, tuple(rows)


def layout_stacked_bar(
    points: Sequence[DataPoint],
    height: float = DEFAULT_CHART_HEIGHT,
    palette: ChartPalette = DEFAULT_PALETTE,
) -> StackedBarLayout:
    """Pivot points into stacked rows and assign one color per category."""

    categories, labels, rows = pivot_stacked_rows(points)
    last = len(categories) - 1
    series = tuple(
        StackedSeries(category=category, color=palette.color_at(index), rounded_top=index == last)
        for index, category in enumerate(categories)
    )
    return StackedBarLayout(categories=categories, labels=labels, rows=rows, series=series)


def donut_radii(height: float) -> tuple[int, int]:
    """Return (inner, outer) donut radii scaled to the chart height."""

    inner = _round_half_up(_clamp(height * DONUT_INNER_RATIO, DONUT_INNER_MIN, DONUT_INNER_MAX))
    outer = _round_half_up(_clamp(height * DONUT_OUTER_RATIO, DONUT_OUTER_MIN, DONUT_OUTER_MAX))
    return inner, outer


def polar_to_cartesian(radius: float, angle_degrees: float) -> tuple[float, float]:
    """Convert a polar offset to screen (dx, dy), with y growing downwards."""

    radians = math.radians(-angle_degrees)
    return radius * math.cos(radians), radius * math.sin(radians)


def _donut_slices(
    points: Sequence[DataPoint],
    *,
    label_radius: float,
    palette: ChartPalette,
) -> tuple[DonutSlice, ...]:
    total = sum(point.value for point in points)
    if total <= 0:
        return ()

    non_zero = sum(1 for point in points if point.value != 0)
    sweep = 360.0 - non_zero * DONUT_PADDING_ANGLE

    slices: list[DonutSlice] = []
    end_angle = 0.0
    for index, point in enumerate(points):
        percent = point.value / total
        if index == 0:
            start_angle = 0.0
        else:
            start_angle = end_angle + (DONUT_PADDING_ANGLE if point.value != 0 else 0.0)
        end_angle = start_angle + percent * sweep
        mid_angle = (start_angle + end_angle) / 2
        dx, dy = polar_to_cartesian(label_radius, mid_angle)
        slices.append(
            DonutSlice(
                name=point.label,
                value=point.value,
                unit=point.unit or "",
                color=palette.color_at(index),
                percent=percent,
                start_angle=start_angle,
                end_angle=end_angle,
                mid_angle=mid_angle,
                label_text=f"{_round_half_up(percent * 100)}%",
                label_dx=dx,
                label_dy=dy,
                label_anchor="start" if dx > 0 else "end",
            )
        )
    return tuple(slices)


def layout_donut(
    points: Sequence[DataPoint],
    height: float = DEFAULT_CHART_HEIGHT,
    palette: ChartPalette = DEFAULT_PALETTE,
) -> DonutLayout:
    """Scale a donut to the chart height and place slice percentage labels.

    Small charts (height at or below `SMALL_CHART_HEIGHT`) use compact fonts
    and legend, and lift the pie center to leave room for the legend.
    """

    inner, outer = donut_radii(height)
    is_small = height <= SMALL_CHART_HEIGHT
    label_offset = 8 if is_small else 10
    center_y_percent = 42 if is_small else 45
    return DonutLayout(
        inner_radius=inner,
        outer_radius=outer,
        is_small=is_small,
        label_font_size=9 if is_small else 11,
        legend_font_size=9 if is_small else 11,
        legend_line_height=14 if is_small else 18,
        legend_icon_size=6 if is_small else 8,
        label_offset=label_offset,
        center_x_percent=50,
        center_y_percent=center_y_percent,
        center_y=height * center_y_percent / 100,
        padding_angle=DONUT_PADDING_ANGLE,
        slices=_donut_slices(points, label_radius=outer + label_offset, palette=palette),
    )


def layout_gauge(
    points: Sequence[DataPoint],
    height: float = DEFAULT_CHART_HEIGHT,
    palette: ChartPalette = DEFAULT_PALETTE,
) -> GaugeLayout:
    """Normalize the first data point onto a half-circle gauge.

    Percent values use a fixed 0-100 range. Other values get headroom above
    the current value, with a floor of `GAUGE_MIN_MAX_VALUE`.
    """

    first = points[0] if points else None
    value = first.value if first is not None else 0.0
    unit = (first.unit or "") if first is not None else ""
    if unit == PERCENT_UNIT:
        max_value = 100.0
    else:
        max_value = max(value * GAUGE_HEADROOM, GAUGE_MIN_MAX_VALUE)
    percentage = min(value / max_value * 100, 100.0)
    return GaugeLayout(
        value=value,
        max_value=max_value,
        percentage=percentage,
        remaining=100.0 - percentage,
        unit=unit,
        label=first.label if first is not None else "",
        display_text=f"{format_value(value)}{unit}",
        start_angle=180,
        end_angle=0,
        inner_radius=height * GAUGE_INNER_RATIO,
        outer_radius=height * GAUGE_OUTER_RATIO,
        center_x_percent=50,
        center_y_percent=75,
        fill_color=palette.primary,
    )


def progress_percentage(point: DataPoint) -> float:
    """Return the bar fill for a point: percent as-is, otherwise 0-9 scaled."""

    if point.unit == PERCENT_UNIT:
        return point.value
    return min(point.value / MATURITY_SCALE_MAX * 100, 100.0)


def layout_progress(
    points: Sequence[DataPoint],
    height: float = DEFAULT_CHART_HEIGHT,
    palette: ChartPalette = DEFAULT_PALETTE,
) -> ProgressLayout:
    """Return one horizontal progress bar per data point."""

    bars = tuple(
        ProgressBar(
            label=point.label,
            value=point.value,
            unit=point.unit or "",
            percentage=progress_percentage(point),
            color=palette.color_at(index),
            gradient_end=palette.color_at(index + 1),
            display_text=f"{format_value(point.value)}{point.unit or ''}",
        )
        for index, point in enumerate(points)
    )
    return ProgressLayout(bars=bars)


def sort_by_year(points: Sequence[DataPoint]) -> tuple[DataPoint, ...]:
    """Stable-sort points by year ascending; a missing year sorts as 0."""

    return tuple(sorted(points, key=lambda point: point.year or 0))


def layout_line(
    points: Sequence[DataPoint],
    height: float = DEFAULT_CHART_HEIGHT,
    palette: ChartPalette = DEFAULT_PALETTE,
) -> LineLayout:
    """Order points by year and label the x axis with the year when known."""

    ordered = sort_by_year(points)
    line_points = tuple(
        LinePoint(
            name=str(point.year) if point.year else point.label,
            value=point.value,
            unit=point.unit or "",
            year=point.year,
        )
        for point in ordered
    )
    return LineLayout(points=line_points, sorted_data_points=ordered, stroke_color=palette.primary)


def layout_radar(
    points: Sequence[DataPoint],
    height: float = DEFAULT_CHART_HEIGHT,
    palette: ChartPalette = DEFAULT_PALETTE,
) -> RadarLayout:
    """Map points onto radar spokes on the fixed 0-9 maturity scale."""

    radar_points = tuple(
        RadarPoint(subject=point.label, value=point.value, full_mark=MATURITY_SCALE_MAX) for point in points
    )
    return RadarLayout(points=radar_points, domain=(0, MATURITY_SCALE_MAX), stroke_color=palette.primary)


def layout_unsupported(chart_type: str) -> UnsupportedLayout:
    return UnsupportedLayout(chart_type=chart_type, message=f'Chart type "{chart_type}" is not supported yet.')
