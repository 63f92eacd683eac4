"""Settings-driven configuration for dashboard scoring and chart layout.

The analysis package never reads Django settings. Views and commands resolve
a `DashboardSettings` value here and pass its parts in explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from analysis.completeness import DEFAULT_POLICY, STRATEGIES
from analysis.geometry import DEFAULT_CHART_HEIGHT
from analysis.palette import DEFAULT_PALETTE, ChartPalette


@dataclass(frozen=True, slots=True)
class DashboardSettings:
    """Resolved dashboard configuration.

    Args:
        policy: Default completeness policy name.
        chart_height: Default chart height in pixels.
        palette: Series color palette.
    """

    policy: str
    chart_height: int
    palette: ChartPalette


def load_dashboard_settings() -> DashboardSettings:
    """Build DashboardSettings from Django settings.

    Returns:
        DashboardSettings with defaults applied for unset values.

    Raises:
        ImproperlyConfigured: When the policy is unknown or the height is not positive.
    """

    policy = str(getattr(settings, "PLANBOARD_COMPLETENESS_POLICY", DEFAULT_POLICY) or DEFAULT_POLICY)
    if policy not in STRATEGIES:
        known = ", ".join(sorted(STRATEGIES))
        raise ImproperlyConfigured(f"PLANBOARD_COMPLETENESS_POLICY must be one of: {known} (got {policy!r}).")

    chart_height = int(getattr(settings, "PLANBOARD_CHART_HEIGHT", DEFAULT_CHART_HEIGHT))
    if chart_height <= 0:
        raise ImproperlyConfigured("PLANBOARD_CHART_HEIGHT must be a positive integer.")

    colors = tuple(getattr(settings, "PLANBOARD_CHART_PALETTE", None) or ())
    palette = ChartPalette(colors=colors) if colors else DEFAULT_PALETTE

    return DashboardSettings(policy=policy, chart_height=chart_height, palette=palette)
