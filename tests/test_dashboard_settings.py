"""Integration tests for settings-driven dashboard configuration."""

from __future__ import annotations

import pytest
from django.core.exceptions import ImproperlyConfigured

from analysis.palette import DEFAULT_PALETTE, ChartPalette
from core.dashboard_config import DashboardSettings, load_dashboard_settings
from core.services import DashboardRequestError, resolve_height, resolve_policy

pytestmark = pytest.mark.integration


def test_defaults(settings) -> None:
    """Unset palette falls back to the built-in colors."""

    settings.PLANBOARD_COMPLETENESS_POLICY = "binary"
    settings.PLANBOARD_CHART_HEIGHT = 250
    settings.PLANBOARD_CHART_PALETTE = []

    config = load_dashboard_settings()
    assert config == DashboardSettings(policy="binary", chart_height=250, palette=DEFAULT_PALETTE)


def test_overrides(settings) -> None:
    """Policy, height and palette are read from settings."""

    settings.PLANBOARD_COMPLETENESS_POLICY = "fractional"
    settings.PLANBOARD_CHART_HEIGHT = 180
    settings.PLANBOARD_CHART_PALETTE = ["#112233", "#445566"]

    config = load_dashboard_settings()
    assert config.policy == "fractional"
    assert config.chart_height == 180
    assert config.palette == ChartPalette(colors=("#112233", "#445566"))


def test_unknown_policy_is_misconfiguration(settings) -> None:
    """A bad default policy fails loudly."""

    settings.PLANBOARD_COMPLETENESS_POLICY = "weighted"
    with pytest.raises(ImproperlyConfigured):
        load_dashboard_settings()


def test_non_positive_height_is_misconfiguration(settings) -> None:
    """Chart height must be positive."""

    settings.PLANBOARD_CHART_HEIGHT = 0
    with pytest.raises(ImproperlyConfigured):
        load_dashboard_settings()


def test_request_overrides_resolve_against_config() -> None:
    """Missing request values fall back to the configured defaults."""

    config = DashboardSettings(policy="fractional", chart_height=300, palette=DEFAULT_PALETTE)
    assert resolve_policy(None, config=config) == "fractional"
    assert resolve_policy(" Binary ", config=config) == "binary"
    assert resolve_height(None, config=config) == 300
    assert resolve_height(120.0, config=config) == 120

    with pytest.raises(DashboardRequestError):
        resolve_policy("weighted", config=config)
    with pytest.raises(DashboardRequestError):
        resolve_height(True, config=config)
    with pytest.raises(DashboardRequestError):
        resolve_height(12.5, config=config)
    with pytest.raises(DashboardRequestError):
        resolve_height(5000, config=config)
