"""App configuration for the core Django app."""

from __future__ import annotations

from django.apps import AppConfig


class CoreConfig(AppConfig):
    """Configuration for the `core` dashboard API app."""

    name = "core"
    verbose_name = "Project dashboard"
