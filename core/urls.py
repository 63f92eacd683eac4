"""URL configuration for core views."""

from __future__ import annotations

from django.urls import path

from core import views

app_name = "core"

urlpatterns = [
    path("api/dashboard/", views.dashboard_api, name="dashboard_api"),
    path("api/completeness/", views.completeness_api, name="completeness_api"),
    path("api/chart-types/", views.chart_types_api, name="chart_types_api"),
]
