"""JSON API views for project completeness and dashboard chart layouts."""

from __future__ import annotations

import json
import logging
from typing import Any

from django.http import HttpRequest, JsonResponse
from django.views.decorators.http import require_GET, require_POST

from analysis.dispatch import SUPPORTED_CHART_TYPES
from core.dashboard_config import load_dashboard_settings
from core.services import (
    DashboardRequestError,
    build_completeness_payload,
    build_dashboard_payload,
    decode_chart_descriptors,
    resolve_height,
    resolve_policy,
)

logger = logging.getLogger(__name__)


def _error(message: str, *, status: int = 400) -> JsonResponse:
    return JsonResponse({"error": message}, status=status)


def _read_json_object(request: HttpRequest) -> dict[str, Any]:
    """Decode the request body as a JSON object.

    Raises:
        DashboardRequestError: When the body is not valid JSON or not an object.
    """

    try:
        payload = json.loads(request.body or b"{}")
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise DashboardRequestError(f"Request body is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise DashboardRequestError("Request body must be a JSON object.")
    return payload


@require_POST
def dashboard_api(request: HttpRequest) -> JsonResponse:
    """Return completeness, summary and chart layouts for a project record."""

    config = load_dashboard_settings()
    try:
        payload = _read_json_object(request)
        policy = resolve_policy(payload.get("policy"), config=config)
        height = resolve_height(payload.get("height"), config=config)
        charts = decode_chart_descriptors(payload.get("charts"))
    except DashboardRequestError as exc:
        logger.warning("Rejected dashboard request: %s", exc)
        return _error(str(exc))

    result = build_dashboard_payload(
        payload.get("project"),
        charts=charts,
        config=config,
        policy=policy,
        height=height,
    )
    return JsonResponse(result)


@require_POST
def completeness_api(request: HttpRequest) -> JsonResponse:
    """Return only the completeness report for a project record."""

    config = load_dashboard_settings()
    try:
        payload = _read_json_object(request)
        policy = resolve_policy(payload.get("policy"), config=config)
    except DashboardRequestError as exc:
        logger.warning("Rejected completeness request: %s", exc)
        return _error(str(exc))
    return JsonResponse(build_completeness_payload(payload.get("project"), policy=policy))


@require_GET
def chart_types_api(request: HttpRequest) -> JsonResponse:
    """List the chart types that have a layout."""

    return JsonResponse({"chartTypes": list(SUPPORTED_CHART_TYPES)})
