"""
Core views and view helpers shared by the domain apps.

Contents:
    health_check: Infrastructure endpoint for load balancers and Docker
    service_failure_response: Turn a failed ServiceResult into a DRF Response
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.db import DatabaseError, connection
from django.http import JsonResponse
from rest_framework import status
from rest_framework.response import Response

if TYPE_CHECKING:
    from collections.abc import Mapping

    from core.services import ServiceResult

logger = logging.getLogger(__name__)


def health_check(request):
    """
    Health check endpoint for monitoring and orchestration.

    Returns:
        JsonResponse with status and component health:
        - status: "healthy" or "unhealthy"
        - database: "connected" or "disconnected"

    HTTP Status Codes:
        200: All systems operational
        503: Database unreachable
    """
    health_status = {
        "status": "healthy",
        "database": "unknown",
    }

    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
        health_status["database"] = "connected"
    except DatabaseError:
        logger.exception("Health check could not reach the database")
        health_status["database"] = "disconnected"
        health_status["status"] = "unhealthy"

    status_code = 200 if health_status["status"] == "healthy" else 503
    return JsonResponse(health_status, status=status_code)


def service_failure_response(
    result: ServiceResult,
    status_map: Mapping[str, int],
    default_status: int = status.HTTP_400_BAD_REQUEST,
) -> Response:
    """
    Build the error response for a failed ServiceResult.

    Each app keeps its own error_code -> HTTP status table next to its
    constants; codes missing from the table fall back to default_status.

    Args:
        result: Failed service result
        status_map: Mapping of error codes to HTTP status codes
        default_status: Status used for unmapped codes

    Returns:
        Response with {"error": ..., "error_code": ...} body
    """
    http_status = status_map.get(result.error_code or "", default_status)
    body = {"error": result.error, "error_code": result.error_code}
    if result.errors:
        body["errors"] = result.errors
    return Response(body, status=http_status)
