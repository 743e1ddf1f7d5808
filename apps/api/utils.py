# apps/api/utils.py

"""
Utility functions for the API layer.

This module provides helpers for creating standardized API responses,
including the conversion of orchestrator outcomes into responses.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from rest_framework import status
from rest_framework.response import Response

logger = logging.getLogger(__name__)


def success_response(
    result: Optional[Union[Dict, List, Any]] = None,
    status_code: int = status.HTTP_200_OK,
    warnings: Optional[List[str]] = None,
) -> Response:
    """
    Create a standardized success response.

    Args:
        result: The response payload (dict, list, or any serializable value)
        status_code: HTTP status code (default 200)
        warnings: Optional non-fatal warnings to report alongside the result

    Returns:
        Response object with standardized success format
    """
    response_data = {
        "success": True,
        "result": result,
    }

    if warnings:
        response_data["warnings"] = warnings

    return Response(response_data, status=status_code)


def error_response(
    message: str,
    code: str = "ERROR",
    status_code: int = status.HTTP_400_BAD_REQUEST,
    details: Optional[Dict[str, Any]] = None,
    errors: Optional[List[Dict[str, Any]]] = None,
) -> Response:
    """
    Create a standardized error response.

    Args:
        message: Human-readable error message
        code: Machine-readable error code
        status_code: HTTP status code (default 400)
        details: Additional error details
        errors: List of specific errors (for validation)

    Returns:
        Response object with standardized error format
    """
    response_data = {
        "success": False,
        "error": {
            "message": message,
            "code": code,
        }
    }

    if details:
        response_data["error"]["details"] = details

    if errors:
        response_data["error"]["errors"] = errors

    return Response(response_data, status=status_code)


def outcome_response(outcome, serialize=None) -> Response:
    """
    Convert an orchestrator ``Outcome`` into a response.

    Failures use the upstream status code, or 400 when the media service
    did not report one.
    """
    if outcome.ok:
        value = serialize(outcome.value) if serialize else outcome.value
        return success_response(result=value, warnings=outcome.warnings)

    error = outcome.error
    details = dict(error.details)
    details["stage"] = outcome.stage

    return error_response(
        message=error.message,
        code=error.code,
        status_code=error.status_code or status.HTTP_400_BAD_REQUEST,
        details=details,
    )
