"""
Custom exception handling for the API layer.

This module provides a unified exception handler that converts all exceptions
to a standardized API response format. It handles both DRF exceptions and
custom application exceptions.
"""
import logging
from typing import Any, Dict, Optional

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


# HTTP status code mapping for custom exceptions
EXCEPTION_STATUS_CODES = {
    "UPSTREAM_ERROR": status.HTTP_400_BAD_REQUEST,
    "INVALID_COMPOSITION_CONFIG": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "COMPOSITIONS_ERROR": status.HTTP_400_BAD_REQUEST,
}


def build_error_response(
    message: str,
    code: str,
    details: Optional[Dict[str, Any]] = None,
    errors: Optional[list] = None,
) -> Dict[str, Any]:
    """
    Build a standardized error response body.

    Args:
        message: Human-readable error message
        code: Machine-readable error code
        details: Additional error details
        errors: List of specific errors (for validation)

    Returns:
        Standardized error response dictionary
    """
    response = {
        "success": False,
        "error": {
            "code": code,
            "message": message,
        }
    }

    if details:
        response["error"]["details"] = details

    if errors:
        response["error"]["errors"] = errors

    return response


def custom_exception_handler(exc: Exception, context: dict) -> Optional[Response]:
    """
    Custom exception handler for Django REST Framework.

    Args:
        exc: The exception that was raised
        context: Dictionary containing request, view, args, kwargs

    Returns:
        Response object with standardized error format
    """
    request = context.get("request")
    view = context.get("view")

    # Let DRF handle standard exceptions first
    response = drf_exception_handler(exc, context)

    if response is not None:
        return _handle_drf_exception(exc, response, request, view)

    return _handle_custom_exception(exc, request, view)


def _handle_drf_exception(
    exc: Exception,
    response: Response,
    request,
    view,
) -> Response:
    """Handle DRF-specific exceptions."""
    errors = []
    detail = getattr(exc, "detail", None)

    if isinstance(detail, dict):
        # Validation errors with field-specific messages
        for field, messages in detail.items():
            if isinstance(messages, list):
                for msg in messages:
                    errors.append({"field": field, "message": str(msg)})
            else:
                errors.append({"field": field, "message": str(messages)})
        message = "Validation failed."
        code = "VALIDATION_ERROR"
    elif isinstance(detail, list):
        errors = [{"message": str(msg)} for msg in detail]
        message = str(detail[0]) if detail else "An error occurred."
        code = getattr(exc, "default_code", "API_ERROR").upper()
    elif detail is not None:
        message = str(detail)
        code = getattr(exc, "default_code", "API_ERROR").upper()
    else:
        message = str(exc)
        code = "API_ERROR"

    _log_error(exc, request, view, response.status_code)

    response.data = build_error_response(
        message=message,
        code=code,
        errors=errors or None,
    )
    return response


def _handle_custom_exception(
    exc: Exception,
    request,
    view,
) -> Optional[Response]:
    """Handle custom application exceptions."""
    from apps.compositions.exceptions import CompositionsException

    if isinstance(exc, CompositionsException):
        status_code = getattr(exc, "status_code", None) or EXCEPTION_STATUS_CODES.get(
            exc.code, status.HTTP_400_BAD_REQUEST
        )
        error_response = build_error_response(
            message=exc.message,
            code=exc.code,
            details=exc.details if exc.details else None,
        )
        _log_error(exc, request, view, status_code)
        return Response(error_response, status=status_code)

    # Handle unexpected exceptions (500 errors)
    logger.exception(
        f"Unhandled exception in {view.__class__.__name__ if view else 'unknown'}: {exc}",
        exc_info=exc,
    )

    error_response = build_error_response(
        message="An unexpected error occurred. Please try again later.",
        code="INTERNAL_SERVER_ERROR",
    )
    return Response(error_response, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


def _log_error(exc: Exception, request, view, status_code: int) -> None:
    """Log error details for debugging."""
    view_name = view.__class__.__name__ if view else "unknown"
    method = request.method if request else "unknown"
    path = request.path if request else "unknown"

    log_message = f"API Error [{status_code}] {method} {path} - {view_name}: {exc}"

    if status_code >= 500:
        logger.error(log_message, exc_info=exc)
    elif status_code >= 400:
        logger.warning(log_message)
    else:
        logger.info(log_message)
