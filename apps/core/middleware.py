# apps/core/middleware.py

"""
Custom middleware for the composition service.

This module provides request logging for the API.
"""

import logging
import time
from typing import Callable

from django.http import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware:
    """
    Middleware for logging API requests and responses.

    Logs request method, path, status code, duration and client IP.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]):
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        # Only log API requests
        if not request.path.startswith('/api/'):
            return self.get_response(request)

        start_time = time.time()
        response = self.get_response(request)
        duration = time.time() - start_time

        self._log_request(request, response, duration)

        return response

    def _log_request(
        self,
        request: HttpRequest,
        response: HttpResponse,
        duration: float
    ) -> None:
        """Log request details."""
        method = request.method
        path = request.path
        status_code = response.status_code
        duration_ms = duration * 1000

        x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
        if x_forwarded_for:
            client_ip = x_forwarded_for.split(',')[0].strip()
        else:
            client_ip = request.META.get('REMOTE_ADDR', 'unknown')

        log_message = f"{method} {path} - {status_code} - {duration_ms:.2f}ms - {client_ip}"

        if status_code >= 500:
            logger.error(log_message)
        elif status_code >= 400:
            logger.warning(log_message)
        else:
            logger.info(log_message)
