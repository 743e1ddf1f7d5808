# apps/compositions/exceptions.py

from typing import Optional


class CompositionsException(Exception):
    """Base exception for all compositions-related errors."""

    def __init__(self, message: str, code: str = None, details: dict = None):
        self.message = message
        self.code = code or "COMPOSITIONS_ERROR"
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Convert exception to dictionary representation."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class UpstreamError(CompositionsException):
    """
    Raised when a call to the media service fails.

    Network, authentication and malformed-input failures are all reported
    through this one kind. ``status_code`` is set when the media service
    reported one.
    """

    def __init__(
        self,
        operation: str,
        path: str,
        reason: str,
        status_code: Optional[int] = None,
    ):
        self.operation = operation
        self.path = path
        self.reason = reason
        self.status_code = status_code
        super().__init__(
            message=f"Upstream error during {operation}: {reason}",
            code="UPSTREAM_ERROR",
            details={
                "operation": operation,
                "path": path,
                "reason": reason,
                "status_code": status_code,
            }
        )


class InvalidCompositionConfigError(CompositionsException):
    """Raised when the composition settings are malformed."""

    def __init__(self, field: str, value, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(
            message=f"Invalid composition setting '{field}': {reason}",
            code="INVALID_COMPOSITION_CONFIG",
            details={
                "field": field,
                "value": str(value),
                "reason": reason,
            }
        )
