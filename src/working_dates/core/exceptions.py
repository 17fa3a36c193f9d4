"""
Custom exceptions for the working dates service.

Business errors map to 4xx responses, infrastructure errors
to 5xx or to a local fallback.
"""

from typing import Optional


class WorkingDatesError(Exception):
    """Base exception for all working dates errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


# =============================================================================
# Business Errors (4xx)
# =============================================================================

class BusinessError(WorkingDatesError):
    """Base exception for business logic errors (typically 4xx)."""
    pass


class InvalidParametersError(BusinessError):
    """Raised when the query parameters of a calculation are invalid."""

    error_kind = "InvalidParameters"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, {"field": field})
        self.field = field


# =============================================================================
# Infrastructure Errors (5xx)
# =============================================================================

class InfrastructureError(WorkingDatesError):
    """Base exception for infrastructure errors (typically 5xx)."""
    pass


class ExternalServiceError(InfrastructureError):
    """Raised when an external service call fails."""

    def __init__(
        self,
        service_name: str,
        message: str,
        status_code: Optional[int] = None,
        duration_ms: Optional[int] = None,
    ):
        super().__init__(
            f"{service_name} error: {message}",
            {
                "service_name": service_name,
                "status_code": status_code,
                "duration_ms": duration_ms,
            }
        )
        self.service_name = service_name
        self.status_code = status_code
        self.duration_ms = duration_ms


class HolidaySourceError(ExternalServiceError):
    """Raised when the holiday calendar cannot be fetched or parsed."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        duration_ms: Optional[int] = None,
    ):
        super().__init__("HolidaySource", message, status_code, duration_ms)
