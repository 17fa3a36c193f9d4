"""
Flask API Routes.

Defines the HTTP endpoints of the working dates service.
"""

from typing import Any, Dict, Tuple

from flask import Blueprint, request
from pydantic import ValidationError as PydanticValidationError

from working_dates import __version__
from working_dates.api.validation import CalculateWorkingDateQuery
from working_dates.core.exceptions import InvalidParametersError
from working_dates.core.timezones import format_utc_iso
from working_dates.infrastructure.holidays import get_holiday_repository
from working_dates.infrastructure.logging import get_logger
from working_dates.infrastructure.metrics import get_metrics, metrics_endpoint
from working_dates.services import WorkingDateService


logger = get_logger(__name__)


api_bp = Blueprint("api", __name__)


INTERNAL_ERROR_KIND = "InternalError"
INTERNAL_ERROR_MESSAGE = "An internal server error occurred"


def _error_response(
    error: str,
    message: str,
    status_code: int,
) -> Tuple[Dict[str, Any], int]:
    """Create standardized error response."""
    return {
        "error": error,
        "message": message,
    }, status_code


# ============================================================================
# Health Check
# ============================================================================

@api_bp.route("/health", methods=["GET"])
def health_check() -> Tuple[Dict[str, Any], int]:
    """
    Health check endpoint for startup and liveness probes.
    
    Returns:
        Health status response.
    """
    return {
        "status": "healthy",
        "service": "working-dates",
        "version": __version__,
        "holidays_loaded": get_holiday_repository().is_loaded,
    }, 200


@api_bp.route("/", methods=["GET"])
def root() -> Tuple[Dict[str, Any], int]:
    """
    Root endpoint - same as health for default platform checks.
    """
    return health_check()


@api_bp.route("/metrics", methods=["GET"])
def metrics():
    """
    Prometheus metrics endpoint.
    """
    return metrics_endpoint()


# ============================================================================
# Calculation Endpoint
# ============================================================================

@api_bp.route("/calculate-working-date", methods=["GET"])
def calculate_working_date() -> Tuple[Dict[str, Any], int]:
    """
    Add business days and/or business hours to a UTC date.
    
    Query Parameters:
        days (int): Business days to add (optional).
        hours (int): Business hours to add (optional).
        date (str): UTC start date, ISO 8601 ending in "Z" (optional, defaults to now).
        
    At least one of days or hours is required. Days are added first.
    
    Returns:
        ``{"date": "<ISO 8601 UTC>"}``.
    """
    try:
        query = CalculateWorkingDateQuery(**request.args.to_dict())
    except PydanticValidationError as e:
        return _error_response(
            InvalidParametersError.error_kind,
            str(e.errors()[0]["msg"]),
            400,
        )
    
    try:
        service = WorkingDateService()
        result = service.calculate(
            start=query.date,
            days=query.days or 0,
            hours=query.hours or 0,
        )
        
    except InvalidParametersError as e:
        return _error_response(e.error_kind, e.message, 400)
    except Exception as e:
        get_metrics().calculations_total.inc(status="error")
        logger.exception(
            f"Unexpected error while calculating working date: {e}",
            extra={"extra_fields": {
                "error_type": type(e).__name__,
                "query": request.args.to_dict(),
            }}
        )
        return _error_response(INTERNAL_ERROR_KIND, INTERNAL_ERROR_MESSAGE, 500)
    
    return {"date": format_utc_iso(result)}, 200
