"""
Infrastructure Layer.

This layer contains all external dependencies and adapters:
- Logging configuration
- Metrics
- Holiday calendar client and repository
"""

from working_dates.infrastructure.logging import (
    get_logger,
    log_duration,
    log_request_context,
    logger,
    StructuredLogger,
)
from working_dates.infrastructure.metrics import (
    get_metrics,
    metrics_endpoint,
    setup_metrics_middleware,
)
from working_dates.infrastructure.holidays import (
    get_holiday_repository,
    HolidayRepository,
    parse_holiday_document,
)


__all__ = [
    "get_logger",
    "log_duration",
    "log_request_context",
    "logger",
    "StructuredLogger",
    "get_metrics",
    "metrics_endpoint",
    "setup_metrics_middleware",
    "get_holiday_repository",
    "HolidayRepository",
    "parse_holiday_document",
]
