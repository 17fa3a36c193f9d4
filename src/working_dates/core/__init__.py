"""Core package - Pure business logic with no external dependencies."""

from working_dates.core.calendar import (
    BUSINESS_WEEKDAYS,
    LUNCH_END_HOUR,
    LUNCH_START_HOUR,
    WORK_END_HOUR,
    WORK_HOURS_PER_DAY,
    WORK_START_HOUR,
    BusinessCalendar,
    HolidayProvider,
)
from working_dates.core.exceptions import (
    BusinessError,
    ExternalServiceError,
    HolidaySourceError,
    InfrastructureError,
    InvalidParametersError,
    WorkingDatesError,
)
from working_dates.core.timezones import (
    format_utc_iso,
    now_utc,
    to_local,
    to_utc,
)
from working_dates.core.working_time import WorkingTimeCalculator

__all__ = [
    # Work schedule
    "BUSINESS_WEEKDAYS",
    "LUNCH_END_HOUR",
    "LUNCH_START_HOUR",
    "WORK_END_HOUR",
    "WORK_HOURS_PER_DAY",
    "WORK_START_HOUR",
    # Calendar and arithmetic
    "BusinessCalendar",
    "HolidayProvider",
    "WorkingTimeCalculator",
    # Timezones
    "format_utc_iso",
    "now_utc",
    "to_local",
    "to_utc",
    # Exceptions
    "BusinessError",
    "ExternalServiceError",
    "HolidaySourceError",
    "InfrastructureError",
    "InvalidParametersError",
    "WorkingDatesError",
]
