"""
Working Date Service.

Orchestrates a calculation request: UTC to business-local time,
business days first, then business hours, then back to UTC.
"""

from datetime import datetime
from typing import Optional

from working_dates.config import settings
from working_dates.core.calendar import BusinessCalendar
from working_dates.core.exceptions import InvalidParametersError
from working_dates.core.timezones import now_utc, to_local, to_utc
from working_dates.core.working_time import WorkingTimeCalculator
from working_dates.infrastructure.holidays import get_holiday_repository
from working_dates.infrastructure.logging import get_logger, log_duration
from working_dates.infrastructure.metrics import get_metrics


logger = get_logger(__name__)


class WorkingDateService:
    """
    Service computing working dates for the API.
    
    Responsible for:
    - Converting between UTC and business-local time
    - Applying day and hour additions in order
    """
    
    def __init__(
        self,
        calculator: Optional[WorkingTimeCalculator] = None,
        timezone_name: Optional[str] = None,
    ) -> None:
        self._calculator = calculator or WorkingTimeCalculator(
            BusinessCalendar(get_holiday_repository())
        )
        self._timezone = timezone_name or settings.business_time.timezone
        self._logger = logger.with_fields(timezone=self._timezone)
    
    @log_duration("calculate_working_date")
    def calculate(
        self,
        start: Optional[datetime] = None,
        days: int = 0,
        hours: int = 0,
    ) -> datetime:
        """
        Add business days, then business hours, to a UTC instant.
        
        Args:
            start: Starting UTC instant. Defaults to now.
            days: Business days to add.
            hours: Business hours to add, counted from the day result.
            
        Returns:
            Resulting aware datetime in UTC.

        Raises:
            InvalidParametersError: If days or hours is negative or above
                the configured maximum.
        """
        for field_name, value in (("days", days), ("hours", hours)):
            if value < 0:
                raise InvalidParametersError(
                    f'The "{field_name}" parameter must be a non-negative integer',
                    field=field_name,
                )
            limit = settings.business_time.max_count(field_name)
            if value > limit:
                raise InvalidParametersError(
                    f'The "{field_name}" parameter must not exceed {limit}',
                    field=field_name,
                )

        start_utc = start or now_utc()
        current = to_local(start_utc, self._timezone)
        
        if days > 0:
            current = self._calculator.add_business_days(current, days)
        
        if hours > 0:
            current = self._calculator.add_business_hours(current, hours)
        
        result = to_utc(current, self._timezone)
        
        get_metrics().calculations_total.inc(status="success")
        self._logger.info(
            "Working date calculated",
            extra={"extra_fields": {
                "start": start_utc.isoformat(),
                "days": days,
                "hours": hours,
                "local_result": current.isoformat(),
            }}
        )
        
        return result
