"""
Business calendar module.

Defines the fixed work schedule and the business day / business hour
predicates. The holiday set comes from an injected provider.
"""

from datetime import date, datetime, timedelta
from typing import FrozenSet, Protocol, Union


# Work schedule (local business time)
WORK_START_HOUR = 8
WORK_END_HOUR = 17
LUNCH_START_HOUR = 12
LUNCH_END_HOUR = 13

# 9 nominal hours minus the lunch hour
WORK_HOURS_PER_DAY = WORK_END_HOUR - WORK_START_HOUR - (LUNCH_END_HOUR - LUNCH_START_HOUR)

# Monday=0 ... Friday=4
BUSINESS_WEEKDAYS = frozenset(range(5))


class HolidayProvider(Protocol):
    """Anything able to return the set of non-working dates."""

    def holidays(self) -> FrozenSet[date]:
        ...


class BusinessCalendar:
    """
    Answers whether a date is a business day and whether an instant
    falls inside working hours.
    """

    def __init__(self, holiday_provider: HolidayProvider) -> None:
        self._holiday_provider = holiday_provider

    def is_holiday(self, check_date: Union[datetime, date]) -> bool:
        if isinstance(check_date, datetime):
            check_date = check_date.date()
        return check_date in self._holiday_provider.holidays()

    def is_business_day(self, check_date: Union[datetime, date]) -> bool:
        """
        Check if a date is a business day (Monday to Friday, not a holiday).

        The weekend check runs first, so the holiday calendar is only
        loaded when a weekday is checked.

        Args:
            check_date: The date to check. The time part of a datetime is ignored.

        Returns:
            True if the date is a business day.
        """
        if isinstance(check_date, datetime):
            check_date = check_date.date()

        if check_date.weekday() not in BUSINESS_WEEKDAYS:
            return False

        return not self.is_holiday(check_date)

    @staticmethod
    def is_business_hour(instant: datetime) -> bool:
        """
        Check if an instant is inside working hours.

        The whole lunch-start hour is excluded, whatever the minute.
        """
        hour = instant.hour
        return WORK_START_HOUR <= hour < WORK_END_HOUR and hour != LUNCH_START_HOUR

    def next_business_day(self, from_date: date) -> date:
        """Get the first business day strictly after a date."""
        current = from_date + timedelta(days=1)
        while not self.is_business_day(current):
            current += timedelta(days=1)
        return current
