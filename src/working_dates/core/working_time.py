"""
Working time calculation module.

Adds business days and business hours to a local instant, following
the work schedule defined in ``working_dates.core.calendar``.

All arithmetic is done on wall-clock fields, so instants must already be
expressed in the business timezone (aware or naive).
"""

from datetime import datetime, time, timedelta

from working_dates.core.calendar import (
    LUNCH_END_HOUR,
    LUNCH_START_HOUR,
    WORK_END_HOUR,
    WORK_START_HOUR,
    BusinessCalendar,
)


_NOTHING_LEFT = timedelta(0)


def _at_hour(instant: datetime, hour: int) -> datetime:
    """Same date as ``instant``, at ``hour``:00:00.000."""
    return instant.replace(hour=hour, minute=0, second=0, microsecond=0)


class WorkingTimeCalculator:
    """
    Business day and business hour arithmetic.

    Both additions canonicalize their input with
    ``adjust_to_business_instant`` before stepping.
    """

    def __init__(self, calendar: BusinessCalendar) -> None:
        self._calendar = calendar

    @property
    def calendar(self) -> BusinessCalendar:
        return self._calendar

    def start_of_next_business_day(self, instant: datetime) -> datetime:
        """Get the next business day after ``instant``, at the start of the work day."""
        next_day = self._calendar.next_business_day(instant.date())
        return datetime.combine(next_day, time(WORK_START_HOUR), tzinfo=instant.tzinfo)

    def adjust_to_business_instant(self, instant: datetime) -> datetime:
        """
        Move an instant to the nearest valid business instant.

        Rules, in order:
            - non business day: next business day at 08:00
            - before 08:00: same day at 08:00
            - during the lunch hour: same day at 12:00 (start of lunch)
            - at or after 17:00: next business day at 08:00
            - otherwise: unchanged

        Args:
            instant: Local datetime to adjust.

        Returns:
            The adjusted datetime.
        """
        if not self._calendar.is_business_day(instant):
            return self.start_of_next_business_day(instant)

        if instant.hour < WORK_START_HOUR:
            return _at_hour(instant, WORK_START_HOUR)

        if instant.hour == LUNCH_START_HOUR:
            return _at_hour(instant, LUNCH_START_HOUR)

        if instant.hour >= WORK_END_HOUR:
            return self.start_of_next_business_day(instant)

        return instant

    def add_business_days(self, instant: datetime, days: int) -> datetime:
        """
        Add a number of business days to a local instant.

        Each added day lands on the next business day at 08:00, so the
        time of day of the input is not carried over. An instant at or
        after the end of a business day counts from that day.

        Args:
            instant: Local starting datetime.
            days: Non-negative number of business days.

        Returns:
            The resulting datetime, or ``instant`` itself when ``days`` is 0.

        Raises:
            ValueError: If ``days`` is negative.
        """
        if days < 0:
            raise ValueError(f"days must be non-negative, got {days}")
        if days == 0:
            return instant

        if self._calendar.is_business_day(instant) and instant.hour >= WORK_END_HOUR:
            current = instant
        else:
            current = self.adjust_to_business_instant(instant)

        for _ in range(days):
            current = self.start_of_next_business_day(current)

        return current

    def add_business_hours(self, instant: datetime, hours: int) -> datetime:
        """
        Add a number of business hours to a local instant.

        Time is consumed segment by segment (morning until lunch, afternoon
        until the end of the day), skipping the lunch hour and rolling over
        to the next business day when a day is exhausted. A result that
        exactly fills the afternoon is returned at 17:00.

        Args:
            instant: Local starting datetime.
            hours: Non-negative number of business hours.

        Returns:
            The resulting datetime, or ``instant`` itself when ``hours`` is 0.

        Raises:
            ValueError: If ``hours`` is negative.
        """
        if hours < 0:
            raise ValueError(f"hours must be non-negative, got {hours}")
        if hours == 0:
            return instant

        current = self.adjust_to_business_instant(instant)
        remaining = timedelta(hours=hours)

        while remaining > _NOTHING_LEFT:
            if current.hour == LUNCH_START_HOUR:
                current = _at_hour(current, LUNCH_END_HOUR)
                continue

            if current.hour < LUNCH_START_HOUR:
                segment_end = _at_hour(current, LUNCH_START_HOUR)
            else:
                segment_end = _at_hour(current, WORK_END_HOUR)

            available = segment_end - current
            if remaining <= available:
                return current + remaining

            current = segment_end
            remaining -= available

            if current.hour >= WORK_END_HOUR:
                current = self.start_of_next_business_day(current)

        return current
