"""
HTTP Client Package.

External service clients:
- Remote holiday calendar
"""

from working_dates.infrastructure.http.holiday_client import HolidayClient


__all__ = [
    "HolidayClient",
]
