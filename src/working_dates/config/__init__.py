"""Configuration package."""

from working_dates.config.settings import (
    BusinessTimeSettings,
    HolidaySourceSettings,
    Settings,
    settings,
)

__all__ = [
    "BusinessTimeSettings",
    "HolidaySourceSettings",
    "Settings",
    "settings",
]
