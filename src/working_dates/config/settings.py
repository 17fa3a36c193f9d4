"""
Application configuration.

Centralizes environment variables and settings
using frozen dataclasses.
"""

import os
from dataclasses import dataclass, field


DEFAULT_HOLIDAYS_URL = "https://content.capta.co/Recruitment/WorkingDays.json"


def _env_flag(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).lower() == "true"


@dataclass(frozen=True)
class HolidaySourceSettings:
    """Remote holiday calendar settings."""
    
    url: str = field(
        default_factory=lambda: os.environ.get("HOLIDAYS_URL", DEFAULT_HOLIDAYS_URL)
    )
    timeout_seconds: float = field(
        default_factory=lambda: float(os.environ.get("HOLIDAYS_TIMEOUT_SECONDS", 10))
    )
    max_retries: int = 2
    
    # Fetch the calendar when the app starts instead of on first request
    preload: bool = field(default_factory=lambda: _env_flag("HOLIDAYS_PRELOAD"))


@dataclass(frozen=True)
class BusinessTimeSettings:
    """Business timezone settings."""
    
    timezone: str = field(
        default_factory=lambda: os.environ.get("BUSINESS_TIMEZONE", "America/Bogota")
    )
    
    # Largest counts accepted per request
    max_days: int = 3650
    max_hours: int = 3650 * 8
    
    def max_count(self, field_name: str) -> int:
        """Upper bound for the "days" or "hours" parameter."""
        return self.max_days if field_name == "days" else self.max_hours


@dataclass(frozen=True)
class Settings:
    """Main application settings."""
    
    holidays: HolidaySourceSettings = field(default_factory=HolidaySourceSettings)
    business_time: BusinessTimeSettings = field(default_factory=BusinessTimeSettings)
    port: int = field(default_factory=lambda: int(os.environ.get("PORT", 8080)))
    debug: bool = field(default_factory=lambda: _env_flag("DEBUG"))
    environment: str = field(
        default_factory=lambda: os.environ.get("ENVIRONMENT", "development")
    )


# Singleton settings instance
settings = Settings()
