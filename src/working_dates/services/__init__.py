"""
Services Layer.

Business logic orchestration:
- Working date calculation
"""

from working_dates.services.calculator import WorkingDateService


__all__ = [
    "WorkingDateService",
]
