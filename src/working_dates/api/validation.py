"""
API Request Validation.

Uses Pydantic for query string validation.
"""

import re
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ValidationInfo, field_validator, model_validator
from pydantic_core import PydanticCustomError

from working_dates.config import settings


_NON_NEGATIVE_INT = re.compile(r"\d+", re.ASCII)

ERROR_TYPE = "invalid_parameters"


class CalculateWorkingDateQuery(BaseModel):
    """Query string of the /calculate-working-date endpoint."""
    
    days: Optional[int] = None
    hours: Optional[int] = None
    date: Optional[datetime] = None
    
    @field_validator("days", "hours", mode="before")
    @classmethod
    def validate_count(cls, v: Any, info: ValidationInfo) -> Optional[int]:
        """Accept a non-negative integer; an empty value counts as absent."""
        if v is None or v == "":
            return None
        if isinstance(v, int) and not isinstance(v, bool) and v >= 0:
            count = v
        elif isinstance(v, str) and _NON_NEGATIVE_INT.fullmatch(v.strip()):
            count = int(v.strip())
        else:
            raise PydanticCustomError(
                ERROR_TYPE,
                'The "{field}" parameter must be a non-negative integer',
                {"field": info.field_name},
            )
        
        limit = settings.business_time.max_count(info.field_name)
        if count > limit:
            raise PydanticCustomError(
                ERROR_TYPE,
                'The "{field}" parameter must not exceed {limit}',
                {"field": info.field_name, "limit": limit},
            )
        return count
    
    @field_validator("date", mode="before")
    @classmethod
    def validate_date(cls, v: Any) -> Optional[datetime]:
        """Parse an ISO 8601 UTC instant ending in "Z"."""
        if v is None or v == "":
            return None
        if isinstance(v, datetime):
            return v
        
        text = str(v).strip()
        try:
            parsed = datetime.fromisoformat(
                text[:-1] + "+00:00" if text.endswith("Z") else text
            )
        except ValueError:
            raise PydanticCustomError(
                ERROR_TYPE,
                'The "date" parameter must be a valid ISO 8601 date',
            ) from None
        
        if not text.endswith("Z"):
            raise PydanticCustomError(
                ERROR_TYPE,
                'The "date" parameter must be in UTC and end with "Z"',
            )
        return parsed
    
    @model_validator(mode="after")
    def require_days_or_hours(self) -> "CalculateWorkingDateQuery":
        if self.days is None and self.hours is None:
            raise PydanticCustomError(
                ERROR_TYPE,
                'At least one of the "days" or "hours" parameters is required',
            )
        return self
