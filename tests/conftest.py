"""
Test Configuration and Fixtures.

Provides shared fixtures for all tests.
"""

from datetime import date
from typing import FrozenSet, Generator, Iterable
from unittest.mock import patch

import pytest
from flask import Flask
from flask.testing import FlaskClient

from working_dates.app import create_app
from working_dates.core.calendar import BusinessCalendar
from working_dates.core.working_time import WorkingTimeCalculator
from working_dates.services import WorkingDateService


BOGOTA = "America/Bogota"


class StaticHolidays:
    """In-memory holiday provider counting how often it is asked."""

    def __init__(self, dates: Iterable[date] = ()) -> None:
        self._holidays = frozenset(dates)
        self.calls = 0

    def holidays(self) -> FrozenSet[date]:
        self.calls += 1
        return self._holidays


@pytest.fixture
def holiday_dates() -> FrozenSet[date]:
    """A few 2025 Colombian holidays."""
    return frozenset({
        date(2025, 1, 1),    # Wednesday
        date(2025, 1, 6),    # Monday
        date(2025, 4, 17),   # Holy Thursday
        date(2025, 4, 18),   # Good Friday
        date(2025, 5, 1),    # Thursday
        date(2025, 12, 25),  # Thursday
    })


@pytest.fixture
def holiday_provider(holiday_dates) -> StaticHolidays:
    return StaticHolidays(holiday_dates)


@pytest.fixture
def calendar(holiday_provider) -> BusinessCalendar:
    return BusinessCalendar(holiday_provider)


@pytest.fixture
def calculator(calendar) -> WorkingTimeCalculator:
    return WorkingTimeCalculator(calendar)


@pytest.fixture
def service(calculator) -> WorkingDateService:
    """Working date service that never touches the network."""
    return WorkingDateService(calculator=calculator, timezone_name=BOGOTA)


@pytest.fixture
def app() -> Flask:
    """Create test Flask application."""
    test_config = {
        "TESTING": True,
        "HOLIDAYS_PRELOAD": False,
    }
    return create_app(test_config)


@pytest.fixture
def client(app: Flask) -> FlaskClient:
    """Create test client."""
    return app.test_client()


@pytest.fixture
def offline_routes(service) -> Generator[WorkingDateService, None, None]:
    """Make the routes use the offline service."""
    with patch("working_dates.api.routes.WorkingDateService", return_value=service):
        yield service


@pytest.fixture
def empty_calendar() -> BusinessCalendar:
    """Calendar of a source that returned no holidays."""
    return BusinessCalendar(StaticHolidays())
