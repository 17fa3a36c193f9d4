"""
Tests for the Holiday Calendar.

Tests document parsing, load-once caching with fallback, and the
HTTP client error mapping.
"""

import threading
import time
from datetime import date
from unittest.mock import MagicMock

import pytest
import requests

from working_dates.core.exceptions import HolidaySourceError
from working_dates.infrastructure.holidays import (
    HolidayRepository,
    parse_holiday_document,
)
from working_dates.infrastructure.http import HolidayClient


class TestParseHolidayDocument:
    """Tests for parse_holiday_document."""

    def test_list_of_strings(self):
        result = parse_holiday_document(["2025-01-01", "2025-01-06"])
        assert result == frozenset({date(2025, 1, 1), date(2025, 1, 6)})

    def test_list_of_objects(self):
        document = [
            {"holiday": "2025-04-17", "name": "Jueves Santo", "type": "religious"},
            {"holiday": "2025-04-18", "name": "Viernes Santo", "type": "religious"},
        ]
        assert parse_holiday_document(document) == frozenset({
            date(2025, 4, 17),
            date(2025, 4, 18),
        })

    def test_objects_with_date_field(self):
        assert parse_holiday_document([{"date": "2025-05-01"}]) == frozenset({date(2025, 5, 1)})

    def test_wrapped_list(self):
        document = {"year": 2025, "holidays": [{"holiday": "2025-12-25"}]}
        assert parse_holiday_document(document) == frozenset({date(2025, 12, 25)})

    def test_first_list_valued_key_wins(self):
        document = {"national": ["2025-01-01"], "regional": ["2025-03-19"]}
        assert parse_holiday_document(document) == frozenset({date(2025, 1, 1)})

    def test_null_and_empty_entries_are_dropped(self):
        document = ["2025-01-01", None, "", {"holiday": None}, {"holiday": ""}]
        assert parse_holiday_document(document) == frozenset({date(2025, 1, 1)})

    def test_datetime_strings_keep_date_part(self):
        assert parse_holiday_document(["2025-01-01T00:00:00.000Z"]) == frozenset({
            date(2025, 1, 1),
        })

    def test_invalid_dates_are_skipped(self):
        assert parse_holiday_document(["not-a-date", "2025-02-30", "2025-01-01"]) == frozenset({
            date(2025, 1, 1),
        })

    def test_empty_list(self):
        assert parse_holiday_document([]) == frozenset()

    def test_object_without_list_raises(self):
        with pytest.raises(HolidaySourceError):
            parse_holiday_document({"status": "ok"})

    @pytest.mark.parametrize("document", ["2025-01-01", 42, None])
    def test_unrecognized_document_raises(self, document):
        with pytest.raises(HolidaySourceError):
            parse_holiday_document(document)


class TestHolidayRepository:
    """Tests for HolidayRepository."""

    @pytest.fixture
    def mock_client(self):
        client = MagicMock(spec=HolidayClient)
        client.url = "https://example.test/holidays.json"
        return client

    def test_not_loaded_until_first_use(self, mock_client):
        repository = HolidayRepository(client=mock_client)

        assert repository.is_loaded is False
        mock_client.fetch_document.assert_not_called()

    def test_loads_once(self, mock_client):
        mock_client.fetch_document.return_value = ["2025-01-01"]
        repository = HolidayRepository(client=mock_client)

        first = repository.holidays()
        second = repository.holidays()

        assert first == frozenset({date(2025, 1, 1)})
        assert second is first
        assert repository.is_loaded is True
        mock_client.fetch_document.assert_called_once()

    def test_fetch_failure_degrades_to_empty_set(self, mock_client):
        mock_client.fetch_document.side_effect = HolidaySourceError("timeout after 10s")
        repository = HolidayRepository(client=mock_client)

        assert repository.holidays() == frozenset()

    def test_failure_is_not_retried(self, mock_client):
        mock_client.fetch_document.side_effect = HolidaySourceError("HTTP 503", status_code=503)
        repository = HolidayRepository(client=mock_client)

        repository.holidays()
        repository.holidays()

        assert repository.is_loaded is True
        mock_client.fetch_document.assert_called_once()

    def test_unparseable_document_degrades_to_empty_set(self, mock_client):
        mock_client.fetch_document.return_value = {"status": "maintenance"}
        repository = HolidayRepository(client=mock_client)

        assert repository.holidays() == frozenset()

    def test_unexpected_error_degrades_to_empty_set(self, mock_client):
        mock_client.fetch_document.side_effect = RecursionError(
            "maximum recursion depth exceeded"
        )
        repository = HolidayRepository(client=mock_client)

        assert repository.holidays() == frozenset()
        assert repository.holidays() == frozenset()
        assert repository.is_loaded is True
        mock_client.fetch_document.assert_called_once()

    def test_deeply_nested_body_degrades_to_empty_set(self):
        """A body nested too deep to decode behaves like any broken source."""
        response = requests.Response()
        response.status_code = 200
        response.encoding = "utf-8"
        response._content = b"[" * 100000
        session = MagicMock()
        session.get.return_value = response
        client = HolidayClient(url="https://example.test/holidays.json")
        client._session = session
        repository = HolidayRepository(client=client)

        assert repository.holidays() == frozenset()
        assert repository.holidays() == frozenset()
        session.get.assert_called_once()

    def test_closes_client_after_load(self, mock_client):
        mock_client.fetch_document.return_value = []
        HolidayRepository(client=mock_client).preload()

        mock_client.close.assert_called_once()

    def test_concurrent_first_use_fetches_once(self, mock_client):
        def slow_fetch():
            time.sleep(0.05)
            return ["2025-01-01"]

        mock_client.fetch_document.side_effect = slow_fetch
        repository = HolidayRepository(client=mock_client)
        results = []

        threads = [
            threading.Thread(target=lambda: results.append(repository.holidays()))
            for _ in range(5)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(results) == 5
        assert all(result == frozenset({date(2025, 1, 1)}) for result in results)
        mock_client.fetch_document.assert_called_once()


class TestHolidayClient:
    """Tests for HolidayClient."""

    @pytest.fixture
    def mock_session(self):
        return MagicMock()

    @pytest.fixture
    def client(self, mock_session):
        client = HolidayClient(url="https://example.test/holidays.json", timeout=3)
        client._session = mock_session
        return client

    def test_returns_decoded_document(self, client, mock_session):
        mock_session.get.return_value.json.return_value = ["2025-01-01"]

        assert client.fetch_document() == ["2025-01-01"]
        mock_session.get.assert_called_once_with(
            "https://example.test/holidays.json",
            timeout=3,
        )

    def test_timeout_raises_source_error(self, client, mock_session):
        mock_session.get.side_effect = requests.exceptions.Timeout("read timed out")

        with pytest.raises(HolidaySourceError, match="timeout"):
            client.fetch_document()

    def test_http_error_raises_source_error(self, client, mock_session):
        response = requests.Response()
        response.status_code = 503
        mock_session.get.return_value.raise_for_status.side_effect = (
            requests.exceptions.HTTPError(response=response)
        )

        with pytest.raises(HolidaySourceError) as exc_info:
            client.fetch_document()

        assert exc_info.value.status_code == 503

    def test_connection_error_raises_source_error(self, client, mock_session):
        mock_session.get.side_effect = requests.exceptions.ConnectionError("refused")

        with pytest.raises(HolidaySourceError, match="request failed"):
            client.fetch_document()

    def test_invalid_json_raises_source_error(self, client, mock_session):
        mock_session.get.return_value.json.side_effect = (
            requests.exceptions.JSONDecodeError("Expecting value", "<html>", 0)
        )

        with pytest.raises(HolidaySourceError, match="invalid JSON"):
            client.fetch_document()

    def test_undecodable_nesting_raises_source_error(self, client, mock_session):
        mock_session.get.return_value.json.side_effect = RecursionError(
            "maximum recursion depth exceeded while decoding a JSON array"
        )

        with pytest.raises(HolidaySourceError, match="invalid JSON"):
            client.fetch_document()

    def test_close_discards_session(self, client, mock_session):
        client.close()

        mock_session.close.assert_called_once()
        assert client._session is None

    def test_session_is_created_lazily(self):
        client = HolidayClient(url="https://example.test/holidays.json")

        assert isinstance(client.session, requests.Session)
        assert client.session is client.session
        client.close()
