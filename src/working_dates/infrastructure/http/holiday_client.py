"""
Holiday Calendar Client.

Downloads the remote JSON document listing non-working dates.
"""

import time
from typing import Any, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from working_dates.config import settings
from working_dates.core.exceptions import HolidaySourceError
from working_dates.infrastructure.logging import get_logger, log_duration
from working_dates.infrastructure.metrics import get_metrics


logger = get_logger(__name__)


class HolidayClient:
    """
    Client for the remote holiday calendar.

    Only transports the document; interpreting it is the
    repository's job.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
    ) -> None:
        """
        Initialize holiday client.

        Args:
            url: URL of the holiday JSON document.
            timeout: Request timeout in seconds.
            max_retries: Retries on gateway errors.
        """
        self._url = url or settings.holidays.url
        self._timeout = timeout or settings.holidays.timeout_seconds
        self._max_retries = (
            settings.holidays.max_retries if max_retries is None else max_retries
        )
        self._session: Optional[requests.Session] = None

    @property
    def url(self) -> str:
        return self._url

    @property
    def session(self) -> requests.Session:
        """Get or create HTTP session with retry logic."""
        if self._session is None:
            self._session = requests.Session()

            retry_strategy = Retry(
                total=self._max_retries,
                backoff_factor=0.5,
                status_forcelist=[502, 503, 504],
                allowed_methods=["GET"],
            )

            adapter = HTTPAdapter(max_retries=retry_strategy)
            self._session.mount("http://", adapter)
            self._session.mount("https://", adapter)

            self._session.headers.update({"Accept": "application/json"})

        return self._session

    @log_duration("holiday_calendar_fetch")
    def fetch_document(self) -> Any:
        """
        Fetch and decode the holiday document.

        Returns:
            The decoded JSON payload.

        Raises:
            HolidaySourceError: If the request fails or the body is not JSON.
        """
        start = time.time()
        logger.info(
            "Fetching holiday calendar",
            extra={"extra_fields": {"url": self._url, "timeout": self._timeout}}
        )

        try:
            response = self.session.get(self._url, timeout=self._timeout)
            response.raise_for_status()
            document = response.json()

        except requests.exceptions.Timeout as e:
            get_metrics().holiday_fetch_total.inc(status="timeout")
            raise HolidaySourceError(
                f"timeout after {self._timeout}s",
                duration_ms=int((time.time() - start) * 1000),
            ) from e

        except requests.exceptions.HTTPError as e:
            get_metrics().holiday_fetch_total.inc(status="http_error")
            raise HolidaySourceError(
                f"HTTP {e.response.status_code}",
                status_code=e.response.status_code,
                duration_ms=int((time.time() - start) * 1000),
            ) from e

        except (requests.exceptions.JSONDecodeError, RecursionError) as e:
            get_metrics().holiday_fetch_total.inc(status="invalid_json")
            raise HolidaySourceError(f"invalid JSON body: {e}") from e

        except requests.exceptions.RequestException as e:
            get_metrics().holiday_fetch_total.inc(status="error")
            raise HolidaySourceError(f"request failed: {e}") from e

        get_metrics().holiday_fetch_total.inc(status="success")
        return document

    def close(self) -> None:
        """Close the HTTP session."""
        if self._session:
            self._session.close()
            self._session = None

    def __enter__(self) -> "HolidayClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
