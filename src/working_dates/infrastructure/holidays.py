"""
Holiday Repository.

Loads the remote holiday calendar once and keeps it for the lifetime of
the repository. A failed load degrades to an empty calendar, which is
kept as well: callers only ever see "no holidays", never an error.
"""

from datetime import date
from threading import Lock
from typing import Any, FrozenSet, List, Optional

from working_dates.core.exceptions import HolidaySourceError
from working_dates.infrastructure.http import HolidayClient
from working_dates.infrastructure.logging import get_logger


logger = get_logger(__name__)


# Keys holding the date in object-shaped entries, by priority
DATE_FIELDS = ("holiday", "date")


def _extract_entries(document: Any) -> List[Any]:
    """
    Find the list of holiday entries in a decoded document.

    The document is either the list itself or an object wrapping it.
    For a wrapper object the first list-valued key, in document order,
    wins; other list-valued keys are ignored.
    """
    if isinstance(document, list):
        return document

    if isinstance(document, dict):
        for key, value in document.items():
            if isinstance(value, list):
                return value
        raise HolidaySourceError("no list of holidays found in document")

    raise HolidaySourceError(f"unrecognized document type: {type(document).__name__}")


def _entry_value(entry: Any) -> Any:
    if isinstance(entry, dict):
        for field_name in DATE_FIELDS:
            if entry.get(field_name):
                return entry[field_name]
        return None
    return entry


def parse_holiday_document(document: Any) -> FrozenSet[date]:
    """
    Turn a holiday document into a set of dates.

    Accepted shapes:
        - ``["2025-01-01", ...]``
        - ``[{"holiday": "2025-01-01", ...}, ...]`` (or a ``date`` field)
        - ``{"<any key>": <one of the lists above>}``

    Null or empty entries are dropped; entries that are not
    ``YYYY-MM-DD`` dates are dropped with a warning.

    Raises:
        HolidaySourceError: If no list of entries can be found.
    """
    holidays = set()
    skipped = 0

    for entry in _extract_entries(document):
        value = _entry_value(entry)
        if value is None or value == "":
            continue
        try:
            holidays.add(date.fromisoformat(str(value)[:10]))
        except ValueError:
            skipped += 1

    if skipped:
        logger.warning(
            f"Skipped {skipped} unparseable holiday entries",
            extra={"extra_fields": {"skipped_count": skipped}}
        )

    return frozenset(holidays)


class HolidayRepository:
    """
    Single-flight, load-once holiday calendar.

    The first caller fetches the document while concurrent callers wait
    on the lock and then reuse its result.
    """

    def __init__(self, client: Optional[HolidayClient] = None) -> None:
        self._client = client or HolidayClient()
        self._holidays: Optional[FrozenSet[date]] = None
        self._lock = Lock()

    @property
    def is_loaded(self) -> bool:
        return self._holidays is not None

    def holidays(self) -> FrozenSet[date]:
        """
        Get the holiday calendar, loading it on first use.

        Returns:
            Frozenset of holiday dates (empty if the source failed).
        """
        cached = self._holidays
        if cached is not None:
            return cached

        with self._lock:
            if self._holidays is None:
                self._holidays = self._load()
            return self._holidays

    def preload(self) -> FrozenSet[date]:
        """Load the calendar eagerly (e.g. at startup)."""
        return self.holidays()

    def _load(self) -> FrozenSet[date]:
        try:
            holidays = parse_holiday_document(self._client.fetch_document())
        except HolidaySourceError as e:
            logger.error(
                f"Holiday calendar unavailable, continuing without holidays: {e}",
                extra={"extra_fields": {
                    "url": self._client.url,
                    "error_type": type(e).__name__,
                    **e.details,
                }}
            )
            return frozenset()
        except Exception as e:
            logger.exception(
                f"Unexpected error loading holiday calendar, continuing without holidays: {e}",
                extra={"extra_fields": {
                    "url": self._client.url,
                    "error_type": type(e).__name__,
                }}
            )
            return frozenset()
        finally:
            self._client.close()

        logger.info(
            f"Loaded {len(holidays)} holidays",
            extra={"extra_fields": {"holiday_count": len(holidays)}}
        )
        return holidays


# Global repository instance
_holiday_repository: Optional[HolidayRepository] = None
_repository_lock = Lock()


def get_holiday_repository() -> HolidayRepository:
    """Get the process-wide holiday repository."""
    global _holiday_repository
    with _repository_lock:
        if _holiday_repository is None:
            _holiday_repository = HolidayRepository()
        return _holiday_repository
