"""Single-slot cache keeping the APOD for the current UTC day."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Callable, Optional

from earendel.apod.client import ApodClient
from earendel.apod.models import ApodRecord

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class CacheEntry:
    date: date
    record: ApodRecord


class ApodCache:
    """Write-through cache holding at most one record, keyed by UTC calendar date.

    A lookup on any later day is a full miss: the client is called again and the
    previous entry is replaced. Concurrent callers on a cold day may each fetch;
    the last write wins.
    """

    def __init__(self, client: ApodClient, clock: Optional[Clock] = None) -> None:
        self.client = client
        self.clock = clock or utc_now
        self._entry: Optional[CacheEntry] = None

    @property
    def cached_date(self) -> Optional[date]:
        return self._entry.date if self._entry else None

    def get(self) -> ApodRecord:
        """Return today's record, fetching it only on the first call of the UTC day."""
        today = self.clock().astimezone(timezone.utc).date()
        if self._entry is not None and self._entry.date == today:
            logger.debug("APOD cache hit for %s", today)
            return self._entry.record

        logger.debug("APOD cache miss for %s (cached: %s)", today, self.cached_date)
        record = self.client.fetch()
        self._entry = CacheEntry(date=today, record=record)
        return record
