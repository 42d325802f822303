"""Construction and wire encoding of MAST cone-search requests."""
from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Dict, Optional
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict

CONE_SERVICE = "Mast.Caom.Cone"
SEARCH_RADIUS_DEG = 0.2
PAGE_SIZE = 25
REQUEST_TIMEOUT_S = 30

SEARCH_HEADERS: Dict[str, str] = {
    "Content-Type": "application/x-www-form-urlencoded",
    "Accept": "text/plain",
}


def check_page(page: int) -> int:
    if isinstance(page, bool) or not isinstance(page, int) or page < 0:
        raise ValueError(f"page must be a non-negative integer, got {page!r}")
    return page


@dataclass(frozen=True)
class Coordinate:
    """ICRS position in decimal degrees."""

    ra: float
    dec: float


class ConeParams(BaseModel):
    model_config = ConfigDict(frozen=True)

    ra: float
    dec: float
    radius: float


class SearchRequest(BaseModel):
    """One page of a cone search, in the field order the service documents."""

    model_config = ConfigDict(frozen=True)

    service: str
    params: ConeParams
    format: str
    pagesize: int
    page: int
    removenullcolumns: bool
    timeout: int
    cachebreaker: Optional[str] = None

    def to_json(self) -> str:
        """Compact JSON rendering of the request."""
        return json.dumps(self.model_dump(exclude_none=True), separators=(",", ":"))

    def encode(self) -> str:
        """Form body carrying the whole JSON request as the single ``request`` value."""
        return urlencode({"request": self.to_json()})


class MastQueryBuilder:
    """Builds cone-search requests around a coordinate for a given result page.

    With ``cache_breaker`` enabled each request also carries the current UTC
    time, which makes otherwise identical requests distinct upstream.
    """

    def __init__(self, cache_breaker: bool = False, clock: Optional[Callable[[], datetime]] = None) -> None:
        self.cache_breaker = cache_breaker
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def build(self, coordinate: Coordinate, page: int) -> SearchRequest:
        """Cone search of fixed radius around ``coordinate`` for one result page."""
        check_page(page)
        return SearchRequest(
            service=CONE_SERVICE,
            params=ConeParams(ra=coordinate.ra, dec=coordinate.dec, radius=SEARCH_RADIUS_DEG),
            format="json",
            pagesize=PAGE_SIZE,
            page=page,
            removenullcolumns=True,
            timeout=REQUEST_TIMEOUT_S,
            cachebreaker=self.clock().isoformat() if self.cache_breaker else None,
        )
