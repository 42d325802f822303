from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

import pytest

from earendel.config import Settings
from earendel.mast.query import Coordinate

APOD_URL = "https://apod.test/planetary/apod"
MAST_URL = "https://mast.test/api/v0/invoke"
IMAGE_URL = "https://apod.test/image/galaxy.jpg"
IMAGE_BYTES = b"\x89PNG fake image"

APOD_JSON = {
    "title": "NGC 1566: The Spanish Dancer",
    "date": "2026-10-19",
    "media_type": "image",
    "copyright": "Jane Astronomer",
    "explanation": "A grand design spiral.",
    "url": IMAGE_URL,
    "hdurl": "https://apod.test/image/galaxy_big.jpg",
    "service_version": "v1",
}

MAST_JSON = {
    "status": "OK",
    "msg": "",
    "data": [{"dataURL": "a/b.fits"}, {"dataURL": "c/d.png"}, {}],
    "paging": {"page": 2, "pageSize": 25, "pagesFiltered": 1, "rows": 3, "rowsFiltered": 3, "rowsTotal": 47},
}

Reply = Union[bytes, str, Exception]


class FakeTransport:
    """Records every call and replays canned replies keyed by URL."""

    def __init__(self, gets: Optional[Dict[str, Reply]] = None, post_reply: Reply = "") -> None:
        self.gets = gets or {}
        self.post_reply = post_reply
        self.get_calls: List[Tuple[str, Dict[str, Any]]] = []
        self.post_calls: List[Tuple[str, str, Dict[str, str]]] = []

    def get(self, url: str, params: Optional[Mapping[str, Any]] = None) -> bytes:
        self.get_calls.append((url, dict(params or {})))
        reply = self.gets[url]
        if isinstance(reply, Exception):
            raise reply
        return reply if isinstance(reply, bytes) else reply.encode("utf-8")

    def post(self, url: str, body: str, headers: Mapping[str, str]) -> str:
        self.post_calls.append((url, body, dict(headers)))
        if isinstance(self.post_reply, Exception):
            raise self.post_reply
        return self.post_reply if isinstance(self.post_reply, str) else self.post_reply.decode("utf-8")


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        apod_api_key="apod-key",
        mast_api_key="mast-key",
        apod_url=APOD_URL,
        mast_url=MAST_URL,
        fallback_object_name="NGC 1566",
    )


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport(
        gets={APOD_URL: json.dumps(APOD_JSON), IMAGE_URL: IMAGE_BYTES},
        post_reply=json.dumps(MAST_JSON),
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def ngc1566() -> Coordinate:
    return Coordinate(ra=65.0016, dec=-54.9380)
