"""HTTP transport used by the APOD and archive clients."""
from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Protocol

import requests

from earendel.errors import TransportError

logger = logging.getLogger(__name__)

USER_AGENT = "earendel/0.1"


class HttpTransport(Protocol):
    """Minimal interface the clients need from an HTTP stack."""

    def get(self, url: str, params: Optional[Mapping[str, Any]] = None) -> bytes:
        ...

    def post(self, url: str, body: str, headers: Mapping[str, str]) -> str:
        ...


class RequestsTransport:
    """Thin wrapper around a requests session that turns failures into TransportError."""

    def __init__(self, timeout: float = 30.0, session: Optional[requests.Session] = None) -> None:
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers["User-Agent"] = USER_AGENT

    def _send(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        logger.debug("%s %s", method, url)
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            raise TransportError(f"{method} {url} failed: {exc}", url=url) from exc
        if not response.ok:
            raise TransportError(
                f"{method} {url} returned {response.status_code}: {response.text[:200]}",
                status_code=response.status_code,
                url=url,
            )
        return response

    def get(self, url: str, params: Optional[Mapping[str, Any]] = None) -> bytes:
        return self._send("GET", url, params=dict(params or {})).content

    def post(self, url: str, body: str, headers: Mapping[str, str]) -> str:
        request_headers: Dict[str, str] = dict(headers)
        return self._send("POST", url, data=body, headers=request_headers).text
