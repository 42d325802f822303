"""Client for NASA's Astronomy Picture of the Day endpoint."""
from __future__ import annotations

import json
import logging

from pydantic import ValidationError

from earendel.apod.models import ApodPayload, ApodRecord
from earendel.config import Settings
from earendel.errors import DataShapeError
from earendel.transport import HttpTransport

logger = logging.getLogger(__name__)


class ApodClient:
    """Fetches today's APOD metadata followed by the image it points to."""

    def __init__(self, transport: HttpTransport, settings: Settings) -> None:
        self.transport = transport
        self.settings = settings

    def fetch(self) -> ApodRecord:
        """Fetch today's APOD metadata and the image bytes it points to."""
        api_key = self.settings.require_apod_key()
        raw = self.transport.get(self.settings.apod_url, params={"api_key": api_key})
        payload = self._parse_payload(raw)
        if not payload.url:
            raise DataShapeError(f"APOD for {payload.date} did not contain an image URL")

        logger.info("Fetching APOD image %r from %s", payload.title, payload.url)
        image = self.transport.get(payload.url)
        return ApodRecord(title=payload.title, copyright=payload.copyright, image_bytes=image)

    @staticmethod
    def _parse_payload(raw: bytes) -> ApodPayload:
        try:
            return ApodPayload.model_validate(json.loads(raw))
        except (ValueError, ValidationError) as exc:
            raise DataShapeError(f"Unexpected APOD response: {exc}") from exc
