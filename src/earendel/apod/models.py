"""Data models for the picture-of-the-day service."""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ApodPayload(BaseModel):
    """Upstream APOD JSON document; fields this package never reads are ignored."""

    model_config = ConfigDict(extra="ignore")

    title: str
    date: str
    media_type: str
    copyright: Optional[str] = None
    explanation: Optional[str] = None
    hdurl: Optional[str] = None
    url: Optional[str] = None
    service_version: Optional[str] = None


class ApodRecord(BaseModel):
    """Everything needed to display today's picture."""

    model_config = ConfigDict(frozen=True)

    title: str
    copyright: Optional[str] = None
    image_bytes: bytes = Field(repr=False)
