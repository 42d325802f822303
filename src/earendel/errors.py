"""Typed failures raised across the APOD and archive lookup paths."""
from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    CONFIG = "config"
    TRANSPORT = "transport"
    DATA_SHAPE = "data_shape"
    PARSE = "parse"
    RESOLUTION = "resolution"


class LookupStage(str, Enum):
    APOD = "apod"
    RESOLVE = "resolve"
    QUERY = "query"
    PARSE = "parse"


class EarendelError(RuntimeError):
    """Base class for every failure this package raises on purpose."""

    kind: ErrorKind


class ConfigError(EarendelError):
    """A required credential or setting is missing."""

    kind = ErrorKind.CONFIG


class TransportError(EarendelError):
    """HTTP-level failure: connection error, timeout or non-2xx status."""

    kind = ErrorKind.TRANSPORT

    def __init__(self, message: str, status_code: Optional[int] = None, url: Optional[str] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class DataShapeError(EarendelError):
    """An upstream document is missing a required field or has the wrong shape."""

    kind = ErrorKind.DATA_SHAPE


class ParseError(EarendelError):
    """The archive search response could not be interpreted."""

    kind = ErrorKind.PARSE


class ResolutionError(EarendelError):
    """An object name could not be resolved to a sky position."""

    kind = ErrorKind.RESOLUTION


# Everything ApodClient.fetch and ApodCache.get may raise.
FETCH_ERRORS = (ConfigError, TransportError, DataShapeError)


class FitsLookupError(EarendelError):
    """Wraps the first failure of a FITS lookup together with the stage it hit."""

    def __init__(self, stage: LookupStage, cause: EarendelError) -> None:
        super().__init__(f"FITS lookup failed during {stage.value}: {cause}")
        self.stage = stage
        self.cause = cause

    @property
    def kind(self) -> ErrorKind:  # type: ignore[override]
        return self.cause.kind
