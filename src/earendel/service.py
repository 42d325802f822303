"""Ties the APOD cache, name resolution and the archive search together."""
from __future__ import annotations

import logging
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from earendel.apod.cache import ApodCache
from earendel.apod.client import ApodClient
from earendel.apod.models import ApodRecord
from earendel.config import Settings, get_settings
from earendel.errors import EarendelError, FitsLookupError, LookupStage
from earendel.mast.parser import MastResultParser, fits_urls
from earendel.mast.query import SEARCH_HEADERS, MastQueryBuilder, check_page
from earendel.resolver import CoordinateResolver, FixedObjectName, ObjectNameStrategy, SesameResolver
from earendel.transport import HttpTransport, RequestsTransport

logger = logging.getLogger(__name__)


class FitsPage(BaseModel):
    """One page of FITS download links related to today's picture."""

    model_config = ConfigDict(frozen=True)

    files: List[str]
    page: int
    total_hits: int


class FitsLookupService:
    """Answers "page N of FITS files related to today's APOD".

    Each call runs sequentially: cached APOD, object name, coordinate, archive
    search, parse. The first failure is raised as a FitsLookupError tagged with
    the stage it happened in; nothing partial is ever returned.
    """

    def __init__(
        self,
        cache: ApodCache,
        resolver: CoordinateResolver,
        transport: HttpTransport,
        settings: Settings,
        naming: Optional[ObjectNameStrategy] = None,
        builder: Optional[MastQueryBuilder] = None,
        parser: Optional[MastResultParser] = None,
    ) -> None:
        self.cache = cache
        self.resolver = resolver
        self.transport = transport
        self.settings = settings
        self.naming = naming or FixedObjectName(settings.fallback_object_name)
        self.builder = builder or MastQueryBuilder()
        self.parser = parser or MastResultParser()

    def get_apod_image(self) -> ApodRecord:
        """Today's picture, served from the day cache when possible."""
        return self.cache.get()

    def get_fits_page(self, page: int) -> FitsPage:
        """FITS download links for result page ``page`` of the search around today's subject."""
        check_page(page)
        try:
            api_key = self.settings.require_mast_key()
        except EarendelError as exc:
            raise FitsLookupError(LookupStage.QUERY, exc) from exc

        try:
            record = self.cache.get()
        except EarendelError as exc:
            raise FitsLookupError(LookupStage.APOD, exc) from exc

        try:
            name = self.naming.object_name(record)
            coordinate = self.resolver.lookup(name)
        except EarendelError as exc:
            raise FitsLookupError(LookupStage.RESOLVE, exc) from exc

        request = self.builder.build(coordinate, page)
        logger.info("Searching %s around %r (RA=%.5f Dec=%.5f), page %d", request.service, name,
                    coordinate.ra, coordinate.dec, page)
        headers = dict(SEARCH_HEADERS, Authorization=f"token {api_key}")
        try:
            body = self.transport.post(self.settings.mast_url, request.encode(), headers)
        except EarendelError as exc:
            raise FitsLookupError(LookupStage.QUERY, exc) from exc

        try:
            entries, paging = self.parser.parse(body)
        except EarendelError as exc:
            raise FitsLookupError(LookupStage.PARSE, exc) from exc

        files = fits_urls(entries)
        logger.info("Page %d: %d of %d rows are FITS (%d total hits)", page, len(files), len(entries),
                    paging.rows_total)
        return FitsPage(files=files, page=page, total_hits=paging.rows_total)


def build_service(settings: Optional[Settings] = None) -> FitsLookupService:
    """Wire the default network-backed collaborators."""
    settings = settings or get_settings()
    transport = RequestsTransport(timeout=settings.http_timeout)
    cache = ApodCache(ApodClient(transport, settings))
    return FitsLookupService(cache=cache, resolver=SesameResolver(), transport=transport, settings=settings)
