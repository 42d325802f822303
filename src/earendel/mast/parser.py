"""Parsing of paginated MAST search responses down to FITS download links."""
from __future__ import annotations

import json
import logging
from typing import Iterable, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from earendel.errors import ParseError

logger = logging.getLogger(__name__)

FITS_MARKER = "fits"
FINISHED_STATUSES = ("COMPLETE", "OK")


class SearchResultEntry(BaseModel):
    """One CAOM archive row. Only ``dataURL`` is interpreted; the rest passes through."""

    model_config = ConfigDict(extra="allow")

    dataURL: Optional[str] = None


class PagingSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    page: int
    page_size: int = Field(alias="pageSize")
    rows_on_page: int = Field(alias="rows")
    rows_total: int = Field(alias="rowsTotal")
    pages_filtered: Optional[int] = Field(default=None, alias="pagesFiltered")
    rows_filtered: Optional[int] = Field(default=None, alias="rowsFiltered")


class SearchResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    status: Optional[str] = None
    msg: Optional[str] = None
    data: List[SearchResultEntry]
    paging: PagingSummary


def fits_urls(entries: Iterable[SearchResultEntry]) -> List[str]:
    """Download URLs containing ``fits`` (case-sensitive), in source order."""
    return [entry.dataURL for entry in entries if entry.dataURL and FITS_MARKER in entry.dataURL]


class MastResultParser:
    def parse(self, body: str) -> Tuple[List[SearchResultEntry], PagingSummary]:
        """Split a search response into its rows and paging summary."""
        try:
            document = json.loads(body)
        except ValueError as exc:
            raise ParseError(f"Archive response is not JSON: {exc}") from exc

        status = document.get("status") if isinstance(document, dict) else None
        if status == "ERROR":
            raise ParseError(f"Archive reported an error: {document.get('msg') or 'no message'}")
        if status is not None and status not in FINISHED_STATUSES:
            raise ParseError(f"Archive search is not finished (status {status!r})")

        try:
            response = SearchResponse.model_validate(document)
        except ValidationError as exc:
            raise ParseError(f"Unexpected archive response shape: {exc}") from exc

        logger.debug(
            "Parsed %d rows (page %d, %d total)",
            len(response.data),
            response.paging.page,
            response.paging.rows_total,
        )
        return response.data, response.paging
