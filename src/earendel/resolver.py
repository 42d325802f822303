"""Object-name resolution and the strategy that picks which object to look up."""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Dict, Mapping, Protocol

from astropy.coordinates import SkyCoord
from astropy.coordinates.name_resolve import NameResolveError

from earendel.apod.models import ApodRecord
from earendel.errors import ResolutionError
from earendel.mast.query import Coordinate

logger = logging.getLogger(__name__)


class CoordinateResolver(Protocol):
    """Maps an object name to an ICRS position."""

    def lookup(self, name: str) -> Coordinate:
        ...


@lru_cache(maxsize=256)
def _sesame_lookup(name: str) -> Coordinate:
    coord = SkyCoord.from_name(name)
    return Coordinate(ra=float(coord.ra.deg), dec=float(coord.dec.deg))


class SesameResolver:
    """Resolves names through the CDS Sesame service (SIMBAD, NED, VizieR)."""

    def lookup(self, name: str) -> Coordinate:
        """Resolve ``name``, remembering earlier answers for the life of the process."""
        try:
            coordinate = _sesame_lookup(name)
        except NameResolveError as exc:
            raise ResolutionError(f"Could not resolve {name!r}: {exc}") from exc
        logger.debug("Resolved %r to RA=%.6f Dec=%.6f", name, coordinate.ra, coordinate.dec)
        return coordinate


class StaticResolver:
    """Dictionary-backed resolver for offline use."""

    def __init__(self, table: Mapping[str, Coordinate]) -> None:
        self.table: Dict[str, Coordinate] = dict(table)

    def lookup(self, name: str) -> Coordinate:
        try:
            return self.table[name]
        except KeyError:
            raise ResolutionError(f"Unknown object {name!r}") from None


class ObjectNameStrategy(Protocol):
    """Chooses the catalog object to search around for a given picture."""

    def object_name(self, record: ApodRecord) -> str:
        ...


class FixedObjectName:
    """Ignores the picture and always answers with the same object."""

    def __init__(self, name: str) -> None:
        self.name = name

    def object_name(self, record: ApodRecord) -> str:
        return self.name
