"""
GeoIP2 Locator

Offline IP geolocation backed by a MaxMind City database.
"""

import logging
import os
from typing import Optional

import geoip2.database
from geoip2.errors import AddressNotFoundError

from src.app.services.geo_locator import GeoLocator, NullGeoLocator
from src.domain.entities import GeoLocation

logger = logging.getLogger(__name__)


class GeoIP2Locator(GeoLocator):
    """GeoLocator reading a local GeoLite2/GeoIP2 City database"""

    def __init__(self, reader: geoip2.database.Reader):
        self.reader = reader

    def lookup(self, ip_address: str) -> Optional[GeoLocation]:
        try:
            response = self.reader.city(ip_address)
        except (AddressNotFoundError, ValueError):
            return None

        coordinates = None
        if response.location.longitude is not None and response.location.latitude is not None:
            coordinates = [response.location.longitude, response.location.latitude]

        return GeoLocation(
            country=response.country.iso_code,
            region=response.subdivisions.most_specific.iso_code,
            city=response.city.name,
            timezone=response.location.time_zone,
            coordinates=coordinates,
        )


def build_geo_locator(db_path: Optional[str]) -> GeoLocator:
    """Open the configured database, falling back to no geo lookup"""
    if not db_path:
        return NullGeoLocator()

    if not os.path.exists(db_path):
        logger.warning(f"GeoIP database not found at {db_path}, geo lookup disabled")
        return NullGeoLocator()

    return GeoIP2Locator(geoip2.database.Reader(db_path))
