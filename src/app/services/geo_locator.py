from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities import GeoLocation


class GeoLocator(ABC):
    """Resolves an IP address to a coarse location"""

    @abstractmethod
    def lookup(self, ip_address: str) -> Optional[GeoLocation]:
        """Return the location for ip_address, or None when unknown"""
        pass


class NullGeoLocator(GeoLocator):
    """Locator used when no geo database is configured"""

    def lookup(self, ip_address: str) -> Optional[GeoLocation]:
        return None
