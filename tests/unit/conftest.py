import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.services.device_enricher import DeviceEnricher
from src.app.services.geo_locator import GeoLocator
from src.domain.entities import GeoLocation


class FakeGeoLocator(GeoLocator):
    """Resolves only the addresses it was given"""

    def __init__(self, locations=None):
        self.locations = locations or {}

    def lookup(self, ip_address):
        return self.locations.get(ip_address)


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


@pytest.fixture
def berlin():
    return GeoLocation(
        country="DE",
        region="BE",
        city="Berlin",
        timezone="Europe/Berlin",
        coordinates=[13.405, 52.52],
    )


@pytest.fixture
def enricher(berlin):
    return DeviceEnricher(FakeGeoLocator({"203.0.113.7": berlin}))
