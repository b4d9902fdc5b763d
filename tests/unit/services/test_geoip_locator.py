"""
Unit tests for GeoIP2Locator
"""
from unittest.mock import MagicMock

from geoip2.errors import AddressNotFoundError

from src.adapter.services.geoip_locator import GeoIP2Locator


def _city_response():
    response = MagicMock()
    response.country.iso_code = "VN"
    response.subdivisions.most_specific.iso_code = "SG"
    response.city.name = "Ho Chi Minh City"
    response.location.time_zone = "Asia/Ho_Chi_Minh"
    response.location.longitude = 106.6296
    response.location.latitude = 10.8231
    return response


def test_lookup_maps_city_response():
    reader = MagicMock()
    reader.city.return_value = _city_response()

    location = GeoIP2Locator(reader).lookup("203.0.113.7")

    reader.city.assert_called_once_with("203.0.113.7")
    assert location.country == "VN"
    assert location.region == "SG"
    assert location.city == "Ho Chi Minh City"
    assert location.timezone == "Asia/Ho_Chi_Minh"
    assert location.coordinates == [106.6296, 10.8231]


def test_lookup_without_coordinates():
    response = _city_response()
    response.location.latitude = None
    reader = MagicMock()
    reader.city.return_value = response

    assert GeoIP2Locator(reader).lookup("203.0.113.7").coordinates is None


def test_lookup_miss_returns_none():
    reader = MagicMock()
    reader.city.side_effect = AddressNotFoundError("address not in database")

    assert GeoIP2Locator(reader).lookup("10.0.0.1") is None


def test_lookup_invalid_address_returns_none():
    reader = MagicMock()
    reader.city.side_effect = ValueError("not an IP address")

    assert GeoIP2Locator(reader).lookup("not-an-ip") is None
