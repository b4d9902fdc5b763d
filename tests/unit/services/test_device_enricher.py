"""
Unit tests for DeviceEnricher
"""

from unittest.mock import MagicMock

import pytest

from src.app.services.device_enricher import (
    DeviceEnricher,
    map_device_type,
    map_platform,
)
from src.app.services.geo_locator import GeoLocator
from src.domain.entities import DeviceType, Platform

IPHONE_UA = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 16_0 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/16.0 Mobile/15E148 Safari/604.1"
)
IPAD_UA = (
    "Mozilla/5.0 (iPad; CPU OS 16_0 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/16.0 Mobile/15E148 Safari/604.1"
)
ANDROID_UA = (
    "Mozilla/5.0 (Linux; Android 13; SM-S901B) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/112.0.0.0 Mobile Safari/537.36"
)
WINDOWS_UA = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/118.0.0.0 Safari/537.36"
)


class ExplodingGeoLocator(GeoLocator):
    def lookup(self, ip_address):
        raise RuntimeError("database corrupted")


def test_enrich_empty_input_returns_unknown_without_geo():
    """enrich("", None) degrades to an empty classification"""
    info = DeviceEnricher().enrich("", None)

    assert info.device_type == DeviceType.unknown
    assert info.platform == Platform.unknown
    assert info.location is None
    assert info.to_document() == {"device_type": "unknown", "platform": "unknown"}


def test_enrich_iphone(enricher):
    info = enricher.enrich(IPHONE_UA, None)

    assert info.device_type == DeviceType.mobile
    assert info.platform == Platform.ios
    assert info.browser == "Mobile Safari"
    assert info.os_version.startswith("16")


def test_enrich_ipad_is_tablet(enricher):
    info = enricher.enrich(IPAD_UA, None)

    assert info.device_type == DeviceType.tablet
    assert info.platform == Platform.ios


def test_enrich_android_phone(enricher):
    info = enricher.enrich(ANDROID_UA, None)

    assert info.device_type == DeviceType.mobile
    assert info.platform == Platform.android


def test_enrich_windows_desktop(enricher):
    info = enricher.enrich(WINDOWS_UA, None)

    assert info.device_type == DeviceType.desktop
    assert info.platform == Platform.windows
    assert info.browser == "Chrome"
    assert info.device_name == "Unknown Device"


def test_enrich_malformed_user_agent_does_not_raise(enricher):
    info = enricher.enrich("%%% not a browser %%%", None)

    assert info.platform == Platform.unknown


def test_enrich_attaches_geo_on_hit(enricher):
    info = enricher.enrich(WINDOWS_UA, "203.0.113.7")

    assert info.location.city == "Berlin"
    # longitude first, then latitude
    assert info.location.coordinates == [13.405, 52.52]
    assert info.to_document()["location"]["country"] == "DE"


def test_enrich_omits_geo_on_miss(enricher):
    info = enricher.enrich(WINDOWS_UA, "198.51.100.1")

    assert info.location is None
    assert "location" not in info.to_document()


def test_enrich_swallows_geo_lookup_errors():
    info = DeviceEnricher(ExplodingGeoLocator()).enrich(WINDOWS_UA, "203.0.113.7")

    assert info.location is None
    assert info.platform == Platform.windows


@pytest.mark.parametrize(
    "os_name,expected",
    [
        ("Android", Platform.android),
        ("iOS", Platform.ios),
        ("Windows", Platform.windows),
        ("Mac OS X", Platform.macos),
        ("Ubuntu Linux", Platform.linux),
        ("Chrome OS", Platform.unknown),
        (None, Platform.unknown),
    ],
)
def test_map_platform(os_name, expected):
    assert map_platform(os_name) == expected


def test_map_device_type_defaults_to_desktop():
    bot = MagicMock(is_tablet=False, is_mobile=False, is_pc=False, is_bot=True)
    assert map_device_type(bot) == DeviceType.desktop

