"""
Device Enricher

Derives device, platform, browser and geolocation data from a user agent
string and an IP address.
"""

import logging
from typing import Optional

from user_agents import parse

from src.app.services.geo_locator import GeoLocator, NullGeoLocator
from src.domain.entities import DeviceInfo, DeviceType, GeoLocation, Platform

logger = logging.getLogger(__name__)

UNKNOWN_DEVICE_NAME = "Unknown Device"


def map_platform(os_name: Optional[str]) -> Platform:
    """Map an OS family name to a platform by case-insensitive substring"""
    if not os_name:
        return Platform.unknown

    name = os_name.lower()
    if "android" in name:
        return Platform.android
    if "ios" in name or "iphone" in name or "ipad" in name:
        return Platform.ios
    if "windows" in name:
        return Platform.windows
    if "mac" in name:
        return Platform.macos
    if "linux" in name:
        return Platform.linux
    return Platform.unknown


def map_device_type(user_agent) -> DeviceType:
    """Map a parsed user agent to a device type"""
    if user_agent.is_tablet:
        return DeviceType.tablet
    if user_agent.is_mobile:
        return DeviceType.mobile
    return DeviceType.desktop


class DeviceEnricher:
    """
    Pure enrichment of request metadata.

    Business Rules:
    - Never raises: parsing or lookup problems degrade to partial data
    - Empty user agent -> unknown device type and platform only
    - Geo block only on a database hit, never fabricated
    """

    def __init__(self, geo_locator: Optional[GeoLocator] = None):
        self.geo_locator = geo_locator or NullGeoLocator()

    def enrich(
        self, user_agent: Optional[str], ip_address: Optional[str]
    ) -> DeviceInfo:
        device_info = self.parse_user_agent(user_agent)
        device_info.location = self.locate(ip_address)
        return device_info

    def parse_user_agent(self, user_agent: Optional[str]) -> DeviceInfo:
        if not user_agent or not user_agent.strip():
            return DeviceInfo()

        try:
            parsed = parse(user_agent)
            return DeviceInfo(
                device_name=parsed.device.model or UNKNOWN_DEVICE_NAME,
                device_type=map_device_type(parsed),
                platform=map_platform(parsed.os.family),
                os_version=parsed.os.version_string or None,
                browser=parsed.browser.family,
                browser_version=parsed.browser.version_string or None,
            )
        except Exception as exc:
            logger.warning(f"Failed to parse user agent {user_agent!r}: {exc}")
            return DeviceInfo()

    def locate(self, ip_address: Optional[str]) -> Optional[GeoLocation]:
        if not ip_address:
            return None

        try:
            return self.geo_locator.lookup(ip_address)
        except Exception as exc:
            logger.warning(f"Geo lookup failed for {ip_address}: {exc}")
            return None
