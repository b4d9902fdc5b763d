"""
Device Info Value Objects

Derived device and geolocation data attached to audit logs, security
events and sessions. Stored as JSON documents; readers treat unknown keys
as opaque.
"""

from typing import List, Optional

from pydantic import BaseModel

from .enums import DeviceType, Platform


class GeoLocation(BaseModel):
    """Coarse location resolved from an IP address"""

    country: Optional[str] = None
    region: Optional[str] = None
    city: Optional[str] = None
    timezone: Optional[str] = None
    coordinates: Optional[List[float]] = None  # [longitude, latitude]


class DeviceInfo(BaseModel):
    """Device classification parsed from a user agent"""

    device_name: Optional[str] = None
    device_type: DeviceType = DeviceType.unknown
    platform: Platform = Platform.unknown
    os_version: Optional[str] = None
    browser: Optional[str] = None
    browser_version: Optional[str] = None
    location: Optional[GeoLocation] = None

    def to_document(self) -> dict:
        return self.model_dump(mode="json", exclude_none=True)
