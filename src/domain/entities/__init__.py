"""
Audit Service Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    ActionCategory,
    AuditSource,
    AuditStatus,
    DeviceType,
    LogoutReason,
    Platform,
    SecurityEventType,
    Severity,
)

# Export value objects
from .device_info import DeviceInfo, GeoLocation

# Export all entities
from .audit_log import AuditLog
from .security_event import SecurityEvent
from .user_session import UserSession

__all__ = [
    # Enums
    "ActionCategory",
    "AuditSource",
    "AuditStatus",
    "DeviceType",
    "LogoutReason",
    "Platform",
    "SecurityEventType",
    "Severity",
    # Value objects
    "DeviceInfo",
    "GeoLocation",
    # Entities
    "AuditLog",
    "SecurityEvent",
    "UserSession",
]
