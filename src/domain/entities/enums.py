"""
Audit Service Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class ActionCategory(str, Enum):
    """Coarse grouping of audited actions"""

    auth = "auth"
    profile = "profile"
    booking = "booking"
    experience = "experience"
    payment = "payment"
    admin = "admin"
    system = "system"


class AuditStatus(str, Enum):
    """Outcome of an audited action"""

    success = "success"
    failed = "failed"
    pending = "pending"


class Severity(str, Enum):
    """Ordered severity levels; high and above escalate to a security event"""

    low = "low"
    medium = "medium"
    high = "high"
    critical = "critical"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]

    @property
    def escalates(self) -> bool:
        return self.rank >= _SEVERITY_RANK[Severity.high]


_SEVERITY_RANK = {
    Severity.low: 0,
    Severity.medium: 1,
    Severity.high: 2,
    Severity.critical: 3,
}


class AuditSource(str, Enum):
    """Where an action originated"""

    web = "web"
    mobile = "mobile"
    admin = "admin"
    api = "api"
    system = "system"


class SecurityEventType(str, Enum):
    """Classification of security events"""

    failed_login = "failed_login"
    suspicious_login = "suspicious_login"
    password_reset_request = "password_reset_request"
    password_changed = "password_changed"
    email_changed = "email_changed"
    unauthorized_access = "unauthorized_access"
    account_locked = "account_locked"
    multiple_failed_attempts = "multiple_failed_attempts"
    new_device_login = "new_device_login"
    location_change = "location_change"


class DeviceType(str, Enum):
    """Device class derived from the user agent"""

    mobile = "mobile"
    tablet = "tablet"
    desktop = "desktop"
    unknown = "unknown"


class Platform(str, Enum):
    """Operating platform derived from the user agent"""

    ios = "ios"
    android = "android"
    web = "web"
    windows = "windows"
    macos = "macos"
    linux = "linux"
    unknown = "unknown"


class LogoutReason(str, Enum):
    """Why a session stopped being active"""

    user_logout = "user_logout"
    user_terminated = "user_terminated"
    token_expired = "token_expired"
    admin_terminated = "admin_terminated"
