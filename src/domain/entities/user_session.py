"""
UserSession Entity

One logical login session bound to one device.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel

from src.domain.base import utcnow

from .enums import DeviceType, Platform


class UserSession(SQLModel, table=True):
    """
    UserSession entity - tracks a user's presence on one device.

    Business Rules:
    - At most one active session per (user_id, device_id)
    - Re-opening on the same device refreshes the session in place
    - session_token is an opaque reference issued by the auth collaborator
    - Closing sets is_active=False, logout_at and logout_reason
    """

    __tablename__ = "user_sessions"

    id: Optional[int] = Field(default=None, primary_key=True)
    uuid: UUID = Field(default_factory=uuid4, unique=True, index=True)

    user_id: int = Field(nullable=False, index=True)
    session_token: str = Field(max_length=500, unique=True, index=True)
    device_id: Optional[str] = Field(default=None, max_length=255)

    device_name: Optional[str] = Field(default=None, max_length=255)
    device_type: DeviceType = Field(default=DeviceType.unknown)
    platform: Platform = Field(default=Platform.unknown)
    app_version: Optional[str] = Field(default=None, max_length=50)
    os_version: Optional[str] = Field(default=None, max_length=100)

    ip_address: Optional[str] = Field(default=None, max_length=45)
    user_agent: Optional[str] = None
    location: Optional[dict] = Field(default=None, sa_column=Column(JSON))
    fcm_token: Optional[str] = Field(default=None, max_length=500)

    is_active: bool = Field(default=True)
    expires_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    login_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    last_activity_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime)
    )
    logout_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    logout_reason: Optional[str] = Field(default=None, max_length=50)

    session_metadata: Optional[dict] = Field(
        default=None, sa_column=Column("metadata", JSON)
    )

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_user_session_user_device_active", "user_id", "device_id", "is_active"),
        Index("idx_user_session_expires_at", "expires_at"),
    )

    def close(self, reason: str) -> None:
        self.is_active = False
        self.logout_at = utcnow()
        self.logout_reason = reason
