"""
SecurityEvent Entity

Alert-worthy subset of audited actions.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel

from src.domain.base import utcnow

from .enums import AuditSource, SecurityEventType, Severity


class SecurityEvent(SQLModel, table=True):
    """
    SecurityEvent entity - alert derived from a high severity audit log.

    Business Rules:
    - resolved=True requires resolved_at
    - Low severity events are auto-resolved on creation
    - details typically carries the originating auditLogId
    """

    __tablename__ = "security_events"

    id: Optional[int] = Field(default=None, primary_key=True)
    uuid: UUID = Field(default_factory=uuid4, unique=True, index=True)

    user_id: Optional[int] = Field(default=None, index=True)
    event_type: SecurityEventType = Field(index=True)
    severity: Severity = Field(default=Severity.medium, index=True)
    description: str
    details: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    ip_address: Optional[str] = Field(default=None, max_length=45)
    user_agent: Optional[str] = None
    device_info: Optional[dict] = Field(default=None, sa_column=Column(JSON))
    session_id: Optional[str] = Field(default=None, max_length=255)
    source: AuditSource = Field(default=AuditSource.web)
    risk_score: Optional[float] = None

    resolved: bool = Field(default=False, index=True)
    resolved_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    resolution_notes: Optional[str] = None

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_security_event_created_at", "created_at"),
        Index("idx_security_event_user_resolved", "user_id", "resolved"),
    )

    def resolve(self, notes: str) -> None:
        self.resolved = True
        self.resolved_at = utcnow()
        self.resolution_notes = notes
