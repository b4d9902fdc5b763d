"""
AuditLog Entity

Append-only record of actions taken by or on behalf of a user.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel

from src.domain.base import utcnow

from .enums import ActionCategory, AuditSource, AuditStatus, Severity


class AuditLog(SQLModel, table=True):
    """
    AuditLog entity - immutable record of one action.

    Business Rules:
    - Immutable (never updated or deleted)
    - user_id nullable for anonymous/system actions
    - error_message is set only when status is failed
    - old_values/new_values/metadata/device_info are schema-less JSON
    """

    __tablename__ = "audit_logs"

    id: Optional[int] = Field(default=None, primary_key=True)
    uuid: UUID = Field(default_factory=uuid4, unique=True, index=True)

    user_id: Optional[int] = Field(default=None, index=True)

    action: str = Field(max_length=100, index=True)  # e.g., "login", "session_terminated"
    action_category: ActionCategory = Field(index=True)
    resource_type: Optional[str] = Field(default=None, max_length=50)
    resource_id: Optional[str] = Field(default=None, max_length=100)

    old_values: Optional[dict] = Field(default=None, sa_column=Column(JSON))
    new_values: Optional[dict] = Field(default=None, sa_column=Column(JSON))
    action_metadata: Optional[dict] = Field(
        default=None, sa_column=Column("metadata", JSON)
    )

    ip_address: Optional[str] = Field(default=None, max_length=45, index=True)
    user_agent: Optional[str] = None
    device_info: Optional[dict] = Field(default=None, sa_column=Column(JSON))
    session_id: Optional[str] = Field(default=None, max_length=255, index=True)

    status: AuditStatus = Field(default=AuditStatus.success)
    error_message: Optional[str] = None
    severity: Severity = Field(default=Severity.low, index=True)
    source: AuditSource = Field(default=AuditSource.web)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_audit_log_created_at", "created_at"),
        Index(
            "idx_audit_log_user_category_created",
            "user_id",
            "action_category",
            "created_at",
        ),
    )
