"""
Audit Use Case DTOs (Data Transfer Objects)

Commands accepted by the audit pipeline and views returned by read use cases.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Union
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from src.app.services.request_context import RequestContext
from src.domain.entities import (
    ActionCategory,
    AuditLog,
    AuditSource,
    AuditStatus,
    DeviceType,
    Platform,
    SecurityEvent,
    SecurityEventType,
    Severity,
    UserSession,
)

DEFAULT_FAILURE_MESSAGE = "Action failed"


# ============================================================================
# Commands
# ============================================================================


class RecordActionCommand(BaseModel):
    """Description of what happened, passed to RecordActionUseCase"""

    user_id: Optional[int] = None
    action: str = Field(..., max_length=100)
    action_category: ActionCategory
    resource_type: Optional[str] = None
    resource_id: Optional[Union[int, str]] = None
    old_values: Optional[Dict[str, Any]] = None
    new_values: Optional[Dict[str, Any]] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
    request_context: Optional[RequestContext] = None
    status: AuditStatus = AuditStatus.success
    error_message: Optional[str] = None
    severity: Severity = Severity.low
    source: AuditSource = AuditSource.web

    @model_validator(mode="after")
    def align_error_message(self):
        # error_message is present exactly when the action failed
        if self.status == AuditStatus.failed:
            if not self.error_message:
                self.error_message = DEFAULT_FAILURE_MESSAGE
        else:
            self.error_message = None
        return self


class SecurityEventCommand(BaseModel):
    """Input for CreateSecurityEventUseCase"""

    user_id: Optional[int] = None
    event_type: SecurityEventType
    severity: Severity = Severity.medium
    description: str
    details: Dict[str, Any] = Field(default_factory=dict)
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    device_info: Optional[Dict[str, Any]] = None
    session_id: Optional[str] = None
    source: AuditSource = AuditSource.web
    risk_score: Optional[float] = None


# ============================================================================
# Views
# ============================================================================


class Pagination(BaseModel):
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(
            current_page=page,
            total_pages=(total + limit - 1) // limit,
            total_items=total,
            items_per_page=limit,
        )


class AuditLogView(BaseModel):
    uuid: UUID
    action: str
    action_category: ActionCategory
    resource_type: Optional[str]
    resource_id: Optional[str]
    metadata: Optional[Dict[str, Any]]
    ip_address: Optional[str]
    status: AuditStatus
    severity: Severity
    source: AuditSource
    created_at: datetime

    @classmethod
    def from_entity(cls, audit_log: AuditLog) -> "AuditLogView":
        return cls(
            uuid=audit_log.uuid,
            action=audit_log.action,
            action_category=audit_log.action_category,
            resource_type=audit_log.resource_type,
            resource_id=audit_log.resource_id,
            metadata=audit_log.action_metadata,
            ip_address=audit_log.ip_address,
            status=audit_log.status,
            severity=audit_log.severity,
            source=audit_log.source,
            created_at=audit_log.created_at,
        )


class AuditLogExport(AuditLogView):
    """Full audit log row for data export"""

    old_values: Optional[Dict[str, Any]]
    new_values: Optional[Dict[str, Any]]
    user_agent: Optional[str]
    device_info: Optional[Dict[str, Any]]
    session_id: Optional[str]
    error_message: Optional[str]

    @classmethod
    def from_entity(cls, audit_log: AuditLog) -> "AuditLogExport":
        base = AuditLogView.from_entity(audit_log).model_dump()
        return cls(
            **base,
            old_values=audit_log.old_values,
            new_values=audit_log.new_values,
            user_agent=audit_log.user_agent,
            device_info=audit_log.device_info,
            session_id=audit_log.session_id,
            error_message=audit_log.error_message,
        )


class RecentActivityView(BaseModel):
    action: str
    action_category: ActionCategory
    status: AuditStatus
    severity: Severity
    source: AuditSource
    created_at: datetime


class SecurityEventView(BaseModel):
    uuid: UUID
    event_type: SecurityEventType
    severity: Severity
    description: str
    ip_address: Optional[str]
    resolved: bool
    risk_score: Optional[float]
    created_at: datetime

    @classmethod
    def from_entity(cls, event: SecurityEvent) -> "SecurityEventView":
        return cls.model_validate(event, from_attributes=True)


class SecurityEventExport(SecurityEventView):
    """Full security event row for data export"""

    details: Optional[Dict[str, Any]]
    user_agent: Optional[str]
    device_info: Optional[Dict[str, Any]]
    session_id: Optional[str]
    source: AuditSource
    resolved_at: Optional[datetime]
    resolution_notes: Optional[str]


class SessionView(BaseModel):
    uuid: UUID
    device_id: Optional[str]
    device_name: Optional[str]
    device_type: DeviceType
    platform: Platform
    app_version: Optional[str]
    ip_address: Optional[str]
    location: Optional[Dict[str, Any]]
    login_at: datetime
    last_activity_at: datetime
    is_active: bool

    @classmethod
    def from_entity(cls, user_session: UserSession) -> "SessionView":
        return cls.model_validate(user_session, from_attributes=True)


class SessionExport(SessionView):
    """Session row for data export (token excluded)"""

    os_version: Optional[str]
    user_agent: Optional[str]
    expires_at: Optional[datetime]
    logout_at: Optional[datetime]
    logout_reason: Optional[str]


class AuditHistoryResponse(BaseModel):
    audit_logs: List[AuditLogView]
    pagination: Pagination


class SecurityEventsResponse(BaseModel):
    security_events: List[SecurityEventView]
    pagination: Pagination


class ActivitySummary(BaseModel):
    total_logins: int
    total_actions: int
    active_sessions: int
    security_events: int
    period: str


class ActivitySummaryResponse(BaseModel):
    summary: ActivitySummary
    activity_by_category: Dict[str, int]
    recent_activity: List[RecentActivityView]


class UserDataExport(BaseModel):
    exported_at: datetime
    user_id: int
    audit_logs: List[AuditLogExport]
    sessions: List[SessionExport]
    security_events: List[SecurityEventExport]
