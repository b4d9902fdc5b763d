"""
Record Action Use Case

The single write path into the audit log. Enriches the action with device
and geo data, persists it, and escalates high severity actions to security
events.
"""

import logging
from typing import Optional

from pydantic_core import to_jsonable_python

from libs.result import Error, Result, Return
from src.app.services.device_enricher import DeviceEnricher
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditLog, AuditStatus, SecurityEventType

from .create_security_event_use_case import CreateSecurityEventUseCase
from .dtos import RecordActionCommand, SecurityEventCommand

logger = logging.getLogger(__name__)


def map_action_to_security_event(action: str, status: AuditStatus) -> SecurityEventType:
    """
    Classify an escalated action.

    Anything not listed falls back to unauthorized_access.
    """
    if status == AuditStatus.failed:
        if action == "login":
            return SecurityEventType.failed_login
        if action == "password_reset":
            return SecurityEventType.password_reset_request

    if action == "login" and status == AuditStatus.success:
        return SecurityEventType.suspicious_login
    if action == "password_change":
        return SecurityEventType.password_changed
    if action == "email_change":
        return SecurityEventType.email_changed

    return SecurityEventType.unauthorized_access


class RecordActionUseCase:
    """
    Use case for recording an audited action.

    Business Rules:
    - Never raises: failures are logged and returned as AUDIT_WRITE_FAILED
    - metadata is extended with timestamp and requestId
    - Snapshots and metadata are stored as JSON-safe values
    - severity high/critical creates exactly one security event
    - A failed security event write does not fail the audit write
    """

    def __init__(self, uow: UnitOfWork, enricher: DeviceEnricher):
        self.uow = uow
        self.enricher = enricher

    async def execute(self, command: RecordActionCommand) -> Result[AuditLog]:
        """
        Execute record action use case.

        Args:
            command: What happened, with optional request context

        Returns:
            Result with the created AuditLog, or AUDIT_WRITE_FAILED Error
        """
        try:
            audit_log = self._build_audit_log(command)
            async with self.uow:
                audit_log = await self.uow.audit_logs.create(audit_log)
                await self.uow.commit()
        except Exception as exc:
            logger.error(f"Audit logging failed for action '{command.action}': {exc}")
            return Return.err(Error("AUDIT_WRITE_FAILED", str(exc)))

        if command.severity.escalates:
            await self._escalate(audit_log, command)

        return Return.ok(audit_log)

    def _build_audit_log(self, command: RecordActionCommand) -> AuditLog:
        context = command.request_context
        ip_address: Optional[str] = None
        user_agent: Optional[str] = None
        session_id: Optional[str] = None
        device_info: Optional[dict] = None

        if context is not None:
            ip_address = context.client_ip
            user_agent = context.user_agent
            session_id = context.session_id
            device_info = self.enricher.enrich(user_agent, ip_address).to_document()

        metadata = {
            **command.metadata,
            "timestamp": utcnow().isoformat() + "Z",
            "requestId": context.request_id if context is not None else None,
        }

        resource_id = command.resource_id
        return AuditLog(
            user_id=command.user_id,
            action=command.action,
            action_category=command.action_category,
            resource_type=command.resource_type,
            resource_id=str(resource_id) if resource_id is not None else None,
            old_values=to_jsonable_python(command.old_values),
            new_values=to_jsonable_python(command.new_values),
            action_metadata=to_jsonable_python(metadata),
            ip_address=ip_address,
            user_agent=user_agent,
            device_info=device_info,
            session_id=session_id,
            status=command.status,
            error_message=command.error_message,
            severity=command.severity,
            source=command.source,
        )

    async def _escalate(self, audit_log: AuditLog, command: RecordActionCommand) -> None:
        event_command = SecurityEventCommand(
            user_id=audit_log.user_id,
            event_type=map_action_to_security_event(command.action, command.status),
            severity=command.severity,
            description=f"{command.action} action with {command.severity.value} severity",
            details={
                "auditLogId": audit_log.id,
                "action": command.action,
                "actionCategory": command.action_category.value,
                "status": command.status.value,
                "errorMessage": command.error_message,
            },
            ip_address=audit_log.ip_address,
            user_agent=audit_log.user_agent,
            device_info=audit_log.device_info,
            session_id=audit_log.session_id,
            source=command.source,
        )

        try:
            await CreateSecurityEventUseCase(self.uow).execute(event_command)
        except Exception as exc:
            logger.error(
                f"Security event creation failed for audit log {audit_log.id}: {exc}"
            )
