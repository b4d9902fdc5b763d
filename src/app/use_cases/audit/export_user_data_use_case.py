"""
Export User Data Use Case

Exports a user's audit logs, sessions and security events as JSON or CSV.
"""

import csv
import io
from datetime import datetime
from enum import Enum
from typing import Optional, Union

from libs.result import Error, Result, Return
from src.app.repositories.audit_log_repository import AuditLogFilter
from src.app.services.device_enricher import DeviceEnricher
from src.app.services.request_context import RequestContext
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import to_naive_utc, utcnow
from src.domain.entities import ActionCategory, AuditSource, Severity

from .dtos import (
    AuditLogExport,
    RecordActionCommand,
    SecurityEventExport,
    SessionExport,
    UserDataExport,
)
from .record_action_use_case import RecordActionUseCase

CSV_HEADERS = [
    "record_type",
    "timestamp",
    "action",
    "category",
    "status",
    "severity",
    "source",
    "ip_address",
]


class ExportFormat(str, Enum):
    json = "json"
    csv = "csv"


def render_csv(export: UserDataExport) -> str:
    """Flatten all exported records into one CSV document"""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADERS)

    for log in export.audit_logs:
        writer.writerow(
            [
                "audit_log",
                log.created_at.isoformat(),
                log.action,
                log.action_category.value,
                log.status.value,
                log.severity.value,
                log.source.value,
                log.ip_address or "",
            ]
        )
    for user_session in export.sessions:
        writer.writerow(
            [
                "session",
                user_session.login_at.isoformat(),
                user_session.logout_reason or "login",
                "auth",
                "active" if user_session.is_active else "closed",
                "",
                user_session.platform.value,
                user_session.ip_address or "",
            ]
        )
    for event in export.security_events:
        writer.writerow(
            [
                "security_event",
                event.created_at.isoformat(),
                event.event_type.value,
                "security",
                "resolved" if event.resolved else "unresolved",
                event.severity.value,
                event.source.value,
                event.ip_address or "",
            ]
        )

    return buffer.getvalue()


class ExportUserDataUseCase:
    """
    Use case for exporting a user's data.

    Business Rules:
    - Date range applies to audit logs only
    - Session tokens are never exported
    - The export itself is audit-logged as data_export (medium severity)
    """

    def __init__(self, uow: UnitOfWork, enricher: DeviceEnricher):
        self.uow = uow
        self.enricher = enricher

    async def execute(
        self,
        user_id: int,
        export_format: ExportFormat = ExportFormat.json,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        request_context: Optional[RequestContext] = None,
    ) -> Result[Union[UserDataExport, str]]:
        """
        Execute export use case.

        Returns:
            Result with UserDataExport (json) or CSV text (csv), or Error
        """
        start_date = to_naive_utc(start_date)
        end_date = to_naive_utc(end_date)
        if start_date and end_date and start_date > end_date:
            return Return.err(
                Error("INVALID_DATE_RANGE", "start_date must not be after end_date")
            )

        async with self.uow:
            audit_logs = await self.uow.audit_logs.get_by_user(
                user_id, AuditLogFilter(start_date=start_date, end_date=end_date)
            )
            user_sessions = await self.uow.user_sessions.get_by_user_id(user_id)
            security_events = await self.uow.security_events.get_by_user(user_id)

            export = UserDataExport(
                exported_at=utcnow(),
                user_id=user_id,
                audit_logs=[AuditLogExport.from_entity(log) for log in audit_logs],
                sessions=[SessionExport.from_entity(s) for s in user_sessions],
                security_events=[
                    SecurityEventExport.from_entity(e) for e in security_events
                ],
            )

        await RecordActionUseCase(self.uow, self.enricher).execute(
            RecordActionCommand(
                user_id=user_id,
                action="data_export",
                action_category=ActionCategory.profile,
                resource_type="user_data",
                resource_id=user_id,
                metadata={
                    "format": export_format.value,
                    "recordCount": {
                        "auditLogs": len(export.audit_logs),
                        "sessions": len(export.sessions),
                        "securityEvents": len(export.security_events),
                    },
                    "dateRange": {
                        "startDate": start_date.isoformat() if start_date else None,
                        "endDate": end_date.isoformat() if end_date else None,
                    },
                },
                request_context=request_context,
                severity=Severity.medium,
                source=request_context.source if request_context else AuditSource.web,
            )
        )

        if export_format == ExportFormat.csv:
            return Return.ok(render_csv(export))
        return Return.ok(export)
