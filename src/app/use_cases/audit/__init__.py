"""
Audit Use Cases

Audit trail writes, security event escalation and read-side queries.
"""

from .create_security_event_use_case import CreateSecurityEventUseCase
from .export_user_data_use_case import ExportFormat, ExportUserDataUseCase
from .get_activity_summary_use_case import GetActivitySummaryUseCase
from .get_audit_history_use_case import GetAuditHistoryUseCase
from .get_security_events_use_case import GetSecurityEventsUseCase
from .record_action_use_case import RecordActionUseCase, map_action_to_security_event

__all__ = [
    "CreateSecurityEventUseCase",
    "ExportFormat",
    "ExportUserDataUseCase",
    "GetActivitySummaryUseCase",
    "GetAuditHistoryUseCase",
    "GetSecurityEventsUseCase",
    "RecordActionUseCase",
    "map_action_to_security_event",
]
