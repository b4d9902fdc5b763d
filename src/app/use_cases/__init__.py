"""
Use Cases

Organized into domain folders:
- audit/: Audit trail writes, security events, read-side queries
- sessions/: Device session lifecycle

Import from subdirectories for better organization.
"""

from .audit import (
    CreateSecurityEventUseCase,
    ExportUserDataUseCase,
    GetActivitySummaryUseCase,
    GetAuditHistoryUseCase,
    GetSecurityEventsUseCase,
    RecordActionUseCase,
)
from .sessions import (
    CloseSessionUseCase,
    ExpireStaleSessionsUseCase,
    ListActiveSessionsUseCase,
    OpenSessionUseCase,
    TerminateSessionUseCase,
    TouchSessionUseCase,
)

__all__ = [
    # Audit
    "CreateSecurityEventUseCase",
    "ExportUserDataUseCase",
    "GetActivitySummaryUseCase",
    "GetAuditHistoryUseCase",
    "GetSecurityEventsUseCase",
    "RecordActionUseCase",
    # Sessions
    "CloseSessionUseCase",
    "ExpireStaleSessionsUseCase",
    "ListActiveSessionsUseCase",
    "OpenSessionUseCase",
    "TerminateSessionUseCase",
    "TouchSessionUseCase",
]
