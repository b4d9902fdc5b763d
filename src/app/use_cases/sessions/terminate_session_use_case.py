"""
Terminate Session Use Case

Lets a user sign out one of their devices ("manage my devices").
"""

from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.device_enricher import DeviceEnricher
from src.app.services.request_context import RequestContext
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.audit.dtos import RecordActionCommand
from src.app.use_cases.audit.record_action_use_case import RecordActionUseCase
from src.domain.entities import ActionCategory, AuditSource, LogoutReason, Severity

from .dtos import TerminateSessionResponse


class TerminateSessionUseCase:
    """
    Use case for terminating one of the caller's sessions.

    Business Rules:
    - Only the caller's own active sessions can be terminated
    - Termination reason is user_terminated
    - Termination is audit-logged as session_terminated (medium severity)
    """

    def __init__(self, uow: UnitOfWork, enricher: DeviceEnricher):
        self.uow = uow
        self.enricher = enricher

    async def execute(
        self,
        user_id: int,
        session_uuid: UUID,
        request_context: Optional[RequestContext] = None,
    ) -> Result[TerminateSessionResponse]:
        """
        Execute terminate session use case.

        Args:
            user_id: Caller's user ID from JWT
            session_uuid: Public UUID of the session to terminate
            request_context: Request data for the audit entry

        Returns:
            Result with TerminateSessionResponse, or SESSION_NOT_FOUND Error
        """
        async with self.uow:
            user_session = await self.uow.user_sessions.get_active_by_uuid(
                user_id, session_uuid
            )
            if user_session is None:
                return Return.err(Error("SESSION_NOT_FOUND", "Session not found"))

            user_session.close(LogoutReason.user_terminated.value)
            user_session = await self.uow.user_sessions.update(user_session)
            await self.uow.commit()

            response = TerminateSessionResponse(
                session_uuid=str(user_session.uuid),
                device_name=user_session.device_name,
                terminated=True,
            )
            session_id = user_session.id

        await RecordActionUseCase(self.uow, self.enricher).execute(
            RecordActionCommand(
                user_id=user_id,
                action="session_terminated",
                action_category=ActionCategory.auth,
                resource_type="session",
                resource_id=session_id,
                metadata={
                    "terminatedSessionId": response.session_uuid,
                    "deviceName": response.device_name,
                    "terminationReason": "user_request",
                },
                request_context=request_context,
                severity=Severity.medium,
                source=request_context.source if request_context else AuditSource.web,
            )
        )

        return Return.ok(response)
