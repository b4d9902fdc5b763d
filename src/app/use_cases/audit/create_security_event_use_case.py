"""
Create Security Event Use Case

Materializes an alert for operator attention.
"""

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import SecurityEvent, Severity

from .dtos import SecurityEventCommand

AUTO_RESOLVE_NOTE = "Auto-resolved: Low severity event"


class CreateSecurityEventUseCase:
    """
    Use case for creating a security event.

    Business Rules:
    - Low severity events are resolved at creation with a system note
    - Medium/high/critical events start unresolved
    - Storage errors propagate to the caller
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: SecurityEventCommand) -> SecurityEvent:
        async with self.uow:
            security_event = SecurityEvent(
                user_id=command.user_id,
                event_type=command.event_type,
                severity=command.severity,
                description=command.description,
                details=command.details,
                ip_address=command.ip_address,
                user_agent=command.user_agent,
                device_info=command.device_info,
                session_id=command.session_id,
                source=command.source,
                risk_score=command.risk_score,
                resolved=False,
            )
            if security_event.severity == Severity.low:
                security_event.resolve(AUTO_RESOLVE_NOTE)

            security_event = await self.uow.security_events.create(security_event)
            await self.uow.commit()
            return security_event
