"""
Open Session Use Case

Registers or refreshes the session of a user on a device at login.
"""

from src.app.services.device_enricher import UNKNOWN_DEVICE_NAME, DeviceEnricher
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import to_naive_utc, utcnow
from src.domain.entities import DeviceInfo, UserSession

from .dtos import OpenSessionCommand


class OpenSessionUseCase:
    """
    Use case for opening a device session.

    Business Rules:
    - At most one active session per (user_id, device_id)
    - An active session on the same device is refreshed in place
    - Undeterminable device fields default to "Unknown Device"/"unknown"
    - Storage errors propagate (auth-critical path)
    """

    def __init__(self, uow: UnitOfWork, enricher: DeviceEnricher):
        self.uow = uow
        self.enricher = enricher

    async def execute(self, command: OpenSessionCommand) -> UserSession:
        context = command.request_context
        ip_address = context.client_ip if context else None
        user_agent = context.user_agent if context else None
        device_info = (
            self.enricher.enrich(user_agent, ip_address) if context else DeviceInfo()
        )
        location = (
            device_info.location.model_dump(mode="json", exclude_none=True)
            if device_info.location
            else None
        )
        now = utcnow()

        async with self.uow:
            existing = await self.uow.user_sessions.get_active_by_device(
                command.user_id, command.device_id
            )

            if existing is not None:
                existing.session_token = command.session_token
                existing.last_activity_at = now
                existing.fcm_token = command.fcm_token
                existing.expires_at = to_naive_utc(command.expires_at)
                existing.ip_address = ip_address
                existing.user_agent = user_agent
                existing.location = location
                existing.session_metadata = {
                    **(existing.session_metadata or {}),
                    "lastUpdate": now.isoformat() + "Z",
                }
                user_session = await self.uow.user_sessions.update(existing)
            else:
                user_session = UserSession(
                    user_id=command.user_id,
                    session_token=command.session_token,
                    device_id=command.device_id,
                    device_name=device_info.device_name or UNKNOWN_DEVICE_NAME,
                    device_type=device_info.device_type,
                    platform=device_info.platform,
                    app_version=context.app_version if context else None,
                    os_version=device_info.os_version,
                    ip_address=ip_address,
                    user_agent=user_agent,
                    location=location,
                    fcm_token=command.fcm_token,
                    expires_at=to_naive_utc(command.expires_at),
                    is_active=True,
                    login_at=now,
                    last_activity_at=now,
                    session_metadata={
                        "createdBy": "auth_service",
                        "initialLogin": now.isoformat() + "Z",
                    },
                )
                user_session = await self.uow.user_sessions.create(user_session)

            await self.uow.commit()
            return user_session
