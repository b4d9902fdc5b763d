"""
Touch Session Use Case

Heartbeat: records activity on an authenticated request.
"""

import logging

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow

logger = logging.getLogger(__name__)


class TouchSessionUseCase:
    """
    Use case for updating session activity.

    Business Rules:
    - Updates last_activity_at only
    - Unknown or inactive tokens are ignored
    - Failures are logged, never raised
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, session_token: str) -> None:
        try:
            async with self.uow:
                user_session = await self.uow.user_sessions.get_active_by_token(
                    session_token
                )
                if user_session is None:
                    return

                user_session.last_activity_at = utcnow()
                await self.uow.user_sessions.update(user_session)
                await self.uow.commit()
        except Exception as exc:
            logger.error(f"Failed to update session activity: {exc}")
