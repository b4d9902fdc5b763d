"""
Close Session Use Case

Ends the active session identified by its token (logout).
"""

from typing import Optional

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import LogoutReason, UserSession


class CloseSessionUseCase:
    """
    Use case for closing a session.

    Business Rules:
    - Only active sessions are closed; unknown tokens return None
    - Storage errors propagate (auth-critical path)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, session_token: str, reason: str = LogoutReason.user_logout.value
    ) -> Optional[UserSession]:
        async with self.uow:
            user_session = await self.uow.user_sessions.get_active_by_token(session_token)
            if user_session is None:
                return None

            user_session.close(reason)
            user_session = await self.uow.user_sessions.update(user_session)
            await self.uow.commit()
            return user_session
