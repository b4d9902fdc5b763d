"""
Expire Stale Sessions Use Case

Batch sweep closing sessions past their expiry. Triggered periodically by
an external scheduler or the admin endpoint.
"""

import logging

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow

logger = logging.getLogger(__name__)


class ExpireStaleSessionsUseCase:
    """
    Use case for expiring stale sessions.

    Business Rules:
    - Closes active sessions with expires_at in the past, reason token_expired
    - Sessions without expires_at never expire
    - Idempotent; failures are logged and reported as 0 closed
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> int:
        try:
            async with self.uow:
                count = await self.uow.user_sessions.expire_stale(utcnow())
                await self.uow.commit()
        except Exception as exc:
            logger.error(f"Session cleanup failed: {exc}")
            return 0

        logger.info(f"Cleaned up {count} expired sessions")
        return count
