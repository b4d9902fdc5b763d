from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import update
from sqlmodel import func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.user_session_repository import IUserSessionRepository
from src.domain.entities import LogoutReason, UserSession


class UserSessionRepository(IUserSessionRepository):
    """UserSession repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, user_session: UserSession) -> UserSession:
        """Create a new session"""
        self.session.add(user_session)
        await self.session.flush()
        await self.session.refresh(user_session)
        return user_session

    async def update(self, user_session: UserSession) -> UserSession:
        """Update existing session"""
        self.session.add(user_session)
        await self.session.flush()
        await self.session.refresh(user_session)
        return user_session

    async def get_active_by_device(
        self, user_id: int, device_id: Optional[str]
    ) -> Optional[UserSession]:
        """Get the active session of a user on a device"""
        if device_id is None:
            device_clause = UserSession.device_id.is_(None)
        else:
            device_clause = UserSession.device_id == device_id

        stmt = select(UserSession).where(
            UserSession.user_id == user_id,
            device_clause,
            UserSession.is_active == True,
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def get_active_by_token(self, session_token: str) -> Optional[UserSession]:
        """Get an active session by its token"""
        stmt = select(UserSession).where(
            UserSession.session_token == session_token,
            UserSession.is_active == True,
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def get_active_by_uuid(
        self, user_id: int, session_uuid: UUID
    ) -> Optional[UserSession]:
        """Get an active session of a user by its public UUID"""
        stmt = select(UserSession).where(
            UserSession.uuid == session_uuid,
            UserSession.user_id == user_id,
            UserSession.is_active == True,
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def get_active_by_user_id(self, user_id: int) -> List[UserSession]:
        """Get active sessions for a user, most recently active first"""
        stmt = (
            select(UserSession)
            .where(UserSession.user_id == user_id, UserSession.is_active == True)
            .order_by(UserSession.last_activity_at.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_by_user_id(self, user_id: int) -> List[UserSession]:
        """Get all sessions for a user, newest first"""
        stmt = (
            select(UserSession)
            .where(UserSession.user_id == user_id)
            .order_by(UserSession.created_at.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def count_active_by_user_id(self, user_id: int) -> int:
        """Count active sessions for a user"""
        stmt = (
            select(func.count())
            .select_from(UserSession)
            .where(UserSession.user_id == user_id, UserSession.is_active == True)
        )
        result = await self.session.exec(stmt)
        return result.one()

    async def expire_stale(self, now: datetime) -> int:
        """Close every active session whose expires_at has passed"""
        stmt = (
            update(UserSession)
            .where(UserSession.is_active == True, UserSession.expires_at < now)
            .values(
                is_active=False,
                logout_at=now,
                logout_reason=LogoutReason.token_expired.value,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
