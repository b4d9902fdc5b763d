from typing import List, Optional, Tuple

from sqlmodel import func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.security_event_repository import ISecurityEventRepository
from src.domain.entities import SecurityEvent


class SecurityEventRepository(ISecurityEventRepository):
    """SecurityEvent repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, security_event: SecurityEvent) -> SecurityEvent:
        """Create a new security event"""
        self.session.add(security_event)
        await self.session.flush()
        await self.session.refresh(security_event)
        return security_event

    async def get_by_user_paginated(
        self,
        user_id: int,
        severity: Optional[str] = None,
        resolved: Optional[bool] = None,
        event_type: Optional[str] = None,
        offset: int = 0,
        limit: int = 20,
    ) -> Tuple[List[SecurityEvent], int]:
        """Get a page of security events for a user, newest first, with total count"""
        conditions = [SecurityEvent.user_id == user_id]
        if severity:
            conditions.append(SecurityEvent.severity == severity)
        if resolved is not None:
            conditions.append(SecurityEvent.resolved == resolved)
        if event_type:
            conditions.append(SecurityEvent.event_type == event_type)

        count_stmt = select(func.count()).select_from(SecurityEvent).where(*conditions)
        total = (await self.session.exec(count_stmt)).one()

        stmt = (
            select(SecurityEvent)
            .where(*conditions)
            .order_by(SecurityEvent.created_at.desc(), SecurityEvent.id.desc())
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.exec(stmt)
        return list(result.all()), total

    async def get_by_user(self, user_id: int) -> List[SecurityEvent]:
        """Get all security events for a user, newest first"""
        stmt = (
            select(SecurityEvent)
            .where(SecurityEvent.user_id == user_id)
            .order_by(SecurityEvent.created_at.desc(), SecurityEvent.id.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def count_unresolved_by_user(self, user_id: int) -> int:
        """Count unresolved security events for a user"""
        stmt = (
            select(func.count())
            .select_from(SecurityEvent)
            .where(SecurityEvent.user_id == user_id, SecurityEvent.resolved == False)
        )
        result = await self.session.exec(stmt)
        return result.one()
