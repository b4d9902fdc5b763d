from datetime import datetime
from typing import Dict, List, Optional, Tuple

from sqlmodel import func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.audit_log_repository import AuditLogFilter, IAuditLogRepository
from src.domain.entities import AuditLog


class AuditLogRepository(IAuditLogRepository):
    """AuditLog repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, audit_log: AuditLog) -> AuditLog:
        """Create a new audit log (immutable)"""
        self.session.add(audit_log)
        await self.session.flush()
        await self.session.refresh(audit_log)
        return audit_log

    async def get_by_id(self, audit_log_id: int) -> Optional[AuditLog]:
        """Get audit log by surrogate ID"""
        stmt = select(AuditLog).where(AuditLog.id == audit_log_id)
        result = await self.session.exec(stmt)
        return result.first()

    def _apply_filters(self, stmt, user_id: int, filters: Optional[AuditLogFilter]):
        stmt = stmt.where(AuditLog.user_id == user_id)
        if filters is None:
            return stmt

        if filters.action_category:
            stmt = stmt.where(AuditLog.action_category == filters.action_category)
        if filters.severity:
            stmt = stmt.where(AuditLog.severity == filters.severity)
        if filters.action:
            stmt = stmt.where(AuditLog.action == filters.action)
        if filters.start_date:
            stmt = stmt.where(AuditLog.created_at >= filters.start_date)
        if filters.end_date:
            stmt = stmt.where(AuditLog.created_at <= filters.end_date)
        return stmt

    async def get_by_user_paginated(
        self,
        user_id: int,
        filters: Optional[AuditLogFilter] = None,
        offset: int = 0,
        limit: int = 50,
    ) -> Tuple[List[AuditLog], int]:
        """Get a page of audit logs for a user, newest first, with total count"""
        count_stmt = self._apply_filters(
            select(func.count()).select_from(AuditLog), user_id, filters
        )
        total = (await self.session.exec(count_stmt)).one()

        stmt = self._apply_filters(select(AuditLog), user_id, filters)
        stmt = (
            stmt.order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.exec(stmt)
        return list(result.all()), total

    async def get_by_user(
        self, user_id: int, filters: Optional[AuditLogFilter] = None
    ) -> List[AuditLog]:
        """Get all matching audit logs for a user, newest first"""
        stmt = self._apply_filters(select(AuditLog), user_id, filters)
        stmt = stmt.order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_recent_by_user(self, user_id: int, limit: int = 10) -> List[AuditLog]:
        """Get the most recent audit logs for a user"""
        stmt = (
            select(AuditLog)
            .where(AuditLog.user_id == user_id)
            .order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
            .limit(limit)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def count_by_user(
        self,
        user_id: int,
        since: Optional[datetime] = None,
        action: Optional[str] = None,
        status: Optional[str] = None,
    ) -> int:
        """Count audit logs for a user with optional criteria"""
        stmt = select(func.count()).select_from(AuditLog).where(AuditLog.user_id == user_id)
        if since is not None:
            stmt = stmt.where(AuditLog.created_at >= since)
        if action is not None:
            stmt = stmt.where(AuditLog.action == action)
        if status is not None:
            stmt = stmt.where(AuditLog.status == status)
        result = await self.session.exec(stmt)
        return result.one()

    async def count_by_category(self, user_id: int, since: datetime) -> Dict[str, int]:
        """Count audit logs per action category since a timestamp"""
        stmt = (
            select(AuditLog.action_category, func.count(AuditLog.id))
            .where(AuditLog.user_id == user_id, AuditLog.created_at >= since)
            .group_by(AuditLog.action_category)
        )
        result = await self.session.exec(stmt)
        counts = {}
        for category, count in result.all():
            key = category.value if hasattr(category, "value") else category
            counts[key] = count
        return counts
