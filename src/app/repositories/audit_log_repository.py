from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel

from src.domain.entities import AuditLog


class AuditLogFilter(BaseModel):
    """Optional criteria for listing a user's audit logs"""

    action_category: Optional[str] = None
    severity: Optional[str] = None
    action: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class IAuditLogRepository(ABC):
    """AuditLog repository interface - application layer (append-only)"""

    @abstractmethod
    async def create(self, audit_log: AuditLog) -> AuditLog:
        """Create a new audit log (immutable)"""
        pass

    @abstractmethod
    async def get_by_id(self, audit_log_id: int) -> Optional[AuditLog]:
        """Get audit log by surrogate ID"""
        pass

    @abstractmethod
    async def get_by_user_paginated(
        self,
        user_id: int,
        filters: Optional[AuditLogFilter] = None,
        offset: int = 0,
        limit: int = 50,
    ) -> Tuple[List[AuditLog], int]:
        """
        Get a page of audit logs for a user.

        Returns:
            Tuple of (logs ordered by created_at DESC, total matching count)
        """
        pass

    @abstractmethod
    async def get_by_user(
        self, user_id: int, filters: Optional[AuditLogFilter] = None
    ) -> List[AuditLog]:
        """Get all matching audit logs for a user, newest first"""
        pass

    @abstractmethod
    async def get_recent_by_user(self, user_id: int, limit: int = 10) -> List[AuditLog]:
        """Get the most recent audit logs for a user"""
        pass

    @abstractmethod
    async def count_by_user(
        self,
        user_id: int,
        since: Optional[datetime] = None,
        action: Optional[str] = None,
        status: Optional[str] = None,
    ) -> int:
        """Count audit logs for a user, optionally since a timestamp"""
        pass

    @abstractmethod
    async def count_by_category(self, user_id: int, since: datetime) -> Dict[str, int]:
        """Count audit logs per action category since a timestamp"""
        pass
