from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from src.domain.entities import SecurityEvent


class ISecurityEventRepository(ABC):
    """SecurityEvent repository interface - application layer"""

    @abstractmethod
    async def create(self, security_event: SecurityEvent) -> SecurityEvent:
        """Create a new security event"""
        pass

    @abstractmethod
    async def get_by_user_paginated(
        self,
        user_id: int,
        severity: Optional[str] = None,
        resolved: Optional[bool] = None,
        event_type: Optional[str] = None,
        offset: int = 0,
        limit: int = 20,
    ) -> Tuple[List[SecurityEvent], int]:
        """
        Get a page of security events for a user.

        Returns:
            Tuple of (events ordered by created_at DESC, total matching count)
        """
        pass

    @abstractmethod
    async def get_by_user(self, user_id: int) -> List[SecurityEvent]:
        """Get all security events for a user, newest first"""
        pass

    @abstractmethod
    async def count_unresolved_by_user(self, user_id: int) -> int:
        """Count unresolved security events for a user"""
        pass
