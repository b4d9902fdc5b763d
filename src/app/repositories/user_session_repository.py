from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from src.domain.entities import UserSession


class IUserSessionRepository(ABC):
    """UserSession repository interface - application layer"""

    @abstractmethod
    async def create(self, user_session: UserSession) -> UserSession:
        """Create a new session"""
        pass

    @abstractmethod
    async def update(self, user_session: UserSession) -> UserSession:
        """Update existing session"""
        pass

    @abstractmethod
    async def get_active_by_device(
        self, user_id: int, device_id: Optional[str]
    ) -> Optional[UserSession]:
        """Get the active session of a user on a device (None device_id matches NULL)"""
        pass

    @abstractmethod
    async def get_active_by_token(self, session_token: str) -> Optional[UserSession]:
        """Get an active session by its token"""
        pass

    @abstractmethod
    async def get_active_by_uuid(
        self, user_id: int, session_uuid: UUID
    ) -> Optional[UserSession]:
        """Get an active session of a user by its public UUID"""
        pass

    @abstractmethod
    async def get_active_by_user_id(self, user_id: int) -> List[UserSession]:
        """Get active sessions for a user, most recently active first"""
        pass

    @abstractmethod
    async def get_by_user_id(self, user_id: int) -> List[UserSession]:
        """Get all sessions for a user, newest first"""
        pass

    @abstractmethod
    async def count_active_by_user_id(self, user_id: int) -> int:
        """Count active sessions for a user"""
        pass

    @abstractmethod
    async def expire_stale(self, now: datetime) -> int:
        """Close active sessions with expires_at before now. Returns count."""
        pass
