"""
List Active Sessions Use Case
"""

from typing import List

from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.audit.dtos import SessionView


class ListActiveSessionsUseCase:
    """Active sessions of a user, most recently active first"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: int) -> List[SessionView]:
        async with self.uow:
            user_sessions = await self.uow.user_sessions.get_active_by_user_id(user_id)
            return [SessionView.from_entity(s) for s in user_sessions]
