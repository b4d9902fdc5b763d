"""
Get Security Events Use Case

Retrieves security events raised for a user.
"""

from typing import Optional

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork

from .dtos import Pagination, SecurityEventsResponse, SecurityEventView


class GetSecurityEventsUseCase:
    """
    Use case for listing a user's security events.

    Business Rules:
    - Results are scoped to the calling user, newest first
    - Filterable by severity, resolution status and event type
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        user_id: int,
        page: int = 1,
        limit: int = 20,
        severity: Optional[str] = None,
        resolved: Optional[bool] = None,
        event_type: Optional[str] = None,
    ) -> Result[SecurityEventsResponse]:
        if page < 1 or limit < 1:
            return Return.err(
                Error("INVALID_PAGINATION", "page and limit must be positive")
            )

        async with self.uow:
            events, total = await self.uow.security_events.get_by_user_paginated(
                user_id,
                severity=severity,
                resolved=resolved,
                event_type=event_type,
                offset=(page - 1) * limit,
                limit=limit,
            )

            return Return.ok(
                SecurityEventsResponse(
                    security_events=[SecurityEventView.from_entity(e) for e in events],
                    pagination=Pagination.build(page, limit, total),
                )
            )
