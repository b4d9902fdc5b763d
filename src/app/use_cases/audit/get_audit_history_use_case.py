"""
Get Audit History Use Case

Retrieves a user's own audit trail with filters and pagination.
"""

from datetime import datetime
from typing import Optional

from libs.result import Error, Result, Return
from src.app.repositories.audit_log_repository import AuditLogFilter
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import to_naive_utc

from .dtos import AuditHistoryResponse, AuditLogView, Pagination


class GetAuditHistoryUseCase:
    """
    Use case for retrieving a user's audit history.

    Business Rules:
    - Results are scoped to the calling user
    - Results ordered by newest first
    - Filterable by category, severity, action and date range
    - Offset pagination by page/limit
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        user_id: int,
        page: int = 1,
        limit: int = 50,
        action_category: Optional[str] = None,
        severity: Optional[str] = None,
        action: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> Result[AuditHistoryResponse]:
        start_date = to_naive_utc(start_date)
        end_date = to_naive_utc(end_date)
        if page < 1 or limit < 1:
            return Return.err(
                Error("INVALID_PAGINATION", "page and limit must be positive")
            )
        if start_date and end_date and start_date > end_date:
            return Return.err(
                Error("INVALID_DATE_RANGE", "start_date must not be after end_date")
            )

        filters = AuditLogFilter(
            action_category=action_category,
            severity=severity,
            action=action,
            start_date=start_date,
            end_date=end_date,
        )

        async with self.uow:
            audit_logs, total = await self.uow.audit_logs.get_by_user_paginated(
                user_id, filters, offset=(page - 1) * limit, limit=limit
            )

            return Return.ok(
                AuditHistoryResponse(
                    audit_logs=[AuditLogView.from_entity(log) for log in audit_logs],
                    pagination=Pagination.build(page, limit, total),
                )
            )
