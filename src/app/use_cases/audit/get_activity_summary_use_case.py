"""
Get Activity Summary Use Case

Dashboard aggregation over a trailing window of days.
"""

from datetime import timedelta

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditStatus

from .dtos import ActivitySummary, ActivitySummaryResponse, RecentActivityView

RECENT_ACTIVITY_LIMIT = 10


class GetActivitySummaryUseCase:
    """
    Use case for summarizing a user's recent activity.

    Business Rules:
    - Logins and actions counted over the last N days
    - Active sessions and unresolved security events counted regardless of window
    - Per-category breakdown over the window
    - Last 10 actions, newest first
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: int, days: int = 30) -> Result[ActivitySummaryResponse]:
        if days < 1:
            return Return.err(Error("INVALID_PERIOD", "days must be positive"))

        since = utcnow() - timedelta(days=days)

        async with self.uow:
            total_logins = await self.uow.audit_logs.count_by_user(
                user_id, since=since, action="login", status=AuditStatus.success.value
            )
            total_actions = await self.uow.audit_logs.count_by_user(user_id, since=since)
            active_sessions = await self.uow.user_sessions.count_active_by_user_id(user_id)
            unresolved = await self.uow.security_events.count_unresolved_by_user(user_id)
            by_category = await self.uow.audit_logs.count_by_category(user_id, since)
            recent = await self.uow.audit_logs.get_recent_by_user(
                user_id, limit=RECENT_ACTIVITY_LIMIT
            )

            return Return.ok(
                ActivitySummaryResponse(
                    summary=ActivitySummary(
                        total_logins=total_logins,
                        total_actions=total_actions,
                        active_sessions=active_sessions,
                        security_events=unresolved,
                        period=f"{days} days",
                    ),
                    activity_by_category=by_category,
                    recent_activity=[
                        RecentActivityView.model_validate(log, from_attributes=True)
                        for log in recent
                    ],
                )
            )
