"""
Audit API Routes

Self-service audit trail, device sessions, security events, activity
summary and data export. Every endpoint is itself audited.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, Response, status
from pydantic import BaseModel

from config import ApplicationConfig
from src.api.error import ClientError, ServerError
from src.api.utils.audit_route import AuditAction, AuditedRoute
from src.api.utils.request_context import build_request_context
from src.app.services.device_enricher import DeviceEnricher
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.audit import (
    ExportFormat,
    ExportUserDataUseCase,
    GetActivitySummaryUseCase,
    GetAuditHistoryUseCase,
    GetSecurityEventsUseCase,
)
from src.app.use_cases.audit.dtos import (
    ActivitySummaryResponse,
    AuditHistoryResponse,
    SecurityEventsResponse,
    SessionView,
)
from src.app.use_cases.sessions import ListActiveSessionsUseCase, TerminateSessionUseCase
from src.app.use_cases.sessions.dtos import TerminateSessionResponse
from src.depends import (
    get_current_user,
    get_device_enricher,
    get_unit_of_work,
    touch_current_session,
)
from src.domain.base import utcnow
from src.domain.entities import ActionCategory, SecurityEventType, Severity

router = APIRouter(
    prefix="/audit",
    tags=["Audit"],
    route_class=AuditedRoute,
    dependencies=[Depends(get_current_user), Depends(touch_current_session)],
)

CLIENT_ERROR_CODES = {"INVALID_PAGINATION", "INVALID_DATE_RANGE", "INVALID_PERIOD"}


class AuditHistoryEnvelope(BaseModel):
    success: bool = True
    data: AuditHistoryResponse


class SessionsData(BaseModel):
    sessions: List[SessionView]


class SessionsEnvelope(BaseModel):
    success: bool = True
    data: SessionsData


class TerminateSessionEnvelope(BaseModel):
    success: bool = True
    message: str
    data: TerminateSessionResponse


class SecurityEventsEnvelope(BaseModel):
    success: bool = True
    data: SecurityEventsResponse


class ActivitySummaryEnvelope(BaseModel):
    success: bool = True
    data: ActivitySummaryResponse


def _raise_for_error(error):
    if error.code in CLIENT_ERROR_CODES:
        raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
    if error.code == "SESSION_NOT_FOUND":
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    raise ServerError(error)


@router.get(
    "/history",
    status_code=status.HTTP_200_OK,
    response_model=AuditHistoryEnvelope,
    dependencies=[Depends(AuditAction("view_audit_history", ActionCategory.profile))],
)
async def get_audit_history(
    request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(
        50, ge=1, le=ApplicationConfig.AUDIT_HISTORY_MAX_LIMIT, description="Items per page"
    ),
    action_category: Optional[ActionCategory] = Query(None),
    severity: Optional[Severity] = Query(None),
    action: Optional[str] = Query(None, max_length=100),
    start_date: Optional[datetime] = Query(None, description="ISO start of range"),
    end_date: Optional[datetime] = Query(None, description="ISO end of range"),
):
    """
    Get Audit History

    Returns the caller's audit trail, newest first, with pagination.

    Raises:
        - 400 Bad Request: Invalid date range
        - 401/403: Missing or invalid JWT
    """
    use_case = GetAuditHistoryUseCase(uow)
    result = await use_case.execute(
        user_id=request.state.user_id,
        page=page,
        limit=limit,
        action_category=action_category,
        severity=severity,
        action=action,
        start_date=start_date,
        end_date=end_date,
    )

    if result.is_err():
        _raise_for_error(result.error)

    return AuditHistoryEnvelope(data=result.value)


@router.get(
    "/sessions",
    status_code=status.HTTP_200_OK,
    response_model=SessionsEnvelope,
    dependencies=[Depends(AuditAction("view_sessions", ActionCategory.auth))],
)
async def get_active_sessions(
    request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get Active Sessions

    Lists the caller's active device sessions, most recently active first.
    """
    sessions = await ListActiveSessionsUseCase(uow).execute(request.state.user_id)
    return SessionsEnvelope(
        data=SessionsData(sessions=sessions)
    )


@router.post(
    "/sessions/{session_uuid}/terminate",
    status_code=status.HTTP_200_OK,
    response_model=TerminateSessionEnvelope,
    dependencies=[
        Depends(
            AuditAction(
                "terminate_session",
                ActionCategory.auth,
                Severity.medium,
                resource_type="session",
                resource_param="session_uuid",
            )
        )
    ],
)
async def terminate_session(
    session_uuid: UUID,
    request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
    enricher: DeviceEnricher = Depends(get_device_enricher),
):
    """
    Terminate Session

    Signs out one of the caller's devices.

    Raises:
        - 404 Not Found: SESSION_NOT_FOUND
    """
    use_case = TerminateSessionUseCase(uow, enricher)
    result = await use_case.execute(
        user_id=request.state.user_id,
        session_uuid=session_uuid,
        request_context=build_request_context(request),
    )

    if result.is_err():
        _raise_for_error(result.error)

    return TerminateSessionEnvelope(
        message="Session terminated successfully", data=result.value
    )


@router.get(
    "/security-events",
    status_code=status.HTTP_200_OK,
    response_model=SecurityEventsEnvelope,
    dependencies=[Depends(AuditAction("view_security_events", ActionCategory.auth))],
)
async def get_security_events(
    request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    severity: Optional[Severity] = Query(None),
    resolved: Optional[bool] = Query(None),
    event_type: Optional[SecurityEventType] = Query(None),
):
    """
    Get Security Events

    Lists security events raised for the caller, newest first.
    """
    use_case = GetSecurityEventsUseCase(uow)
    result = await use_case.execute(
        user_id=request.state.user_id,
        page=page,
        limit=limit,
        severity=severity,
        resolved=resolved,
        event_type=event_type,
    )

    if result.is_err():
        _raise_for_error(result.error)

    return SecurityEventsEnvelope(data=result.value)


@router.get(
    "/summary",
    status_code=status.HTTP_200_OK,
    response_model=ActivitySummaryEnvelope,
    dependencies=[Depends(AuditAction("view_activity_summary", ActionCategory.profile))],
)
async def get_activity_summary(
    request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
    days: int = Query(30, ge=1, le=365, description="Trailing window in days"),
):
    """
    Get Activity Summary

    Login/action counts, active sessions, unresolved security events and a
    per-category breakdown over the last N days.
    """
    result = await GetActivitySummaryUseCase(uow).execute(request.state.user_id, days)

    if result.is_err():
        _raise_for_error(result.error)

    return ActivitySummaryEnvelope(data=result.value)


@router.get(
    "/export",
    status_code=status.HTTP_200_OK,
    dependencies=[
        Depends(AuditAction("export_user_data", ActionCategory.profile, Severity.high))
    ],
)
async def export_user_data(
    request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
    enricher: DeviceEnricher = Depends(get_device_enricher),
    format: ExportFormat = Query(ExportFormat.json),
    start_date: Optional[datetime] = Query(None),
    end_date: Optional[datetime] = Query(None),
):
    """
    Export User Data

    Downloads the caller's audit logs, sessions and security events as a
    JSON document or a CSV file.

    Raises:
        - 400 Bad Request: Invalid date range
    """
    user_id = request.state.user_id
    use_case = ExportUserDataUseCase(uow, enricher)
    result = await use_case.execute(
        user_id=user_id,
        export_format=format,
        start_date=start_date,
        end_date=end_date,
        request_context=build_request_context(request),
    )

    if result.is_err():
        _raise_for_error(result.error)

    stamp = utcnow().strftime("%Y%m%d%H%M%S")
    if format == ExportFormat.csv:
        return Response(
            content=result.value,
            media_type="text/csv",
            headers={
                "Content-Disposition": f'attachment; filename="user-data-{user_id}-{stamp}.csv"'
            },
        )

    return Response(
        content=result.value.model_dump_json(),
        media_type="application/json",
        headers={
            "Content-Disposition": f'attachment; filename="user-data-{user_id}-{stamp}.json"'
        },
    )
