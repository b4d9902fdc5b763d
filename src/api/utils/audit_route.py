"""
Audited Routes

Records an audit entry for every call to an endpoint declaring an
AuditAction dependency. The entry is written after the response body is
built and never alters the response. Calls that raise are recorded as
failed before the exception propagates.

Usage:
    router = APIRouter(route_class=AuditedRoute)

    @router.get("/history", dependencies=[Depends(AuditAction("view_audit_history", ActionCategory.profile))])
"""

import json
import logging
from typing import Callable, Optional

from fastapi import Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.routing import APIRoute
from starlette.background import BackgroundTask, BackgroundTasks
from starlette.exceptions import HTTPException

from src.api.error import ClientError
from src.api.utils.request_context import build_request_context
from src.app.use_cases.audit import RecordActionUseCase
from src.app.use_cases.audit.dtos import RecordActionCommand
from src.domain.entities import ActionCategory, AuditStatus, Severity

logger = logging.getLogger(__name__)


class AuditAction:
    """Dependency marking the current request for auditing"""

    def __init__(
        self,
        action: str,
        action_category: ActionCategory,
        severity: Severity = Severity.low,
        resource_type: Optional[str] = None,
        resource_param: Optional[str] = None,
    ):
        self.action = action
        self.action_category = action_category
        self.severity = severity
        self.resource_type = resource_type
        # Path parameter holding the targeted resource id
        self.resource_param = resource_param

    async def __call__(self, request: Request) -> None:
        request.state.audit_action = self


def _response_outcome(response: Response) -> tuple:
    """Derive (status, error_message) from the body's success flag"""
    succeeded = response.status_code < 400
    error_message = None

    body = getattr(response, "body", None)
    # Downloads are not envelopes
    is_envelope = "content-disposition" not in response.headers
    if body and is_envelope and "json" in (response.media_type or ""):
        try:
            payload = json.loads(body)
        except ValueError:
            payload = None
        if isinstance(payload, dict):
            succeeded = bool(payload.get("success", succeeded))
            error = payload.get("error")
            if isinstance(error, dict):
                error_message = error.get("message")
            elif error:
                error_message = str(error)

    if succeeded:
        return AuditStatus.success, None
    return AuditStatus.failed, error_message


def _exception_outcome(exc: Exception) -> tuple:
    """Derive (status_code, error_message) from an exception leaving the endpoint"""
    if isinstance(exc, ClientError):
        return exc.status_code, exc.base_error.message
    if isinstance(exc, HTTPException):
        return exc.status_code, str(exc.detail)
    if isinstance(exc, RequestValidationError):
        return status.HTTP_422_UNPROCESSABLE_ENTITY, "Request validation failed"
    return status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error"


def _build_command(
    request: Request,
    audit_action: AuditAction,
    status: AuditStatus,
    status_code: int,
    error_message: Optional[str] = None,
) -> RecordActionCommand:
    context = build_request_context(request)
    return RecordActionCommand(
        user_id=getattr(request.state, "user_id", None),
        action=audit_action.action,
        action_category=audit_action.action_category,
        resource_type=audit_action.resource_type,
        resource_id=(
            request.path_params.get(audit_action.resource_param)
            if audit_action.resource_param
            else None
        ),
        metadata={
            "endpoint": str(request.url.path),
            "method": request.method,
            "statusCode": status_code,
        },
        request_context=context,
        status=status,
        error_message=error_message,
        severity=audit_action.severity,
        source=context.source,
    )


async def record_route_action(request: Request, command: RecordActionCommand) -> None:
    app_state = request.app.state
    try:
        async with app_state.unit_of_work_scope() as uow:
            result = await RecordActionUseCase(uow, app_state.device_enricher).execute(
                command
            )
    except Exception as exc:
        logger.error(f"Audit middleware error for {command.action}: {exc}")
        return

    if result.is_err():
        logger.warning(f"Route audit unavailable for {command.action}: {result.error.code}")


class AuditedRoute(APIRoute):
    """APIRoute that audits requests marked with an AuditAction dependency"""

    def get_route_handler(self) -> Callable:
        original_route_handler = super().get_route_handler()

        async def audited_route_handler(request: Request) -> Response:
            try:
                response = await original_route_handler(request)
            except Exception as exc:
                audit_action = getattr(request.state, "audit_action", None)
                if audit_action is not None:
                    status_code, error_message = _exception_outcome(exc)
                    command = _build_command(
                        request,
                        audit_action,
                        AuditStatus.failed,
                        status_code,
                        error_message,
                    )
                    await record_route_action(request, command)
                raise

            audit_action = getattr(request.state, "audit_action", None)
            if audit_action is None:
                return response

            audit_status, error_message = _response_outcome(response)
            command = _build_command(
                request, audit_action, audit_status, response.status_code, error_message
            )
            task = BackgroundTask(record_route_action, request, command)
            if response.background is None:
                response.background = task
            else:
                response.background = BackgroundTasks(tasks=[response.background, task])
            return response

        return audited_route_handler
