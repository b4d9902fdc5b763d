"""
Admin API Routes - Operational Endpoints

Triggered by schedulers and internal tooling.
Authentication is via Admin API Key, not user JWTs.
"""

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from src.api.utils.admin_auth import verify_admin_api_key
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.sessions import ExpireStaleSessionsUseCase
from src.depends import get_unit_of_work

router = APIRouter(prefix="/admin", tags=["Admin"])


class ExpireSessionsResponse(BaseModel):
    success: bool = True
    expired_count: int


@router.post(
    "/sessions/expire",
    status_code=status.HTTP_200_OK,
    response_model=ExpireSessionsResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def expire_stale_sessions(uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Expire Stale Sessions

    Closes every active session whose expiry has passed (reason token_expired).
    Intended to be called periodically by an external scheduler.

    Requires: X-Admin-API-Key header

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
    """
    count = await ExpireStaleSessionsUseCase(uow).execute()
    return ExpireSessionsResponse(expired_count=count)
