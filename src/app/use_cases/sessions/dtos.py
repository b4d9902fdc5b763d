"""
Session Use Case DTOs (Data Transfer Objects)
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from src.app.services.request_context import RequestContext


class OpenSessionCommand(BaseModel):
    """Login-time session registration from the auth collaborator"""

    user_id: int
    session_token: str = Field(..., max_length=500)
    device_id: Optional[str] = None
    request_context: Optional[RequestContext] = None
    fcm_token: Optional[str] = None
    expires_at: Optional[datetime] = None


class TerminateSessionResponse(BaseModel):
    session_uuid: str
    device_name: Optional[str]
    terminated: bool
