"""
Request Context

Framework-independent view of the inbound request that audit and session
use cases need. The HTTP adapter is the only place that reads raw headers.
"""

from typing import Optional

from pydantic import BaseModel

from src.domain.entities import AuditSource


class RequestContext(BaseModel):
    """
    Request-derived values used for enrichment.

    Client IP resolution order:
    1. remote_addr (direct connection address)
    2. first entry of forwarded_for (X-Forwarded-For)
    3. real_ip (X-Real-IP)
    """

    remote_addr: Optional[str] = None
    forwarded_for: Optional[str] = None
    real_ip: Optional[str] = None
    user_agent: Optional[str] = None
    request_id: Optional[str] = None
    session_id: Optional[str] = None
    app_version: Optional[str] = None

    @property
    def client_ip(self) -> Optional[str]:
        if self.remote_addr:
            return self.remote_addr
        if self.forwarded_for:
            first = self.forwarded_for.split(",")[0].strip()
            if first:
                return first
        return self.real_ip or None

    @property
    def source(self) -> AuditSource:
        # Mobile clients send their app version with every request
        return AuditSource.mobile if self.app_version else AuditSource.web
