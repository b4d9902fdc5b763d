"""
Request Context Adapter

Builds a RequestContext from a Starlette request. All header lookups for
the audit pipeline live here.
"""

from fastapi import Request

from src.app.services.request_context import RequestContext


def build_request_context(request: Request) -> RequestContext:
    headers = request.headers
    return RequestContext(
        remote_addr=request.client.host if request.client else None,
        forwarded_for=headers.get("x-forwarded-for"),
        real_ip=headers.get("x-real-ip"),
        user_agent=headers.get("user-agent"),
        request_id=getattr(request.state, "request_id", None),
        session_id=headers.get("x-session-id"),
        app_version=headers.get("x-app-version"),
    )
