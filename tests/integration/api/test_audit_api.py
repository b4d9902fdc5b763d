"""
Integration tests for the audit HTTP surface
"""
import csv
import io
import json
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient

from libs.result import Error, Return
from src.app.repositories.audit_log_repository import AuditLogFilter
from src.app.use_cases.audit import GetActivitySummaryUseCase, GetAuditHistoryUseCase
from src.domain.entities import UserSession


async def _history(client: AsyncClient, auth_headers, **params):
    response = await client.get("/audit/history", headers=auth_headers, params=params)
    assert response.status_code == 200
    return response.json()["data"]


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_audit_endpoints_require_bearer_token(client: AsyncClient):
    response = await client.get("/audit/history")
    assert response.status_code in (401, 403)

    response = await client.get(
        "/audit/history", headers={"Authorization": "Bearer not-a-jwt"}
    )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_history_records_its_own_access(client: AsyncClient, auth_headers):
    """Every audited endpoint writes one entry after responding"""
    first = await _history(client, auth_headers)
    assert first["audit_logs"] == []
    assert first["pagination"]["total_items"] == 0

    response = await client.get(
        "/audit/history", headers={**auth_headers, "X-Request-ID": "corr-123"}
    )
    assert response.headers["x-request-id"] == "corr-123"

    data = await _history(client, auth_headers, action="view_audit_history")
    assert data["pagination"]["total_items"] == 2
    newest = data["audit_logs"][0]
    assert newest["status"] == "success"
    assert newest["action_category"] == "profile"
    assert newest["metadata"]["requestId"] == "corr-123"
    assert newest["metadata"]["endpoint"] == "/audit/history"
    assert newest["metadata"]["method"] == "GET"
    assert newest["ip_address"] == "127.0.0.1"


@pytest.mark.asyncio
async def test_history_rejects_inverted_dates(client: AsyncClient, auth_headers):
    response = await client.get(
        "/audit/history",
        headers=auth_headers,
        params={"start_date": "2024-06-01T00:00:00Z", "end_date": "2024-05-01T00:00:00Z"},
    )

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"]["code"] == "INVALID_DATE_RANGE"

    data = await _history(client, auth_headers, action="view_audit_history")
    failed = [log for log in data["audit_logs"] if log["status"] == "failed"]
    assert len(failed) == 1


@pytest.mark.asyncio
async def test_list_active_sessions(client: AsyncClient, auth_headers):
    response = await client.get("/audit/sessions", headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    sessions = body["data"]["sessions"]
    assert len(sessions) == 1
    assert sessions[0]["device_name"] == "Work Laptop"
    assert "session_token" not in sessions[0]


@pytest.mark.asyncio
async def test_terminate_other_device_session(client: AsyncClient, auth_headers, db_session):
    # Arrange
    phone = UserSession(
        user_id=1, session_token="phone-token", device_id="phone", device_name="Pixel"
    )
    db_session.add(phone)
    await db_session.commit()
    phone_uuid = str(phone.uuid)

    # Act
    response = await client.post(
        f"/audit/sessions/{phone_uuid}/terminate", headers=auth_headers
    )

    # Assert
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["session_uuid"] == phone_uuid
    assert body["data"]["terminated"] is True

    sessions = (await client.get("/audit/sessions", headers=auth_headers)).json()
    assert [s["device_name"] for s in sessions["data"]["sessions"]] == ["Work Laptop"]

    data = await _history(client, auth_headers, action="session_terminated")
    assert data["pagination"]["total_items"] == 1
    entry = data["audit_logs"][0]
    assert entry["severity"] == "medium"
    assert entry["resource_type"] == "session"
    assert entry["metadata"]["terminatedSessionId"] == phone_uuid


@pytest.mark.asyncio
async def test_terminate_unknown_session_is_404_and_audited_as_failed(
    client: AsyncClient, auth_headers
):
    response = await client.post(
        f"/audit/sessions/{uuid4()}/terminate", headers=auth_headers
    )

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "SESSION_NOT_FOUND"

    data = await _history(client, auth_headers, action="terminate_session")
    assert data["pagination"]["total_items"] == 1
    assert data["audit_logs"][0]["status"] == "failed"


@pytest.mark.asyncio
async def test_cannot_terminate_another_users_session(
    client: AsyncClient, auth_headers, db_session
):
    other = UserSession(user_id=2, session_token="other-token", device_id="x")
    db_session.add(other)
    await db_session.commit()

    response = await client.post(
        f"/audit/sessions/{other.uuid}/terminate", headers=auth_headers
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_export_json_is_audited_and_raises_security_event(
    client: AsyncClient, auth_headers
):
    # Act
    response = await client.get("/audit/export", headers=auth_headers)

    # Assert
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/json")
    assert "attachment" in response.headers["content-disposition"]
    export = json.loads(response.content)
    assert export["user_id"] == 1
    assert len(export["sessions"]) == 1
    assert "session_token" not in export["sessions"][0]

    data = await _history(client, auth_headers, action="data_export")
    assert data["pagination"]["total_items"] == 1

    events = (await client.get("/audit/security-events", headers=auth_headers)).json()
    assert events["success"] is True
    security_events = events["data"]["security_events"]
    assert len(security_events) == 1
    assert security_events[0]["event_type"] == "unauthorized_access"
    assert security_events[0]["severity"] == "high"
    assert security_events[0]["resolved"] is False


@pytest.mark.asyncio
async def test_export_csv(client: AsyncClient, auth_headers):
    await client.get("/audit/history", headers=auth_headers)

    response = await client.get(
        "/audit/export", headers=auth_headers, params={"format": "csv"}
    )

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    rows = list(csv.reader(io.StringIO(response.text)))
    assert rows[0] == [
        "record_type",
        "timestamp",
        "action",
        "category",
        "status",
        "severity",
        "source",
        "ip_address",
    ]
    record_types = {row[0] for row in rows[1:]}
    assert record_types == {"audit_log", "session"}


@pytest.mark.asyncio
async def test_security_events_filter_by_resolution(client: AsyncClient, auth_headers):
    await client.get("/audit/export", headers=auth_headers)

    response = await client.get(
        "/audit/security-events", headers=auth_headers, params={"resolved": "true"}
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["security_events"] == []
    assert data["pagination"]["total_items"] == 0


@pytest.mark.asyncio
async def test_activity_summary(client: AsyncClient, auth_headers):
    await client.get("/audit/history", headers=auth_headers)
    await client.get("/audit/sessions", headers=auth_headers)

    response = await client.get("/audit/summary", headers=auth_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["summary"]["active_sessions"] == 1
    assert data["summary"]["total_actions"] == 2
    assert data["summary"]["total_logins"] == 0
    assert data["summary"]["security_events"] == 0
    assert data["summary"]["period"] == "30 days"
    assert data["activity_by_category"] == {"profile": 1, "auth": 1}
    assert [a["action"] for a in data["recent_activity"]] == [
        "view_sessions",
        "view_audit_history",
    ]


@pytest.mark.asyncio
async def test_admin_expire_requires_api_key(client: AsyncClient):
    response = await client.post("/admin/sessions/expire")
    assert response.status_code == 401

    response = await client.post(
        "/admin/sessions/expire", headers={"X-Admin-API-Key": "wrong"}
    )
    assert response.status_code == 401
    assert response.json()["error"]["code"] == "INVALID_API_KEY"


@pytest.mark.asyncio
async def test_admin_expire_closes_stale_sessions(client: AsyncClient, db_session):
    from datetime import timedelta

    from config import ApplicationConfig
    from src.domain.base import utcnow

    db_session.add(
        UserSession(
            user_id=1,
            session_token="stale-token",
            device_id="old",
            expires_at=utcnow() - timedelta(minutes=5),
        )
    )
    await db_session.commit()

    response = await client.post(
        "/admin/sessions/expire",
        headers={"X-Admin-API-Key": ApplicationConfig.ADMIN_API_KEY},
    )

    assert response.status_code == 200
    assert response.json() == {"success": True, "expired_count": 1}


async def _audit_outcomes(uow, action):
    async with uow:
        logs = await uow.audit_logs.get_by_user(1, AuditLogFilter(action=action))
        return [
            (log.status.value, log.error_message, log.action_metadata["statusCode"])
            for log in logs
        ]


@pytest.mark.asyncio
async def test_server_error_is_audited_as_failed(
    client: AsyncClient, auth_headers, uow, monkeypatch
):
    # Arrange
    async def failing_execute(self, *args, **kwargs):
        return Return.err(Error("DB_FAILURE", "database unavailable"))

    monkeypatch.setattr(GetAuditHistoryUseCase, "execute", failing_execute)

    # Act
    response = await client.get("/audit/history", headers=auth_headers)

    # Assert
    assert response.status_code == 500
    assert response.json()["success"] is False
    assert await _audit_outcomes(uow, "view_audit_history") == [
        ("failed", "Internal server error", 500)
    ]


@pytest.mark.asyncio
async def test_unexpected_exception_is_audited_as_failed(app, auth_headers, uow, monkeypatch):
    async def crashing_execute(self, *args, **kwargs):
        raise RuntimeError("connection reset")

    monkeypatch.setattr(GetActivitySummaryUseCase, "execute", crashing_execute)

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        response = await ac.get("/audit/summary", headers=auth_headers)

    assert response.status_code == 500
    assert await _audit_outcomes(uow, "view_activity_summary") == [
        ("failed", "Internal server error", 500)
    ]


@pytest.mark.asyncio
async def test_invalid_query_is_audited_as_failed(client: AsyncClient, auth_headers, uow):
    response = await client.get("/audit/history", headers=auth_headers, params={"page": 0})

    assert response.status_code == 422
    assert await _audit_outcomes(uow, "view_audit_history") == [
        ("failed", "Request validation failed", 422)
    ]
