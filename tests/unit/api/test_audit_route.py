"""
Unit tests for deriving an audit outcome from a route's response
"""
from fastapi.responses import JSONResponse, Response

from libs.result import Error
from src.api.error import ClientError, ServerError
from src.api.utils.audit_route import _exception_outcome, _response_outcome
from src.domain.entities import AuditStatus


def test_success_flag_in_envelope():
    response = JSONResponse({"success": True, "data": {}})
    assert _response_outcome(response) == (AuditStatus.success, None)


def test_failed_envelope_carries_error_message():
    response = JSONResponse(
        {"success": False, "error": {"code": "X", "message": "Nope"}}, status_code=200
    )
    assert _response_outcome(response) == (AuditStatus.failed, "Nope")


def test_download_body_is_not_inspected():
    response = Response(
        content='{"success": false}',
        media_type="application/json",
        headers={"Content-Disposition": 'attachment; filename="export.json"'},
    )
    assert _response_outcome(response) == (AuditStatus.success, None)


def test_status_code_decides_without_envelope():
    response = Response(content="oops", media_type="text/plain", status_code=503)
    assert _response_outcome(response) == (AuditStatus.failed, None)


def test_exception_outcomes():
    assert _exception_outcome(ClientError(Error("NOT_FOUND", "Missing"), 404)) == (
        404,
        "Missing",
    )
    assert _exception_outcome(ServerError(Error("DB_FAILURE", "down"))) == (
        500,
        "Internal server error",
    )
    assert _exception_outcome(RuntimeError("boom")) == (500, "Internal server error")
