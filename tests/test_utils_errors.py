"""Tests for utils/errors.py — error classification and structured output."""
import json

import pytest

from agentcost_admin.utils.errors import AdminError, ApiError, TransportError, error_code, handle_error


# ── error types ──────────────────────────────────────────────────────

def test_api_error_str_includes_status():
    err = ApiError("User not found", 404)
    assert err.message == "User not found"
    assert err.status == 404
    assert str(err) == "User not found (HTTP 404)"


def test_transport_error_is_admin_error():
    err = TransportError("connection refused")
    assert isinstance(err, AdminError)
    assert err.timeout is False


# ── error_code ───────────────────────────────────────────────────────

@pytest.mark.parametrize("status,code", [
    (400, "INVALID_ARGUMENT"),
    (401, "AUTH_ERROR"),
    (403, "FORBIDDEN"),
    (404, "NOT_FOUND"),
    (422, "INVALID_ARGUMENT"),
    (429, "RATE_LIMITED"),
    (500, "SERVER_ERROR"),
    (503, "SERVER_ERROR"),
    (409, "API_ERROR"),
])
def test_api_error_codes(status, code):
    assert error_code(ApiError("x", status)) == code


def test_transport_codes():
    assert error_code(TransportError("slow", timeout=True)) == "TIMEOUT"
    assert error_code(TransportError("refused")) == "CONNECTION_ERROR"


def test_unknown_error_code():
    assert error_code(RuntimeError("boom")) == "RUNTIME_ERROR"


# ── handle_error ─────────────────────────────────────────────────────

def test_handle_error_api(capsys):
    handle_error(ApiError("Token expired", 401))
    out = json.loads(capsys.readouterr().out)
    assert out["error"] is True
    assert out["code"] == "AUTH_ERROR"
    assert out["message"] == "Token expired"
    assert out["status"] == 401
    assert "auth login" in out["hint"]


def test_handle_error_transport(capsys):
    handle_error(TransportError("Request timed out", timeout=True))
    out = json.loads(capsys.readouterr().out)
    assert out["code"] == "TIMEOUT"
    assert "status" not in out
    assert "AGENTCOST_API_URL" in out["hint"]


def test_handle_error_without_hint(capsys):
    handle_error(ApiError("Conflict", 409))
    out = json.loads(capsys.readouterr().out)
    assert out["code"] == "API_ERROR"
    assert "hint" not in out


def test_handle_error_writes_human_message_to_stderr(capsys):
    handle_error(ApiError("User not found", 404))
    err = capsys.readouterr().err
    assert "User not found" in err
