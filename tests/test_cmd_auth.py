"""CLI tests for auth command group."""
import json
from unittest.mock import AsyncMock, MagicMock, patch

from typer.testing import CliRunner

from agentcost_admin.commands.auth_cmd import app
from agentcost_admin.models.auth import AdminUser, LoginResponse, SessionStatus
from agentcost_admin.utils.errors import ApiError, TransportError

runner = CliRunner()

USER = AdminUser(id="u-1", email="root@agentcost.dev", name="Root")


def _mocks():
    client = MagicMock()
    client.close = AsyncMock()
    client.refresh_access_token = AsyncMock()
    auth = MagicMock()
    auth.login = AsyncMock()
    auth.restore_session = AsyncMock()
    return client, auth


def _invoke(client, auth, args, **kwargs):
    with patch("agentcost_admin.commands.auth_cmd._build_auth", return_value=(client, auth)):
        return runner.invoke(app, args, **kwargs)


# ── login ────────────────────────────────────────────────────────────

def test_login_success():
    client, auth = _mocks()
    auth.login.return_value = LoginResponse(access_token="a", refresh_token="r", user=USER)

    result = _invoke(client, auth, ["login", "--email", "root@agentcost.dev", "--password", "pw", "-o", "json"])

    assert result.exit_code == 0
    assert '"status": "authenticated"' in result.stdout
    assert '"user_id": "u-1"' in result.stdout
    auth.login.assert_awaited_once_with("root@agentcost.dev", "pw")
    client.close.assert_awaited_once()


def test_login_prompts_for_password():
    client, auth = _mocks()
    auth.login.return_value = LoginResponse(access_token="a", refresh_token="r", user=USER)

    result = _invoke(client, auth, ["login", "--email", "root@agentcost.dev", "-o", "json"], input="secret\n")

    assert result.exit_code == 0
    auth.login.assert_awaited_once_with("root@agentcost.dev", "secret")


def test_login_invalid_credentials():
    client, auth = _mocks()
    auth.login.side_effect = ApiError("Invalid email or password.", 401)

    result = _invoke(client, auth, ["login", "--email", "a@b.com", "--password", "x"])

    assert result.exit_code == 1
    assert '"code": "AUTH_ERROR"' in result.stdout
    assert "Invalid email or password." in result.stdout
    client.close.assert_awaited_once()


def test_login_backend_unreachable():
    client, auth = _mocks()
    auth.login.side_effect = TransportError("connection refused")

    result = _invoke(client, auth, ["login", "--email", "a@b.com", "--password", "x"])

    assert result.exit_code == 1
    assert '"code": "CONNECTION_ERROR"' in result.stdout


# ── logout / status ──────────────────────────────────────────────────

def test_logout():
    client, auth = _mocks()
    result = _invoke(client, auth, ["logout"])
    assert result.exit_code == 0
    auth.logout.assert_called_once()


def test_status_json():
    client, auth = _mocks()
    auth.get_status.return_value = SessionStatus(has_access_token=True, has_refresh_token=False, user=USER)

    result = _invoke(client, auth, ["status", "-o", "json"])

    assert result.exit_code == 0
    assert '"has_access_token": true' in result.stdout
    assert '"has_refresh_token": false' in result.stdout
    assert '"email": "root@agentcost.dev"' in result.stdout


def test_status_signed_out():
    client, auth = _mocks()
    auth.get_status.return_value = SessionStatus(has_access_token=False, has_refresh_token=False)

    result = _invoke(client, auth, ["status", "-o", "json"])
    assert '"email": "N/A"' in result.stdout


# ── whoami ───────────────────────────────────────────────────────────

def test_whoami():
    client, auth = _mocks()
    auth.restore_session.return_value = USER

    result = _invoke(client, auth, ["whoami", "-o", "json"])

    assert result.exit_code == 0
    assert '"email": "root@agentcost.dev"' in result.stdout


def test_whoami_not_signed_in():
    client, auth = _mocks()
    auth.restore_session.return_value = None

    result = _invoke(client, auth, ["whoami"])
    assert result.exit_code == 1


# ── refresh ──────────────────────────────────────────────────────────

def test_refresh_success():
    client, auth = _mocks()
    client.refresh_access_token.return_value = "new-token"

    result = _invoke(client, auth, ["refresh", "-o", "json"])

    assert result.exit_code == 0
    assert '"status": "refreshed"' in result.stdout
    assert "new-token" not in result.stdout


def test_refresh_failure():
    client, auth = _mocks()
    client.refresh_access_token.return_value = None

    result = _invoke(client, auth, ["refresh"])
    assert result.exit_code == 1
