"""CLI tests for projects command group."""
from unittest.mock import AsyncMock, MagicMock, patch

from typer.testing import CliRunner

from agentcost_admin.commands.projects_cmd import app
from agentcost_admin.utils.errors import ApiError

runner = CliRunner()


def _mocks():
    client = MagicMock()
    client.close = AsyncMock()
    service = MagicMock()
    for name in ("list", "list_all", "get", "set_active", "rotate_key", "revoke_key"):
        setattr(service, name, AsyncMock())
    return client, service


def _invoke(client, service, args):
    with patch("agentcost_admin.commands.projects_cmd._build_client", return_value=(client, service)):
        return runner.invoke(app, args)


def test_list_json():
    client, service = _mocks()
    service.list.return_value = {"items": [{"id": "p-1", "name": "demo"}], "total": 1, "limit": 50, "offset": 0}

    result = _invoke(client, service, ["list", "--active", "-o", "json"])

    assert result.exit_code == 0
    assert '"name": "demo"' in result.stdout
    service.list.assert_awaited_once_with(search=None, is_active=True, limit=50, offset=0)


def test_list_all():
    client, service = _mocks()
    service.list_all.return_value = [{"id": "p-1"}, {"id": "p-2"}]

    result = _invoke(client, service, ["list", "--all", "-o", "csv"])

    assert result.exit_code == 0
    assert "p-2" in result.stdout


def test_enable():
    client, service = _mocks()
    service.set_active.return_value = {"id": "p-1", "is_active": True}

    result = _invoke(client, service, ["enable", "p-1", "-o", "json"])

    assert result.exit_code == 0
    service.set_active.assert_awaited_once_with("p-1", True)


def test_rotate_key():
    client, service = _mocks()
    service.rotate_key.return_value = {"api_key": "ac_live_new", "key_prefix": "ac_live_"}

    result = _invoke(client, service, ["rotate-key", "p-1", "-o", "json"])

    assert result.exit_code == 0
    assert "ac_live_new" in result.stdout


def test_rotate_key_dry_run():
    client, service = _mocks()
    result = _invoke(client, service, ["rotate-key", "p-1", "--dry-run"])
    assert result.exit_code == 0
    service.rotate_key.assert_not_awaited()


def test_revoke_key_forbidden():
    client, service = _mocks()
    service.revoke_key.side_effect = ApiError("Superuser required", 403)

    result = _invoke(client, service, ["revoke-key", "p-1"])

    assert result.exit_code == 1
    assert '"code": "FORBIDDEN"' in result.stdout
    client.close.assert_awaited_once()
