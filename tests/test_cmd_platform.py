"""CLI tests for the read-only groups: overview, system, analytics, incidents, audit."""
from unittest.mock import AsyncMock, MagicMock, patch

from typer.testing import CliRunner

from agentcost_admin.commands import analytics_cmd, audit_cmd, incidents_cmd, overview_cmd, system_cmd
from agentcost_admin.utils.errors import TransportError

runner = CliRunner()


def _mocks(*methods):
    client = MagicMock()
    client.close = AsyncMock()
    service = MagicMock()
    for name in methods:
        setattr(service, name, AsyncMock())
    return client, service


def _invoke(module, client, service, args):
    with patch.object(module, "_build_client", return_value=(client, service)):
        return runner.invoke(module.app, args)


# ── overview ─────────────────────────────────────────────────────────

def test_overview_stats():
    client, service = _mocks("stats", "timeseries")
    service.stats.return_value = {"total_users": 120, "total_projects": 45}

    result = _invoke(overview_cmd, client, service, ["stats", "-o", "json"])

    assert result.exit_code == 0
    assert '"total_users": 120' in result.stdout


def test_overview_timeseries_range():
    client, service = _mocks("stats", "timeseries")
    service.timeseries.return_value = [{"date": "2026-10-01", "events": 10, "tokens": 500, "cost": 0.12}]

    result = _invoke(overview_cmd, client, service, ["timeseries", "--range", "7d", "-o", "csv"])

    assert result.exit_code == 0
    assert result.stdout.splitlines()[0] == "date,events,tokens,cost"
    service.timeseries.assert_awaited_once_with("7d")


# ── system ───────────────────────────────────────────────────────────

def test_system_health():
    client, service = _mocks("health", "ingestion_stats")
    service.health.return_value = {"status": "degraded", "database": "ok"}

    result = _invoke(system_cmd, client, service, ["health", "-o", "json"])

    assert result.exit_code == 0
    assert '"status": "degraded"' in result.stdout


def test_system_health_unreachable():
    client, service = _mocks("health", "ingestion_stats")
    service.health.side_effect = TransportError("Request timed out", timeout=True)

    result = _invoke(system_cmd, client, service, ["health"])

    assert result.exit_code == 1
    assert '"code": "TIMEOUT"' in result.stdout


def test_system_ingestion_default_range():
    client, service = _mocks("health", "ingestion_stats")
    service.ingestion_stats.return_value = []

    result = _invoke(system_cmd, client, service, ["ingestion", "-o", "json"])

    assert result.exit_code == 0
    service.ingestion_stats.assert_awaited_once_with("24h")


# ── analytics ────────────────────────────────────────────────────────

def test_analytics_top_models():
    client, service = _mocks("top_models", "top_spenders", "provider_growth", "cost_per_user")
    service.top_models.return_value = [{"model": "gpt-4o", "calls": 900}]

    result = _invoke(analytics_cmd, client, service, ["top-models", "--range", "90d", "-l", "5", "-o", "json"])

    assert result.exit_code == 0
    assert '"model": "gpt-4o"' in result.stdout
    service.top_models.assert_awaited_once_with("90d", 5)


def test_analytics_cost_per_user():
    client, service = _mocks("top_models", "top_spenders", "provider_growth", "cost_per_user")
    service.cost_per_user.return_value = {"total_cost": 10.0, "unique_users": 4, "avg_cost_per_user": 2.5}

    result = _invoke(analytics_cmd, client, service, ["cost-per-user", "-o", "json"])

    assert result.exit_code == 0
    service.cost_per_user.assert_awaited_once_with("30d")


# ── incidents / audit ────────────────────────────────────────────────

def test_incident_events():
    client, service = _mocks("failed_events", "feedback")
    service.failed_events.return_value = {"items": [], "total": 0, "limit": 50, "offset": 0}

    result = _invoke(incidents_cmd, client, service, ["events", "--project-id", "p-1", "-o", "json"])

    assert result.exit_code == 0
    service.failed_events.assert_awaited_once_with(limit=50, offset=0, project_id="p-1")


def test_audit_admin_log():
    client, service = _mocks("feedback_log", "admin_log")
    service.admin_log.return_value = {
        "items": [{"admin_email": "root@agentcost.dev", "action_type": "user.disable"}],
        "total": 1, "limit": 50, "offset": 0,
    }

    result = _invoke(audit_cmd, client, service, ["admin-log", "--action-type", "user.disable", "-o", "csv"])

    assert result.exit_code == 0
    assert "user.disable" in result.stdout
    assert service.admin_log.await_args.kwargs["action_type"] == "user.disable"


def test_audit_feedback_log():
    client, service = _mocks("feedback_log", "admin_log")
    service.feedback_log.return_value = {"items": [], "total": 0, "limit": 20, "offset": 0}

    result = _invoke(audit_cmd, client, service, ["log", "-l", "20", "-o", "json"])

    assert result.exit_code == 0
    service.feedback_log.assert_awaited_once_with(limit=20, offset=0)
