"""Incident views: failed ingestion events and bug-report feedback."""

from __future__ import annotations

from typing import Any

from agentcost_admin.client import AdminApiClient
from agentcost_admin.utils.pagination import build_query


class IncidentService:
    def __init__(self, client: AdminApiClient) -> None:
        self._client = client

    async def failed_events(
        self,
        limit: int = 50,
        offset: int = 0,
        project_id: str | None = None,
    ) -> dict[str, Any]:
        """Events that failed ingestion, newest first."""
        params = build_query(limit=limit, offset=offset, project_id=project_id)
        return await self._client.get("/v1/admin/incidents/events", params=params)

    async def feedback(
        self,
        status: str | None = None,
        priority: str | None = None,
        type: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> dict[str, Any]:
        """Feedback items treated as incidents (bug reports and the like)."""
        params = build_query(
            status=status, priority=priority, type=type, limit=limit, offset=offset,
        )
        return await self._client.get("/v1/admin/incidents/feedback", params=params)
