"""Audit log service.

The backend serves two response shapes from the same path: the basic
feedback-event log and the enhanced admin-action log, selected by the
filters sent. Both are exposed; neither replaces the other.
"""

from __future__ import annotations

from typing import Any

from agentcost_admin.client import AdminApiClient
from agentcost_admin.utils.pagination import build_query

AUDIT_LOG_PATH = "/v1/admin/audit-log"


class AuditService:
    def __init__(self, client: AdminApiClient) -> None:
        self._client = client

    async def feedback_log(self, limit: int = 50, offset: int = 0) -> dict[str, Any]:
        """Basic shape: feedback status/priority change events."""
        return await self._client.get(
            AUDIT_LOG_PATH, params=build_query(limit=limit, offset=offset),
        )

    async def admin_log(
        self,
        action_type: str | None = None,
        target_type: str | None = None,
        admin_id: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> dict[str, Any]:
        """Enhanced shape: every admin action with actor, target and IP."""
        params = build_query(
            action_type=action_type,
            target_type=target_type,
            admin_id=admin_id,
            limit=limit,
            offset=offset,
        )
        return await self._client.get(AUDIT_LOG_PATH, params=params)
