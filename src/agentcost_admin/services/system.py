"""System health service."""

from __future__ import annotations

from typing import Any

from agentcost_admin.client import AdminApiClient
from agentcost_admin.utils.pagination import build_query


class SystemService:
    def __init__(self, client: AdminApiClient) -> None:
        self._client = client

    async def health(self) -> dict[str, Any]:
        """Database, ingestion and pricing health plus version/environment."""
        return await self._client.get("/v1/admin/system/health")

    async def ingestion_stats(self, range: str = "24h") -> list[dict[str, Any]]:
        """Ingested/succeeded/failed event counts per bucket."""
        return await self._client.get(
            "/v1/admin/system/ingestion-stats", params=build_query(range=range),
        )
