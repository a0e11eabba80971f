"""Platform overview service."""

from __future__ import annotations

from typing import Any

from agentcost_admin.client import AdminApiClient
from agentcost_admin.utils.pagination import build_query


class OverviewService:
    """Platform-wide totals and their daily timeseries."""

    def __init__(self, client: AdminApiClient) -> None:
        self._client = client

    async def stats(self) -> dict[str, Any]:
        """Users, projects, events, tokens, cost and SDK installation totals."""
        return await self._client.get("/v1/admin/overview/stats")

    async def timeseries(self, range: str = "30d") -> list[dict[str, Any]]:
        """Daily events, cost and tokens over ``range`` (7d, 30d, 90d)."""
        return await self._client.get(
            "/v1/admin/overview/timeseries", params=build_query(range=range),
        )
