"""Platform analytics service."""

from __future__ import annotations

from typing import Any

from agentcost_admin.client import AdminApiClient
from agentcost_admin.utils.pagination import build_query


class AnalyticsService:
    """Cross-tenant usage rankings and growth."""

    def __init__(self, client: AdminApiClient) -> None:
        self._client = client

    async def top_models(self, range: str = "30d", limit: int = 20) -> list[dict[str, Any]]:
        return await self._client.get(
            "/v1/admin/analytics/top-models", params=build_query(range=range, limit=limit),
        )

    async def top_spenders(self, range: str = "30d", limit: int = 20) -> list[dict[str, Any]]:
        """Projects ranked by cost over the range."""
        return await self._client.get(
            "/v1/admin/analytics/top-spenders", params=build_query(range=range, limit=limit),
        )

    async def provider_growth(self, range: str = "30d") -> list[dict[str, Any]]:
        """Daily calls and cost per provider."""
        return await self._client.get(
            "/v1/admin/analytics/provider-growth", params=build_query(range=range),
        )

    async def cost_per_user(self, range: str = "30d") -> dict[str, Any]:
        return await self._client.get(
            "/v1/admin/analytics/cost-per-user", params=build_query(range=range),
        )
