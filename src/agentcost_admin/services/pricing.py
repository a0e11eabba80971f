"""Model pricing service."""

from __future__ import annotations

from typing import Any

from agentcost_admin.client import AdminApiClient
from agentcost_admin.models.pricing import PricingSource, UpdateModelPricingRequest
from agentcost_admin.utils.pagination import build_query


class PricingService:
    """Service for the model pricing catalogue and its upstream syncs."""

    def __init__(self, client: AdminApiClient) -> None:
        self._client = client

    async def list_models(
        self,
        search: str | None = None,
        provider: str | None = None,
        source: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> dict[str, Any]:
        """List priced models. ``source`` filters by pricing source (manual, litellm, ...)."""
        params = build_query(
            search=search, provider=provider, source=source, limit=limit, offset=offset,
        )
        return await self._client.get("/v1/admin/pricing/models", params=params)

    async def list_providers(self) -> list[dict[str, Any]]:
        """Model counts and average prices per provider."""
        return await self._client.get("/v1/admin/pricing/providers")

    async def update_model(self, model_id: int, request: UpdateModelPricingRequest) -> dict[str, Any]:
        """Override a model's prices. The backend marks the model as manually priced."""
        return await self._client.patch(
            f"/v1/admin/pricing/models/{model_id}",
            body=request.model_dump(exclude_none=True),
        )

    async def sync(self, source: PricingSource) -> dict[str, Any]:
        """Pull prices from an upstream catalogue (litellm or openrouter)."""
        return await self._client.post(f"/v1/admin/pricing/sync/{source.value}")

    async def sync_history(
        self,
        source: str | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> dict[str, Any]:
        params = build_query(source=source, limit=limit, offset=offset)
        return await self._client.get("/v1/admin/pricing/sync-history", params=params)
