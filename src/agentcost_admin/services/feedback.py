"""Feedback management service."""

from __future__ import annotations

from typing import Any

from agentcost_admin.client import AdminApiClient
from agentcost_admin.models.feedback import UpdateFeedbackRequest
from agentcost_admin.utils.pagination import build_query, paginate


class FeedbackService:
    """Service for triaging and responding to user feedback."""

    def __init__(self, client: AdminApiClient) -> None:
        self._client = client

    async def list(
        self,
        status: str | None = None,
        priority: str | None = None,
        type: str | None = None,
        search: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> dict[str, Any]:
        params = build_query(
            status=status,
            priority=priority,
            type=type,
            search=search,
            limit=limit,
            offset=offset,
        )
        return await self._client.get("/v1/admin/feedback", params=params)

    async def list_all(self, page_size: int = 100, **filters: Any) -> list[dict[str, Any]]:
        async def fetch(limit: int, offset: int) -> dict[str, Any]:
            return await self.list(limit=limit, offset=offset, **filters)

        return await paginate(fetch, page_size)

    async def get(self, feedback_id: str) -> dict[str, Any]:
        """Feedback detail with comments, attachments and event history."""
        return await self._client.get(f"/v1/admin/feedback/{feedback_id}")

    async def update(self, feedback_id: str, request: UpdateFeedbackRequest) -> dict[str, Any]:
        """Change status/priority and optionally post an admin response."""
        return await self._client.patch(
            f"/v1/admin/feedback/{feedback_id}",
            body=request.model_dump(mode="json", exclude_none=True),
        )
