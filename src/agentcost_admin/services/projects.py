"""Project and API key management service."""

from __future__ import annotations

from typing import Any

from agentcost_admin.client import AdminApiClient
from agentcost_admin.models.projects import UpdateProjectRequest
from agentcost_admin.utils.pagination import build_query, paginate


class ProjectService:
    """Service for projects and their ingestion API keys."""

    def __init__(self, client: AdminApiClient) -> None:
        self._client = client

    async def list(
        self,
        search: str | None = None,
        is_active: bool | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> dict[str, Any]:
        """List one page of projects with owner and event counts."""
        params = build_query(search=search, is_active=is_active, limit=limit, offset=offset)
        return await self._client.get("/v1/admin/projects", params=params)

    async def list_all(self, page_size: int = 100, **filters: Any) -> list[dict[str, Any]]:
        async def fetch(limit: int, offset: int) -> dict[str, Any]:
            return await self.list(limit=limit, offset=offset, **filters)

        return await paginate(fetch, page_size)

    async def get(self, project_id: str) -> dict[str, Any]:
        """Project detail with owner, members and usage totals."""
        return await self._client.get(f"/v1/admin/projects/{project_id}")

    async def set_active(self, project_id: str, active: bool) -> dict[str, Any]:
        return await self._client.patch(
            f"/v1/admin/projects/{project_id}",
            body=UpdateProjectRequest(is_active=active).model_dump(exclude_none=True),
        )

    async def rotate_key(self, project_id: str) -> dict[str, Any]:
        """Issue a new API key. The old key stops working immediately."""
        return await self._client.post(f"/v1/admin/projects/{project_id}/rotate-key")

    async def revoke_key(self, project_id: str) -> dict[str, Any]:
        """Revoke the project's API key without issuing a new one."""
        return await self._client.post(f"/v1/admin/projects/{project_id}/revoke-key")
