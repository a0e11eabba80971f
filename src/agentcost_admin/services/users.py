"""User management service."""

from __future__ import annotations

from typing import Any

from agentcost_admin.client import AdminApiClient
from agentcost_admin.models.users import AdminNotesRequest, SendEmailRequest, UpdateUserRequest
from agentcost_admin.utils.pagination import build_query, paginate


class UserService:
    """Service for listing, inspecting and moderating platform users."""

    def __init__(self, client: AdminApiClient) -> None:
        self._client = client

    async def list(
        self,
        search: str | None = None,
        is_active: bool | None = None,
        is_superuser: bool | None = None,
        limit: int = 50,
        offset: int = 0,
        sort: str | None = None,
        order: str | None = None,
    ) -> dict[str, Any]:
        """List one page of users: ``{"items", "total", "limit", "offset"}``."""
        params = build_query(
            search=search,
            is_active=is_active,
            is_superuser=is_superuser,
            limit=limit,
            offset=offset,
            sort=sort,
            order=order,
        )
        return await self._client.get("/v1/admin/users", params=params)

    async def list_all(self, page_size: int = 100, **filters: Any) -> list[dict[str, Any]]:
        """List every user matching the filters, across pages."""

        async def fetch(limit: int, offset: int) -> dict[str, Any]:
            return await self.list(limit=limit, offset=offset, **filters)

        return await paginate(fetch, page_size)

    async def get(self, user_id: str) -> dict[str, Any]:
        """User detail with projects, memberships, milestones and usage."""
        return await self._client.get(f"/v1/admin/users/{user_id}")

    async def update(self, user_id: str, request: UpdateUserRequest) -> dict[str, Any]:
        """Enable/disable a user or change their superuser flag."""
        return await self._client.patch(
            f"/v1/admin/users/{user_id}",
            body=request.model_dump(exclude_none=True),
        )

    async def set_active(self, user_id: str, active: bool) -> dict[str, Any]:
        return await self.update(user_id, UpdateUserRequest(is_active=active))

    async def set_superuser(self, user_id: str, superuser: bool) -> dict[str, Any]:
        return await self.update(user_id, UpdateUserRequest(is_superuser=superuser))

    async def revoke_sessions(self, user_id: str) -> dict[str, Any]:
        """Sign the user out everywhere. Returns ``{"revoked": N}``."""
        return await self._client.post(f"/v1/admin/users/{user_id}/revoke-sessions")

    async def delete(self, user_id: str) -> dict[str, Any]:
        return await self._client.delete(f"/v1/admin/users/{user_id}")

    async def set_notes(self, user_id: str, notes: str) -> dict[str, Any]:
        """Replace the internal admin notes on a user."""
        return await self._client.put(
            f"/v1/admin/users/{user_id}/notes",
            body=AdminNotesRequest(notes=notes).model_dump(),
        )

    async def send_email(self, user_id: str, subject: str, body: str) -> dict[str, Any]:
        """Send a plain email to the user from the platform address."""
        return await self._client.post(
            f"/v1/admin/users/{user_id}/send-email",
            body=SendEmailRequest(subject=subject, body=body).model_dump(),
        )
