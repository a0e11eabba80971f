"""Auth-related data models."""

from __future__ import annotations

from pydantic import BaseModel


class AdminUser(BaseModel):
    """The signed-in operator, as returned by the verify endpoint."""
    id: str
    email: str
    name: str | None = None
    is_superuser: bool = True


class LoginResponse(BaseModel):
    """Response from the generic login endpoint."""
    access_token: str
    refresh_token: str
    user: AdminUser


class RefreshResponse(BaseModel):
    """Response from the token refresh endpoint.

    The backend only includes refresh_token when it rotated it.
    """
    access_token: str
    refresh_token: str | None = None


class SessionStatus(BaseModel):
    """What the local token store currently holds."""
    has_access_token: bool
    has_refresh_token: bool
    user: AdminUser | None = None
