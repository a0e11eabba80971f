"""Admin authentication: two-step login, session restore, logout.

General authentication success is not enough to use this client; every
login is followed by an elevated-role check against the admin API.
"""

from __future__ import annotations

import json

from pydantic import ValidationError

from agentcost_admin.client import AdminApiClient, error_message
from agentcost_admin.models.auth import AdminUser, LoginResponse, SessionStatus
from agentcost_admin.storage import (
    ACCESS_TOKEN_KEY,
    REFRESH_TOKEN_KEY,
    USER_KEY,
    TokenStore,
    clear_session,
)
from agentcost_admin.utils.errors import ApiError

LOGIN_PATH = "/v1/auth/login"
VERIFY_PATH = "/v1/admin/auth/verify"

INVALID_CREDENTIALS = "Invalid email or password."
ACCOUNT_DISABLED = "This account has been disabled. Contact your administrator."
SERVER_UNAVAILABLE = "Authentication server unavailable. Try again later."
ACCESS_DENIED = "Access denied. This account does not have admin privileges."


class AuthManager:
    """Manages the admin session held in the token store."""

    def __init__(self, client: AdminApiClient, store: TokenStore | None = None) -> None:
        self._client = client
        self._store = store if store is not None else client.store

    async def login(self, email: str, password: str) -> LoginResponse:
        """Authenticate and verify admin privileges, then persist the session.

        Raises:
            ApiError: Bad credentials (401/400), disabled account (403),
                missing admin role (403) or any other backend failure.
            TransportError: The backend could not be reached.
        """
        # Step 1: the generic login endpoint, always anonymous.
        res = await self._client.send(
            "POST", LOGIN_PATH, body={"email": email, "password": password},
        )
        if not res.is_success:
            if res.status_code in (400, 401):
                raise ApiError(INVALID_CREDENTIALS, res.status_code)
            if res.status_code == 403:
                raise ApiError(ACCOUNT_DISABLED, 403)
            raise ApiError(error_message(res, fallback=SERVER_UNAVAILABLE), res.status_code)

        try:
            data = LoginResponse.model_validate(res.json())
        except (ValidationError, ValueError) as e:
            raise ApiError(SERVER_UNAVAILABLE, 502) from e

        # Step 2: the elevated-role check with the fresh token.
        verify = await self._client.send(
            "GET",
            VERIFY_PATH,
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {data.access_token}",
            },
        )
        if not verify.is_success:
            raise ApiError(ACCESS_DENIED, 403)

        self._store.set(ACCESS_TOKEN_KEY, data.access_token)
        self._store.set(REFRESH_TOKEN_KEY, data.refresh_token)
        self._store.set(USER_KEY, data.user.model_dump_json())
        return data

    async def verify(self) -> AdminUser:
        """Confirm the stored session still belongs to a superuser."""
        data = await self._client.get(VERIFY_PATH)
        return AdminUser.model_validate(data)

    async def restore_session(self) -> AdminUser | None:
        """Re-validate a stored session.

        Returns None without any request when nothing is stored. A session
        the backend rejects (401/403) is cleared. Server errors and
        transport failures propagate and leave the session in place.
        """
        if not self._store.get(ACCESS_TOKEN_KEY):
            return None
        try:
            user = await self.verify()
        except ApiError as e:
            if e.status not in (401, 403):
                raise
            clear_session(self._store)
            return None
        except ValidationError:
            clear_session(self._store)
            return None
        self._store.set(USER_KEY, user.model_dump_json())
        return user

    def logout(self) -> None:
        clear_session(self._store)

    def get_status(self) -> SessionStatus:
        """Describe what the token store currently holds."""
        return SessionStatus(
            has_access_token=bool(self._store.get(ACCESS_TOKEN_KEY)),
            has_refresh_token=bool(self._store.get(REFRESH_TOKEN_KEY)),
            user=self._cached_user(),
        )

    def _cached_user(self) -> AdminUser | None:
        raw = self._store.get(USER_KEY)
        if not raw:
            return None
        try:
            return AdminUser.model_validate(json.loads(raw))
        except (ValidationError, ValueError):
            return None
