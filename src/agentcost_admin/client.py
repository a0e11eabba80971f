"""Async API client for the AgentCost admin backend.

Attaches the stored bearer token to every request and recovers from an
expired access token with one shared refresh followed by a single retry.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx
from pydantic import ValidationError

from agentcost_admin.config import Settings
from agentcost_admin.models.auth import RefreshResponse
from agentcost_admin.storage import ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY, TokenStore
from agentcost_admin.utils.errors import ApiError, TransportError

logger = logging.getLogger(__name__)

API_PREFIX = "/v1/"
REFRESH_PATH = "/v1/auth/refresh"


def error_message(response: httpx.Response, fallback: str | None = None) -> str:
    """Extract a human message from an error response.

    Uses the ``detail`` field of a JSON body, falling back to ``fallback``
    (default: the HTTP reason phrase) when the body is not JSON or carries
    no usable detail.
    """
    fallback = fallback or response.reason_phrase or "Request failed"
    try:
        body = response.json()
    except ValueError:
        return fallback
    if not isinstance(body, dict):
        return fallback

    detail = body.get("detail")
    if isinstance(detail, str) and detail:
        return detail
    # FastAPI validation errors: [{"loc": [...], "msg": "...", ...}]
    if isinstance(detail, list):
        msgs = [str(item["msg"]) for item in detail if isinstance(item, dict) and item.get("msg")]
        if msgs:
            return "; ".join(msgs)
    return fallback


class AdminApiClient:
    """HTTP client for the AgentCost admin API with single-flight token refresh."""

    def __init__(
        self,
        settings: Settings,
        store: TokenStore,
        http: httpx.AsyncClient | None = None,
        verbose: bool = False,
    ) -> None:
        self._settings = settings
        self._store = store
        self._verbose = verbose
        self._http = http or httpx.AsyncClient(timeout=settings.timeout)
        self._refresh_task: asyncio.Task[str | None] | None = None

    @property
    def store(self) -> TokenStore:
        return self._store

    async def request(
        self,
        method: str,
        path: str,
        *,
        body: Any = None,
        headers: dict[str, str] | None = None,
        params: dict[str, str] | None = None,
    ) -> Any:
        """Make an authenticated API request.

        Args:
            method: HTTP method (GET, POST, PATCH, PUT, DELETE).
            path: API path, starting with /v1/.
            body: JSON-serializable request body.
            headers: Extra headers, merged over the JSON content type.
            params: Query parameters.

        Returns:
            The decoded JSON body, or None for an empty response.

        Raises:
            ApiError: The backend answered with a non-2xx status.
            TransportError: The backend could not be reached.
        """
        token = self._store.get(ACCESS_TOKEN_KEY)
        merged = self._build_headers(headers, token)

        response = await self.send(method, path, headers=merged, body=body, params=params)

        if response.status_code == 401 and token:
            if self._verbose:
                logger.info("Got 401 for %s %s, refreshing access token", method, path)
            new_token = await self.refresh_access_token()
            if new_token:
                merged["Authorization"] = f"Bearer {new_token}"
                response = await self.send(method, path, headers=merged, body=body, params=params)

        if not response.is_success:
            raise ApiError(error_message(response), response.status_code)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ApiError("Invalid JSON in response", response.status_code) from e

    async def get(self, path: str, **kwargs: Any) -> Any:
        """Convenience method for GET requests."""
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> Any:
        """Convenience method for POST requests."""
        return await self.request("POST", path, **kwargs)

    async def patch(self, path: str, **kwargs: Any) -> Any:
        """Convenience method for PATCH requests."""
        return await self.request("PATCH", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> Any:
        """Convenience method for PUT requests."""
        return await self.request("PUT", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> Any:
        """Convenience method for DELETE requests."""
        return await self.request("DELETE", path, **kwargs)

    async def send(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: Any = None,
        params: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Issue one raw HTTP call with no auth handling.

        Transport failures are raised as TransportError; HTTP statuses are
        returned untouched for the caller to interpret.
        """
        if not path.startswith(API_PREFIX):
            raise ValueError(f"API path must start with {API_PREFIX!r}, got {path!r}")

        url = self._settings.api_url + path
        if self._verbose:
            logger.info("%s %s", method, url)

        try:
            response = await self._http.request(
                method,
                url,
                headers=headers if headers is not None else self._build_headers(None, None),
                json=body,
                params=params,
            )
        except httpx.TimeoutException as e:
            raise TransportError(f"Request to {url} timed out: {e}", timeout=True) from e
        except httpx.HTTPError as e:
            raise TransportError(f"Could not reach {url}: {e}") from e

        if self._verbose:
            logger.info("Response: %s", response.status_code)
        return response

    async def refresh_access_token(self) -> str | None:
        """Obtain a new access token, sharing one refresh between concurrent callers.

        Returns the new access token, or None when no refresh token is stored
        or the refresh failed. Never raises for refresh failures.
        """
        task = self._refresh_task
        if task is None or task.done():
            task = asyncio.ensure_future(self._refresh_once())
            task.add_done_callback(self._clear_refresh_task)
            self._refresh_task = task
        # Shielded: a cancelled waiter must not abort the shared refresh.
        return await asyncio.shield(task)

    def _clear_refresh_task(self, task: asyncio.Task[str | None]) -> None:
        if self._refresh_task is task:
            self._refresh_task = None

    async def _refresh_once(self) -> str | None:
        refresh_token = self._store.get(REFRESH_TOKEN_KEY)
        if not refresh_token:
            return None

        try:
            response = await self.send(
                "POST", REFRESH_PATH, body={"refresh_token": refresh_token},
            )
            if not response.is_success:
                if self._verbose:
                    logger.info("Token refresh rejected (HTTP %s)", response.status_code)
                return None
            data = RefreshResponse.model_validate(response.json())
        except (TransportError, ValidationError, ValueError) as e:
            if self._verbose:
                logger.info("Token refresh failed: %s", e)
            return None
        if not data.access_token:
            return None

        try:
            self._store.set(ACCESS_TOKEN_KEY, data.access_token)
            if data.refresh_token:
                self._store.set(REFRESH_TOKEN_KEY, data.refresh_token)
        except OSError as e:
            if self._verbose:
                logger.info("Could not store refreshed tokens: %s", e)
            return None
        return data.access_token

    def _build_headers(self, extra: dict[str, str] | None, token: str | None) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if extra:
            headers.update(extra)
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._http.aclose()
