"""Shared fixtures for the agentcost-admin test suite."""
from __future__ import annotations

import asyncio
import inspect
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from agentcost_admin.client import AdminApiClient
from agentcost_admin.config import Settings
from agentcost_admin.storage import MemoryTokenStore

BASE_URL = "http://admin.test"


class FakeHttp:
    """Stands in for httpx.AsyncClient: routes by (method, path) and records calls.

    A route is an httpx.Response, a list of responses/exceptions consumed in
    order, or a callable (sync or async) taking the recorded call dict and
    returning a response or exception.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Any] = {}
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    def route(self, method: str, path: str, handler: Any) -> None:
        self.routes[(method, path)] = handler

    def calls_to(self, path: str) -> list[dict[str, Any]]:
        return [c for c in self.calls if c["path"] == path]

    async def request(self, method, url, *, headers=None, json=None, params=None):
        path = url[len(BASE_URL):] if url.startswith(BASE_URL) else url
        call = {
            "method": method,
            "path": path,
            "headers": dict(headers or {}),
            "json": json,
            "params": params,
        }
        self.calls.append(call)
        await asyncio.sleep(0)

        handler = self.routes.get((method, path))
        if handler is None:
            return httpx.Response(404, json={"detail": "Not Found"})
        if isinstance(handler, list):
            result = handler.pop(0)
        elif callable(handler):
            result = handler(call)
            if inspect.isawaitable(result):
                result = await result
        else:
            result = handler

        if isinstance(result, Exception):
            raise result
        return result

    async def aclose(self) -> None:
        self.closed = True


def bearer(call: dict[str, Any]) -> str | None:
    return call["headers"].get("Authorization")


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        api_url=BASE_URL,
        timeout=5.0,
        session_file=str(tmp_path / "session.json"),
    )


@pytest.fixture
def store() -> MemoryTokenStore:
    return MemoryTokenStore()


@pytest.fixture
def fake_http() -> FakeHttp:
    return FakeHttp()


@pytest.fixture
def client(settings, store, fake_http) -> AdminApiClient:
    return AdminApiClient(settings, store, http=fake_http)


@pytest.fixture
def mock_client():
    """MagicMock standing in for AdminApiClient, with awaitable verbs."""
    client = MagicMock()
    client.get = AsyncMock()
    client.post = AsyncMock()
    client.patch = AsyncMock()
    client.put = AsyncMock()
    client.delete = AsyncMock()
    client.close = AsyncMock()
    return client
