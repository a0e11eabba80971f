"""Bridge from synchronous typer commands to the async client."""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable

from agentcost_admin.client import AdminApiClient


def run_with_client(client: AdminApiClient, call: Callable[[], Awaitable[Any]]) -> Any:
    """Run ``call`` on a fresh event loop and close ``client`` afterwards."""

    async def _go() -> Any:
        try:
            return await call()
        finally:
            await client.close()

    return asyncio.run(_go())
