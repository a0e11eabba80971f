"""Pagination and query-string helpers for the admin API."""

from __future__ import annotations

from typing import Any, Awaitable, Callable


def build_query(**params: Any) -> dict[str, str]:
    """Build query parameters the way the admin console does.

    Unset, empty and zero values are dropped; booleans render as
    ``true``/``false``. ``False`` is kept since it is a real filter.
    """
    query: dict[str, str] = {}
    for key, value in params.items():
        if isinstance(value, bool):
            query[key] = "true" if value else "false"
        elif value is None or value == "" or value == 0:
            continue
        else:
            query[key] = str(value)
    return query


async def paginate(
    fetch_fn: Callable[[int, int], Awaitable[dict[str, Any]]],
    page_size: int = 100,
    max_items: int | None = None,
) -> list[dict[str, Any]]:
    """Walk an offset-paginated list endpoint.

    Args:
        fetch_fn: Coroutine taking (limit, offset) and returning a page
                  envelope ``{"items": [...], "total": N, ...}``.
        page_size: Items requested per page.
        max_items: Stop after this many items. None = everything.

    Returns:
        All items concatenated across pages.
    """
    all_items: list[dict[str, Any]] = []
    offset = 0

    while True:
        page = await fetch_fn(page_size, offset)
        items = page.get("items", [])
        all_items.extend(items)
        offset += len(items)

        total = page.get("total", 0)
        if not items or offset >= total:
            break
        if max_items is not None and len(all_items) >= max_items:
            break

    if max_items is not None:
        return all_items[:max_items]
    return all_items
