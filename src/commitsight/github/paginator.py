"""Paged fetching of GitHub list endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from loguru import logger

from commitsight.clients.http import RequestContext, decode_json, ensure_success, fetch_with_retry
from commitsight.errors import ResponseParseError

if TYPE_CHECKING:
    import httpx


def page_url(base_url: str, per_page: int, page: int) -> str:
    separator = "&" if "?" in base_url else "?"
    return f"{base_url}{separator}per_page={per_page}&page={page}"


async def fetch_pages(
    client: httpx.AsyncClient,
    ctx: RequestContext,
    base_url: str,
    *,
    per_page: int = 100,
    max_items: int | None = None,
) -> list[dict[str, Any]]:
    """Drain a list endpoint page by page, in server order.

    Stops when the ``Link`` header has no ``next`` relation, when a page is
    shorter than ``per_page``, or once ``max_items`` items were collected (the
    result is then truncated to exactly ``max_items``). Any failure aborts the
    whole fetch; no partial result is returned.
    """

    items: list[dict[str, Any]] = []
    page = 1

    while True:
        url = page_url(base_url, per_page, page)
        logger.debug("Fetching {}", url)
        response = await fetch_with_retry(client, ctx, url)
        ensure_success(response, url)

        payload = decode_json(response, url)
        if not isinstance(payload, list):
            raise ResponseParseError(f"Expected JSON array from {url}")
        items.extend(payload)

        has_next = "next" in response.links
        if max_items is not None and len(items) >= max_items:
            break
        if not has_next or len(payload) < per_page:
            break
        page += 1

    if max_items is not None:
        del items[max_items:]
    return items
