"""httpx wrapper.

Why a wrapper:
- Standardizes timeouts and headers for every beacon provider.
- Eases testing: callers can pass an `httpx.MockTransport`.
"""

from __future__ import annotations

from typing import Any

import httpx

from core.config import AppSettings


def build_async_client(
    settings: AppSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` with safe defaults.

    One client is shared by all beacon requests of an aggregated query.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json,text/html;q=0.9,text/plain;q=0.8,*/*;q=0.5",
    }
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


def build_get_request(url: str, *, params: dict[str, Any] | None = None, headers: dict[str, str] | None = None) -> httpx.Request:
    """Build (without sending) a GET request; query values are URL-encoded by httpx."""

    return httpx.Request("GET", url, params=params, headers=headers)


async def fetch_text(client: httpx.AsyncClient, request: httpx.Request) -> str:
    """Send `request` and return the body text.

    Raises `httpx.HTTPError` on transport errors and non-2xx statuses.
    """

    # Re-prepare through the client so its default headers and timeout apply.
    prepared = client.build_request(
        request.method,
        request.url,
        headers=request.headers,
        content=request.content,
    )
    response = await client.send(prepared)
    response.raise_for_status()
    return response.text
