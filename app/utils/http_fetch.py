"""
Upstream HTTP retrieval

This module fetches the source playlist as text. Status codes are returned
to the caller rather than raised, so the cache decides what counts as failure.
"""
import logging
from typing import Awaitable, Callable

import httpx


logger = logging.getLogger(__name__)

Fetcher = Callable[[str], Awaitable[tuple[int, str]]]


async def fetch_text(
    url: str,
    timeout: float = 30.0,
    transport: httpx.AsyncBaseTransport | None = None
) -> tuple[int, str]:
    """
    Download a URL and return its status code and decoded body

    No retry is attempted; transport failures surface immediately.

    Args:
        url: URL to download from
        timeout: HTTP timeout in seconds
        transport: Optional httpx transport, e.g. a MockTransport in tests

    Returns:
        Tuple of (status_code, body_text)

    Raises:
        httpx.HTTPError: On connection errors, timeouts and other transport failures
    """
    async with httpx.AsyncClient(timeout=timeout, follow_redirects=True, transport=transport) as client:
        response = await client.get(url)

    size_kb = len(response.content) / 1024
    logger.debug(f"GET returned HTTP {response.status_code} ({size_kb:.1f} KB)")

    return response.status_code, response.text


def make_fetcher(timeout: float, transport: httpx.AsyncBaseTransport | None = None) -> Fetcher:
    """Bind a timeout to fetch_text, producing the cache's fetch capability"""
    async def fetch(url: str) -> tuple[int, str]:
        return await fetch_text(url, timeout=timeout, transport=transport)

    return fetch
