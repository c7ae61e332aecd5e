"""Async HTTP fetcher for the Threads post page.

The request mimics a desktop Chrome navigation so the post page is served
with its embedded JSON payload rather than a login wall.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from backend.config import settings
from backend.scraper.errors import TransportError, UpstreamHTTPError
from backend.scraper.models import RawPage

logger = logging.getLogger(__name__)

BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/131.0.0.0 Safari/537.36"
    ),
    "Accept": (
        "text/html,application/xhtml+xml,application/xml;q=0.9,"
        "image/avif,image/webp,*/*;q=0.8"
    ),
    "Accept-Language": "en-US,en;q=0.9",
    "Accept-Encoding": "gzip, deflate, br",
    "Sec-Fetch-Dest": "document",
    "Sec-Fetch-Mode": "navigate",
    "Sec-Fetch-Site": "none",
    "Sec-Fetch-User": "?1",
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
}


async def fetch_post(url: Optional[str] = None) -> RawPage:
    """Fetch the post page at *url* (default: ``settings.target_url``).

    A fresh client is opened per call; nothing is shared between requests.

    Raises:
        UpstreamHTTPError: If the server answers with a non-2xx status.
        TransportError: If the request or body read fails at the network level.
    """
    url = url or settings.target_url

    try:
        async with httpx.AsyncClient(
            headers=BROWSER_HEADERS,
            timeout=settings.request_timeout,
            follow_redirects=True,
        ) as client:
            response = await client.get(url)
            raw = RawPage(url=url, html="", status_code=response.status_code)
            if raw.ok:
                raw.html = response.text
    except httpx.HTTPError as exc:
        logger.warning("Fetch of %s failed: %r", url, exc)
        raise TransportError(str(exc)) from exc

    if not raw.ok:
        logger.warning("Upstream %s answered HTTP %d", url, raw.status_code)
        raise UpstreamHTTPError(raw.status_code)

    logger.debug("Fetched %s (%d chars)", url, len(raw.html))
    return raw
