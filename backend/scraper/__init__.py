"""Scraper package — post fetch & field extraction."""

from __future__ import annotations

from typing import Optional

from backend.scraper.errors import (
    ExtractionFailure,
    ScrapeError,
    TransportError,
    UpstreamHTTPError,
)
from backend.scraper.extractor import extract_like_count, extract_post_text, extract_stats
from backend.scraper.fetcher import fetch_post
from backend.scraper.models import PostStats, RawPage


async def scrape_post(url: Optional[str] = None) -> PostStats:
    """Fetch the post page and extract its stats in one step.

    Raises any :class:`ScrapeError` subclass; see :mod:`backend.scraper.errors`.
    """
    raw = await fetch_post(url)
    return extract_stats(raw)


__all__ = [
    "scrape_post",
    "fetch_post",
    "extract_like_count",
    "extract_post_text",
    "extract_stats",
    "RawPage",
    "PostStats",
    "ScrapeError",
    "UpstreamHTTPError",
    "ExtractionFailure",
    "TransportError",
]
