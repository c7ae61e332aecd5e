"""Exceptions raised by the scraper layer.

Each maps to one failure envelope in :mod:`backend.api.routers.likes`:

    UpstreamHTTPError  → 502  (post page returned a non-2xx status)
    ExtractionFailure  → 502  (no like-count pattern matched)
    TransportError     → 500  (network failure, timeout, body read error)
"""

from __future__ import annotations


class ScrapeError(Exception):
    """Base class for every failure of a single scrape."""


class UpstreamHTTPError(ScrapeError):
    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(f"Threads returned HTTP {status_code}")


class ExtractionFailure(ScrapeError):
    def __init__(self, html_length: int) -> None:
        self.html_length = html_length
        super().__init__("Could not extract like count from page")


class TransportError(ScrapeError):
    """Wraps the ``httpx`` error that aborted the fetch; the message is kept."""
