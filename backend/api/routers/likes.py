"""Like-count endpoint.

Routes
------
GET     /api/likes    Scrape the configured post → JSON envelope
OPTIONS /api/likes    CORS preflight → 204, no body

Every response carries :data:`CORS_HEADERS`, including the error envelopes,
so browser clients on any origin can read the failure reason.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import APIRouter, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from backend.config import settings
from backend.scraper import (
    ExtractionFailure,
    TransportError,
    UpstreamHTTPError,
    scrape_post,
)

logger = logging.getLogger(__name__)

router = APIRouter()

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


# ---------------------------------------------------------------------------
# Schemas (OpenAPI only; bodies are built by the helpers below)
# ---------------------------------------------------------------------------

class LikesResponse(BaseModel):
    likes: int
    postText: Optional[str]
    timestamp: str


class ErrorResponse(BaseModel):
    error: str
    likes: None = None
    postText: None = None
    htmlLength: Optional[int] = None
    timestamp: str


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _timestamp() -> str:
    """Current UTC time as ISO-8601 with milliseconds, e.g. ``...T12:00:00.123Z``."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _json(body: dict[str, Any], status_code: int = 200, **headers: str) -> JSONResponse:
    return JSONResponse(
        content=body,
        status_code=status_code,
        headers={**headers, **CORS_HEADERS},
    )


def _error(message: str, status_code: int, html_length: Optional[int] = None) -> JSONResponse:
    body: dict[str, Any] = {"error": message, "likes": None, "postText": None}
    if html_length is not None:
        body["htmlLength"] = html_length
    body["timestamp"] = _timestamp()
    return _json(body, status_code=status_code)


async def likes_response(url: Optional[str] = None) -> JSONResponse:
    """Scrape *url* (default: the configured post) and build the envelope.

    Failures never raise out of here; each is reported as an error envelope
    with ``likes`` and ``postText`` set to ``null``.
    """
    try:
        stats = await scrape_post(url)
    except UpstreamHTTPError as exc:
        return _error(str(exc), 502)
    except ExtractionFailure as exc:
        return _error(str(exc), 502, html_length=exc.html_length)
    except TransportError as exc:
        return _error(str(exc) or "Unknown error", 500)
    except Exception as exc:
        logger.exception("Unexpected failure while scraping likes")
        return _error(str(exc) or "Unknown error", 500)

    body = {"likes": stats.likes, "postText": stats.post_text, "timestamp": _timestamp()}
    return _json(body, **{"Cache-Control": settings.cache_control})


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get(
    "",
    response_model=LikesResponse,
    responses={500: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def get_likes() -> JSONResponse:
    """Scrape the post page and return its like count and text."""
    return await likes_response()


@router.options("", status_code=204)
async def preflight_likes() -> Response:
    """Answer CORS preflight with an empty 204."""
    return Response(status_code=204, headers=CORS_HEADERS)
