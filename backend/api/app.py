"""FastAPI application factory.

Routers
-------
    /api/likes  — scrape the configured Threads post for its like count

CORS is handled inside the likes router rather than by ``CORSMiddleware``:
the endpoint must send the same fixed header set on every response and
answer preflight with 204.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI

from backend.config import settings

from backend.api.routers import likes as likes_router


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="Threads Likes API",
        description=(
            "Scrapes a public Threads post page and reports its current "
            "like count and caption as JSON."
        ),
        version="1.0.0",
    )

    app.include_router(likes_router.router, prefix="/api/likes", tags=["likes"])

    return app


# Module-level instance used by uvicorn:
#   uvicorn backend.api.app:app --reload
app = create_app()
