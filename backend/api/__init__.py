"""HTTP layer for the likes endpoint.

Re-exports the ASGI app so it can be served as::

    uvicorn backend.api:app
"""

from backend.api.app import app, create_app

__all__ = ["app", "create_app"]
