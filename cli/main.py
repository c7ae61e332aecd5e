"""Threads likes CLI — entry-point for local runs.

Usage:
    python cli/main.py --help

Commands:
    fetch   → scrape the post once and print the JSON envelope
    serve   → run the HTTP API under uvicorn
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from backend.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import asyncio
import json
from typing import Optional

import typer

from backend.config import settings

app = typer.Typer(
    name="likes",
    help="Threads like-count scraper CLI.",
    no_args_is_help=True,
)


@app.command("fetch")
def fetch(
    url: Optional[str] = typer.Option(None, help="Post URL (default: THREADS_POST_URL)."),
    pretty: bool = typer.Option(False, "--pretty", help="Indent the JSON output."),
) -> None:
    """Scrape the post once and print the same envelope GET /api/likes returns."""
    from backend.api.routers.likes import likes_response

    response = asyncio.run(likes_response(url))
    body = json.loads(response.body)
    typer.echo(json.dumps(body, indent=2 if pretty else None, ensure_ascii=False))

    if response.status_code != 200:
        typer.echo(f"[fetch] HTTP {response.status_code}: {body['error']}", err=True)
        raise typer.Exit(1)


@app.command("serve")
def serve(
    host: str = typer.Option(settings.host, help="Interface to bind."),
    port: int = typer.Option(settings.port, help="Port to listen on."),
    reload: bool = typer.Option(False, "--reload", help="Auto-reload on code changes."),
) -> None:
    """Run the HTTP API (``/api/likes``) under uvicorn."""
    import uvicorn

    typer.echo(f"[serve] Listening on http://{host}:{port}/api/likes")
    uvicorn.run("backend.api.app:app", host=host, port=port, reload=reload)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
