"""
web/routes.py -- Serves the single-page frontend.

The page at web/static/index.html talks to /api/v1 with fetch() and the
session cookie. It is read from disk on every request so edits show up
without a restart.

Layer rule: web/ imports nothing from api/, auth/, tasks/ or resolvers/.
asgi.py is the only place both layers meet.
"""

import logging
from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import HTMLResponse, PlainTextResponse

logger = logging.getLogger("taskboard.web")

_INDEX_HTML = Path(__file__).parent / "static" / "index.html"

router = APIRouter()


@router.get("/", include_in_schema=False)
@router.get("/index.html", include_in_schema=False)
async def index():
    try:
        html = _INDEX_HTML.read_text(encoding="utf-8")
    except OSError:
        logger.warning("Frontend page missing at %s", _INDEX_HTML)
        return PlainTextResponse("File not found", status_code=404)
    return HTMLResponse(html)
