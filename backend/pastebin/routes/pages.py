"""
Pastebin Backend - HTML Page Routes
====================================

What:  Serves the home page (paste form) and the rendered view of a paste.
How:   Jinja2 templates with autoescaping. Paste content is escaped at render
       time only; the stored text is untouched.
Who:   Browsers. The home page loads the client widget from /static/script.js.

Routes:
    GET /            → index.html (form + widget script)
    GET /{paste_id}  → paste.html, or plain-text 404 / 500

Why plain-text errors here:
    The JSON error handlers in main.py serve API clients. A browser following
    a share link gets a short text response instead, so this route catches
    the service errors itself.
"""

import logging
from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, Response
from fastapi.templating import Jinja2Templates

from pastebin.config import settings
from pastebin.dependencies import get_paste_service
from pastebin.exceptions import NotFoundError, StorageError
from pastebin.middleware.request_id import request_id_var
from pastebin.services.paste_service import PasteService

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

# Jinja2Templates enables autoescaping: & < > " ' in content become entities
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(tags=["Pages"])


@router.get("/", response_class=HTMLResponse, summary="Home page with the paste form")
async def index(request: Request) -> Response:
    return templates.TemplateResponse(
        request,
        "index.html",
        {"max_length": settings.max_content_length},
    )


@router.get(
    "/{paste_id}",
    response_class=HTMLResponse,
    responses={
        200: {"description": "Rendered paste page"},
        404: {"description": "Paste not found (plain text)"},
        500: {"description": "Storage failure (plain text)"},
    },
    summary="View a paste as an HTML page",
)
async def view_paste(
    request: Request,
    paste_id: str,
    service: PasteService = Depends(get_paste_service),
) -> Response:
    """
    Render a paste inside a <pre> block.

    Returns:
        200 HTML page with title "Paste <id>", the content, and creation time
        404 "Paste not found." (text/plain)
        500 "Database error." (text/plain)
    """
    try:
        paste = await service.get_paste(paste_id)
    except NotFoundError as e:
        return PlainTextResponse(e.message, status_code=404)
    except StorageError as e:
        logger.error(
            "[%s] Database error rendering paste: %s | Context: %s",
            request_id_var.get(""),
            e.message,
            e.context,
        )
        return PlainTextResponse(e.message, status_code=500)

    return templates.TemplateResponse(
        request,
        "paste.html",
        {
            "paste": paste,
            "created_at": paste.created_at.strftime("%Y-%m-%d %H:%M:%S UTC"),
        },
    )
