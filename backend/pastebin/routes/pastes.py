"""
Pastebin Backend - Paste API Route Handlers
============================================

What:  Handles POST /api/paste (create) and GET /api/paste/{id} (fetch as JSON).
How:   Extracts the body or path parameter, delegates to PasteService,
       returns the schema. Errors raised by the service are turned into
       {"error": ...} responses by the global handlers in main.py.
Who:   Called by the client widget (create) and any HTTP client (fetch).

Status codes:
    POST /api/paste          201 created, 400 invalid/too long, 500 storage
    GET  /api/paste/{id}     200 found, 404 not found, 500 storage
"""

import logging

from fastapi import APIRouter, Depends, Request

from pastebin.dependencies import get_paste_service
from pastebin.schemas.paste import (
    ErrorResponse,
    PasteCreate,
    PasteCreated,
    PasteResponse,
)
from pastebin.services.paste_service import PasteService

logger = logging.getLogger(__name__)

# ── Router Configuration ──────────────────────────────────────────────────
router = APIRouter(prefix="/api", tags=["Pastes"])


def request_base_url(request: Request) -> str:
    """Scheme and host of the incoming request, e.g. "http://localhost:3000"."""
    return f"{request.url.scheme}://{request.url.netloc}"


@router.post(
    "/paste",
    status_code=201,
    response_model=PasteCreated,
    responses={
        201: {"description": "Paste created", "model": PasteCreated},
        400: {"description": "Invalid or too long content", "model": ErrorResponse},
        500: {"description": "Storage failure", "model": ErrorResponse},
    },
    summary="Create a paste",
    description=(
        "Stores the submitted text (1-10,000 characters) and returns its "
        "identifier and a shareable URL."
    ),
)
async def create_paste(
    body: PasteCreate,
    request: Request,
    service: PasteService = Depends(get_paste_service),
) -> PasteCreated:
    """
    Create a new paste.

    Error responses (handled by global exception handlers):
        HTTP 400: Missing/non-string/empty content, or content too long
        HTTP 500: Database failure (generic message; details logged)
    """
    return await service.create_paste(body.content, base_url=request_base_url(request))


@router.get(
    "/paste/{paste_id}",
    response_model=PasteResponse,
    responses={
        200: {"description": "Paste data", "model": PasteResponse},
        404: {"description": "Paste not found", "model": ErrorResponse},
        500: {"description": "Storage failure", "model": ErrorResponse},
    },
    summary="Get a paste by ID",
)
async def get_paste(
    paste_id: str,
    service: PasteService = Depends(get_paste_service),
) -> PasteResponse:
    """Return {id, content, created_at} for an existing paste."""
    return await service.get_paste(paste_id)
