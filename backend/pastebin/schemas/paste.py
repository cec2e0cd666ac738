"""
Pastebin Backend - Pydantic Request/Response Schemas
=====================================================

What:  Pydantic models defining the JSON contract of the paste API.
Why:   Automatic serialization and OpenAPI docs, separate from the ORM model.
How:   FastAPI parses request bodies into these models and serializes
       service return values through them.
Who:   Used by route handlers and returned by PasteService.

Note on PasteCreate:
    `content` is typed Any on purpose. Missing, null and non-string content
    must produce the application's own 400 {"error": "Invalid content."},
    which PasteService decides. A `str` annotation would let FastAPI reject
    those bodies first with its 422 format.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class PasteCreate(BaseModel):
    """Body of POST /api/paste. Unknown keys are ignored."""
    content: Any = Field(
        default=None,
        description="Paste text, 1-10,000 characters",
        examples=["hello world"],
    )


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class PasteCreated(BaseModel):
    """
    What:  Result of a successful create.
    Who:   Returned by POST /api/paste with HTTP 201.

    The client widget renders `url` as a link; API clients can use `id`
    with GET /api/paste/{id}.
    """
    id: str = Field(description="Paste identifier (8 lowercase hex characters)")
    url: str = Field(description="Shareable URL of the HTML page for this paste")


class PasteResponse(BaseModel):
    """
    What:  Full representation of a stored paste.
    Who:   Returned by GET /api/paste/{id}; also the page template's context.
    """
    id: str = Field(description="Paste identifier")
    content: str = Field(description="Paste text exactly as submitted")
    created_at: datetime = Field(description="When the paste was created (UTC ISO 8601)")

    model_config = {"from_attributes": True}


class ErrorResponse(BaseModel):
    """
    Error body for every failing JSON endpoint.

    Example:
        {"error": "Paste not found."}
    """
    error: str = Field(description="Human-readable error message")


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and database status.
    Who:   Returned by GET /health for monitoring and container health checks.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
