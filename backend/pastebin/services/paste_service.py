"""
Pastebin Backend - Paste Service (Business Logic)
==================================================

What:  The only holder of business rules: content validation, identifier
       assignment, and the create/get contract on top of PasteStore.
Why:   Routes stay HTTP-only; the rules here can be tested without HTTP.
How:   Receives its PasteStore explicitly (constructed per request by the
       get_paste_service dependency). Holds no state of its own.
Who:   Called by the JSON API routes and the HTML page route.

Create Flow (POST /api/paste):
    ┌───────────┐    ┌─────────────┐    ┌──────────────┐    ┌───────────┐
    │ Validate  │───▶│ Generate id │───▶│ store.insert │───▶│ Build URL │
    └───────────┘    └─────────────┘    └──────────────┘    └───────────┘
                            ▲                  │
                            └──── collision ───┘  (up to id_max_attempts)

Error Mapping:
    content missing / not str / ""   → ValidationError ("Invalid content.")
    content with no UTF-8 form       → ValidationError ("Invalid content.")
    len(content) > max               → ContentTooLongError
    every generated id collided      → StorageError
    store failure                    → StorageError (propagated)
    no row for id                    → NotFoundError ("Paste not found.")
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from tenacity import (
    retry,
    stop_after_attempt,
    retry_if_exception_type,
    before_sleep_log,
)

from pastebin.config import settings
from pastebin.exceptions import (
    ConstraintViolationError,
    ContentTooLongError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from pastebin.schemas.paste import PasteCreated, PasteResponse
from pastebin.services.identifier import generate_paste_id
from pastebin.store import PasteStore

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    """SQLite returns naive datetimes; they are UTC (CURRENT_TIMESTAMP)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class PasteService:
    """
    Business logic layer for paste operations.

    Responsibilities:
        - create_paste(): validate, assign a free id, persist, build share URL
        - get_paste(): primary-key retrieval with not-found handling
    """

    def __init__(
        self,
        store: PasteStore,
        max_content_length: Optional[int] = None,
        public_base_url: Optional[str] = None,
    ):
        self.store = store
        self.max_content_length = max_content_length or settings.max_content_length
        self.public_base_url = (
            settings.public_base_url if public_base_url is None else public_base_url.rstrip("/")
        )

    def validate_content(self, content: Any) -> str:
        """
        Check submitted content against the paste rules.

        Only the empty string counts as empty. Whitespace-only content is a
        valid paste; trimming is the client widget's concern. Text that has
        no UTF-8 form (a lone surrogate such as U+D800 from a JSON escape)
        cannot be stored and is rejected as invalid.

        Raises:
            ValidationError: content is missing, not a string, "", or not
                             encodable as UTF-8
            ContentTooLongError: content exceeds max_content_length characters
        """
        if not isinstance(content, str) or content == "":
            raise ValidationError(
                field="content",
                context={"received_type": type(content).__name__},
            )

        try:
            content.encode("utf-8")
        except UnicodeEncodeError as e:
            raise ValidationError(
                field="content",
                context={"reason": "unencodable", "position": e.start},
            ) from e

        if len(content) > self.max_content_length:
            raise ContentTooLongError(
                max_length=self.max_content_length,
                actual_length=len(content),
            )

        return content

    @retry(
        # Only an id clash is worth retrying; any other store error is final
        retry=retry_if_exception_type(ConstraintViolationError),
        stop=stop_after_attempt(settings.id_max_attempts),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
    async def _insert_with_fresh_id(self, content: str) -> str:
        """
        Generate an id and insert; a new id is drawn on every attempt.

        With reraise=True the last ConstraintViolationError escapes once the
        attempts are spent.
        """
        paste_id = generate_paste_id()
        await self.store.insert(paste_id, content)
        return paste_id

    async def create_paste(self, content: Any, base_url: str) -> PasteCreated:
        """
        Validate and store a new paste.

        Args:
            content: The `content` value from the request body (any JSON type)
            base_url: Scheme and host of the incoming request,
                      e.g. "http://localhost:3000". Ignored when
                      settings.public_base_url is set.

        Returns:
            PasteCreated with the new id and its shareable URL.

        Raises:
            ValidationError / ContentTooLongError: invalid content (→ 400)
            StorageError: insert failed or no free id was found (→ 500)
        """
        content = self.validate_content(content)

        try:
            paste_id = await self._insert_with_fresh_id(content)
        except ConstraintViolationError as e:
            logger.error(
                "No free paste id after %d attempts (last tried %s)",
                settings.id_max_attempts,
                e.paste_id,
            )
            raise StorageError(
                context={"reason": "id_space_exhausted", "attempts": settings.id_max_attempts},
            ) from e

        url = f"{self.public_base_url or base_url.rstrip('/')}/{paste_id}"
        logger.info("Paste %s created (%d chars)", paste_id, len(content))
        return PasteCreated(id=paste_id, url=url)

    async def get_paste(self, paste_id: str) -> PasteResponse:
        """
        Retrieve a paste by id.

        Raises:
            NotFoundError: no paste has this id (→ 404)
            StorageError: the lookup failed (→ 500)
        """
        paste = await self.store.get_by_id(paste_id)
        if paste is None:
            raise NotFoundError(resource_id=paste_id)

        return PasteResponse(
            id=paste.id,
            content=paste.content,
            created_at=_as_utc(paste.created_at),
        )
