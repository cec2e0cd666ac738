"""
Pastebin Backend - Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for every failure a paste request can hit.
Why:   Services raise domain errors; global handlers in main.py turn them into
       HTTP responses, so routes never build error bodies themselves.
How:   Each exception carries a user-facing message and an optional context dict.
       The message is safe to return to clients; the context is logged only.
Who:   Raised by the store and PasteService; caught by the handlers in main.py
       and by the HTML page route.

Exception Hierarchy:
    PastebinError (base)
    ├── ValidationError               → 400 Bad Request (client can fix)
    │   └── ContentTooLongError       → 400 Bad Request
    ├── NotFoundError                 → 404 Not Found
    └── StorageError                  → 500 Internal Server Error
        └── ConstraintViolationError  → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class PastebinError(Exception):
    """
    Base exception for all Pastebin application errors.

    Attributes:
        message:  User-facing error description (returned as {"error": message})
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(PastebinError):
    """
    Raised when submitted content fails validation.

    When:    Content missing, not a string, or empty; malformed request body.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "Invalid content.",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class ContentTooLongError(ValidationError):
    """
    Raised when content exceeds the configured maximum length.

    HTTP:    400 Bad Request (same status as other validation failures)
    """

    def __init__(
        self,
        max_length: int = 10_000,
        actual_length: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["max_length"] = max_length
        if actual_length is not None:
            ctx["actual_length"] = actual_length
        super().__init__(
            message=f"Content too long. Maximum {max_length:,} characters allowed.",
            field="content",
            context=ctx,
        )
        self.max_length = max_length


class NotFoundError(PastebinError):
    """
    Raised when no paste exists for the requested identifier.

    HTTP:    404 Not Found

    The store returns None for missing rows; PasteService converts that into
    this exception so routes stay free of lookup logic.
    """

    def __init__(
        self,
        resource_id: Optional[str] = None,
        message: str = "Paste not found.",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class StorageError(PastebinError):
    """
    Raised when a database operation fails.

    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always the generic
        "Database error.". Driver messages, SQL and constraint names go into
        `context` and are logged server-side only.
    """

    def __init__(
        self,
        message: str = "Database error.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ConstraintViolationError(StorageError):
    """
    Raised by the store when an insert hits the primary-key constraint.

    When:    A generated paste identifier already exists.
    Handled: PasteService retries with a fresh identifier; only after the
             retry budget is spent does it surface as a StorageError.
    """

    def __init__(
        self,
        paste_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if paste_id:
            ctx["paste_id"] = paste_id
        super().__init__(context=ctx)
        self.paste_id = paste_id
