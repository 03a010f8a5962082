"""
Notes API — Custom Exception Hierarchy
=======================================

What:  Application-specific exceptions for the note lifecycle.
Why:   Custom exceptions map cleanly to HTTP status codes and user-friendly
       messages without leaking internal details to the client.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) turn them into
       `{"error", "code", "request_id"}` JSON bodies.
Who:   Raised by NoteService; caught by the global handlers.

Exception Hierarchy:
    NotesError (base)
    ├── ValidationError  → 400 Bad Request (client can fix)
    ├── NotFoundError    → 404 Not Found
    └── DatabaseError    → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class NotesError(Exception):
    """
    Base exception for all Notes API errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    code = "internal_server_error"
    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NotesError):
    """
    Raised when client input fails validation.

    When:    `text` missing or empty on create/update, malformed JSON body.
    HTTP:    400 Bad Request

    Example response:
        {"error": "text is required", "code": "validation_error", "request_id": "1a2b3c4d"}
    """

    code = "validation_error"
    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(NotesError):
    """
    Raised when no document matches the requested identifier.

    SQLAlchemy reports a missing row as None / rowcount 0 rather than an
    exception; the service layer converts that into NotFoundError.
    """

    code = "not_found"
    status_code = 404

    def __init__(
        self,
        resource: str = "note",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource} not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource_id = resource_id


class DatabaseError(NotesError):
    """
    Raised when a persistence operation fails unexpectedly.

    The message returned to the client is always generic; the original
    error type is kept in `context` and logged server-side only.
    """

    code = "server_error"
    status_code = 500

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
