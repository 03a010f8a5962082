"""
Notes API — Pydantic Request/Response Schemas
==============================================

What:  Pydantic models defining the API contract between client and backend.
Why:   Request parsing, response serialization, and OpenAPI docs from one place.
How:   Responses are camelCase on the wire (`nrOfEdits`, `createdAt`) through
       an alias generator; Python code uses snake_case names.

Design Decision:
    Request models accept a missing `text` on purpose. The rule "text is
    required and non-empty" lives in NoteService so that a violation is a
    ValidationError (400) with one consistent body, not FastAPI's 422.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NoteCreate(BaseModel):
    """Body of POST /create."""
    text: Optional[str] = Field(default=None, description="Note content (required, non-empty)")
    color: Optional[str] = Field(default=None, description="Free-form color, e.g. a CSS color")


class NoteUpdate(BaseModel):
    """Body of PUT /update/{id}. Omitting `color` keeps the stored value."""
    text: Optional[str] = Field(default=None, description="New content (required, non-empty)")
    color: Optional[str] = Field(default=None, description="New color; omitted keeps the current one")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """
    External representation of a note.

    The internal integer key is deliberately absent: `uuid` is the only
    identifier clients ever see or send back.
    """
    uuid: str = Field(description="External note identifier")
    text: str = Field(description="Note content")
    color: str = Field(description="Color annotation ('' when unset)")
    nr_of_edits: int = Field(description="Number of successful updates")
    created_at: datetime = Field(description="Creation time (UTC ISO 8601)")
    updated_at: datetime = Field(description="Last update time (UTC ISO 8601)")

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    @field_validator("created_at", "updated_at")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        # SQLite drops tzinfo on read-back; values are always stored as UTC
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class DeleteResponse(BaseModel):
    """Acknowledgement returned by DELETE /delete/{id}."""
    ok: bool = True


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Example:
        {"error": "text is required", "code": "validation_error", "request_id": "1a2b3c4d"}
    """
    error: str = Field(description="Human-readable error description")
    code: str = Field(description="Machine-readable error code")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Liveness probe payload."""
    status: str = Field(description="Always 'ok' when the process can answer")
    uptime: float = Field(description="Seconds since the process started")
    now: datetime = Field(description="Current server time (UTC)")
