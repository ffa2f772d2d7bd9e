"""
NotesApp Backend — Note Request/Response Schemas
==================================================

What:  Pydantic models defining the notes API contract.
How:   FastAPI uses these models to parse request bodies, serialize responses,
       and generate the OpenAPI documentation.

Request fields accept any JSON value: type, presence and length checks belong
to NoteService, which runs them after the existence check on update.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NoteWrite(BaseModel):
    """
    Body of POST /api/notes and PUT /api/notes/{id}.

    Both fields are required to be non-empty by the service layer.
    """
    title: Optional[Any] = Field(default=None, examples=["Groceries"])
    content: Optional[Any] = Field(default=None, examples=["Milk, eggs, bread"])


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """
    Full representation of a stored note.

    Returned by GET /api/notes (as array items), GET /api/notes/{id}, and
    POST /api/notes.
    """
    id: int = Field(description="Store-assigned note identifier")
    title: str = Field(description="Note title")
    content: str = Field(description="Note body")
    created_at: datetime = Field(description="When the note was created (ISO 8601)")

    model_config = {"from_attributes": True}


class MessageResponse(BaseModel):
    """Confirmation returned by operations with no resource body."""
    message: str = Field(description="Human-readable confirmation")


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "note_not_found",
            "message": "Note not found",
            "details": {"resource": "note", "resource_id": 42},
            "request_id": "1f3a9c2e"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer probes."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
