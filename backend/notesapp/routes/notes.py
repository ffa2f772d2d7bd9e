"""
NotesApp Backend — Notes Route Handlers
=========================================

What:  CRUD endpoints under /api/notes.
How:   Thin handlers: pass the raw path id and body to NoteService, let the
       global exception handlers turn errors into 400/404/500 responses.
       Ids are parsed by the service, so an id matching no row is a 404
       whatever its shape.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Request, status

from notesapp.dependencies import get_note_service
from notesapp.schemas.note import (
    ErrorResponse,
    MessageResponse,
    NoteResponse,
    NoteWrite,
)
from notesapp.services.note_service import NoteService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Notes"])


async def note_write_or_empty(request: Request) -> NoteWrite:
    """
    Body of PUT /api/notes/{id}, read leniently.

    A body that is missing, not JSON, or not a JSON object becomes an empty
    NoteWrite, so the existence check still runs before any body check.
    """
    try:
        data = await request.json()
    except ValueError:
        data = None
    if not isinstance(data, dict):
        data = {}
    return NoteWrite.model_validate(data)


@router.get(
    "/notes",
    response_model=List[NoteResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List all notes",
)
async def list_notes(
    service: NoteService = Depends(get_note_service),
) -> List[NoteResponse]:
    """All notes in insertion order. No pagination."""
    return await service.list_notes()


@router.get(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses={
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a single note by ID",
)
async def get_note(
    note_id: str,
    service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    return await service.get_note(note_id)


@router.post(
    "/notes",
    response_model=NoteResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Title or content missing", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a note",
)
async def create_note(
    payload: Optional[NoteWrite] = None,
    service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    """
    Create a note from {title, content}.

    Every call inserts a new row; the response carries the assigned id.
    """
    payload = payload or NoteWrite()
    return await service.create_note(title=payload.title, content=payload.content)


@router.put(
    "/notes/{note_id}",
    response_model=MessageResponse,
    responses={
        400: {"description": "Title or content missing", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Update a note's title and content",
    openapi_extra={
        "requestBody": {
            "content": {
                "application/json": {"schema": NoteWrite.model_json_schema()}
            }
        }
    },
)
async def update_note(
    note_id: str,
    payload: NoteWrite = Depends(note_write_or_empty),
    service: NoteService = Depends(get_note_service),
) -> MessageResponse:
    """
    Replace title and content. An unknown id is a 404 even when the body
    would fail validation.
    """
    return await service.update_note(
        note_id=note_id,
        title=payload.title,
        content=payload.content,
    )


@router.delete(
    "/notes/{note_id}",
    response_model=MessageResponse,
    responses={
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Delete a note",
)
async def delete_note(
    note_id: str,
    service: NoteService = Depends(get_note_service),
) -> MessageResponse:
    return await service.delete_note(note_id)
