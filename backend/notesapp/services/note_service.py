"""
NotesApp Backend — Note Service
=================================

What:  Create/read/update/delete over note records.
How:   Each operation opens one transactional session on the injected
       Database, translates "no row" into NoteNotFoundError and any
       SQLAlchemy failure into StoreError.
Who:   Called by the /api/notes route handlers.

Operation Semantics:
    list    → every note, ordered by id (insertion order); empty list if none
    get     → the note, or NoteNotFoundError
    create  → new row with a fresh id on every call (not idempotent)
    update  → existence is checked BEFORE the body is validated, so an unknown
              id is always reported as not found; only title/content change
    delete  → hard delete; a second delete of the same id is NoteNotFoundError

    An id that is not a positive 32-bit integer matches no row, so it is
    reported as NoteNotFoundError without querying the store.
"""

import logging
from typing import Any, List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from notesapp.database import Database
from notesapp.exceptions import NoteNotFoundError, StoreError
from notesapp.models.note import TITLE_MAX_LENGTH, Note
from notesapp.schemas.note import MessageResponse, NoteResponse
from notesapp.services.validation import require_text

logger = logging.getLogger(__name__)

# Upper bound of the INTEGER primary key
MAX_NOTE_ID = 2**31 - 1


def parse_note_id(raw: Any) -> int:
    """
    Convert a path id into a primary key value.

    Raises:
        NoteNotFoundError: raw is not a decimal integer in 1..MAX_NOTE_ID
    """
    if isinstance(raw, int) and not isinstance(raw, bool):
        note_id = raw
    elif isinstance(raw, str) and raw.isascii() and raw.isdigit():
        note_id = int(raw)
    else:
        raise NoteNotFoundError(raw)

    if not 1 <= note_id <= MAX_NOTE_ID:
        raise NoteNotFoundError(raw)
    return note_id


class NoteService:
    """
    Business logic layer for note operations.

    Holds no state apart from the injected Database; every call is
    independent.
    """

    def __init__(self, database: Database):
        self.database = database

    async def list_notes(self) -> List[NoteResponse]:
        """
        Return all notes in insertion order.

        Raises:
            StoreError: query execution failed (→ 500)
        """
        try:
            async with self.database.session() as session:
                result = await session.execute(select(Note).order_by(Note.id))
                notes = list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing notes: %s", str(e), exc_info=True)
            raise StoreError(error=e)

        return [NoteResponse.model_validate(note) for note in notes]

    async def get_note(self, note_id: Any) -> NoteResponse:
        """
        Retrieve a single note by ID.

        Raises:
            NoteNotFoundError: no note with this id (→ 404)
            StoreError: query execution failed (→ 500)
        """
        note_id = parse_note_id(note_id)
        try:
            async with self.database.session() as session:
                note = await session.get(Note, note_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching note %s: %s", note_id, str(e))
            raise StoreError(error=e, context={"note_id": note_id})

        if note is None:
            raise NoteNotFoundError(note_id)
        return NoteResponse.model_validate(note)

    async def create_note(
        self,
        title: Any,
        content: Any,
    ) -> NoteResponse:
        """
        Insert a new note.

        Returns:
            The stored note, including its store-assigned id

        Raises:
            MissingFieldError: title or content missing/empty (→ 400)
            ValidationError: title longer than TITLE_MAX_LENGTH (→ 400)
            StoreError: insert failed (→ 500)
        """
        title = require_text(title, "title", TITLE_MAX_LENGTH)
        content = require_text(content, "content")

        try:
            async with self.database.session() as session:
                note = Note(title=title, content=content)
                session.add(note)
                # Flush assigns the id without ending the transaction
                await session.flush()
        except SQLAlchemyError as e:
            logger.error("Database error creating note: %s", str(e))
            raise StoreError(error=e)

        logger.info("Note %d created", note.id)
        return NoteResponse.model_validate(note)

    async def update_note(
        self,
        note_id: Any,
        title: Any,
        content: Any,
    ) -> MessageResponse:
        """
        Replace the title and content of an existing note.

        Raises:
            NoteNotFoundError: no note with this id, whatever the body (→ 404)
            MissingFieldError: title or content missing/empty (→ 400)
            ValidationError: title longer than TITLE_MAX_LENGTH (→ 400)
            StoreError: query execution failed (→ 500)
        """
        note_id = parse_note_id(note_id)
        try:
            async with self.database.session() as session:
                note = await session.get(Note, note_id)
                if note is None:
                    raise NoteNotFoundError(note_id)

                note.title = require_text(title, "title", TITLE_MAX_LENGTH)
                note.content = require_text(content, "content")
        except SQLAlchemyError as e:
            logger.error("Database error updating note %s: %s", note_id, str(e))
            raise StoreError(error=e, context={"note_id": note_id})

        logger.info("Note %d updated", note_id)
        return MessageResponse(message="Note updated successfully")

    async def delete_note(self, note_id: Any) -> MessageResponse:
        """
        Delete a note.

        Raises:
            NoteNotFoundError: no note with this id (→ 404)
            StoreError: query execution failed (→ 500)
        """
        note_id = parse_note_id(note_id)
        try:
            async with self.database.session() as session:
                note = await session.get(Note, note_id)
                if note is None:
                    raise NoteNotFoundError(note_id)
                await session.delete(note)
        except SQLAlchemyError as e:
            logger.error("Database error deleting note %s: %s", note_id, str(e))
            raise StoreError(error=e, context={"note_id": note_id})

        logger.info("Note %d deleted", note_id)
        return MessageResponse(message="Note deleted successfully")
