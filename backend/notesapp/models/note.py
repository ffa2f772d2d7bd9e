"""
NotesApp Backend — Note SQLAlchemy Model
==========================================

What:  ORM model representing the `notes` table.
How:   Inherits from the shared DeclarativeBase; the startup schema step and
       Alembic both read it.
Who:   Used by NoteService for CRUD operations.

Table Design:
    - Integer autoincrement primary key, assigned by the store on insert
    - title: VARCHAR(255), never empty
    - content: TEXT, never empty
    - created_at: set once on insert, never updated
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from notesapp.database import Base

TITLE_MAX_LENGTH = 255


class Note(Base):
    """
    A titled piece of text.

    Lifecycle:
        1. Created by POST /api/notes
        2. Optionally updated (title and content only) by PUT /api/notes/{id}
        3. Hard-deleted by DELETE /api/notes/{id}
    """

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    title: Mapped[str] = mapped_column(
        String(TITLE_MAX_LENGTH),
        nullable=False,
    )

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    # Python-side default so the value is known right after flush
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title='{self.title}')>"
