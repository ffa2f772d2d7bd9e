"""
NotesApp Backend — User SQLAlchemy Model
==========================================

What:  ORM model representing the `users` table.
Who:   Used by CredentialService for registration and login lookups.

Table Design:
    - email is UNIQUE: the store, not the application, guarantees that no two
      users share an address under concurrent registrations
    - password holds the bcrypt hash (60 chars), never the raw password
    - username is optional
    - rows are never updated or deleted by this service
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from notesapp.database import Base

USERNAME_MAX_LENGTH = 255


class User(Base):
    """A registered account."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    username: Mapped[Optional[str]] = mapped_column(
        String(USERNAME_MAX_LENGTH),
        nullable=True,
    )

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
    )

    password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="bcrypt hash",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        # Never include the password hash
        return f"<User(id={self.id}, email='{self.email}')>"
