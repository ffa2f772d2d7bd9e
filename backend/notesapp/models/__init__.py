# Importing the models registers their tables on Base.metadata
from notesapp.models.note import Note
from notesapp.models.user import User

__all__ = ["Note", "User"]
