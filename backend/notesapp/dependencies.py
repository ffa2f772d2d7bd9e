"""
NotesApp Backend — FastAPI Dependencies
=========================================

What:  Accessors for the per-application objects built by create_app().
How:   The Database and services live on app.state; route handlers receive
       them through Depends(), which also lets tests swap them via
       app.dependency_overrides.
"""

from fastapi import Request

from notesapp.database import Database
from notesapp.services.credential_service import CredentialService
from notesapp.services.note_service import NoteService


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_note_service(request: Request) -> NoteService:
    return request.app.state.note_service


def get_credential_service(request: Request) -> CredentialService:
    return request.app.state.credential_service
