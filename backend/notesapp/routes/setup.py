"""
NotesApp Backend — Schema Setup Route Handlers
================================================

What:  GET /api/setup-users-table and GET /api/setup-database.
How:   Both run the same idempotent schema step used at startup, scoped to
       the users table and the notes table respectively. Repeating a call is
       harmless. No database is ever created, only tables inside the
       configured one.

With AUTO_MIGRATE enabled (the default) the tables already exist by the time
these routes can be called; they remain for deployments that disable it.
"""

from fastapi import APIRouter, Depends

from notesapp.database import Database
from notesapp.dependencies import get_database
from notesapp.models.note import Note
from notesapp.models.user import User
from notesapp.schemas.note import ErrorResponse, MessageResponse

router = APIRouter(prefix="/api", tags=["Setup"])

_RESPONSES = {500: {"description": "Table creation failed", "model": ErrorResponse}}


@router.get(
    "/setup-users-table",
    response_model=MessageResponse,
    responses=_RESPONSES,
    summary="Create the users table if it does not exist",
)
async def setup_users_table(database: Database = Depends(get_database)) -> MessageResponse:
    await database.create_schema([User.__table__])
    return MessageResponse(message="Users table created successfully")


@router.get(
    "/setup-database",
    response_model=MessageResponse,
    responses=_RESPONSES,
    summary="Create the notes table if it does not exist",
)
async def setup_database(database: Database = Depends(get_database)) -> MessageResponse:
    await database.create_schema([Note.__table__])
    return MessageResponse(message="Database and table created successfully")
