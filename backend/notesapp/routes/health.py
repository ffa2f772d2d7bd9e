"""
NotesApp Backend — Root & Health Check Routes
===============================================

What:  GET / (plain-text greeting) and GET /health (dependency probe).
How:   /health runs SELECT 1 through the application's Database and reports
       503 when the store is unreachable, so load balancers route away.
"""

import logging
import time

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import PlainTextResponse

from notesapp import __version__
from notesapp.database import Database
from notesapp.dependencies import get_database
from notesapp.schemas.note import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Module load time, for uptime reporting
_start_time = time.time()


@router.get("/", response_class=PlainTextResponse, summary="Greeting")
async def root() -> str:
    return "Hello"


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
)
async def health_check(
    response: Response,
    database: Database = Depends(get_database),
) -> HealthResponse:
    """
    Check the service and its database.

    Returns:
        HealthResponse; HTTP 200 when the database answers, 503 otherwise.
    """
    if await database.ping():
        db_status, overall = "connected", "healthy"
    else:
        db_status, overall = "disconnected", "unhealthy"
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
