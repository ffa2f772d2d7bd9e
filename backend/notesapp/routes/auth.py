"""
NotesApp Backend — Signup & Login Route Handlers
==================================================

What:  POST /api/signup (alias /api/register) and POST /api/login.
How:   Delegate to CredentialService; errors become 400/500 responses via the
       global handlers. Login returns a confirmation message only.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, status

from notesapp.dependencies import get_credential_service
from notesapp.schemas.note import ErrorResponse, MessageResponse
from notesapp.schemas.user import LoginRequest, SignupRequest, SignupResponse
from notesapp.services.credential_service import CredentialService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Auth"])

_SIGNUP_RESPONSES = {
    400: {"description": "Invalid input or user already exists", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}


@router.post(
    "/signup",
    response_model=SignupResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_SIGNUP_RESPONSES,
    summary="Register a new user",
)
@router.post(
    "/register",
    response_model=SignupResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_SIGNUP_RESPONSES,
    summary="Register a new user (alias of /api/signup)",
)
async def signup(
    payload: Optional[SignupRequest] = None,
    service: CredentialService = Depends(get_credential_service),
) -> SignupResponse:
    """
    Create an account from {username?, email, password}.

    The password is stored as a bcrypt hash and never returned.
    """
    payload = payload or SignupRequest()
    return await service.register(
        email=payload.email,
        password=payload.password,
        username=payload.username,
    )


@router.post(
    "/login",
    response_model=MessageResponse,
    responses={
        400: {"description": "Invalid input, unknown user, or wrong password", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Verify email and password",
)
async def login(
    payload: Optional[LoginRequest] = None,
    service: CredentialService = Depends(get_credential_service),
) -> MessageResponse:
    """Checks the credentials. No token or session is issued."""
    payload = payload or LoginRequest()
    return await service.login(email=payload.email, password=payload.password)
