"""
NotesApp Backend — Credential Request/Response Schemas
========================================================

What:  Pydantic models for signup and login.

Request fields accept any JSON value. Type and format checks are done by
CredentialService, email first, so a malformed address always maps to a 400
`invalid_email_format` error whatever the other fields hold.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field


class SignupRequest(BaseModel):
    """Body of POST /api/signup and POST /api/register."""
    username: Optional[Any] = Field(default=None, examples=["alice"])
    email: Optional[Any] = Field(default=None, examples=["alice@mail.com"])
    password: Optional[Any] = Field(default=None, examples=["correct horse battery staple"])


class LoginRequest(BaseModel):
    """Body of POST /api/login."""
    email: Optional[Any] = Field(default=None, examples=["alice@mail.com"])
    password: Optional[Any] = Field(default=None, examples=["correct horse battery staple"])


class SignupResponse(BaseModel):
    """Returned with HTTP 201 after a successful registration. Never carries the hash."""
    id: int = Field(description="Store-assigned user identifier")
    message: str = Field(default="User registered successfully")
