"""
NotesApp Backend — Credential Service
=======================================

What:  Account registration and login verification.
How:   Validates input, looks up the user by email through the injected
       Database, and hashes/verifies passwords with bcrypt in a worker thread.
Who:   Called by the /api/signup, /api/register and /api/login routes.

Registration Flow:
    validate email → validate password/username → lookup by email
    → bcrypt hash → INSERT → {id, message}

    The lookup and the INSERT use separate sessions; no connection is held
    while bcrypt runs.

    The lookup is advisory. The UNIQUE constraint on users.email is the real
    guarantee: if a concurrent signup inserts first, the IntegrityError from
    our INSERT is reported as DuplicateUserError.

Login Flow:
    validate email → validate password → lookup by email → bcrypt compare
    Success returns a message only. No token or session is issued.
"""

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.concurrency import run_in_threadpool

from notesapp.database import Database
from notesapp.exceptions import (
    DuplicateUserError,
    InvalidCredentialsError,
    UserNotFoundError,
    ValidationError,
    StoreError,
)
from notesapp.models.user import USERNAME_MAX_LENGTH, User
from notesapp.schemas.note import MessageResponse
from notesapp.schemas.user import SignupResponse
from notesapp.security import hash_password, password_too_long, verify_password
from notesapp.services.validation import (
    require_non_blank,
    require_text,
    validate_email_address,
)

logger = logging.getLogger(__name__)


class CredentialService:
    """
    Business logic for user accounts.

    Responsibilities:
        - register(): create a user with a hashed password
        - login(): verify an email/password pair

    Error Handling Strategy:
        Input problems raise ValidationError subclasses, account problems raise
        CredentialError subclasses, and any SQLAlchemy failure is wrapped in
        StoreError. Nothing is retried.
    """

    def __init__(self, database: Database, bcrypt_rounds: int = 10):
        self.database = database
        self.bcrypt_rounds = bcrypt_rounds

    async def register(
        self,
        email: Any,
        password: Any,
        username: Any = None,
    ) -> SignupResponse:
        """
        Create a new account.

        Args:
            email:    Address to register (checked first)
            password: Plaintext password, hashed before storage
            username: Optional display name; must be non-blank when given

        Returns:
            SignupResponse with the new user id

        Raises:
            InvalidEmailFormatError: email missing or malformed
            MissingFieldError: password empty, or username given but blank
            ValidationError: password longer than bcrypt's 72-byte limit
            DuplicateUserError: email already registered
            StoreError: database failure
        """
        normalized_email = validate_email_address(email)
        raw_password = require_text(password, "password")
        if password_too_long(raw_password):
            raise ValidationError(
                message="Password cannot be longer than 72 bytes",
                field="password",
            )
        if username is not None:
            username = require_non_blank(username, "username", USERNAME_MAX_LENGTH)

        try:
            async with self.database.session() as session:
                result = await session.execute(
                    select(User.id).where(User.email == normalized_email)
                )
                existing = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error during registration: %s", str(e))
            raise StoreError(error=e)

        if existing is not None:
            logger.info("Signup rejected: %s already registered", normalized_email)
            raise DuplicateUserError(normalized_email)

        hashed = await run_in_threadpool(hash_password, raw_password, self.bcrypt_rounds)

        try:
            async with self.database.session() as session:
                user = User(username=username, email=normalized_email, password=hashed)
                session.add(user)
                await session.flush()
                user_id = user.id
        except IntegrityError as e:
            # Lost a race against a concurrent signup for the same email
            logger.info("Signup rejected by unique constraint: %s", normalized_email)
            raise DuplicateUserError(normalized_email) from e
        except SQLAlchemyError as e:
            logger.error("Database error during registration: %s", str(e))
            raise StoreError(error=e)

        logger.info("User %d registered", user_id)
        return SignupResponse(id=user_id, message="User registered successfully")

    async def login(
        self,
        email: Any,
        password: Any,
    ) -> MessageResponse:
        """
        Verify an email/password pair.

        Returns:
            MessageResponse("Login successful"); no credential artifact

        Raises:
            InvalidEmailFormatError: email missing or malformed
            MissingFieldError: password empty
            UserNotFoundError: no account for this email
            InvalidCredentialsError: password does not match
            StoreError: database failure
        """
        normalized_email = validate_email_address(email)
        raw_password = require_text(password, "password")

        try:
            async with self.database.session() as session:
                result = await session.execute(
                    select(User.password).where(User.email == normalized_email)
                )
                stored_hash = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error during login: %s", str(e))
            raise StoreError(error=e)

        if stored_hash is None:
            raise UserNotFoundError()

        matches = await run_in_threadpool(verify_password, raw_password, stored_hash)
        if not matches:
            logger.info("Login failed for %s: invalid credentials", normalized_email)
            raise InvalidCredentialsError()

        return MessageResponse(message="Login successful")
