"""
NotesApp Backend — Custom Exception Hierarchy
===============================================

What:  Application-specific exceptions for every error the API can report.
How:   Each exception carries a message, a machine-readable `code`, and an
       optional context dict. Global exception handlers (registered in
       main.py) translate them into JSON error responses.
Who:   Raised by services; caught by the global handlers.

Exception Hierarchy:
    NotesAppError (base)
    ├── ValidationError              → 400 Bad Request
    │   ├── InvalidEmailFormatError  → 400
    │   └── MissingFieldError        → 400
    ├── CredentialError              → 400 Bad Request
    │   ├── DuplicateUserError       → 400
    │   ├── UserNotFoundError        → 400
    │   └── InvalidCredentialsError  → 400
    ├── NotFoundError                → 404 Not Found
    │   └── NoteNotFoundError        → 404
    └── StoreError                   → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class NotesAppError(Exception):
    """
    Base exception for all NotesApp application errors.

    Attributes:
        message:  Human-readable error description (returned to the client)
        context:  Additional details (returned as `details` in the response)
        code:     Machine-readable error identifier
    """

    code = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NotesAppError):
    """
    Raised when client input fails a presence or format check.

    HTTP: 400 Bad Request
    """

    code = "validation_error"

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class InvalidEmailFormatError(ValidationError):
    """The email is missing or is not a syntactically valid address."""

    code = "invalid_email_format"

    def __init__(self, reason: Optional[str] = None):
        context = {"reason": reason} if reason else None
        super().__init__(message="Invalid email format", field="email", context=context)


class MissingFieldError(ValidationError):
    """A required field is absent or empty."""

    code = "missing_field"

    def __init__(self, field: str, message: Optional[str] = None):
        super().__init__(
            message=message or f"{field.capitalize()} cannot be empty",
            field=field,
        )


class CredentialError(NotesAppError):
    """
    Base for registration and login failures.

    HTTP: 400 Bad Request. Unknown user and wrong password are both client
    errors; neither issues any session artifact.
    """

    code = "credential_error"


class DuplicateUserError(CredentialError):
    """An account with this email already exists."""

    code = "duplicate_user"

    def __init__(self, email: str):
        super().__init__(message="User already exists", context={"email": email})


class UserNotFoundError(CredentialError):
    """No account is registered under this email."""

    code = "user_not_found"

    def __init__(self):
        super().__init__(message="User not found")


class InvalidCredentialsError(CredentialError):
    """The password does not match the stored hash."""

    code = "invalid_credentials"

    def __init__(self):
        super().__init__(message="Invalid credentials")


class NotFoundError(NotesAppError):
    """
    Raised when a requested resource does not exist.

    HTTP: 404 Not Found

    SQLAlchemy returns None (or a zero row count) for missing records; the
    service layer converts that into this exception.
    """

    code = "not_found"

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id is not None:
            message = f"{resource.capitalize()} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class NoteNotFoundError(NotFoundError):
    """No note exists with the given id."""

    code = "note_not_found"

    def __init__(self, note_id: Any):
        super().__init__(resource="note", resource_id=note_id)
        self.message = "Note not found"


class StoreError(NotesAppError):
    """
    Raised when a data-store operation fails.

    HTTP: 500 Internal Server Error

    What:  Connection loss, failed query, constraint or schema problems.
    How:   The underlying error text travels in context["error"] and is
           returned to the client. Store failures are never retried.
    """

    code = "store_error"

    def __init__(
        self,
        message: str = "Server error",
        error: Optional[BaseException] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if error is not None:
            ctx["error"] = str(error)
        super().__init__(message=message, context=ctx)
