"""
NotesApp Backend — Input Checks Shared by the Services
========================================================

What:  Presence and format checks for request fields.
How:   Each helper returns the accepted value or raises a ValidationError
       subclass. No sanitization beyond these checks is performed.
"""

from typing import Any, Optional

from email_validator import EmailNotValidError, validate_email

from notesapp.exceptions import (
    InvalidEmailFormatError,
    MissingFieldError,
    ValidationError,
)


def validate_email_address(email: Any) -> str:
    """
    Check email syntax and return the normalized address.

    Deliverability (DNS) checks are disabled: only the syntax is validated.
    Normalization lowercases the domain, so lookups by email are consistent
    between signup and login.

    Raises:
        InvalidEmailFormatError: email missing, not a string, or malformed
    """
    if not isinstance(email, str) or not email:
        raise InvalidEmailFormatError()
    try:
        info = validate_email(email, check_deliverability=False)
    except EmailNotValidError as e:
        raise InvalidEmailFormatError(reason=str(e))
    return info.normalized


def require_text(value: Any, field: str, max_length: Optional[int] = None) -> str:
    """
    Require a non-empty string, optionally no longer than max_length.

    Raises:
        MissingFieldError: value is None, not a string, or empty
        ValidationError: value longer than max_length characters
    """
    if not isinstance(value, str) or value == "":
        raise MissingFieldError(field)
    if max_length is not None and len(value) > max_length:
        raise ValidationError(
            message=f"{field.capitalize()} cannot be longer than {max_length} characters",
            field=field,
        )
    return value


def require_non_blank(value: Any, field: str, max_length: Optional[int] = None) -> str:
    """Like require_text, but whitespace-only strings are rejected too."""
    text = require_text(value, field, max_length)
    if not text.strip():
        raise MissingFieldError(field)
    return text
