"""
NotesApp Backend — Password Hashing and Input Check Tests
===========================================================
"""

import pytest

from notesapp.exceptions import InvalidEmailFormatError, MissingFieldError, ValidationError
from notesapp.security import hash_password, verify_password
from notesapp.services.validation import (
    require_non_blank,
    require_text,
    validate_email_address,
)


class TestPasswordHashing:

    def test_hash_is_salted_and_one_way(self):
        first = hash_password("pw-123", rounds=4)
        second = hash_password("pw-123", rounds=4)

        assert first != second  # fresh salt each time
        assert "pw-123" not in first
        assert first.startswith("$2b$04$")
        assert len(first) == 60

    def test_default_cost_factor_is_ten(self):
        assert hash_password("pw").startswith("$2b$10$")

    def test_verify(self):
        hashed = hash_password("correct horse", rounds=4)

        assert verify_password("correct horse", hashed) is True
        assert verify_password("correct hors", hashed) is False
        assert verify_password("", hashed) is False

    def test_over_72_bytes(self):
        with pytest.raises(ValueError):
            hash_password("é" * 37, rounds=4)  # 74 bytes in UTF-8

        hashed = hash_password("a" * 72, rounds=4)
        assert verify_password("a" * 73, hashed) is False


class TestEmailValidation:

    @pytest.mark.parametrize(
        "email",
        ["alice@mail.com", "first.last+tag@sub.mail.org", "x@mail.io"],
    )
    def test_valid_addresses(self, email):
        assert validate_email_address(email) == email

    def test_domain_is_normalized(self):
        assert validate_email_address("Alice@MAIL.COM") == "Alice@mail.com"

    @pytest.mark.parametrize(
        "email",
        [None, "", "not-an-email", "a@", "@mail.com", "a b@mail.com", 42],
    )
    def test_invalid_addresses(self, email):
        with pytest.raises(InvalidEmailFormatError) as exc_info:
            validate_email_address(email)

        assert exc_info.value.code == "invalid_email_format"
        assert exc_info.value.field == "email"


class TestRequiredFields:

    def test_require_text(self):
        assert require_text("  ", "title") == "  "
        with pytest.raises(MissingFieldError) as exc_info:
            require_text("", "title")
        assert exc_info.value.message == "Title cannot be empty"

    @pytest.mark.parametrize("value", [None, 5, ["x"]])
    def test_require_text_non_strings(self, value):
        with pytest.raises(MissingFieldError):
            require_text(value, "content")

    def test_require_non_blank(self):
        assert require_non_blank("alice", "username") == "alice"
        with pytest.raises(MissingFieldError):
            require_non_blank("   ", "username")

    def test_require_text_max_length(self):
        assert require_text("t" * 255, "title", 255) == "t" * 255
        with pytest.raises(ValidationError) as exc_info:
            require_text("t" * 256, "title", 255)
        assert not isinstance(exc_info.value, MissingFieldError)
        assert exc_info.value.message == "Title cannot be longer than 255 characters"
