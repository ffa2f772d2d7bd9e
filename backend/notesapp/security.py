"""
NotesApp Backend — Password Hashing
=====================================

What:  bcrypt hashing and verification of user passwords.
How:   bcrypt embeds the random salt and the cost factor in the hash string,
       so verification needs only the stored hash.

bcrypt only reads the first 72 bytes of a password. hash_password refuses
longer input instead of silently truncating it.
"""

import bcrypt

BCRYPT_MAX_PASSWORD_BYTES = 72


def password_too_long(password: str) -> bool:
    return len(password.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES


def hash_password(password: str, rounds: int = 10) -> str:
    """
    Hash a password with a fresh salt.

    Args:
        password: Plaintext password (at most 72 bytes UTF-8)
        rounds:   bcrypt cost factor (log2 of the iteration count)

    Returns:
        The 60-character bcrypt hash, e.g. "$2b$10$..."

    Raises:
        ValueError: password longer than 72 bytes
    """
    if password_too_long(password):
        raise ValueError("password exceeds 72 bytes")
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """Constant-time check of a plaintext password against a stored bcrypt hash."""
    if password_too_long(password):
        # Registration rejects such passwords, so no stored hash can match
        return False
    return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
