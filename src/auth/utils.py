from flask import current_app
from passlib.hash import bcrypt


def _truncate_password(plain_password: str) -> str:
    """Helper to consistently truncate password to its first 72 UTF-8 bytes."""
    # Encode to bytes, take the first 72 bytes, and decode back to a string,
    # ignoring any incomplete multi-byte characters at the truncation point.
    password_bytes = plain_password.encode('utf-8')[:72]
    return password_bytes.decode('utf-8', errors='ignore')


def hash_password(plain_password: str) -> str:
    """
    Hash password using bcrypt. It is truncated to the first 72 bytes
    of its UTF-8 encoding before hashing.
    """
    truncated = _truncate_password(plain_password)
    return bcrypt.hash(truncated)


def verify_password(plain_password: str, password_hash: str) -> bool:
    """Verify a password against a hash, using the same truncation as hash_password."""
    truncated = _truncate_password(plain_password)
    return bcrypt.verify(truncated, password_hash)


def validate_password(password: str) -> tuple[bool, str | None]:
    """
    Basic server-side password validation.
    Returns (is_valid, error_message).
    """
    min_length = current_app.config.get("MIN_PASSWORD_LENGTH", 8)
    if len(password) < min_length:
        return False, f"Password must be at least {min_length} characters long"

    return True, None


def validate_username(username: str) -> tuple[bool, str | None]:
    if not username:
        return False, "Username is required"
    if len(username) > 255:
        return False, "Username must be at most 255 characters long"
    if any(ch.isspace() for ch in username):
        return False, "Username must not contain spaces"
    return True, None
