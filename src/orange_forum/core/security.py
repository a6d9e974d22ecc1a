"""Password hashing and reset-token primitives."""
from __future__ import annotations

import secrets
import string

import bcrypt

from orange_forum.core.errors import ValidationFailureError
from orange_forum.core.settings import settings

RESET_TOKEN_ALPHABET = string.digits + string.ascii_lowercase + string.ascii_uppercase


def hash_password(password: str, rounds: int | None = None) -> str:
    """Return the hex-encoded bcrypt hash of ``password``.

    Raises:
        ValidationFailureError: If bcrypt refuses the input (e.g. too long).
    """
    try:
        salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).hex()
    except ValueError as err:
        raise ValidationFailureError(f"Could not hash password: {err}") from err


def verify_password(password: str, passwd_hash_hex: str) -> bool:
    """Return True if ``password`` matches the stored hex-encoded hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), bytes.fromhex(passwd_hash_hex))
    except ValueError:
        return False


def generate_reset_token(length: int | None = None) -> str:
    """Return a random alphanumeric token from the system CSPRNG."""
    size = length or settings.reset_token_length
    return "".join(secrets.choice(RESET_TOKEN_ALPHABET) for _ in range(size))
