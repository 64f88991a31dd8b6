"""Password hashing with bcrypt."""

from __future__ import annotations

import bcrypt

_MIN_ROUNDS = 4
_MAX_ROUNDS = 31
_MAX_KEY_BYTES = 72


def _key(password: str) -> bytes:
    return password.encode("utf-8")[:_MAX_KEY_BYTES]


def generate_hash(password: str, rounds: int = 10) -> str:
    """Hash ``password`` with a fresh "$2b$" salt; rounds are clamped to 4..31."""
    rounds = min(max(rounds, _MIN_ROUNDS), _MAX_ROUNDS)
    salt = bcrypt.gensalt(rounds=rounds, prefix=b"2b")
    return bcrypt.hashpw(_key(password), salt).decode("ascii")


def validate_password(password: str, hashed: str) -> bool:
    """Return True if ``password`` matches ``hashed``; malformed hashes never match."""
    try:
        return bcrypt.checkpw(_key(password), hashed.encode("ascii"))
    except (ValueError, UnicodeEncodeError):
        return False