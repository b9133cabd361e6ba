# src/task_tracker/auth/passwords.py

from __future__ import annotations

import bcrypt

# bcrypt only reads the first 72 bytes; bcrypt>=5 raises ValueError past that.
MAX_PASSWORD_BYTES = 72


def password_too_long(password: str) -> bool:
    return len(password.encode("utf-8")) > MAX_PASSWORD_BYTES


def hash_password(password: str, *, rounds: int = 10) -> str:
    """Salted bcrypt hash, stored as text in logindata.password."""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed hash in the table: treat as a mismatch.
        return False
