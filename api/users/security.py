"""
Password hashing helpers.
"""

from __future__ import annotations

import bcrypt

# bcrypt only reads the first 72 bytes of its input.
MAX_PASSWORD_BYTES = 72


def hash_password(plain_password: str) -> str:
    password = plain_password.encode("utf-8")
    return bcrypt.hashpw(password, bcrypt.gensalt()).decode("utf-8")
