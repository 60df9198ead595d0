"""
User persistence helpers.
"""

from __future__ import annotations

from uuid import UUID, uuid4

import asyncpg

from core import db
from core.errors import NotFound, StoreError

_COLUMNS = "id, username, email, password_hash, created_at"


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


async def create_user(
    conn: asyncpg.Connection,
    *,
    username: str,
    email: str,
    password_hash: str,
) -> dict:
    row = await db.fetch_one(
        conn,
        f"""
        INSERT INTO users (id, username, email, password_hash)
        VALUES ($1, $2, $3, $4)
        RETURNING {_COLUMNS}
        """,
        uuid4(),
        username.strip(),
        normalize_email(email),
        password_hash,
    )
    if row is None:
        raise StoreError("Failed to create user.")
    return row


async def get_user(conn: asyncpg.Connection, user_id: UUID) -> dict:
    row = await db.fetch_one(
        conn,
        f"""
        SELECT {_COLUMNS}
        FROM users
        WHERE id = $1
        """,
        user_id,
    )
    if row is None:
        raise NotFound("User not found.")
    return row


async def update_user(
    conn: asyncpg.Connection,
    user_id: UUID,
    *,
    username: str | None = None,
    email: str | None = None,
) -> dict:
    row = await db.fetch_one(
        conn,
        f"""
        UPDATE users
        SET username = COALESCE($2, username),
            email = COALESCE($3, email)
        WHERE id = $1
        RETURNING {_COLUMNS}
        """,
        user_id,
        username.strip() if username is not None else None,
        normalize_email(email) if email is not None else None,
    )
    if row is None:
        raise NotFound("User not found.")
    return row


async def delete_user(conn: asyncpg.Connection, user_id: UUID) -> int:
    tag = await db.execute(conn, "DELETE FROM users WHERE id = $1", user_id)
    return db.affected_rows(tag)
