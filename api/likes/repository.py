"""
Like persistence helpers (raw SQL).

Likes are not unique per (blog, user): every POST inserts a new row.
"""

from __future__ import annotations

from uuid import UUID, uuid4

import asyncpg

from core import db
from core.errors import NotFound, StoreError

_COLUMNS = "id, blog_id, user_id, created_at"


async def create_like(conn: asyncpg.Connection, *, blog_id: UUID, user_id: UUID) -> dict:
    row = await db.fetch_one(
        conn,
        f"""
        INSERT INTO likes (id, blog_id, user_id)
        VALUES ($1, $2, $3)
        RETURNING {_COLUMNS}
        """,
        uuid4(),
        blog_id,
        user_id,
    )
    if row is None:
        raise StoreError("Failed to create like.")
    return row


async def get_like(conn: asyncpg.Connection, like_id: UUID) -> dict:
    row = await db.fetch_one(
        conn,
        f"""
        SELECT {_COLUMNS}
        FROM likes
        WHERE id = $1
        """,
        like_id,
    )
    if row is None:
        raise NotFound("Like not found.")
    return row


async def delete_like(conn: asyncpg.Connection, like_id: UUID) -> int:
    tag = await db.execute(conn, "DELETE FROM likes WHERE id = $1", like_id)
    return db.affected_rows(tag)
