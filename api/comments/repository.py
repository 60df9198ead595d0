"""
Comment persistence helpers (raw SQL).
"""

from __future__ import annotations

from uuid import UUID, uuid4

import asyncpg

from core import db
from core.errors import NotFound, StoreError

_COLUMNS = "id, blog_id, user_id, content, parent_comment_id, created_at"


async def create_comment(
    conn: asyncpg.Connection,
    *,
    blog_id: UUID,
    user_id: UUID,
    content: str,
    parent_comment_id: UUID | None = None,
) -> dict:
    row = await db.fetch_one(
        conn,
        f"""
        INSERT INTO comments (id, blog_id, user_id, content, parent_comment_id)
        VALUES ($1, $2, $3, $4, $5)
        RETURNING {_COLUMNS}
        """,
        uuid4(),
        blog_id,
        user_id,
        content,
        parent_comment_id,
    )
    if row is None:
        raise StoreError("Failed to create comment.")
    return row


async def get_comment(conn: asyncpg.Connection, comment_id: UUID) -> dict:
    row = await db.fetch_one(
        conn,
        f"""
        SELECT {_COLUMNS}
        FROM comments
        WHERE id = $1
        """,
        comment_id,
    )
    if row is None:
        raise NotFound("Comment not found.")
    return row


async def update_comment(conn: asyncpg.Connection, comment_id: UUID, *, content: str) -> dict:
    row = await db.fetch_one(
        conn,
        f"""
        UPDATE comments
        SET content = $2
        WHERE id = $1
        RETURNING {_COLUMNS}
        """,
        comment_id,
        content,
    )
    if row is None:
        raise NotFound("Comment not found.")
    return row


async def delete_comment(conn: asyncpg.Connection, comment_id: UUID) -> int:
    tag = await db.execute(conn, "DELETE FROM comments WHERE id = $1", comment_id)
    return db.affected_rows(tag)
