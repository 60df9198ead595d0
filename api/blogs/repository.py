"""
Blog persistence helpers (raw SQL).
"""

from __future__ import annotations

from uuid import UUID, uuid4

import asyncpg

from core import db
from core.errors import NotFound, StoreError

_COLUMNS = "id, title, content, author_id, created_at, updated_at"


async def create_blog(
    conn: asyncpg.Connection,
    *,
    title: str,
    content: str,
    author_id: UUID,
) -> dict:
    # Both timestamps come from the same now(), so they start out equal.
    row = await db.fetch_one(
        conn,
        f"""
        INSERT INTO blogs (id, title, content, author_id, created_at, updated_at)
        VALUES ($1, $2, $3, $4, now(), now())
        RETURNING {_COLUMNS}
        """,
        uuid4(),
        title,
        content,
        author_id,
    )
    if row is None:
        raise StoreError("Failed to create blog.")
    return row


async def get_blog(conn: asyncpg.Connection, blog_id: UUID) -> dict:
    row = await db.fetch_one(
        conn,
        f"""
        SELECT {_COLUMNS}
        FROM blogs
        WHERE id = $1
        """,
        blog_id,
    )
    if row is None:
        raise NotFound("Blog not found.")
    return row


async def update_blog(
    conn: asyncpg.Connection,
    blog_id: UUID,
    *,
    title: str | None = None,
    content: str | None = None,
) -> dict:
    # updated_at strictly advances, even inside the inserting transaction.
    row = await db.fetch_one(
        conn,
        f"""
        UPDATE blogs
        SET title = COALESCE($2, title),
            content = COALESCE($3, content),
            updated_at = GREATEST(clock_timestamp(), updated_at + interval '1 microsecond')
        WHERE id = $1
        RETURNING {_COLUMNS}
        """,
        blog_id,
        title,
        content,
    )
    if row is None:
        raise NotFound("Blog not found.")
    return row


async def delete_blog(conn: asyncpg.Connection, blog_id: UUID) -> int:
    tag = await db.execute(conn, "DELETE FROM blogs WHERE id = $1", blog_id)
    return db.affected_rows(tag)
