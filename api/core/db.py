"""
Async database access helpers (raw SQL) using asyncpg.

The pool is created once per process by the application lifespan (see
`api/main.py`) and kept on `app.state.pool`. Handlers never touch the pool
directly: they depend on `get_connection`, which borrows one connection for
the duration of the request and hands it to the repository functions.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...

Every driver fault raised from these helpers surfaces as `StoreError`.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, AsyncIterator

import asyncpg
from fastapi import Request

from . import config
from .errors import StoreError

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).with_name("schema.sql")

# Raised by asyncpg for server errors, protocol/interface misuse, dropped
# sockets and timeouts respectively.
DRIVER_ERRORS = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    OSError,
    asyncio.TimeoutError,
)


async def create_pool() -> asyncpg.Pool:
    pool = await asyncpg.create_pool(
        dsn=config.database_url(),
        min_size=config.pool_min_size(),
        max_size=config.pool_max_size(),
        command_timeout=config.command_timeout(),
    )
    logger.info(
        "db_pool_opened min_size=%s max_size=%s",
        config.pool_min_size(),
        config.pool_max_size(),
    )
    return pool


async def close_pool(pool: asyncpg.Pool | None) -> None:
    if pool is None:
        return None
    await pool.close()
    logger.info("db_pool_closed")


async def apply_schema(pool: asyncpg.Pool) -> None:
    """
    Create the blog tables if they do not exist yet.
    """
    sql = SCHEMA_PATH.read_text(encoding="utf-8")
    try:
        async with pool.acquire() as conn:
            await conn.execute(sql)
    except DRIVER_ERRORS as exc:
        raise StoreError(f"Failed to apply schema: {exc}") from exc
    logger.info("db_schema_applied path=%s", SCHEMA_PATH.name)


def pool_from_request(request: Request) -> asyncpg.Pool:
    pool = getattr(request.app.state, "pool", None)
    if pool is None:
        raise StoreError("DB pool is not initialized.")
    return pool


async def get_connection(request: Request) -> AsyncIterator[asyncpg.Connection]:
    """
    FastAPI dependency: borrow a pooled connection for one request.

    Acquisition failures are not retried.
    """
    pool = pool_from_request(request)
    try:
        conn = await pool.acquire(timeout=config.acquire_timeout())
    except DRIVER_ERRORS as exc:
        raise StoreError(f"Could not acquire a database connection: {exc!r}") from exc

    try:
        yield conn
    finally:
        await pool.release(conn)


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


async def fetch_one(conn: asyncpg.Connection, sql: str, *args: Any) -> dict[str, Any] | None:
    """
    Run a query and return a single row as a dict (or None).
    """
    try:
        row = await conn.fetchrow(sql, *args)
    except DRIVER_ERRORS as exc:
        raise StoreError(f"{type(exc).__name__}: {exc}") from exc
    return _record_to_dict(row) if row is not None else None


async def execute(conn: asyncpg.Connection, sql: str, *args: Any) -> str:
    """
    Run a statement (INSERT/UPDATE/DELETE/DDL) and return the command tag.
    """
    try:
        return await conn.execute(sql, *args)
    except DRIVER_ERRORS as exc:
        raise StoreError(f"{type(exc).__name__}: {exc}") from exc


def affected_rows(command_tag: str) -> int:
    # Tags look like "DELETE 1" or "UPDATE 0".
    tail = (command_tag or "").rsplit(" ", 1)[-1]
    return int(tail) if tail.isdigit() else 0
