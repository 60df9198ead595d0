"""
Blog API endpoints.
"""

from __future__ import annotations

import logging
from uuid import UUID

import asyncpg
from fastapi import APIRouter, Depends

from core import db
from core.envelope import ApiResponse, DeleteResult

from . import repository, schemas

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/blogs")

NOT_FOUND = {404: {"model": ApiResponse[None], "description": "Blog not found"}}


@router.post("", response_model=ApiResponse[schemas.BlogResponse])
async def create_blog(
    payload: schemas.BlogCreate,
    conn: asyncpg.Connection = Depends(db.get_connection),
) -> ApiResponse[schemas.BlogResponse]:
    row = await repository.create_blog(
        conn,
        title=payload.title,
        content=payload.content,
        author_id=payload.author_id,
    )
    logger.info("blog_created blog_id=%s author_id=%s", row["id"], row["author_id"])
    return ApiResponse[schemas.BlogResponse].success(row)


@router.get("/{blog_id}", response_model=ApiResponse[schemas.BlogResponse], responses=NOT_FOUND)
async def get_blog(
    blog_id: UUID,
    conn: asyncpg.Connection = Depends(db.get_connection),
) -> ApiResponse[schemas.BlogResponse]:
    row = await repository.get_blog(conn, blog_id)
    return ApiResponse[schemas.BlogResponse].success(row)


@router.put("/{blog_id}", response_model=ApiResponse[schemas.BlogResponse], responses=NOT_FOUND)
async def update_blog(
    blog_id: UUID,
    payload: schemas.BlogUpdate,
    conn: asyncpg.Connection = Depends(db.get_connection),
) -> ApiResponse[schemas.BlogResponse]:
    """
    Change title and/or content. `updated_at` always moves forward, even for
    an empty body.
    """
    row = await repository.update_blog(
        conn,
        blog_id,
        title=payload.title,
        content=payload.content,
    )
    return ApiResponse[schemas.BlogResponse].success(row)


@router.delete("/{blog_id}", response_model=ApiResponse[DeleteResult])
async def delete_blog(
    blog_id: UUID,
    conn: asyncpg.Connection = Depends(db.get_connection),
) -> ApiResponse[DeleteResult]:
    deleted = await repository.delete_blog(conn, blog_id)
    logger.info("blog_deleted blog_id=%s deleted=%s", blog_id, deleted)
    return ApiResponse[DeleteResult].success(DeleteResult(deleted=deleted))
