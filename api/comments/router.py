"""
Comment API endpoints.
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

router = APIRouter(prefix="/comments")

NOT_FOUND = {404: {"model": ApiResponse[None], "description": "Comment not found"}}


@router.post("", response_model=ApiResponse[schemas.CommentResponse])
async def create_comment(
    payload: schemas.CommentCreate,
    conn: asyncpg.Connection = Depends(db.get_connection),
) -> ApiResponse[schemas.CommentResponse]:
    row = await repository.create_comment(
        conn,
        blog_id=payload.blog_id,
        user_id=payload.user_id,
        content=payload.content,
        parent_comment_id=payload.parent_comment_id,
    )
    logger.info("comment_created comment_id=%s blog_id=%s", row["id"], row["blog_id"])
    return ApiResponse[schemas.CommentResponse].success(row)


@router.get("/{comment_id}", response_model=ApiResponse[schemas.CommentResponse], responses=NOT_FOUND)
async def get_comment(
    comment_id: UUID,
    conn: asyncpg.Connection = Depends(db.get_connection),
) -> ApiResponse[schemas.CommentResponse]:
    row = await repository.get_comment(conn, comment_id)
    return ApiResponse[schemas.CommentResponse].success(row)


@router.put("/{comment_id}", response_model=ApiResponse[schemas.CommentResponse], responses=NOT_FOUND)
async def update_comment(
    comment_id: UUID,
    payload: schemas.CommentUpdate,
    conn: asyncpg.Connection = Depends(db.get_connection),
) -> ApiResponse[schemas.CommentResponse]:
    row = await repository.update_comment(conn, comment_id, content=payload.content)
    return ApiResponse[schemas.CommentResponse].success(row)


@router.delete("/{comment_id}", response_model=ApiResponse[DeleteResult])
async def delete_comment(
    comment_id: UUID,
    conn: asyncpg.Connection = Depends(db.get_connection),
) -> ApiResponse[DeleteResult]:
    deleted = await repository.delete_comment(conn, comment_id)
    logger.info("comment_deleted comment_id=%s deleted=%s", comment_id, deleted)
    return ApiResponse[DeleteResult].success(DeleteResult(deleted=deleted))
