"""
Like API endpoints.
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

router = APIRouter(prefix="/likes")


@router.post("", response_model=ApiResponse[schemas.LikeResponse])
async def create_like(
    payload: schemas.LikeCreate,
    conn: asyncpg.Connection = Depends(db.get_connection),
) -> ApiResponse[schemas.LikeResponse]:
    row = await repository.create_like(conn, blog_id=payload.blog_id, user_id=payload.user_id)
    logger.info("like_created like_id=%s blog_id=%s", row["id"], row["blog_id"])
    return ApiResponse[schemas.LikeResponse].success(row)


@router.get(
    "/{like_id}",
    response_model=ApiResponse[schemas.LikeResponse],
    responses={404: {"model": ApiResponse[None], "description": "Like not found"}},
)
async def get_like(
    like_id: UUID,
    conn: asyncpg.Connection = Depends(db.get_connection),
) -> ApiResponse[schemas.LikeResponse]:
    row = await repository.get_like(conn, like_id)
    return ApiResponse[schemas.LikeResponse].success(row)


@router.delete("/{like_id}", response_model=ApiResponse[DeleteResult])
async def delete_like(
    like_id: UUID,
    conn: asyncpg.Connection = Depends(db.get_connection),
) -> ApiResponse[DeleteResult]:
    deleted = await repository.delete_like(conn, like_id)
    return ApiResponse[DeleteResult].success(DeleteResult(deleted=deleted))
