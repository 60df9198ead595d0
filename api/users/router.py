"""
User API endpoints.
"""

from __future__ import annotations

import logging
from uuid import UUID

import asyncpg
from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool

from core import db
from core.envelope import ApiResponse, DeleteResult
from core.errors import ValidationError

from . import repository, schemas, security

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users")

NOT_FOUND = {404: {"model": ApiResponse[None], "description": "User not found"}}


@router.post("", response_model=ApiResponse[schemas.UserResponse])
async def create_user(
    payload: schemas.UserCreate,
    conn: asyncpg.Connection = Depends(db.get_connection),
) -> ApiResponse[schemas.UserResponse]:
    row = await repository.create_user(
        conn,
        username=payload.username,
        email=payload.email,
        password_hash=await run_in_threadpool(security.hash_password, payload.password),
    )
    logger.info("user_created user_id=%s", row["id"])
    return ApiResponse[schemas.UserResponse].success(row)


@router.get("/{user_id}", response_model=ApiResponse[schemas.UserResponse], responses=NOT_FOUND)
async def get_user(
    user_id: UUID,
    conn: asyncpg.Connection = Depends(db.get_connection),
) -> ApiResponse[schemas.UserResponse]:
    row = await repository.get_user(conn, user_id)
    return ApiResponse[schemas.UserResponse].success(row)


@router.put("/{user_id}", response_model=ApiResponse[schemas.UserResponse], responses=NOT_FOUND)
async def update_user(
    user_id: UUID,
    payload: schemas.UserUpdate,
    conn: asyncpg.Connection = Depends(db.get_connection),
) -> ApiResponse[schemas.UserResponse]:
    if payload.username is None and payload.email is None:
        raise ValidationError("Provide username or email to update.")

    row = await repository.update_user(
        conn,
        user_id,
        username=payload.username,
        email=payload.email,
    )
    return ApiResponse[schemas.UserResponse].success(row)


@router.delete("/{user_id}", response_model=ApiResponse[DeleteResult])
async def delete_user(
    user_id: UUID,
    conn: asyncpg.Connection = Depends(db.get_connection),
) -> ApiResponse[DeleteResult]:
    """
    Remove a user together with their blogs, comments and likes.

    Deleting an unknown id is not an error: the response reports `deleted: 0`.
    """
    deleted = await repository.delete_user(conn, user_id)
    logger.info("user_deleted user_id=%s deleted=%s", user_id, deleted)
    return ApiResponse[DeleteResult].success(DeleteResult(deleted=deleted))
