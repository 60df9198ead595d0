"""
Comment API schemas.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class CommentCreate(BaseModel):
    blog_id: UUID
    user_id: UUID
    content: str = Field(..., min_length=1, max_length=5000)
    # Threading: the parent must be a comment on the same blog.
    parent_comment_id: UUID | None = None


class CommentUpdate(BaseModel):
    content: str = Field(..., min_length=1, max_length=5000)


class CommentResponse(BaseModel):
    id: UUID
    blog_id: UUID
    user_id: UUID
    content: str
    parent_comment_id: UUID | None = None
    created_at: datetime
