"""
Like API schemas.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class LikeCreate(BaseModel):
    blog_id: UUID
    user_id: UUID


class LikeResponse(BaseModel):
    id: UUID
    blog_id: UUID
    user_id: UUID
    created_at: datetime
