"""
Uniform response envelope shared by every endpoint.

    {"status": "success", "data": {...}, "message": null}
    {"status": "error", "data": null, "message": "Blog not found."}
"""

from __future__ import annotations

from typing import Generic, Literal, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    status: Literal["success", "error"]
    data: T | None = None
    message: str | None = None

    @classmethod
    def success(cls, data: T) -> "ApiResponse[T]":
        return cls(status="success", data=data)

    @classmethod
    def error(cls, message: str) -> "ApiResponse[None]":
        return cls(status="error", message=message)


class DeleteResult(BaseModel):
    deleted: int
