"""
Error taxonomy and the FastAPI handlers that render it.

Persistence code raises `NotFound` / `StoreError`; in-core input checks raise
`ValidationError`. Each class owns its HTTP status so nothing collapses into a
catch-all 500.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .envelope import ApiResponse

logger = logging.getLogger(__name__)

GENERIC_STORE_MESSAGE = "Database error."


class BlogApiError(RuntimeError):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    public_message: str | None = None

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message

    @property
    def client_message(self) -> str:
        return self.public_message or self.message or "Request failed."


class NotFound(BlogApiError):
    status_code = status.HTTP_404_NOT_FOUND


class StoreError(BlogApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    # Driver details stay in the logs.
    public_message = GENERIC_STORE_MESSAGE


class ValidationError(BlogApiError):
    status_code = 422


def error_response(status_code: int, message: str) -> JSONResponse:
    body = ApiResponse.error(message)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


async def _blog_api_error_handler(request: Request, exc: BlogApiError) -> JSONResponse:
    if isinstance(exc, StoreError):
        logger.error(
            "store_error method=%s path=%s detail=%s",
            request.method,
            request.url.path,
            exc.message,
            exc_info=exc.__cause__ or exc,
        )
    else:
        logger.debug(
            "request_failed method=%s path=%s status=%s detail=%s",
            request.method,
            request.url.path,
            exc.status_code,
            exc.message,
        )
    return error_response(exc.status_code, exc.client_message)


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        # loc looks like ("path", "blog_id") or ("body", "title").
        location = ".".join(str(item) for item in error.get("loc", ()) if item != "body")
        parts.append(f"{location or 'request'}: {error.get('msg', 'invalid value')}")
    return "Invalid request. " + "; ".join(parts) if parts else "Invalid request."


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(422, _format_validation_errors(exc))


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "unhandled_error method=%s path=%s",
        request.method,
        request.url.path,
        exc_info=exc,
    )
    return error_response(500, "Internal server error.")


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    response = error_response(exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BlogApiError, _blog_api_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
