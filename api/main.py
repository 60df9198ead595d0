from __future__ import annotations

from contextlib import asynccontextmanager

import asyncpg
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from blogs import router as blogs_router
from comments import router as comments_router
from core import config, db
from core.errors import register_exception_handlers
from core.log import configure_logging
from likes import router as likes_router
from users import router as users_router

OPENAPI_TAGS = [
    {"name": "users", "description": "User management API"},
    {"name": "blogs", "description": "Blog management API"},
    {"name": "comments", "description": "Comment management API"},
    {"name": "likes", "description": "Like management API"},
]


def create_app(pool: asyncpg.Pool | None = None) -> FastAPI:
    """
    Build the API.

    When `pool` is given the caller owns it; otherwise the lifespan opens one
    from DATABASE_URL and closes it on shutdown.
    """
    configure_logging()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = pool is None
        app.state.pool = await db.create_pool() if owned else pool
        try:
            if config.bootstrap_schema():
                await db.apply_schema(app.state.pool)
            yield
        finally:
            if owned:
                await db.close_pool(app.state.pool)
            app.state.pool = None

    app = FastAPI(title="Blog API", openapi_tags=OPENAPI_TAGS, lifespan=lifespan)
    # Usable before startup runs (e.g. TestClient without a `with` block).
    app.state.pool = pool

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_allow_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(users_router.router, tags=["users"])
    app.include_router(blogs_router.router, tags=["blogs"])
    app.include_router(comments_router.router, tags=["comments"])
    app.include_router(likes_router.router, tags=["likes"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return app


app = create_app()
