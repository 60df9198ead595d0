from __future__ import annotations

from datetime import datetime, timedelta, timezone
from uuid import UUID, uuid4

import pytest
from fastapi.testclient import TestClient

from blogs import repository as blogs_repository
from comments import repository as comments_repository
from core.errors import NotFound, StoreError
from likes import repository as likes_repository
from main import create_app
from users import repository as users_repository


class FakeConnection:
    pass


class FakePool:
    """
    Stands in for asyncpg.Pool: hands out dummy connections and counts them.
    """

    def __init__(self, acquire_error: BaseException | None = None) -> None:
        self.acquire_error = acquire_error
        self.acquired = 0
        self.released = 0
        self.acquire_timeouts: list[float | None] = []

    async def acquire(self, *, timeout: float | None = None) -> FakeConnection:
        self.acquire_timeouts.append(timeout)
        if self.acquire_error is not None:
            raise self.acquire_error
        self.acquired += 1
        return FakeConnection()

    async def release(self, conn: FakeConnection) -> None:
        self.released += 1


class InMemoryStore:
    """
    Dict-backed replacement for the repository functions.

    Mirrors the database behaviour the API relies on: foreign keys fail with
    StoreError, missing rows raise NotFound, deletes report a row count and
    cascade like the schema does.
    """

    def __init__(self) -> None:
        self.users: dict[UUID, dict] = {}
        self.blogs: dict[UUID, dict] = {}
        self.comments: dict[UUID, dict] = {}
        self.likes: dict[UUID, dict] = {}
        self.fail_with: StoreError | None = None
        self._clock = datetime(2026, 1, 1, tzinfo=timezone.utc)

    def _now(self) -> datetime:
        self._clock += timedelta(milliseconds=1)
        return self._clock

    def _check(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    def _require(self, table: dict, key: UUID | None, name: str) -> None:
        if key is not None and key not in table:
            raise StoreError(f"ForeignKeyViolationError: {name} {key} does not exist")

    # users

    async def create_user(self, conn, *, username: str, email: str, password_hash: str) -> dict:
        self._check()
        row = {
            "id": uuid4(),
            "username": username.strip(),
            "email": users_repository.normalize_email(email),
            "password_hash": password_hash,
            "created_at": self._now(),
        }
        self.users[row["id"]] = row
        return dict(row)

    async def get_user(self, conn, user_id: UUID) -> dict:
        self._check()
        if user_id not in self.users:
            raise NotFound("User not found.")
        return dict(self.users[user_id])

    async def update_user(self, conn, user_id: UUID, *, username=None, email=None) -> dict:
        self._check()
        if user_id not in self.users:
            raise NotFound("User not found.")
        row = self.users[user_id]
        if username is not None:
            row["username"] = username.strip()
        if email is not None:
            row["email"] = users_repository.normalize_email(email)
        return dict(row)

    async def delete_user(self, conn, user_id: UUID) -> int:
        self._check()
        if self.users.pop(user_id, None) is None:
            return 0
        for blog_id in [b["id"] for b in self.blogs.values() if b["author_id"] == user_id]:
            await self.delete_blog(conn, blog_id)
        self.comments = {k: v for k, v in self.comments.items() if v["user_id"] != user_id}
        self.likes = {k: v for k, v in self.likes.items() if v["user_id"] != user_id}
        return 1

    # blogs

    async def create_blog(self, conn, *, title: str, content: str, author_id: UUID) -> dict:
        self._check()
        self._require(self.users, author_id, "user")
        now = self._now()
        row = {
            "id": uuid4(),
            "title": title,
            "content": content,
            "author_id": author_id,
            "created_at": now,
            "updated_at": now,
        }
        self.blogs[row["id"]] = row
        return dict(row)

    async def get_blog(self, conn, blog_id: UUID) -> dict:
        self._check()
        if blog_id not in self.blogs:
            raise NotFound("Blog not found.")
        return dict(self.blogs[blog_id])

    async def update_blog(self, conn, blog_id: UUID, *, title=None, content=None) -> dict:
        self._check()
        if blog_id not in self.blogs:
            raise NotFound("Blog not found.")
        row = self.blogs[blog_id]
        if title is not None:
            row["title"] = title
        if content is not None:
            row["content"] = content
        row["updated_at"] = self._now()
        return dict(row)

    async def delete_blog(self, conn, blog_id: UUID) -> int:
        self._check()
        if self.blogs.pop(blog_id, None) is None:
            return 0
        self.comments = {k: v for k, v in self.comments.items() if v["blog_id"] != blog_id}
        self.likes = {k: v for k, v in self.likes.items() if v["blog_id"] != blog_id}
        return 1

    # comments

    async def create_comment(
        self, conn, *, blog_id: UUID, user_id: UUID, content: str, parent_comment_id=None
    ) -> dict:
        self._check()
        self._require(self.blogs, blog_id, "blog")
        self._require(self.users, user_id, "user")
        self._require(self.comments, parent_comment_id, "comment")
        row = {
            "id": uuid4(),
            "blog_id": blog_id,
            "user_id": user_id,
            "content": content,
            "parent_comment_id": parent_comment_id,
            "created_at": self._now(),
        }
        self.comments[row["id"]] = row
        return dict(row)

    async def get_comment(self, conn, comment_id: UUID) -> dict:
        self._check()
        if comment_id not in self.comments:
            raise NotFound("Comment not found.")
        return dict(self.comments[comment_id])

    async def update_comment(self, conn, comment_id: UUID, *, content: str) -> dict:
        self._check()
        if comment_id not in self.comments:
            raise NotFound("Comment not found.")
        self.comments[comment_id]["content"] = content
        return dict(self.comments[comment_id])

    async def delete_comment(self, conn, comment_id: UUID) -> int:
        self._check()
        if self.comments.pop(comment_id, None) is None:
            return 0
        for row in self.comments.values():
            if row["parent_comment_id"] == comment_id:
                row["parent_comment_id"] = None
        return 1

    # likes

    async def create_like(self, conn, *, blog_id: UUID, user_id: UUID) -> dict:
        self._check()
        self._require(self.blogs, blog_id, "blog")
        self._require(self.users, user_id, "user")
        row = {"id": uuid4(), "blog_id": blog_id, "user_id": user_id, "created_at": self._now()}
        self.likes[row["id"]] = row
        return dict(row)

    async def get_like(self, conn, like_id: UUID) -> dict:
        self._check()
        if like_id not in self.likes:
            raise NotFound("Like not found.")
        return dict(self.likes[like_id])

    async def delete_like(self, conn, like_id: UUID) -> int:
        self._check()
        return 1 if self.likes.pop(like_id, None) is not None else 0


REPOSITORY_FUNCTIONS = {
    users_repository: ("create_user", "get_user", "update_user", "delete_user"),
    blogs_repository: ("create_blog", "get_blog", "update_blog", "delete_blog"),
    comments_repository: ("create_comment", "get_comment", "update_comment", "delete_comment"),
    likes_repository: ("create_like", "get_like", "delete_like"),
}


@pytest.fixture
def store(monkeypatch: pytest.MonkeyPatch) -> InMemoryStore:
    store = InMemoryStore()
    for module, names in REPOSITORY_FUNCTIONS.items():
        for name in names:
            monkeypatch.setattr(module, name, getattr(store, name))
    return store


@pytest.fixture
def pool() -> FakePool:
    return FakePool()


@pytest.fixture
def client(store: InMemoryStore, pool: FakePool) -> TestClient:
    return TestClient(create_app(pool=pool))


@pytest.fixture
def user(client: TestClient) -> dict:
    resp = client.post(
        "/users",
        json={"username": "ada", "email": "Ada@Example.com", "password": "correct horse"},
    )
    assert resp.status_code == 200
    return resp.json()["data"]


@pytest.fixture
def blog(client: TestClient, user: dict) -> dict:
    resp = client.post(
        "/blogs",
        json={"title": "First post", "content": "Hello.", "author_id": user["id"]},
    )
    assert resp.status_code == 200
    return resp.json()["data"]
