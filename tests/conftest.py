# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import datetime, timedelta

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("CACHE_BACKEND", "memory")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from threadboard.core.security import Role, create_access_token
from threadboard.db.session import Base
from threadboard.db.session import get_db as app_get_session
from threadboard.db.time import utcnow
from threadboard.main import app as fastapi_app
from threadboard.models import Board, BoardFollow, Post
from threadboard.services.cache import MemoryCacheStore

TEST_DB_URL = "sqlite://"

AUTHOR_ID = 1
OTHER_USER_ID = 2


class FakeClock:
    """Monotonic clock the tests can move forward by hand."""

    def __init__(self) -> None:
        self.now = 1_000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingCache(MemoryCacheStore):
    """Memory cache that remembers every key it was asked to delete."""

    def __init__(self, clock: Callable[[], float] | None = None) -> None:
        super().__init__(clock or FakeClock())
        self.deleted: list[str] = []

    def delete(self, key: str) -> None:
        self.deleted.append(key)
        super().delete(key)


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def cache(clock: FakeClock) -> RecordingCache:
    return RecordingCache(clock)


@pytest.fixture()
def app(db_session: Session, cache: RecordingCache) -> Iterator[FastAPI]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    fastapi_app.dependency_overrides[app_get_session] = _get_session_override
    fastapi_app.state.cache = cache
    try:
        yield fastapi_app
    finally:
        fastapi_app.dependency_overrides.pop(app_get_session, None)
        fastapi_app.state.cache = None


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def auth_headers() -> Callable[..., dict[str, str]]:
    """Return a factory of authorization headers for a user id and role."""

    def _headers(user_id: int = AUTHOR_ID, role: Role = Role.USER) -> dict[str, str]:
        token = create_access_token(user_id, role)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture()
def board(db_session: Session) -> Board:
    """Create a default test board."""
    board = Board(title="General", description="Anything goes", owner_id=AUTHOR_ID)
    db_session.add(board)
    db_session.commit()
    db_session.refresh(board)
    return board


@pytest.fixture()
def other_board(db_session: Session) -> Board:
    """Create a second board."""
    board = Board(title="Off-topic", description="", owner_id=OTHER_USER_ID)
    db_session.add(board)
    db_session.commit()
    db_session.refresh(board)
    return board


@pytest.fixture()
def make_post(db_session: Session) -> Callable[..., Post]:
    """Return a factory inserting posts with chosen counters and age."""

    def _make_post(
        board: Board,
        *,
        author_id: int = AUTHOR_ID,
        content: str = "Test post content",
        created_at: datetime | None = None,
        age: timedelta | None = None,
        upvotes: int = 0,
        downvotes: int = 0,
        comments: int = 0,
    ) -> Post:
        if created_at is None:
            created_at = utcnow() - (age or timedelta(0))
        post = Post(
            author_id=author_id,
            board_id=board.id,
            content=content,
            created_at=created_at,
            upvote_count=upvotes,
            downvote_count=downvotes,
            comment_count=comments,
        )
        db_session.add(post)
        db_session.commit()
        db_session.refresh(post)
        return post

    return _make_post


@pytest.fixture()
def test_post(board: Board, make_post: Callable[..., Post]) -> Post:
    """Create a baseline post for tests."""
    return make_post(board)


@pytest.fixture()
def follow(db_session: Session) -> Callable[[int, Board], None]:
    """Return a helper recording that a user follows a board."""

    def _follow(user_id: int, board: Board) -> None:
        db_session.add(BoardFollow(user_id=user_id, board_id=board.id))
        db_session.commit()

    return _follow
