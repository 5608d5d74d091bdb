# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from itertools import count

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")

from loop_forum.core.security import create_access_token, hash_password
from loop_forum.db.seed import seed_categories
from loop_forum.db.session import Base, enable_sqlite_foreign_keys
from loop_forum.db.session import get_db as app_get_session
from loop_forum.main import app as fastapi_app
from loop_forum.models import Category, Post, Reply, User

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "password123"

_USER_COUNTER = count(1)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    connection = engine.connect()
    transaction = connection.begin()
    # Service commits release a SAVEPOINT; the outer transaction is rolled back.
    SessionLocal = sessionmaker(
        bind=connection,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        join_transaction_mode="create_savepoint",
    )
    session = SessionLocal()

    try:
        yield session
    finally:
        session.close()

        if transaction.is_active:
            transaction.rollback()
        connection.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture(autouse=True)
def categories(db_session: Session) -> dict[str, Category]:
    """Seed the default taxonomy and return it keyed by slug."""
    seed_categories(db_session)
    return {category.slug: category for category in db_session.query(Category).all()}


@pytest.fixture(scope="session")
def test_password() -> str:
    return TEST_PASSWORD


@pytest.fixture(scope="session")
def password_hash(test_password: str) -> str:
    """Hash the shared test password once per session."""
    return hash_password(test_password)


@pytest.fixture()
def make_user(db_session: Session, password_hash: str) -> Callable[..., User]:
    """Return a factory that persists users with the shared test password."""

    def _make_user(username: str | None = None) -> User:
        number = next(_USER_COUNTER)
        username = username or f"user{number}"
        user = User(
            username=username,
            email=f"{username}@example.com",
            password_hash=password_hash,
        )
        db_session.add(user)
        db_session.flush()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def test_user(make_user: Callable[..., User]) -> User:
    """Create and return a persisted test user."""
    return make_user("alice")


@pytest.fixture()
def other_user(make_user: Callable[..., User]) -> User:
    """Create and return a second persisted user."""
    return make_user("bob")


def auth_headers(user: User) -> dict[str, str]:
    token = create_access_token(user.id, user.username)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return auth_headers(test_user)


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return auth_headers(other_user)


@pytest.fixture()
def make_post(db_session: Session, categories: dict[str, Category]) -> Callable[..., Post]:
    """Return a factory that persists posts directly, bypassing validation."""

    def _make_post(
        author: User,
        title: str = "A post about things",
        content: str = "Some content that is long enough to post.",
        category: str = "general",
        upvotes: int = 0,
    ) -> Post:
        post = Post(
            title=title,
            content=content,
            user_id=author.id,
            category_id=categories[category].id,
            upvotes=upvotes,
        )
        db_session.add(post)
        db_session.flush()
        db_session.refresh(post)
        return post

    return _make_post


@pytest.fixture()
def test_post(make_post: Callable[..., Post], test_user: User) -> Post:
    """Create a baseline post owned by the primary test user."""
    return make_post(test_user, title="Baseline post", category="general")


@pytest.fixture()
def make_reply(db_session: Session) -> Callable[..., Reply]:
    """Return a factory that persists replies directly."""

    def _make_reply(
        author: User,
        post: Post,
        content: str = "A reply",
        parent: Reply | None = None,
        upvotes: int = 0,
    ) -> Reply:
        reply = Reply(
            content=content,
            user_id=author.id,
            post_id=post.id,
            parent_reply_id=parent.id if parent is not None else None,
            upvotes=upvotes,
        )
        db_session.add(reply)
        db_session.flush()
        db_session.refresh(reply)
        return reply

    return _make_reply
