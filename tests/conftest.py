"""
Blog API Backend: Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock session for pure service unit tests
    ├── db_engine:       in-memory aiosqlite engine with all tables created
    ├── db_session:      AsyncSession bound to db_engine
    ├── seeded_db:       users 7 and 9, categories 1 and 2
    ├── make_token:      builds signed bearer tokens for a user id
    ├── auth_headers:    Authorization headers for a user id
    └── test_client:     HTTPX AsyncClient with get_db_session bound to db_engine
"""

import os

# Settings are read at import time; set them before importing blogapi
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET_KEY"] = "test-secret-not-real"
os.environ["JWT_ALGORITHM"] = "HS256"
os.environ["DB_CREATE_ALL"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator, Callable, Dict
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from jose import jwt
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from blogapi.config import settings
from blogapi.database import create_tables, get_db_session
from blogapi.models import Category, User

OWNER_ID = 7
OTHER_USER_ID = 9
CATEGORY_ID = 1
OTHER_CATEGORY_ID = 2


# ══════════════════════════════════════════════════════════════════════════
# Mocked persistence
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_missing_post(mock_db_session):
            result = MagicMock()
            result.scalar_one_or_none.return_value = None
            mock_db_session.execute.return_value = result
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.delete = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# Real persistence (in-memory SQLite)
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    """A fresh in-memory database per test; StaticPool keeps one connection alive."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_tables(engine)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def seeded_db(session_factory):
    """Two users and two categories; no posts."""
    async with session_factory() as session:
        session.add_all([
            User(id=OWNER_ID, username="owner", email="owner@example.com"),
            User(id=OTHER_USER_ID, username="other", email="other@example.com"),
            Category(id=CATEGORY_ID, name="General"),
            Category(id=OTHER_CATEGORY_ID, name="Releases"),
        ])
        await session.commit()
    return session_factory


# ══════════════════════════════════════════════════════════════════════════
# Tokens
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def make_token() -> Callable[..., str]:
    """
    Build a token the way the identity service does: user id as the first
    claim, then expiry.
    """
    def _make(
        user_id,
        secret: str = settings.jwt_secret_key,
        expires_in: timedelta = timedelta(hours=1),
        **extra_claims,
    ) -> str:
        claims = {"nameid": str(user_id)}
        claims["exp"] = datetime.now(timezone.utc) + expires_in
        claims.update(extra_claims)
        return jwt.encode(claims, secret, algorithm=settings.jwt_algorithm)

    return _make


@pytest.fixture
def auth_headers(make_token) -> Callable[[int], Dict[str, str]]:
    def _headers(user_id: int) -> Dict[str, str]:
        return {"Authorization": f"Bearer {make_token(user_id)}"}

    return _headers


# ══════════════════════════════════════════════════════════════════════════
# HTTP client
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(seeded_db):
    """
    HTTPX AsyncClient talking to the app over ASGITransport, with every
    request's session drawn from the seeded in-memory database.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from blogapi.main import app

    async def override_get_db_session():
        async with seeded_db() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.clear()
