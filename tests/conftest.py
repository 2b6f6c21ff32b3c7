"""Pytest configuration and fixtures for the portfolio API.

Settings come from the environment set below, before any portfolio import
resolves get_settings(). Store and API tests run against a fresh in-memory
SQLite database (aiosqlite) per test; the cache is the in-process
MemoryCache.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("REDIS_ENABLED", "false")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("TELEMETRY_ENABLED", "false")

from collections.abc import AsyncIterator, Awaitable, Callable  # noqa: E402
from typing import Any  # noqa: E402

import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from portfolio.api.v1.dependencies import get_session_factory_dep  # noqa: E402
from portfolio.core.config import get_settings  # noqa: E402
from portfolio.infrastructure.cache.memory_cache import MemoryCache  # noqa: E402
from portfolio.infrastructure.persistence.database import Base, make_session_factory  # noqa: E402
from portfolio.infrastructure.persistence.models import User  # noqa: E402
from portfolio.infrastructure.security.jwt import create_access_token  # noqa: E402
from portfolio.infrastructure.security.password import get_password_hash  # noqa: E402

get_settings.cache_clear()

TEST_PASSWORD = "Passw0rdTest"

UserFactory = Callable[..., Awaitable[dict[str, Any]]]


@pytest.fixture
async def session_factory() -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    """Session factory bound to a fresh in-memory database with all tables."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield make_session_factory(engine)
    await engine.dispose()


@pytest.fixture
def cache() -> MemoryCache:
    return MemoryCache(default_ttl=300)


@pytest.fixture
def app(session_factory: async_sessionmaker[AsyncSession], cache: MemoryCache) -> FastAPI:
    """App wired to the test database and memory cache (lifespan not run)."""
    from portfolio.main import create_app

    application = create_app()
    application.dependency_overrides[get_session_factory_dep] = lambda: session_factory
    application.state.cache = cache
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def make_user(session_factory: async_sessionmaker[AsyncSession]) -> UserFactory:
    """Insert a user row; returns {id, email, headers} with a valid bearer token."""

    async def _make(email: str, role: str = "owner", name: str | None = None) -> dict[str, Any]:
        async with session_factory() as session:
            async with session.begin():
                user = User(
                    email=email,
                    name=name or email.split("@")[0],
                    role=role,
                    password_hash=get_password_hash(TEST_PASSWORD),
                )
                session.add(user)
                await session.flush()
                user_id = user.id
        token = create_access_token(user_id, {"email": email})
        return {
            "id": user_id,
            "email": email,
            "headers": {"Authorization": f"Bearer {token}"},
        }

    return _make


@pytest.fixture
async def alice(make_user: UserFactory) -> dict[str, Any]:
    return await make_user("alice@example.com")


@pytest.fixture
async def bob(make_user: UserFactory) -> dict[str, Any]:
    return await make_user("bob@example.com")


@pytest.fixture
async def admin(make_user: UserFactory) -> dict[str, Any]:
    return await make_user("admin@example.com", role="admin")
