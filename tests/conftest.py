"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator
from pathlib import Path
from typing import Any
from uuid import UUID

# Disable rate limiting in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.pool import StaticPool

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from infrastructure.auth.jwt_provider import JWTTokenService
from infrastructure.auth.password import BcryptPasswordHasher
from infrastructure.database.models import Base


# Compile JSONB as JSON for SQLite (used in tests)
@compiles(JSONB, "sqlite")
def _compile_jsonb_sqlite(type_: Any, compiler: Any, **kw: Any) -> str:
    return "JSON"


# One shared in-memory database per test (StaticPool keeps a single connection)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

TEST_SECRET = "test-secret-key"


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh test database with all tables."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    # Enforce foreign keys the way Postgres does
    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory bound to the test engine."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
def token_service() -> JWTTokenService:
    """Token service with a known secret."""
    return JWTTokenService(
        secret_key=TEST_SECRET,
        algorithm="HS256",
        expire_seconds=3600,
    )


@pytest.fixture
def password_hasher() -> BcryptPasswordHasher:
    """Minimum bcrypt cost keeps the suite fast."""
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client against the default app (no overrides)."""
    from main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def app(
    session_factory: async_sessionmaker[AsyncSession],
    token_service: JWTTokenService,
    password_hasher: BcryptPasswordHasher,
) -> FastAPI:
    """
    Create an app wired to the in-memory database.

    Services are overridden to use the test session factory; the auth gate
    verifies real tokens issued by the test token service.
    """
    from api.dependencies.auth import get_token_service
    from api.v1.dependencies import get_post_service, get_profile_service, get_user_service
    from domain.services.post_service import PostService
    from domain.services.profile_service import ProfileService
    from domain.services.user_service import UserService
    from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
    from main import create_app

    app = create_app()

    def test_uow_factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    user_service = UserService(
        test_uow_factory,
        password_hasher=password_hasher,
        token_service=token_service,
    )
    profile_service = ProfileService(test_uow_factory)
    post_service = PostService(test_uow_factory)

    app.dependency_overrides[get_token_service] = lambda: token_service
    app.dependency_overrides[get_user_service] = lambda: user_service
    app.dependency_overrides[get_profile_service] = lambda: profile_service
    app.dependency_overrides[get_post_service] = lambda: post_service
    return app


@pytest.fixture
async def api_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Async client for the database-backed app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


async def register(
    client: AsyncClient,
    name: str = "Alice",
    email: str = "a@x.com",
    password: str = "secret1",
) -> dict[str, str]:
    """Register a user through the API and return auth headers for it."""
    response = await client.post(
        "/api/v1/users",
        json={"name": name, "email": email, "password": password},
    )
    assert response.status_code == 201, response.text
    return {"x-auth-token": response.json()["token"]}


async def current_user_id(client: AsyncClient, headers: dict[str, str]) -> UUID:
    response = await client.get("/api/v1/auth", headers=headers)
    assert response.status_code == 200, response.text
    return UUID(response.json()["id"])
