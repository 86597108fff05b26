"""Test fixtures: in-memory async DB, FastAPI test client and auth helpers.

Every test gets a fresh in-memory SQLite database; the `get_db_session`
dependency is overridden so routes and direct service calls share it.
"""

import os

# settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")
os.environ.setdefault("OTP_TOKEN_SECRET", "test-otp-secret")
os.environ.setdefault("ACCESS_TOKEN_SECRET", "test-access-secret")
os.environ.setdefault("OTP_EXPOSE_CODE", "true")
os.environ.setdefault("OTP_SEND_EMAIL", "false")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.api import deps
from app.core.security import TokenService
from app.db import models  # noqa: F401
from app.db.base import Base
from app.main import app
from app.services.auth import AuthService
from tests.helpers import make_request, register_and_verify


@pytest.fixture
async def test_engine():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def test_db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    """FastAPI test client with the DB dependency overridden."""

    async def override_get_db_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[deps.get_db_session] = override_get_db_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def auth_service_factory(test_db):
    """Build an AuthService on the test session with an optional OTP cookie."""

    def _factory(cookies: dict[str, str] | None = None) -> AuthService:
        return AuthService(session=test_db, request=make_request(cookies), token_service=TokenService())

    return _factory


@pytest.fixture
async def access_token(client) -> str:
    return await register_and_verify(client)


@pytest.fixture
def auth_headers(access_token) -> dict[str, str]:
    return {"Authorization": f"Bearer {access_token}"}
