"""Shared fixtures for integration tests.

Each test gets a fresh application and a fresh in-memory SQLite database;
requests reach it through the real ``get_db`` dependency.
"""

from collections.abc import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from api_boilerplate.api.main import create_app
from api_boilerplate.core.config import get_settings
from api_boilerplate.core.context import RequestContext
from api_boilerplate.infrastructure.database.session import (
    create_database_engine,
    create_schema,
)

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(autouse=True)
def clear_settings_cache() -> None:
    """Rebuild settings from the current environment for every test."""
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def clean_request_context() -> None:
    """Start every test without request identifiers."""
    RequestContext.clear()


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine]:
    """Create an in-memory database with every table."""
    engine = create_database_engine(TEST_DATABASE_URL)
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test database."""
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def app(
    session_factory: async_sessionmaker[AsyncSession],
    monkeypatch: pytest.MonkeyPatch,
) -> FastAPI:
    """Application whose requests use the test database.

    Only the session factory is swapped, so requests still go through
    ``get_db`` and its commit/rollback handling.
    """
    monkeypatch.setattr(
        "api_boilerplate.infrastructure.database.session.get_session_factory",
        lambda: session_factory,
    )
    return create_app()


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """HTTP client bound to the application without a network."""
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
