from __future__ import annotations

import os
from pathlib import Path

# The module-level engine is built at import time; keep it off PostgreSQL.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from cityledger.api.deps import get_session
from cityledger.api.errors import register_exception_handlers
from cityledger.api.router import api_router
from cityledger.config import get_settings
from cityledger.database.base import Base


@pytest.fixture(autouse=True)
def _settings_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Set deterministic test env and reset cached Settings."""

    monkeypatch.setenv("DEBUG", "false")
    monkeypatch.setenv("TIMEZONE", "UTC")
    monkeypatch.setenv("DEFAULT_USD_TO_UZS", "12000")
    monkeypatch.setenv("DEFAULT_USD_TO_RUB", "100")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest_asyncio.fixture
async def session_factory(tmp_path: Path) -> async_sessionmaker[AsyncSession]:
    """Provide isolated sqlite session factory per test."""

    db_path = tmp_path / "test.db"
    engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}")
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    try:
        yield factory
    finally:
        await engine.dispose()


@pytest.fixture
def api_app(session_factory: async_sessionmaker[AsyncSession]) -> FastAPI:
    """Build API app with test DB dependency override."""

    app = FastAPI()
    app.include_router(api_router, prefix="/api")
    register_exception_handlers(app)

    async def override_get_session() -> AsyncSession:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    return app


@pytest_asyncio.fixture
async def api_client(api_app: FastAPI) -> httpx.AsyncClient:
    """ASGI client for API integration tests."""

    transport = httpx.ASGITransport(app=api_app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
