"""Async database engine/session management."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from cityledger.config import get_settings


class DatabaseManager:
    """Lifecycle manager for SQLAlchemy async engine."""

    def __init__(self, database_url: Optional[str] = None) -> None:
        settings = get_settings()
        url = database_url or settings.database_url
        engine_kwargs = {"echo": settings.debug}
        if not url.startswith("sqlite"):
            engine_kwargs["pool_pre_ping"] = True
        self._engine = create_async_engine(url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    async def dispose(self) -> None:
        """Dispose engine cleanly on shutdown."""

        await self._engine.dispose()

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        """Expose the configured sessionmaker for services and scripts."""

        return self._session_factory


db_manager = DatabaseManager()


async def get_db_session() -> AsyncIterator[AsyncSession]:
    """FastAPI dependency that yields an async DB session."""

    async with db_manager.session_factory() as session:
        yield session
