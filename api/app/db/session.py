"""Async engine and session factory shared by the API and scripts."""

from __future__ import annotations

from typing import AsyncIterator

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from app.core.config import settings
from app.db.base import Base


def build_engine(database_url: str) -> AsyncEngine:
    """Create an async engine, enabling foreign keys on SQLite connections."""
    engine = create_async_engine(database_url, future=True)
    if make_url(database_url).drivername.startswith("sqlite"):

        @event.listens_for(engine.sync_engine, "connect")
        def _enable_sqlite_foreign_keys(dbapi_connection, _record) -> None:
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


engine = build_engine(settings.database_url)
async_session = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


async def get_session() -> AsyncIterator[AsyncSession]:
    async with async_session() as session:
        yield session


async def init_models(bind: AsyncEngine | None = None) -> None:
    """Create any missing tables; migrations remain the source of truth in production."""
    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
