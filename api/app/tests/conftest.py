"""Shared pytest fixtures for API tests and database isolation."""

from __future__ import annotations

import uuid

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.api.deps import get_db, get_llm_client
from app.core.config import settings
from app.db.base import Base
from app.db.session import build_engine
from app.main import app
from app.tests.utils import StubLanguageModel


@pytest_asyncio.fixture()
async def session(tmp_path) -> AsyncSession:
    database_url = settings.test_database_url or f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"
    url = make_url(database_url)
    schema_name: str | None = None
    engine = build_engine(database_url)
    if url.drivername.startswith("postgresql"):
        # Isolate each test run in its own schema for parallel-friendly cleanup.
        schema_name = f"test_{uuid.uuid4().hex}"
        engine = engine.execution_options(schema_translate_map={None: schema_name})
    async with engine.begin() as conn:
        if schema_name:
            await conn.exec_driver_sql(f'CREATE SCHEMA IF NOT EXISTS "{schema_name}"')
        await conn.run_sync(Base.metadata.create_all)
    TestingSession = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
    try:
        async with TestingSession() as session:
            yield session
    finally:
        async with engine.begin() as conn:
            if schema_name:
                await conn.exec_driver_sql(f'DROP SCHEMA IF EXISTS "{schema_name}" CASCADE')
            else:
                await conn.run_sync(Base.metadata.drop_all)
        await engine.dispose()


@pytest.fixture()
def llm_stub() -> StubLanguageModel:
    return StubLanguageModel()


@pytest_asyncio.fixture()
async def client(session: AsyncSession, llm_stub: StubLanguageModel) -> AsyncClient:
    async def _get_test_db():
        yield session

    app.dependency_overrides[get_db] = _get_test_db
    app.dependency_overrides[get_llm_client] = lambda: llm_stub
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as async_client:
        yield async_client
    app.dependency_overrides.pop(get_db, None)
    app.dependency_overrides.pop(get_llm_client, None)
