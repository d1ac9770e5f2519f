from typing import AsyncGenerator, Callable

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import sheetshare.models  # noqa: F401
from sheetshare.infra.database.connection import build_engine
from tests.fixtures.auth import admin_headers, agent_headers  # noqa: F401
from tests.fixtures.client import async_client  # noqa: F401

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """A fresh in-memory database per test."""
    engine = build_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSession(db_engine, expire_on_commit=False) as session:
        yield session


@pytest.fixture
def override_get_session(db_session: AsyncSession) -> Callable[[], AsyncGenerator[AsyncSession, None]]:
    """Route request handlers to the test's session."""

    async def _override() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    return _override
