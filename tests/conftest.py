"""Pytest configuration and fixtures."""

from typing import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from bridge_history.shared.database.connection import create_tables
from bridge_history.shared.models.schemas import BridgeBatchInfo
from bridge_history.storage.bridge_batch_repository import BridgeBatchRepository


@pytest.fixture
def test_database_url(tmp_path) -> str:
    """File-backed SQLite so write and read sessions use separate connections."""
    return f"sqlite+aiosqlite:///{tmp_path / 'bridge_history.db'}"


@pytest.fixture
async def test_engine(test_database_url):
    """Create test database engine with the schema in place."""
    engine = create_async_engine(test_database_url, echo=False)
    await create_tables(engine)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker:
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_tx(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Caller-owned session used as the write transaction."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def repository(session_factory) -> BridgeBatchRepository:
    return BridgeBatchRepository(session_factory)


def _make_batch(batch_index: int, start: int, end: int, height: int = None) -> BridgeBatchInfo:
    return BridgeBatchInfo(
        batch_index=batch_index,
        batch_hash="0x" + f"{batch_index:064x}",
        height=height if height is not None else end + 10,
        start_block_number=start,
        end_block_number=end,
    )


@pytest.fixture
def make_batch():
    """Build a batch record with a hash derived from its index."""
    return _make_batch
