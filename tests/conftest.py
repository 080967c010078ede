"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

import src.infrastructure.storage.sqlite.connection as conn_module
from src.config import HistorySettings
from src.core.entities import Sale
from src.infrastructure.storage.sqlite.connection import ConnectionPool, close_pool
from src.infrastructure.storage.sqlite.migrations import initialize_database

# 2023-11-14T22:13:20Z
BASE_TIME_MS = 1_700_000_000_000
BASE_TIME = datetime(2023, 11, 14, 22, 13, 20, tzinfo=UTC)


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
async def migrated_db(temp_db_path: Path) -> Path:
    """Temporary database with the market history schema applied."""
    results = await initialize_database(temp_db_path)
    assert all(r.success for r in results)
    return temp_db_path


@pytest.fixture
async def db_pool(migrated_db: Path) -> AsyncGenerator[ConnectionPool, None]:
    """Install a pool on the migrated database as the global pool."""
    pool = ConnectionPool(migrated_db, pool_size=2, busy_timeout=5000)
    await pool.initialize()
    conn_module._pool = pool
    yield pool
    await close_pool()


@pytest.fixture
def history_settings() -> HistorySettings:
    return HistorySettings(default_sale_count=1000)


@pytest.fixture
def make_sale():
    """Build a Sale for world/item at BASE_TIME + offset seconds."""

    def _make(
        world_id: int = 1,
        item_id: int = 100,
        offset_seconds: int = 0,
        price_per_unit: int = 1000,
        quantity: int | None = 1,
        **kwargs,
    ) -> Sale:
        return Sale(
            world_id=world_id,
            item_id=item_id,
            price_per_unit=price_per_unit,
            quantity=quantity,
            sale_time=BASE_TIME + timedelta(seconds=offset_seconds),
            **kwargs,
        )

    return _make


@pytest.fixture
def base_time() -> datetime:
    return BASE_TIME


@pytest.fixture
def base_time_ms() -> int:
    return BASE_TIME_MS
