"""Storage infrastructure implementations."""

from src.infrastructure.storage.sqlite import (
    SQLiteMarketItemStore,
    SQLiteSaleStore,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)

__all__ = [
    # SQLite stores
    "SQLiteMarketItemStore",
    "SQLiteSaleStore",
    # Connection pool
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
]
