"""SQLite storage implementations."""

from src.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)
from src.infrastructure.storage.sqlite.market_item_store import SQLiteMarketItemStore
from src.infrastructure.storage.sqlite.sale_store import SQLiteSaleStore

# Type aliases for convenience
MarketItemStore = SQLiteMarketItemStore
SaleStore = SQLiteSaleStore

# Singleton instances
_market_item_store: SQLiteMarketItemStore | None = None
_sale_store: SQLiteSaleStore | None = None


async def get_market_item_store() -> SQLiteMarketItemStore:
    """Get singleton market item store instance."""
    global _market_item_store
    if _market_item_store is None:
        _market_item_store = SQLiteMarketItemStore()
    return _market_item_store


async def get_sale_store() -> SQLiteSaleStore:
    """Get singleton sale store instance."""
    global _sale_store
    if _sale_store is None:
        _sale_store = SQLiteSaleStore()
    return _sale_store


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    # Store classes
    "SQLiteMarketItemStore",
    "SQLiteSaleStore",
    # Type aliases
    "MarketItemStore",
    "SaleStore",
    # Factory functions
    "get_market_item_store",
    "get_sale_store",
]
