"""Core interfaces (ports) for dependency injection."""

from src.core.interfaces.history import IHistoryDbAccess
from src.core.interfaces.market_item_store import IMarketItemStore
from src.core.interfaces.sale_store import ISaleStore

__all__ = [
    # Storage interfaces
    "IMarketItemStore",
    "ISaleStore",
    # Aggregate access
    "IHistoryDbAccess",
]
