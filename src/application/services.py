"""
Service factory functions for dependency injection.

Wires the SQLite store implementations into the core services.
"""

from typing import TYPE_CHECKING

from src.core.services import HistoryDbAccess

if TYPE_CHECKING:
    from src.core.interfaces import IMarketItemStore, ISaleStore


# Singleton service instances
_history_db_access: HistoryDbAccess | None = None


async def get_history_db_access(
    market_item_store: "IMarketItemStore | None" = None,
    sale_store: "ISaleStore | None" = None,
) -> HistoryDbAccess:
    """
    Get or create the HistoryDbAccess instance.

    Falls back to the SQLite stores for any store not provided. Passing a
    store always builds a fresh instance and leaves the singleton alone.

    Args:
        market_item_store: Optional market item store override
        sale_store: Optional sale store override

    Returns:
        Configured HistoryDbAccess
    """
    global _history_db_access

    overridden = market_item_store is not None or sale_store is not None
    if _history_db_access is not None and not overridden:
        return _history_db_access

    # Lazy import infrastructure to avoid circular imports
    from src.infrastructure.storage.sqlite import get_market_item_store, get_sale_store

    service = HistoryDbAccess(
        market_item_store=market_item_store or await get_market_item_store(),
        sale_store=sale_store or await get_sale_store(),
    )

    if not overridden:
        _history_db_access = service
    return service


def reset_services() -> None:
    """Reset all service singletons (for testing)."""
    global _history_db_access
    _history_db_access = None


__all__ = [
    "get_history_db_access",
    "reset_services",
]
