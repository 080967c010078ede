"""
Abstract interface for market item (upload marker) storage.

One marker per world/item pair.
"""

from abc import ABC, abstractmethod

from src.core.entities.market import MarketItem
from src.core.entities.query import MarketItemManyQuery


class IMarketItemStore(ABC):
    """Interface for market item persistence."""

    @abstractmethod
    async def insert(self, market_item: MarketItem) -> None:
        """Insert a new marker row."""
        pass

    @abstractmethod
    async def update(self, market_item: MarketItem) -> None:
        """Insert the marker, or overwrite its upload time if it already exists."""
        pass

    @abstractmethod
    async def retrieve(self, world_id: int, item_id: int) -> MarketItem | None:
        """Get the marker for a world/item pair, or None."""
        pass

    @abstractmethod
    async def retrieve_many(self, query: MarketItemManyQuery) -> list[MarketItem]:
        """Get every existing marker among the query's world/item combinations."""
        pass
