"""Abstract interface for market sale storage."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import datetime

from src.core.entities.market import Sale


class ISaleStore(ABC):
    """Interface for sale record persistence."""

    @abstractmethod
    async def insert_many(self, sales: Iterable[Sale]) -> None:
        """Insert a batch of sales."""
        pass

    @abstractmethod
    async def retrieve_by_sale_time(
        self,
        world_id: int,
        item_id: int,
        count: int,
        from_time: datetime | None = None,
    ) -> list[Sale]:
        """Get up to count sales for a world/item pair, most recent first.

        When from_time is given, only sales at or after it are returned.
        """
        pass
