"""Abstract interface for the sale history aggregate."""

from abc import ABC, abstractmethod
from collections.abc import Iterable

from src.core.entities.market import History, Sale
from src.core.entities.query import HistoryManyQuery, HistoryQuery


class IHistoryDbAccess(ABC):
    """
    Reads and writes History aggregates.

    A History is a market item marker joined with its most recent sales.
    """

    @abstractmethod
    async def create(self, document: History) -> None:
        """Store the marker and the sales of a freshly built history."""
        pass

    @abstractmethod
    async def retrieve(self, query: HistoryQuery) -> History | None:
        """Get the history for one world/item pair, or None without a marker."""
        pass

    @abstractmethod
    async def retrieve_many(self, query: HistoryManyQuery) -> list[History]:
        """Get one history per existing marker among the query's combinations."""
        pass

    @abstractmethod
    async def insert_sales(self, sales: Iterable[Sale], query: HistoryQuery) -> None:
        """Append sales and refresh the marker's upload time to now."""
        pass
