"""Core domain entities."""

from src.core.entities.market import (
    History,
    MarketItem,
    Sale,
    datetime_to_unix_ms,
    to_utc_millis,
    unix_ms_to_datetime,
    utc_now,
)
from src.core.entities.query import (
    HistoryManyQuery,
    HistoryQuery,
    MarketItemManyQuery,
)

__all__ = [
    # Market entities
    "MarketItem",
    "Sale",
    "History",
    # Queries
    "MarketItemManyQuery",
    "HistoryQuery",
    "HistoryManyQuery",
    # Time helpers
    "to_utc_millis",
    "unix_ms_to_datetime",
    "datetime_to_unix_ms",
    "utc_now",
]
