"""SQLite implementation of market item (upload marker) storage."""

from datetime import datetime

import aiosqlite

from src.config import get_logger
from src.core.entities.market import MarketItem
from src.core.entities.query import MarketItemManyQuery
from src.core.exceptions import DuplicateMarketItemError
from src.core.interfaces.market_item_store import IMarketItemStore
from src.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from src.infrastructure.storage.sqlite.errors import storage_errors

logger = get_logger(__name__)


def format_timestamp(value: datetime) -> str:
    """UTC ISO-8601 text with millisecond precision, sortable as a string."""
    return value.isoformat(timespec="milliseconds")


class SQLiteMarketItemStore(IMarketItemStore):
    """SQLite implementation of the market_item table."""

    async def insert(self, market_item: MarketItem) -> None:
        """Insert a new marker row. A second row for the same key is rejected."""
        with storage_errors("market_item.insert"):
            try:
                async with get_transaction() as conn:
                    await conn.execute(
                        "INSERT INTO market_item (world_id, item_id, updated) VALUES (?, ?, ?)",
                        (
                            market_item.world_id,
                            market_item.item_id,
                            format_timestamp(market_item.last_upload_time),
                        ),
                    )
            except aiosqlite.IntegrityError as e:
                raise DuplicateMarketItemError(
                    market_item.world_id, market_item.item_id
                ) from e

        logger.debug(
            "market_item_inserted",
            world_id=market_item.world_id,
            item_id=market_item.item_id,
        )

    async def update(self, market_item: MarketItem) -> None:
        """
        Upsert the marker in a single statement.

        There is no separate lookup, so two writers racing on the same key
        cannot lose an update; the last statement to commit wins.
        """
        with storage_errors("market_item.update"):
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    INSERT INTO market_item (world_id, item_id, updated)
                    VALUES (?, ?, ?)
                    ON CONFLICT (world_id, item_id) DO UPDATE SET updated = excluded.updated
                    """,
                    (
                        market_item.world_id,
                        market_item.item_id,
                        format_timestamp(market_item.last_upload_time),
                    ),
                )

        logger.debug(
            "market_item_updated",
            world_id=market_item.world_id,
            item_id=market_item.item_id,
        )

    async def retrieve(self, world_id: int, item_id: int) -> MarketItem | None:
        with storage_errors("market_item.retrieve"):
            async with get_connection() as conn:
                cursor = await conn.execute(
                    """
                    SELECT world_id, item_id, updated FROM market_item
                    WHERE world_id = ? AND item_id = ?
                    """,
                    (world_id, item_id),
                )
                row = await cursor.fetchone()

        if row is None:
            return None
        return self._row_to_market_item(row)

    async def retrieve_many(self, query: MarketItemManyQuery) -> list[MarketItem]:
        """Get all markers in world_ids x item_ids, ordered by world then item."""
        if query.is_empty:
            return []

        world_ids = sorted(query.world_ids)
        item_ids = sorted(query.item_ids)
        world_marks = ", ".join("?" for _ in world_ids)
        item_marks = ", ".join("?" for _ in item_ids)

        with storage_errors("market_item.retrieve_many"):
            async with get_connection() as conn:
                cursor = await conn.execute(
                    f"""
                    SELECT world_id, item_id, updated FROM market_item
                    WHERE world_id IN ({world_marks}) AND item_id IN ({item_marks})
                    ORDER BY world_id, item_id
                    """,
                    [*world_ids, *item_ids],
                )
                rows = await cursor.fetchall()

        return [self._row_to_market_item(r) for r in rows]

    @staticmethod
    def _row_to_market_item(row: aiosqlite.Row) -> MarketItem:
        return MarketItem(
            world_id=row["world_id"],
            item_id=row["item_id"],
            last_upload_time=datetime.fromisoformat(row["updated"]),
        )
