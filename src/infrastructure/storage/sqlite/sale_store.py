"""SQLite implementation of market sale storage."""

from collections.abc import Iterable
from datetime import datetime
from typing import Any
from uuid import UUID

import aiosqlite

from src.config import get_logger
from src.core.entities.market import Sale, to_utc_millis
from src.core.exceptions import ValidationError
from src.core.interfaces.sale_store import ISaleStore
from src.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from src.infrastructure.storage.sqlite.errors import storage_errors
from src.infrastructure.storage.sqlite.market_item_store import format_timestamp

logger = get_logger(__name__)


class SQLiteSaleStore(ISaleStore):
    """SQLite implementation of the sale table."""

    async def insert_many(self, sales: Iterable[Sale]) -> None:
        """Insert all sales in one transaction. An empty batch is a no-op."""
        rows = [self._sale_to_params(s) for s in sales]
        if not rows:
            return

        with storage_errors("sale.insert_many"):
            async with get_transaction() as conn:
                await conn.executemany(
                    """
                    INSERT INTO sale (
                        id, world_id, item_id, hq, unit_price, quantity,
                        buyer_name, on_mannequin, sale_time, uploader_id
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    rows,
                )

        logger.debug("sales_inserted", count=len(rows))

    async def retrieve_by_sale_time(
        self,
        world_id: int,
        item_id: int,
        count: int,
        from_time: datetime | None = None,
    ) -> list[Sale]:
        if count < 0:
            raise ValidationError("count", "must not be negative", count)
        if count == 0:
            return []

        conditions = ["world_id = ?", "item_id = ?"]
        params: list[Any] = [world_id, item_id]
        if from_time is not None:
            conditions.append("sale_time >= ?")
            params.append(format_timestamp(to_utc_millis(from_time)))
        params.append(count)

        with storage_errors("sale.retrieve_by_sale_time"):
            async with get_connection() as conn:
                cursor = await conn.execute(
                    f"""
                    SELECT * FROM sale
                    WHERE {" AND ".join(conditions)}
                    ORDER BY sale_time DESC
                    LIMIT ?
                    """,
                    params,
                )
                rows = await cursor.fetchall()

        return [self._row_to_sale(r) for r in rows]

    @staticmethod
    def _sale_to_params(sale: Sale) -> tuple:
        return (
            str(sale.id),
            sale.world_id,
            sale.item_id,
            int(sale.hq),
            sale.price_per_unit,
            sale.quantity,
            sale.buyer_name,
            None if sale.on_mannequin is None else int(sale.on_mannequin),
            format_timestamp(sale.sale_time),
            sale.uploader_id_hash,
        )

    @staticmethod
    def _row_to_sale(row: aiosqlite.Row) -> Sale:
        on_mannequin = row["on_mannequin"]
        return Sale(
            id=UUID(row["id"]),
            world_id=row["world_id"],
            item_id=row["item_id"],
            hq=bool(row["hq"]),
            price_per_unit=row["unit_price"],
            quantity=row["quantity"],
            buyer_name=row["buyer_name"],
            on_mannequin=None if on_mannequin is None else bool(on_mannequin),
            sale_time=datetime.fromisoformat(row["sale_time"]),
            uploader_id_hash=row["uploader_id"],
        )
