"""
Sale history aggregate access.

Joins the upload marker of a world/item pair with its most recent sales.
Each store call is its own round trip; nothing here spans a transaction, so
a failure between the marker write and the sales write leaves a marker
without sales. Readers tolerate that and see an empty sales list.
"""

import asyncio
from collections.abc import Iterable

from src.config import HistorySettings, bound_market_key, get_logger, get_settings
from src.core.entities.market import (
    History,
    MarketItem,
    Sale,
    unix_ms_to_datetime,
    utc_now,
)
from src.core.entities.query import HistoryManyQuery, HistoryQuery
from src.core.interfaces.history import IHistoryDbAccess
from src.core.interfaces.market_item_store import IMarketItemStore
from src.core.interfaces.sale_store import ISaleStore

logger = get_logger(__name__)


class HistoryDbAccess(IHistoryDbAccess):
    """
    Composes the market item store and the sale store.

    Pure orchestration: no storage logic, no state beyond the injected stores.
    """

    def __init__(
        self,
        market_item_store: IMarketItemStore,
        sale_store: ISaleStore,
        settings: HistorySettings | None = None,
    ) -> None:
        self._market_item_store = market_item_store
        self._sale_store = sale_store
        self._settings = settings if settings is not None else get_settings().history

    async def create(self, document: History) -> None:
        """Insert the marker, then the sales, as two separate writes."""
        with bound_market_key(document.world_id, document.item_id):
            await self._market_item_store.insert(
                MarketItem(
                    world_id=document.world_id,
                    item_id=document.item_id,
                    last_upload_time=unix_ms_to_datetime(
                        document.last_upload_time_unix_milliseconds
                    ),
                )
            )
            await self._sale_store.insert_many(document.sales)
            logger.info("history_created", sales=len(document.sales))

    async def retrieve(self, query: HistoryQuery) -> History | None:
        with bound_market_key(query.world_id, query.item_id):
            market_item = await self._market_item_store.retrieve(
                query.world_id, query.item_id
            )
            if market_item is None:
                logger.debug("history_not_found")
                return None

            sales = await self._sale_store.retrieve_by_sale_time(
                query.world_id, query.item_id, self._resolve_count(query.count)
            )
            logger.debug("history_retrieved", sales=len(sales))
            return History.from_market_item(market_item, sales)

    async def retrieve_many(self, query: HistoryManyQuery) -> list[History]:
        """
        Get one History per existing marker in world_ids x item_ids.

        Keys without a marker are left out. Results keep the order the
        market item store returned the markers in.
        """
        market_item_query = query.market_item_query()
        candidate_keys = set(market_item_query.keys())

        market_items = [
            mi
            for mi in await self._market_item_store.retrieve_many(market_item_query)
            if mi.key in candidate_keys
        ]
        if not market_items:
            return []

        count = self._resolve_count(query.count)

        async def fetch_sales(market_item: MarketItem) -> list[Sale]:
            return await self._sale_store.retrieve_by_sale_time(
                market_item.world_id, market_item.item_id, count
            )

        if self._settings.parallel_sales_fetch:
            tasks = [asyncio.ensure_future(fetch_sales(mi)) for mi in market_items]
            try:
                sales_per_item = await asyncio.gather(*tasks)
            except BaseException:
                # No fetch may outlive the call
                for task in tasks:
                    task.cancel()
                await asyncio.gather(*tasks, return_exceptions=True)
                raise
        else:
            sales_per_item = [await fetch_sales(mi) for mi in market_items]

        histories = [
            History.from_market_item(mi, sales)
            for mi, sales in zip(market_items, sales_per_item, strict=True)
        ]
        logger.debug(
            "history_many_retrieved",
            requested=len(candidate_keys),
            found=len(histories),
        )
        return histories

    async def insert_sales(self, sales: Iterable[Sale], query: HistoryQuery) -> None:
        """
        Refresh the marker to now, then append the sales.

        The marker goes through the store's upsert, so repeated appends keep
        a single marker row per world/item pair.
        """
        sales = list(sales)
        with bound_market_key(query.world_id, query.item_id):
            await self._market_item_store.update(
                MarketItem(
                    world_id=query.world_id,
                    item_id=query.item_id,
                    last_upload_time=utc_now(),
                )
            )
            await self._sale_store.insert_many(sales)
            logger.info("sales_appended", sales=len(sales))

    def _resolve_count(self, count: int | None) -> int:
        if count is None:
            return self._settings.default_sale_count
        return count
