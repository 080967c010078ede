"""Lookup keys for markers and history."""

from itertools import product

from pydantic import BaseModel, Field


class MarketItemManyQuery(BaseModel):
    """Every world/item combination of the two id sets."""

    world_ids: set[int] = Field(default_factory=set)
    item_ids: set[int] = Field(default_factory=set)

    def keys(self) -> list[tuple[int, int]]:
        return list(product(sorted(self.world_ids), sorted(self.item_ids)))

    @property
    def is_empty(self) -> bool:
        return not self.world_ids or not self.item_ids


class HistoryQuery(BaseModel):
    world_id: int = Field(ge=0)
    item_id: int = Field(ge=0)
    count: int | None = Field(default=None, ge=0)  # None -> configured default


class HistoryManyQuery(BaseModel):
    world_ids: set[int] = Field(default_factory=set)
    item_ids: set[int] = Field(default_factory=set)
    count: int | None = Field(default=None, ge=0)

    def market_item_query(self) -> MarketItemManyQuery:
        return MarketItemManyQuery(world_ids=self.world_ids, item_ids=self.item_ids)
