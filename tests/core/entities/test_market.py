"""Tests for market entities and time helpers."""

from datetime import UTC, datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from src.core.entities.market import (
    History,
    MarketItem,
    Sale,
    datetime_to_unix_ms,
    to_utc_millis,
    unix_ms_to_datetime,
)
from src.core.entities.query import HistoryManyQuery, HistoryQuery, MarketItemManyQuery


class TestTimeHelpers:
    def test_unix_ms_to_datetime(self, base_time, base_time_ms):
        assert unix_ms_to_datetime(base_time_ms) == base_time

    def test_unix_ms_to_datetime_is_utc(self, base_time_ms):
        assert unix_ms_to_datetime(base_time_ms).tzinfo == UTC

    def test_round_trip_keeps_milliseconds(self):
        for ms in (0, 1, 999, 1_700_000_000_123, 1_700_000_000_999):
            assert datetime_to_unix_ms(unix_ms_to_datetime(ms)) == ms

    def test_naive_datetime_treated_as_utc(self, base_time_ms):
        naive = datetime(2023, 11, 14, 22, 13, 20)
        assert datetime_to_unix_ms(naive) == base_time_ms

    def test_offset_datetime_converted_to_utc(self, base_time):
        plus_two = base_time.astimezone(timezone(timedelta(hours=2)))
        assert to_utc_millis(plus_two) == base_time
        assert to_utc_millis(plus_two).tzinfo == UTC

    def test_microseconds_truncated(self):
        value = datetime(2024, 1, 1, 12, 0, 0, 123987, tzinfo=UTC)
        assert to_utc_millis(value).microsecond == 123000


class TestMarketItem:
    def test_upload_time_normalized(self):
        item = MarketItem(
            world_id=1, item_id=2, last_upload_time=datetime(2024, 1, 1, 0, 0, 0, 500)
        )
        assert item.last_upload_time == datetime(2024, 1, 1, tzinfo=UTC)

    def test_key(self, base_time):
        item = MarketItem(world_id=73, item_id=5333, last_upload_time=base_time)
        assert item.key == (73, 5333)

    def test_negative_ids_rejected(self, base_time):
        with pytest.raises(ValidationError):
            MarketItem(world_id=-1, item_id=2, last_upload_time=base_time)


class TestSale:
    def test_id_generated(self, make_sale):
        assert make_sale().id != make_sale().id

    def test_total(self, make_sale):
        assert make_sale(price_per_unit=250, quantity=4).total == 1000

    def test_total_without_quantity(self, make_sale):
        assert make_sale(quantity=None).total == 0

    def test_defaults(self, make_sale):
        sale = make_sale()
        assert sale.hq is False
        assert sale.buyer_name is None
        assert sale.on_mannequin is None
        assert sale.uploader_id_hash is None


class TestHistory:
    def test_from_market_item(self, base_time, base_time_ms, make_sale):
        item = MarketItem(world_id=1, item_id=100, last_upload_time=base_time)
        sales = [make_sale()]

        history = History.from_market_item(item, sales)

        assert history.world_id == 1
        assert history.item_id == 100
        assert history.last_upload_time_unix_milliseconds == base_time_ms
        assert history.sales == sales
        assert history.sales is not sales

    def test_last_upload_time(self, base_time, base_time_ms):
        history = History(
            world_id=1, item_id=100, last_upload_time_unix_milliseconds=base_time_ms
        )
        assert history.last_upload_time == base_time
        assert history.sales == []


class TestQueries:
    def test_history_query_default_count(self):
        assert HistoryQuery(world_id=1, item_id=2).count is None

    def test_history_query_negative_count_rejected(self):
        with pytest.raises(ValidationError):
            HistoryQuery(world_id=1, item_id=2, count=-1)

    def test_market_item_many_query_keys(self):
        query = MarketItemManyQuery(world_ids={2, 1}, item_ids={10, 20})
        assert query.keys() == [(1, 10), (1, 20), (2, 10), (2, 20)]

    def test_market_item_many_query_empty(self):
        assert MarketItemManyQuery(world_ids={1}, item_ids=set()).is_empty
        assert not MarketItemManyQuery(world_ids={1}, item_ids={2}).is_empty

    def test_history_many_query_to_market_item_query(self):
        query = HistoryManyQuery(world_ids={1, 2}, item_ids={3}, count=5)
        mi_query = query.market_item_query()
        assert mi_query.world_ids == {1, 2}
        assert mi_query.item_ids == {3}
