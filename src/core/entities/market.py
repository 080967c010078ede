"""Market board domain entities: upload markers, sales and the history aggregate."""

from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, field_validator

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_ONE_MS = timedelta(milliseconds=1)


def to_utc_millis(value: datetime) -> datetime:
    """Normalize to an aware UTC datetime truncated to millisecond precision.

    Naive datetimes are taken to already be in UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    else:
        value = value.astimezone(UTC)
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def unix_ms_to_datetime(unix_ms: int) -> datetime:
    """Convert milliseconds since the Unix epoch to a UTC datetime."""
    return EPOCH + timedelta(milliseconds=unix_ms)


def datetime_to_unix_ms(value: datetime) -> int:
    """Convert a datetime to milliseconds since the Unix epoch."""
    return (to_utc_millis(value) - EPOCH) // _ONE_MS


def utc_now() -> datetime:
    return to_utc_millis(datetime.now(UTC))


class MarketItem(BaseModel):
    """Marks the last time market data was uploaded for a world/item pair."""

    world_id: int = Field(ge=0)
    item_id: int = Field(ge=0)
    last_upload_time: datetime

    @field_validator("last_upload_time")
    @classmethod
    def normalize_upload_time(cls, v: datetime) -> datetime:
        return to_utc_millis(v)

    @property
    def key(self) -> tuple[int, int]:
        return (self.world_id, self.item_id)


class Sale(BaseModel):
    """A single completed market board transaction."""

    id: UUID = Field(default_factory=uuid4)
    world_id: int = Field(ge=0)
    item_id: int = Field(ge=0)
    hq: bool = False
    price_per_unit: int = Field(ge=0)
    quantity: int | None = Field(default=None, ge=0)
    buyer_name: str | None = None
    on_mannequin: bool | None = None
    sale_time: datetime
    uploader_id_hash: str | None = None

    @field_validator("sale_time")
    @classmethod
    def normalize_sale_time(cls, v: datetime) -> datetime:
        return to_utc_millis(v)

    @property
    def total(self) -> int:
        """Total gil paid (price_per_unit * quantity)."""
        return self.price_per_unit * (self.quantity or 0)


class History(BaseModel):
    """
    A marker joined with its most recent sales.

    Built on read, never persisted as a unit.
    """

    world_id: int = Field(ge=0)
    item_id: int = Field(ge=0)
    last_upload_time_unix_milliseconds: int = Field(ge=0)
    sales: list[Sale] = Field(default_factory=list)

    @property
    def last_upload_time(self) -> datetime:
        return unix_ms_to_datetime(self.last_upload_time_unix_milliseconds)

    @classmethod
    def from_market_item(cls, market_item: MarketItem, sales: list[Sale]) -> "History":
        return cls(
            world_id=market_item.world_id,
            item_id=market_item.item_id,
            last_upload_time_unix_milliseconds=datetime_to_unix_ms(
                market_item.last_upload_time
            ),
            sales=list(sales),
        )
