"""Price cache models."""

from datetime import datetime, timezone
from decimal import Decimal

from pydantic import BaseModel, field_validator


class PriceCacheEntry(BaseModel):
    ticker: str
    price: Decimal
    currency: str = "BRL"
    source: str = "brapi"
    last_updated: datetime

    @field_validator("last_updated")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # Naive timestamps are UTC, same as rows read back from SQLite
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class PriceQuote(BaseModel):
    """One quote as returned by the upstream provider."""

    ticker: str
    price: Decimal | None = None
    currency: str = "BRL"


class PriceResult(BaseModel):
    ticker: str
    price: Decimal
    currency: str
    cached: bool
