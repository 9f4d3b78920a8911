"""Asset position and buy/sell operation models."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field

from carteira.models.enums import OperationType


class AssetPosition(BaseModel):
    ticker: str
    asset_class: str
    quantity: Decimal = Field(ge=0)
    average_price: Decimal = Field(ge=0)
    current_price: Decimal | None = None
    target_percentage: Decimal | None = Field(default=None, le=100)
    name: str | None = None
    sector: str | None = None
    broker: str | None = None
    wallet_id: str | None = None

    @property
    def market_price(self) -> Decimal:
        # A missing or zero quote falls back to the acquisition price
        return self.current_price or self.average_price

    @property
    def current_value(self) -> Decimal:
        return self.quantity * self.market_price

    @property
    def invested_value(self) -> Decimal:
        return self.quantity * self.average_price

    @property
    def profit(self) -> Decimal:
        return self.current_value - self.invested_value

    @property
    def profit_percent(self) -> Decimal:
        if self.invested_value == 0:
            return Decimal("0")
        return self.profit / self.invested_value * 100

    @property
    def has_target(self) -> bool:
        return self.target_percentage is not None and self.target_percentage > 0


class Operation(BaseModel):
    asset_id: str
    operation_type: OperationType
    quantity: Decimal
    price: Decimal
    operation_date: date
    id: str | None = None
    ticker: str | None = None
    fees: Decimal = Decimal("0")
    notes: str | None = None

    @property
    def total_value(self) -> Decimal:
        return self.quantity * self.price

    @property
    def ref(self) -> str:
        """Short identifier used in error messages."""
        label = self.id or self.ticker or self.asset_id
        return f"{label} ({self.operation_type.value} {self.operation_date.isoformat()})"
