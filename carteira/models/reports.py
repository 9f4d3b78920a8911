"""Calculation output models."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from carteira.models.enums import MonthlyTaxStatus, RebalanceStatus


class RebalanceItem(BaseModel):
    ticker: str
    asset_class: str
    current_value: Decimal
    current_percentage: Decimal
    target_percentage: Decimal
    ideal_value: Decimal
    gap: Decimal
    gap_percentage: Decimal
    suggested_amount: Decimal = Decimal("0")


class RebalancePlan(BaseModel):
    contribution: Decimal
    total_portfolio: Decimal
    future_total: Decimal
    status: RebalanceStatus
    items: list[RebalanceItem]

    @property
    def allocated_total(self) -> Decimal:
        return sum((item.suggested_amount for item in self.items), Decimal("0"))

    @property
    def unallocated(self) -> Decimal:
        return self.contribution - self.allocated_total


class MonthlyTaxRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int
    month: int
    label: str
    total_sales: Decimal = Decimal("0")
    total_profit: Decimal = Decimal("0")
    total_loss: Decimal = Decimal("0")
    exempt_sales: Decimal = Decimal("0")
    tax_due: Decimal = Decimal("0")
    sale_count: int = 0

    @property
    def net_profit(self) -> Decimal:
        return self.total_profit - self.total_loss

    @property
    def status(self) -> MonthlyTaxStatus:
        if self.sale_count == 0:
            return MonthlyTaxStatus.NO_ACTIVITY
        if self.exempt_sales > 0:
            return MonthlyTaxStatus.EXEMPT
        if self.tax_due > 0:
            return MonthlyTaxStatus.TAX_DUE
        return MonthlyTaxStatus.NO_TAX


class TaxReport(BaseModel):
    year: int
    months: list[MonthlyTaxRecord]

    @property
    def total_tax_due(self) -> Decimal:
        return sum((m.tax_due for m in self.months), Decimal("0"))

    @property
    def total_profit(self) -> Decimal:
        return sum((m.total_profit for m in self.months), Decimal("0"))

    @property
    def total_loss(self) -> Decimal:
        return sum((m.total_loss for m in self.months), Decimal("0"))

    @property
    def net_result(self) -> Decimal:
        return self.total_profit - self.total_loss


class ClassAllocation(BaseModel):
    asset_class: str
    value: Decimal
    percentage: Decimal


class PortfolioSummary(BaseModel):
    total: Decimal
    invested: Decimal
    profit: Decimal
    profit_percent: Decimal
    by_class: list[ClassAllocation]
