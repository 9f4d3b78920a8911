"""Monthly capital-gains engine with a running average cost.

Replays a year of buy/sell operations in date order. Buys move the asset's
running average price; sells realise profit or loss against it. Each month is
settled on its own: sales below the exemption threshold owe nothing, otherwise
net monthly profit is taxed at a flat rate.

The running average is the unweighted mean of the previous average and the new
buy price, ``(avg + price) / 2``. It ignores buy quantities and will drift from
a quantity-weighted cost basis when lot sizes differ. Changing it changes the
tax figures users see, so it stays until that is a product decision.
"""

import logging
from datetime import date
from decimal import Decimal
from functools import reduce

from carteira.engines.tax_rules import EXEMPTION_THRESHOLD, TAX_RATE, month_label
from carteira.exceptions import InvalidOperationError
from carteira.models.enums import OperationType
from carteira.models.portfolio import Operation
from carteira.models.reports import MonthlyTaxRecord, TaxReport

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

# (monthly records keyed by month number, running average per asset)
_FoldState = tuple[dict[int, MonthlyTaxRecord], dict[str, Decimal]]


class TaxLotEngine:
    """Computes realised gains and tax due per calendar month."""

    def __init__(
        self,
        exemption_threshold: Decimal = EXEMPTION_THRESHOLD,
        tax_rate: Decimal = TAX_RATE,
    ):
        self.exemption_threshold = exemption_threshold
        self.tax_rate = tax_rate

    def compute_monthly_tax(self, operations: list[Operation], year: int) -> list[MonthlyTaxRecord]:
        """Return twelve monthly records (January first) for ``year``."""
        ordered = self._year_operations(operations, year)
        initial: _FoldState = (
            {m: MonthlyTaxRecord(year=year, month=m, label=month_label(year, m)) for m in range(1, 13)},
            {},
        )
        months, averages = reduce(self._step, ordered, initial)
        logger.debug("Replayed %d operation(s) across %d asset(s) for %d", len(ordered), len(averages), year)
        return [months[m] for m in range(1, 13)]

    def build_report(self, operations: list[Operation], year: int) -> TaxReport:
        """Monthly records plus yearly totals."""
        return TaxReport(year=year, months=self.compute_monthly_tax(operations, year))

    def average_cost_history(self, operations: list[Operation], year: int) -> list[tuple[Operation, Decimal]]:
        """Running average of the operation's asset right after each buy."""
        history: list[tuple[Operation, Decimal]] = []
        averages: dict[str, Decimal] = {}
        for op in self._year_operations(operations, year):
            if op.operation_type == OperationType.BUY:
                averages[op.asset_id] = self.update_average(averages.get(op.asset_id), op.price)
                history.append((op, averages[op.asset_id]))
        return history

    @staticmethod
    def update_average(previous: Decimal | None, price: Decimal) -> Decimal:
        """Unweighted running average: ``(previous + price) / 2``."""
        if not previous:
            return price
        return (previous + price) / 2

    # --- Fold ---

    def _step(self, state: _FoldState, op: Operation) -> _FoldState:
        months, averages = state
        if op.operation_type == OperationType.BUY:
            return months, {**averages, op.asset_id: self.update_average(averages.get(op.asset_id), op.price)}

        sale_value = op.quantity * op.price
        cost_basis = op.quantity * (averages.get(op.asset_id) or op.price)
        profit_loss = sale_value - cost_basis
        month = op.operation_date.month
        record = self._apply_sale(months[month], sale_value, profit_loss)
        return {**months, month: record}, averages

    def _apply_sale(self, record: MonthlyTaxRecord, sale_value: Decimal, profit_loss: Decimal) -> MonthlyTaxRecord:
        """New record with the sale added and exemption/tax re-derived."""
        total_sales = record.total_sales + sale_value
        total_profit = record.total_profit + (profit_loss if profit_loss > 0 else ZERO)
        total_loss = record.total_loss + (abs(profit_loss) if profit_loss <= 0 else ZERO)

        if total_sales < self.exemption_threshold:
            exempt_sales = total_sales
            tax_due = ZERO
        else:
            exempt_sales = ZERO
            net_profit = total_profit - total_loss
            tax_due = net_profit * self.tax_rate if net_profit > 0 else ZERO

        return record.model_copy(update={
            "total_sales": total_sales,
            "total_profit": total_profit,
            "total_loss": total_loss,
            "exempt_sales": exempt_sales,
            "tax_due": tax_due,
            "sale_count": record.sale_count + 1,
        })

    # --- Input handling ---

    def _year_operations(self, operations: list[Operation], year: int) -> list[Operation]:
        """Validated operations inside ``year``, sorted by date."""
        for op in operations:
            self._validate(op)
        start, end = date(year, 1, 1), date(year, 12, 31)
        in_year = [op for op in operations if start <= op.operation_date <= end]
        return sorted(in_year, key=lambda op: op.operation_date)

    @staticmethod
    def _validate(op: Operation) -> None:
        if op.quantity <= 0:
            raise InvalidOperationError(op.ref, f"quantity must be positive, got {op.quantity}")
        if op.price <= 0:
            raise InvalidOperationError(op.ref, f"price must be positive, got {op.price}")
