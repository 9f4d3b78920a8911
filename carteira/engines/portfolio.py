"""Portfolio totals and allocation by asset class."""

from decimal import Decimal

from carteira.models.portfolio import AssetPosition
from carteira.models.reports import ClassAllocation, PortfolioSummary

ZERO = Decimal("0")


class PortfolioAnalyzer:
    """Aggregates current value, invested amount and profit for a set of positions."""

    def summarize(self, positions: list[AssetPosition]) -> PortfolioSummary:
        total = sum((p.current_value for p in positions), ZERO)
        invested = sum((p.invested_value for p in positions), ZERO)
        profit = total - invested
        profit_percent = profit / invested * 100 if invested > 0 else ZERO

        return PortfolioSummary(
            total=total,
            invested=invested,
            profit=profit,
            profit_percent=profit_percent,
            by_class=self.allocation_by_class(positions),
        )

    def allocation_by_class(self, positions: list[AssetPosition]) -> list[ClassAllocation]:
        """Current value per asset class, in first-seen order."""
        values: dict[str, Decimal] = {}
        for position in positions:
            values[position.asset_class] = values.get(position.asset_class, ZERO) + position.current_value

        total = sum(values.values(), ZERO)
        return [
            ClassAllocation(
                asset_class=asset_class,
                value=value,
                percentage=value / total * 100 if total > 0 else ZERO,
            )
            for asset_class, value in values.items()
        ]
