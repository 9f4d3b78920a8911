"""Contribution-driven rebalancing.

Splits a new contribution across the assets that sit below their target
weight, proportionally to how far below target each one is. Nothing is ever
sold: overweight assets simply receive nothing.
"""

import logging
from decimal import Decimal

from carteira.exceptions import InvalidInputError
from carteira.models.enums import RebalanceStatus
from carteira.models.portfolio import AssetPosition
from carteira.models.reports import RebalanceItem, RebalancePlan

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")


class RebalanceCalculator:
    """Computes per-asset contribution suggestions toward target allocations."""

    def compute_plan(self, positions: list[AssetPosition], contribution: Decimal) -> RebalancePlan:
        """Build a ranked allocation plan for ``contribution``.

        Args:
            positions: Full current holdings of one wallet. Positions without a
                positive target still count toward the portfolio total but are
                left out of the plan.
            contribution: New money to allocate. Must be positive.

        Returns:
            RebalancePlan with items sorted by gap, largest underweight first.
        """
        contribution = Decimal(contribution)
        if not contribution.is_finite() or contribution <= 0:
            raise InvalidInputError("contribution", f"must be positive, got {contribution}")
        if not positions:
            raise InvalidInputError("positions", "at least one position is required")

        total_portfolio = sum((p.current_value for p in positions), ZERO)
        future_total = total_portfolio + contribution

        items = [
            self._build_item(position, total_portfolio, future_total)
            for position in positions
            if position.has_target
        ]

        total_positive_gaps = sum((item.gap for item in items if item.gap > 0), ZERO)
        if not items:
            status = RebalanceStatus.NO_TARGETS
        elif total_positive_gaps == 0:
            status = RebalanceStatus.NO_UNDERWEIGHT
        else:
            status = RebalanceStatus.ALLOCATED

        if status == RebalanceStatus.ALLOCATED:
            items = [
                item.model_copy(update={
                    "suggested_amount": self._share(item.gap, total_positive_gaps, contribution),
                })
                for item in items
            ]
        else:
            logger.info(
                "Contribution of %s left unallocated: %s", contribution, status.value
            )

        # sorted() is stable, so equal gaps keep input order
        items = sorted(items, key=lambda item: item.gap, reverse=True)

        return RebalancePlan(
            contribution=contribution,
            total_portfolio=total_portfolio,
            future_total=future_total,
            status=status,
            items=items,
        )

    @staticmethod
    def _build_item(
        position: AssetPosition, total_portfolio: Decimal, future_total: Decimal
    ) -> RebalanceItem:
        target = position.target_percentage or ZERO
        current_value = position.current_value
        current_pct = current_value / total_portfolio * HUNDRED if total_portfolio > 0 else ZERO
        ideal_value = future_total * target / HUNDRED

        return RebalanceItem(
            ticker=position.ticker,
            asset_class=position.asset_class,
            current_value=current_value,
            current_percentage=current_pct,
            target_percentage=target,
            ideal_value=ideal_value,
            gap=ideal_value - current_value,
            gap_percentage=target - current_pct,
        )

    @staticmethod
    def _share(gap: Decimal, total_positive_gaps: Decimal, contribution: Decimal) -> Decimal:
        if gap <= 0 or total_positive_gaps <= 0:
            return ZERO
        return gap / total_positive_gaps * contribution
