"""Tests for the contribution rebalancing calculator."""

from decimal import Decimal

import pytest

from carteira.engines.rebalance import RebalanceCalculator
from carteira.exceptions import InvalidInputError
from carteira.models.enums import RebalanceStatus
from carteira.models.portfolio import AssetPosition


def _position(ticker: str, value: str, target: str | None, asset_class: str = "Ação") -> AssetPosition:
    """Position with quantity 1 so that current value equals the price."""
    return AssetPosition(
        ticker=ticker,
        asset_class=asset_class,
        quantity=Decimal("1"),
        average_price=Decimal(value),
        target_percentage=Decimal(target) if target is not None else None,
    )


@pytest.fixture
def calculator():
    return RebalanceCalculator()


class TestScenarios:
    def test_underweight_asset_receives_full_contribution(self, calculator, two_asset_wallet):
        plan = calculator.compute_plan(two_asset_wallet, Decimal("1000"))

        assert plan.total_portfolio == Decimal("10000")
        assert plan.future_total == Decimal("11000")
        assert plan.status == RebalanceStatus.ALLOCATED

        first, second = plan.items
        assert first.ticker == "HGLG11"
        assert first.ideal_value == Decimal("4400")
        assert first.gap == Decimal("2400")
        assert first.current_percentage == Decimal("20")
        assert first.gap_percentage == Decimal("20")
        assert first.suggested_amount == Decimal("1000")

        assert second.ticker == "PETR4"
        assert second.ideal_value == Decimal("6600")
        assert second.gap == Decimal("-1400")
        assert second.gap_percentage == Decimal("-20")
        assert second.suggested_amount == Decimal("0")

    def test_contribution_is_conserved(self, calculator):
        positions = [
            _position("A", "1000", "50"),
            _position("B", "1000", "30"),
            _position("C", "1000", "20"),
        ]
        plan = calculator.compute_plan(positions, Decimal("1000"))

        assert abs(plan.allocated_total - Decimal("1000")) < Decimal("1e-18")
        amounts = {item.ticker: item.suggested_amount for item in plan.items}
        # Gaps: A +1000, B +200, C -200
        assert abs(amounts["A"] - Decimal("833.3333333333333333333333333")) < Decimal("1e-18")
        assert abs(amounts["B"] - Decimal("166.6666666666666666666666667")) < Decimal("1e-18")
        assert amounts["C"] == Decimal("0")
        assert [item.ticker for item in plan.items] == ["A", "B", "C"]

    def test_suggestions_are_never_negative(self, calculator):
        positions = [_position("A", "9000", "10"), _position("B", "1000", "90")]
        plan = calculator.compute_plan(positions, Decimal("500"))
        assert all(item.suggested_amount >= 0 for item in plan.items)


class TestUnallocatedContribution:
    def test_all_assets_at_or_above_target(self, calculator):
        positions = [_position("A", "5000", "40"), _position("B", "5000", "40")]
        plan = calculator.compute_plan(positions, Decimal("1000"))

        assert plan.status == RebalanceStatus.NO_UNDERWEIGHT
        assert all(item.suggested_amount == 0 for item in plan.items)
        assert plan.allocated_total == Decimal("0")
        assert plan.unallocated == Decimal("1000")

    def test_no_targets(self, calculator):
        positions = [_position("A", "5000", None), _position("B", "5000", "0")]
        plan = calculator.compute_plan(positions, Decimal("1000"))

        assert plan.status == RebalanceStatus.NO_TARGETS
        assert plan.items == []
        assert plan.unallocated == Decimal("1000")


class TestPortfolioTotal:
    def test_untargeted_positions_count_toward_total(self, calculator):
        positions = [_position("A", "5000", "50"), _position("CASH", "5000", None)]
        plan = calculator.compute_plan(positions, Decimal("1000"))

        assert plan.total_portfolio == Decimal("10000")
        assert [item.ticker for item in plan.items] == ["A"]
        item = plan.items[0]
        assert item.current_percentage == Decimal("50")
        assert item.ideal_value == Decimal("5500")
        assert item.suggested_amount == Decimal("1000")

    def test_empty_portfolio_value(self, calculator):
        positions = [
            AssetPosition(ticker="A", asset_class="Ação", quantity=Decimal("0"),
                          average_price=Decimal("10"), target_percentage=Decimal("60")),
            AssetPosition(ticker="B", asset_class="FII", quantity=Decimal("0"),
                          average_price=Decimal("10"), target_percentage=Decimal("40")),
        ]
        plan = calculator.compute_plan(positions, Decimal("1000"))

        assert plan.total_portfolio == Decimal("0")
        assert all(item.current_percentage == 0 for item in plan.items)
        assert plan.items[0].suggested_amount == Decimal("600")
        assert plan.items[1].suggested_amount == Decimal("400")

    def test_current_price_preferred_over_average(self, calculator, two_asset_wallet):
        plan = calculator.compute_plan(two_asset_wallet, Decimal("1000"))
        petr = next(item for item in plan.items if item.ticker == "PETR4")
        assert petr.current_value == Decimal("8000")

    def test_zero_quote_falls_back_to_average_price(self):
        position = AssetPosition(
            ticker="A", asset_class="Ação", quantity=Decimal("10"),
            average_price=Decimal("12"), current_price=Decimal("0"),
        )
        assert position.current_value == Decimal("120")


class TestOrdering:
    def test_ties_keep_input_order(self, calculator):
        positions = [_position("A", "1000", "25"), _position("B", "1000", "25"), _position("C", "2000", "50")]
        plan = calculator.compute_plan(positions, Decimal("400"))
        assert [item.ticker for item in plan.items] == ["C", "A", "B"]

        plan = calculator.compute_plan(list(reversed(positions)), Decimal("400"))
        assert [item.ticker for item in plan.items] == ["C", "B", "A"]

    def test_inputs_not_mutated(self, calculator, two_asset_wallet):
        before = [p.model_copy() for p in two_asset_wallet]
        calculator.compute_plan(two_asset_wallet, Decimal("1000"))
        assert two_asset_wallet == before


class TestPreconditions:
    @pytest.mark.parametrize("amount", ["0", "-100"])
    def test_non_positive_contribution(self, calculator, two_asset_wallet, amount):
        with pytest.raises(InvalidInputError) as exc_info:
            calculator.compute_plan(two_asset_wallet, Decimal(amount))
        assert exc_info.value.field == "contribution"

    @pytest.mark.parametrize("amount", ["NaN", "Infinity", "-Infinity"])
    def test_non_finite_contribution(self, calculator, two_asset_wallet, amount):
        with pytest.raises(InvalidInputError) as exc_info:
            calculator.compute_plan(two_asset_wallet, Decimal(amount))
        assert exc_info.value.field == "contribution"

    def test_empty_positions(self, calculator):
        with pytest.raises(InvalidInputError) as exc_info:
            calculator.compute_plan([], Decimal("1000"))
        assert exc_info.value.field == "positions"
