"""Shared test fixtures for Carteira."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from carteira.models.portfolio import AssetPosition


@pytest.fixture
def two_asset_wallet() -> list[AssetPosition]:
    """8,000 in PETR4 (target 60%) and 2,000 in HGLG11 (target 40%)."""
    return [
        AssetPosition(
            ticker="PETR4",
            asset_class="Ação",
            quantity=Decimal("200"),
            average_price=Decimal("30.00"),
            current_price=Decimal("40.00"),
            target_percentage=Decimal("60"),
        ),
        AssetPosition(
            ticker="HGLG11",
            asset_class="FII",
            quantity=Decimal("20"),
            average_price=Decimal("100.00"),
            target_percentage=Decimal("40"),
        ),
    ]


@pytest.fixture
def t0() -> datetime:
    return datetime(2025, 3, 10, 14, 0, tzinfo=timezone.utc)


@pytest.fixture
def positions_json() -> str:
    return """[
  {"ticker": "petr4", "classe": "Ação", "quantidade": 200, "preco_medio": 30, "cotacao_atual": 40, "percentual_ideal": 60},
  {"ticker": "HGLG11", "classe": "FII", "quantidade": 20, "preco_medio": 100, "percentual_ideal": 40}
]
"""


@pytest.fixture
def operations_csv() -> str:
    return (
        "ativo;tipo;quantidade;preco;data\n"
        "PETR4;compra;100;40,00;10/02/2025\n"
        "PETR4;venda;100;50,00;15/03/2025\n"
    )
