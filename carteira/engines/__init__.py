"""Portfolio and tax computation engines."""

from carteira.engines.portfolio import PortfolioAnalyzer
from carteira.engines.rebalance import RebalanceCalculator
from carteira.engines.tax_lots import TaxLotEngine

__all__ = [
    "PortfolioAnalyzer",
    "RebalanceCalculator",
    "TaxLotEngine",
]
