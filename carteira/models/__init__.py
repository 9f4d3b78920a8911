"""Data models for Carteira."""

from carteira.models.enums import MonthlyTaxStatus, OperationType, RebalanceStatus
from carteira.models.portfolio import AssetPosition, Operation
from carteira.models.prices import PriceCacheEntry, PriceQuote, PriceResult
from carteira.models.reports import (
    ClassAllocation,
    MonthlyTaxRecord,
    PortfolioSummary,
    RebalanceItem,
    RebalancePlan,
    TaxReport,
)

__all__ = [
    "AssetPosition",
    "ClassAllocation",
    "MonthlyTaxRecord",
    "MonthlyTaxStatus",
    "Operation",
    "OperationType",
    "PortfolioSummary",
    "PriceCacheEntry",
    "PriceQuote",
    "PriceResult",
    "RebalanceItem",
    "RebalancePlan",
    "RebalanceStatus",
    "TaxReport",
]
