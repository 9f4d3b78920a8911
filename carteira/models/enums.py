"""Enumerations for Carteira."""

from enum import StrEnum


class OperationType(StrEnum):
    BUY = "buy"
    SELL = "sell"


class RebalanceStatus(StrEnum):
    ALLOCATED = "ALLOCATED"
    NO_UNDERWEIGHT = "NO_UNDERWEIGHT"
    NO_TARGETS = "NO_TARGETS"


class MonthlyTaxStatus(StrEnum):
    EXEMPT = "EXEMPT"
    TAX_DUE = "TAX_DUE"
    NO_TAX = "NO_TAX"
    NO_ACTIVITY = "NO_ACTIVITY"
