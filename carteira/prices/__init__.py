"""Price lookup with a freshness-bounded cache."""

from carteira.prices.brapi import BrapiQuoteProvider, QuoteProvider
from carteira.prices.cache import DEFAULT_TTL, PriceCache, apply_prices
from carteira.prices.store import InMemoryPriceStore, PriceStore

__all__ = [
    "BrapiQuoteProvider",
    "DEFAULT_TTL",
    "InMemoryPriceStore",
    "PriceCache",
    "PriceStore",
    "QuoteProvider",
    "apply_prices",
]
