"""Time-boxed cache of last known asset prices.

A cached price younger than the TTL is served as-is. Everything else is
collected into one upstream request, written back to the store and returned
as fresh. Two callers asking for the same stale ticker at the same time will
both hit the upstream; prices are read-mostly, so that race is tolerated.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from carteira.exceptions import PriceFetchError
from carteira.models.portfolio import AssetPosition
from carteira.models.prices import PriceCacheEntry, PriceResult
from carteira.prices.brapi import QuoteProvider
from carteira.prices.store import PriceStore

logger = logging.getLogger(__name__)

DEFAULT_TTL = timedelta(minutes=15)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PriceCache:
    """Serves prices from ``store`` and refreshes stale ones from ``provider``."""

    def __init__(
        self,
        store: PriceStore,
        provider: QuoteProvider,
        ttl: timedelta = DEFAULT_TTL,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.store = store
        self.provider = provider
        self.ttl = ttl
        self.clock = clock

    def is_fresh(self, entry: PriceCacheEntry, now: datetime) -> bool:
        return now - entry.last_updated < self.ttl

    def get_prices(self, tickers: list[str]) -> list[PriceResult]:
        """Return prices for ``tickers``, cached ones first.

        Tickers the upstream does not return, or returns without a positive
        price, are left out of the result, as are quotes for tickers that
        were not asked for.

        Raises:
            PriceFetchError: If the upstream batch fails. The results already
                served from cache are attached as ``cached_results``.
        """
        now = self.clock()
        results: list[PriceResult] = []
        to_fetch: list[str] = []

        for ticker in dict.fromkeys(t.strip().upper() for t in tickers if t.strip()):
            entry = self.store.get(ticker)
            if entry is not None and self.is_fresh(entry, now):
                logger.debug("Using cached price for %s", ticker)
                results.append(PriceResult(
                    ticker=entry.ticker, price=entry.price, currency=entry.currency, cached=True,
                ))
            else:
                to_fetch.append(ticker)

        if not to_fetch:
            return results

        try:
            quotes = self.provider.fetch_quotes(to_fetch)
        except PriceFetchError as e:
            e.cached_results = list(results)
            raise

        fetched_at = self.clock()
        requested = set(to_fetch)
        for quote in quotes:
            if quote.ticker not in requested:
                logger.debug("Ignoring unrequested quote for %s", quote.ticker)
                continue
            if quote.price is None or quote.price <= 0:
                logger.warning("Ignoring quote for %s without a valid price", quote.ticker)
                continue
            self.store.upsert(PriceCacheEntry(
                ticker=quote.ticker,
                price=quote.price,
                currency=quote.currency,
                source=self.provider.source,
                last_updated=fetched_at,
            ))
            results.append(PriceResult(
                ticker=quote.ticker, price=quote.price, currency=quote.currency, cached=False,
            ))

        missing = set(to_fetch) - {r.ticker for r in results}
        if missing:
            logger.warning("No price returned for %s", ", ".join(sorted(missing)))
        return results


def apply_prices(positions: list[AssetPosition], results: list[PriceResult]) -> list[AssetPosition]:
    """Copies of ``positions`` with ``current_price`` taken from ``results``.

    Positions without a matching result keep the price they already had.
    """
    prices = {r.ticker: r.price for r in results}
    return [
        p.model_copy(update={"current_price": prices[p.ticker.upper()]}) if p.ticker.upper() in prices else p
        for p in positions
    ]
