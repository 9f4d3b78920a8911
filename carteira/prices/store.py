"""Keyed stores backing the price cache."""

from typing import Protocol

from carteira.models.prices import PriceCacheEntry


class PriceStore(Protocol):
    """Ticker-keyed storage for last known prices."""

    def get(self, ticker: str) -> PriceCacheEntry | None: ...

    def upsert(self, entry: PriceCacheEntry) -> None: ...


class InMemoryPriceStore:
    """Dict-backed store, one entry per ticker."""

    def __init__(self, entries: list[PriceCacheEntry] | None = None):
        self._entries: dict[str, PriceCacheEntry] = {}
        for entry in entries or []:
            self.upsert(entry)

    def get(self, ticker: str) -> PriceCacheEntry | None:
        return self._entries.get(ticker.upper())

    def upsert(self, entry: PriceCacheEntry) -> None:
        self._entries[entry.ticker.upper()] = entry

    def __len__(self) -> int:
        return len(self._entries)
