"""Data access layer for the price cache."""

import sqlite3
from datetime import datetime, timezone
from decimal import Decimal

from carteira.models.prices import PriceCacheEntry


class PriceCacheRepository:
    """SQLite-backed price store, one row per ticker."""

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def get(self, ticker: str) -> PriceCacheEntry | None:
        """Retrieve the cached entry for ``ticker``, if any."""
        cursor = self.conn.execute(
            "SELECT ticker, price, currency, source, last_updated FROM price_cache WHERE ticker = ?",
            (ticker.upper(),),
        )
        row = cursor.fetchone()
        if row is None:
            return None
        return self._row_to_entry(row)

    def upsert(self, entry: PriceCacheEntry) -> None:
        """Insert or replace the entry keyed by its ticker."""
        self.conn.execute(
            """INSERT INTO price_cache (ticker, price, currency, source, last_updated)
               VALUES (?, ?, ?, ?, ?)
               ON CONFLICT(ticker) DO UPDATE SET
                   price = excluded.price,
                   currency = excluded.currency,
                   source = excluded.source,
                   last_updated = excluded.last_updated""",
            (
                entry.ticker.upper(),
                str(entry.price),
                entry.currency,
                entry.source,
                entry.last_updated.isoformat(),
            ),
        )
        self.conn.commit()

    def list_entries(self) -> list[PriceCacheEntry]:
        cursor = self.conn.execute(
            "SELECT ticker, price, currency, source, last_updated FROM price_cache ORDER BY ticker"
        )
        return [self._row_to_entry(row) for row in cursor.fetchall()]

    @staticmethod
    def _row_to_entry(row: tuple) -> PriceCacheEntry:
        ticker, price, currency, source, last_updated = row
        updated = datetime.fromisoformat(last_updated)
        if updated.tzinfo is None:
            # Rows written without an offset are UTC
            updated = updated.replace(tzinfo=timezone.utc)
        return PriceCacheEntry(
            ticker=ticker,
            price=Decimal(price),
            currency=currency,
            source=source,
            last_updated=updated,
        )
