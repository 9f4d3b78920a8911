"""Tests for the SQLite price cache repository."""

from datetime import timedelta
from decimal import Decimal

import pytest

from carteira.db.repository import PriceCacheRepository
from carteira.db.schema import SCHEMA_VERSION, create_schema
from carteira.models.prices import PriceCacheEntry, PriceQuote
from carteira.prices.cache import PriceCache


@pytest.fixture
def repo(tmp_path):
    conn = create_schema(tmp_path / "carteira.db")
    yield PriceCacheRepository(conn)
    conn.close()


class TestPriceCacheRepository:
    def test_schema_version_recorded(self, repo):
        row = repo.conn.execute("SELECT MAX(version) FROM schema_version").fetchone()
        assert row[0] == SCHEMA_VERSION

    def test_round_trip(self, repo, t0):
        repo.upsert(PriceCacheEntry(ticker="petr4", price=Decimal("38.52"), last_updated=t0))
        entry = repo.get("PETR4")
        assert entry.ticker == "PETR4"
        assert entry.price == Decimal("38.52")
        assert entry.currency == "BRL"
        assert entry.source == "brapi"
        assert entry.last_updated == t0

    def test_upsert_replaces_existing(self, repo, t0):
        repo.upsert(PriceCacheEntry(ticker="PETR4", price=Decimal("38.52"), last_updated=t0))
        later = t0 + timedelta(minutes=20)
        repo.upsert(PriceCacheEntry(ticker="PETR4", price=Decimal("39.00"), last_updated=later))

        entries = repo.list_entries()
        assert len(entries) == 1
        assert entries[0].price == Decimal("39.00")
        assert entries[0].last_updated == later

    def test_missing_ticker(self, repo):
        assert repo.get("XXXX3") is None

    def test_backs_price_cache(self, repo, t0):
        class Provider:
            source = "brapi"

            def fetch_quotes(self, tickers):
                return [PriceQuote(ticker=t, price=Decimal("10")) for t in tickers]

        cache = PriceCache(repo, Provider(), clock=lambda: t0)
        assert cache.get_prices(["VALE3"])[0].cached is False
        assert cache.get_prices(["VALE3"])[0].cached is True
