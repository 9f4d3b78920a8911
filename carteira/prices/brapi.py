"""Quote provider for the brapi.dev HTTP API."""

import logging
from decimal import Decimal, InvalidOperation
from typing import Protocol

import requests

from carteira.exceptions import PriceFetchError
from carteira.models.prices import PriceQuote

logger = logging.getLogger(__name__)

BRAPI_URL = "https://brapi.dev/api/quote"


class QuoteProvider(Protocol):
    """Upstream source of current prices, queried in batches."""

    source: str

    def fetch_quotes(self, tickers: list[str]) -> list[PriceQuote]: ...


class BrapiQuoteProvider:
    """Fetches quotes for comma-separated tickers in a single request."""

    source = "brapi"

    def __init__(
        self,
        base_url: str = BRAPI_URL,
        token: str | None = None,
        session: requests.Session | None = None,
        timeout: float = 30,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        self.timeout = timeout

    def fetch_quotes(self, tickers: list[str]) -> list[PriceQuote]:
        """Request all ``tickers`` at once.

        Raises:
            PriceFetchError: On transport errors, non-2xx responses or a body
                that is not JSON.
        """
        url = f"{self.base_url}/{','.join(tickers)}"
        params = {"fundamental": "false", "dividends": "false"}
        if self.token:
            params["token"] = self.token

        logger.info("Fetching %d quote(s) from brapi: %s", len(tickers), ",".join(tickers))
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            logger.error("brapi request failed: %s", e)
            raise PriceFetchError(tickers, str(e)) from e
        except ValueError as e:
            raise PriceFetchError(tickers, f"invalid JSON response: {e}") from e

        results = data.get("results") if isinstance(data, dict) else None
        if not isinstance(results, list):
            logger.warning("brapi response has no results list")
            return []
        return [self._parse_item(item) for item in results if item.get("symbol")]

    @staticmethod
    def _parse_item(item: dict) -> PriceQuote:
        raw_price = item.get("regularMarketPrice")
        try:
            price = Decimal(str(raw_price)) if raw_price is not None else None
        except InvalidOperation:
            price = None
        return PriceQuote(
            ticker=str(item["symbol"]).upper(),
            price=price,
            currency=item.get("currency") or "BRL",
        )
