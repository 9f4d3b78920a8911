"""Tests for the brapi quote provider."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest
import requests

from carteira.exceptions import PriceFetchError
from carteira.prices.brapi import BrapiQuoteProvider


@pytest.fixture
def session():
    session = MagicMock(spec=requests.Session)
    session.headers = {}
    return session


def _response(payload):
    response = MagicMock()
    response.json.return_value = payload
    response.raise_for_status = MagicMock()
    return response


class TestFetchQuotes:
    def test_single_request_for_all_tickers(self, session):
        session.get.return_value = _response({
            "results": [
                {"symbol": "PETR4", "regularMarketPrice": 38.5, "currency": "BRL"},
                {"symbol": "AAPL34", "regularMarketPrice": 61.02},
            ]
        })
        provider = BrapiQuoteProvider(session=session)

        quotes = provider.fetch_quotes(["PETR4", "AAPL34"])

        session.get.assert_called_once()
        url = session.get.call_args.args[0]
        params = session.get.call_args.kwargs["params"]
        assert url == "https://brapi.dev/api/quote/PETR4,AAPL34"
        assert params == {"fundamental": "false", "dividends": "false"}
        assert session.headers["Accept"] == "application/json"
        assert [(q.ticker, q.price, q.currency) for q in quotes] == [
            ("PETR4", Decimal("38.5"), "BRL"),
            ("AAPL34", Decimal("61.02"), "BRL"),
        ]

    def test_token_sent_when_configured(self, session):
        session.get.return_value = _response({"results": []})
        BrapiQuoteProvider(token="secret", session=session).fetch_quotes(["PETR4"])
        assert session.get.call_args.kwargs["params"]["token"] == "secret"

    def test_missing_price_kept_as_none(self, session):
        session.get.return_value = _response({"results": [{"symbol": "XPTO3"}]})
        quotes = BrapiQuoteProvider(session=session).fetch_quotes(["XPTO3"])
        assert quotes[0].price is None

    def test_no_results_list(self, session):
        session.get.return_value = _response({"error": True})
        assert BrapiQuoteProvider(session=session).fetch_quotes(["PETR4"]) == []


class TestFailures:
    def test_network_error(self, session):
        session.get.side_effect = requests.ConnectionError("boom")
        with pytest.raises(PriceFetchError, match="PETR4"):
            BrapiQuoteProvider(session=session).fetch_quotes(["PETR4"])

    def test_http_error_status(self, session):
        response = _response({})
        response.raise_for_status.side_effect = requests.HTTPError("500 Server Error")
        session.get.return_value = response
        with pytest.raises(PriceFetchError):
            BrapiQuoteProvider(session=session).fetch_quotes(["PETR4"])

    def test_invalid_json(self, session):
        response = _response(None)
        response.json.side_effect = ValueError("Expecting value")
        session.get.return_value = response
        with pytest.raises(PriceFetchError, match="invalid JSON"):
            BrapiQuoteProvider(session=session).fetch_quotes(["PETR4"])
