"""Tests for environment-driven settings and logging setup."""

import logging
from datetime import timedelta
from pathlib import Path

import pytest

from carteira.config import DEFAULT_DB_PATH, Settings
from carteira.logging_utils import configure_logging
from carteira.prices.brapi import BRAPI_URL


class TestSettings:
    def test_defaults(self):
        settings = Settings.load({})
        assert settings.db_path == DEFAULT_DB_PATH
        assert settings.brapi_url == BRAPI_URL
        assert settings.brapi_token is None
        assert settings.price_ttl == timedelta(minutes=15)
        assert settings.log_level == "INFO"

    def test_overrides(self, tmp_path):
        settings = Settings.load({
            "CARTEIRA_DB": str(tmp_path / "c.db"),
            "CARTEIRA_BRAPI_URL": "http://localhost:9000/quote",
            "CARTEIRA_BRAPI_TOKEN": "abc",
            "CARTEIRA_PRICE_TTL_MINUTES": "5",
            "CARTEIRA_LOG_LEVEL": "DEBUG",
        })
        assert settings.db_path == Path(tmp_path / "c.db")
        assert settings.brapi_url == "http://localhost:9000/quote"
        assert settings.brapi_token == "abc"
        assert settings.price_ttl == timedelta(minutes=5)
        assert settings.log_level == "DEBUG"

    @pytest.mark.parametrize("raw", ["abc", "0", "-3"])
    def test_invalid_ttl(self, raw):
        with pytest.raises(RuntimeError, match="CARTEIRA_PRICE_TTL_MINUTES"):
            Settings.load({"CARTEIRA_PRICE_TTL_MINUTES": raw})


class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def _restore_levels(self):
        root, urllib3 = logging.getLogger(), logging.getLogger("urllib3")
        saved = root.level, urllib3.level, list(root.handlers)
        yield
        root.setLevel(saved[0])
        urllib3.setLevel(saved[1])
        root.handlers[:] = saved[2]

    def test_level_from_name(self):
        assert configure_logging("warning") == logging.WARNING
        assert logging.getLogger().level == logging.WARNING

    def test_unknown_name_falls_back_to_info(self):
        assert configure_logging("not-a-level") == logging.INFO

    def test_verbose_overrides_level(self):
        assert configure_logging("ERROR", verbose=True) == logging.DEBUG
        assert logging.getLogger("urllib3").level == logging.INFO

    def test_no_duplicate_handlers(self):
        root = logging.getLogger()
        root.handlers[:] = []
        configure_logging("INFO")
        configure_logging("DEBUG")
        assert len(root.handlers) == 1
