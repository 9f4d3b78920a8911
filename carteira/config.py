"""Runtime configuration read from environment variables."""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path

from carteira.prices.brapi import BRAPI_URL

DEFAULT_DB_PATH = Path.home() / ".carteira" / "carteira.db"
DEFAULT_PRICE_TTL_MINUTES = 15


@dataclass(frozen=True)
class Settings:
    """Runtime configuration."""

    db_path: Path = DEFAULT_DB_PATH
    brapi_url: str = BRAPI_URL
    brapi_token: str | None = None
    price_ttl_minutes: int = DEFAULT_PRICE_TTL_MINUTES
    log_level: str = "INFO"

    @property
    def price_ttl(self) -> timedelta:
        return timedelta(minutes=self.price_ttl_minutes)

    @staticmethod
    def load(env: Mapping[str, str] | None = None) -> "Settings":
        """Load settings from ``CARTEIRA_*`` environment variables."""
        env = os.environ if env is None else env

        ttl_raw = env.get("CARTEIRA_PRICE_TTL_MINUTES")
        try:
            ttl = int(ttl_raw) if ttl_raw else DEFAULT_PRICE_TTL_MINUTES
        except ValueError as exc:
            raise RuntimeError(
                f"CARTEIRA_PRICE_TTL_MINUTES must be an integer, got {ttl_raw!r}"
            ) from exc
        if ttl <= 0:
            raise RuntimeError("CARTEIRA_PRICE_TTL_MINUTES must be positive")

        db_raw = env.get("CARTEIRA_DB")
        return Settings(
            db_path=Path(db_raw).expanduser() if db_raw else DEFAULT_DB_PATH,
            brapi_url=env.get("CARTEIRA_BRAPI_URL") or BRAPI_URL,
            brapi_token=env.get("CARTEIRA_BRAPI_TOKEN") or None,
            price_ttl_minutes=ttl,
            log_level=env.get("CARTEIRA_LOG_LEVEL", "INFO"),
        )


__all__ = ["DEFAULT_DB_PATH", "Settings"]
